from __future__ import annotations
from flask import Blueprint, request, abort
from flask_jwt_extended import jwt_required
from apidocs import RouteAccumulator, RouteDescriptor
from apidocs.helpers import json_response, path_param, query_param, schema_ref

ALBUMS = [
    {'id': 1, 'title': 'VH II', 'rating': 10},
    {'id': 2, 'title': 'Fair Warning', 'rating': 9},
]

LIST_ALBUMS = RouteDescriptor(
    'get', '/',
    summary='List albums',
    description='Returns every album with its title and rating',
    parameters=(query_param('limit', 'integer', default=50),),
    responses={
        '200': json_response('OK', {'type': 'array', 'items': schema_ref('Album')}),
        '401': json_response('Missing or invalid token', schema_ref('Error')),
    },
    security='jwt_token',
    tags=('album',),
)

GET_ALBUM = RouteDescriptor(
    'get', '/{album_id}',
    summary='Get album',
    parameters=(path_param('album_id', description='Album id'),),
    responses={
        '200': json_response('Album found', schema_ref('Album')),
        '404': json_response('Album not found', schema_ref('Error')),
    },
    security=(),
    tags=('album',),
)

CREATE_ALBUM = RouteDescriptor(
    'post', '/',
    summary='Create album',
    request_body={
        'required': True,
        'content': {'application/json': {'schema': {
            'type': 'object',
            'properties': {'title': {'type': 'string'}, 'rating': {'type': 'integer'}},
            'required': ['title'],
        }}},
    },
    responses={
        '201': json_response('Album created', schema_ref('Album')),
        '400': json_response('Invalid payload', schema_ref('Error')),
    },
    security='jwt_token',
    tags=('album',),
)


@jwt_required()
def list_albums():
    return {'data': ALBUMS}


def get_album(album_id: int):
    for a in ALBUMS:
        if a['id'] == album_id:
            return a
    abort(404, description='album not found')


@jwt_required()
def create_album():
    data = request.json or {}
    title = data.get('title')
    if not title:
        abort(400, description='title required')
    album = {'id': max((a['id'] for a in ALBUMS), default=0) + 1, 'title': title, 'rating': int(data.get('rating', 0))}
    ALBUMS.append(album)
    return album, 201


def register_album_routes(app, accumulator: RouteAccumulator):
    album_bp = Blueprint('album', __name__)
    scoped = accumulator.prefix('/api/album')
    scoped.add(album_bp, LIST_ALBUMS, list_albums)
    scoped.add(album_bp, GET_ALBUM, get_album, rule='/<int:album_id>')
    scoped.add(album_bp, CREATE_ALBUM, create_album)
    app.register_blueprint(album_bp)
    return album_bp
