from flask import Flask
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from dotenv import load_dotenv
from typing import Optional, Dict, Any
import os

from apidocs import (
    OpenAPIConfig,
    OpenAPIDocs,
    RouteAccumulator,
    RouteDescriptor,
    SpecDocument,
    apply_security_addon,
    default_document,
    routes,
)
from apidocs.constants import CONFIG_KEY
from apidocs.helpers import json_response

load_dotenv()

jwt = JWTManager()


def build_api_doc(app: Flask) -> SpecDocument:
    """Base document: metadata, security schemes and shared schemas."""
    doc = default_document(
        app.config.get('API_TITLE', 'Album Demo API'),
        version=app.config.get('API_VERSION', '0.1.0'),
        description='Demo service documented with apidocs',
    )
    apply_security_addon(doc, app)
    doc.add_schema('Album', {
        'type': 'object',
        'properties': {
            'id': {'type': 'integer'},
            'title': {'type': 'string'},
            'rating': {'type': 'integer'},
        },
        'required': ['id', 'title', 'rating'],
    })
    doc.add_schema('Error', {'type': 'object', 'properties': {'error': {'type': 'object'}}, 'required': ['error']})
    doc.add_tag('album', 'Album catalogue')
    return doc


HEALTH_ROUTES = routes(
    RouteDescriptor(
        'get', '/healthz',
        summary='Liveness probe',
        responses={'200': json_response('OK', {'type': 'object', 'properties': {'status': {'type': 'string'}}})},
        security=(),
        tags=('ops',),
    ),
    name='ops',
)


def create_app(config: Optional[Dict[str, Any]] = None):
    app = Flask(__name__)

    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['API_TITLE'] = os.getenv('API_TITLE', 'Album Demo API')
    env_visualizers = OpenAPIConfig.from_env()
    if env_visualizers.enabled():
        app.config[CONFIG_KEY] = env_visualizers
    else:
        app.config[CONFIG_KEY] = {
            'redoc': True,
            'scalar': {'url': '/scalar', 'spec_yaml_url': '/scalar/openapi.yaml'},
            'swagger': {'url': '/swagger', 'spec_json_url': '/api-docs/openapi.json'},
        }

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    jwt.init_app(app)

    # Routes record their descriptors into the accumulator as they register
    accumulator = RouteAccumulator()
    from .routes.album import register_album_routes
    register_album_routes(app, accumulator)

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    OpenAPIDocs(app, builder=build_api_doc, accumulator=accumulator, collections=[HEALTH_ROUTES])
    return app
