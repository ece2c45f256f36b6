"""Security scheme addon derived from the app's Flask-JWT-Extended settings.

The `jwt_token` scheme mirrors where the application actually reads its
access token:

    headers (Authorization: Bearer)  -> http bearer, format JWT
    headers (custom name / no type)  -> apiKey in header
    query_string                     -> apiKey in query (JWT_QUERY_STRING_NAME)
    cookies                          -> apiKey in cookie (JWT_ACCESS_COOKIE_NAME)

Only the first configured location is documented. Apps that never initialized
`JWTManager` get the bearer default.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask import Flask
from flask_jwt_extended.config import config as jwt_config

from .constants import API_KEY_HEADER, API_KEY_SCHEME, JWT_SCHEME
from .document import SpecDocument

JWT_EXTENSION_KEY = "flask-jwt-extended"

BEARER = "bearer"
HEADER = "header"
QUERY = "query"
COOKIE = "cookie"


@dataclass(frozen=True)
class JWTLocation:
    kind: str = BEARER
    name: Optional[str] = None

    @classmethod
    def from_app(cls, app: Flask) -> "JWTLocation":
        if JWT_EXTENSION_KEY not in app.extensions:
            return cls()
        with app.app_context():
            first = next(iter(jwt_config.token_location), "headers")
            if first == "query_string":
                return cls(QUERY, jwt_config.query_string_name)
            if first == "cookies":
                return cls(COOKIE, jwt_config.access_cookie_name)
            if first == "headers":
                if jwt_config.header_name == "Authorization" and jwt_config.header_type == "Bearer":
                    return cls()
                return cls(HEADER, jwt_config.header_name)
        # json body tokens have no OpenAPI security scheme equivalent
        return cls()

    def to_scheme(self) -> Dict[str, Any]:
        if self.kind == BEARER:
            return {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
        return {"type": "apiKey", "in": self.kind, "name": self.name}


def apply_security_addon(document: SpecDocument, app: Optional[Flask] = None,
                         location: Optional[JWTLocation] = None) -> SpecDocument:
    """Register the `jwt_token` and `api_key` schemes on a base document."""
    if location is None:
        location = JWTLocation.from_app(app) if app is not None else JWTLocation()
    document.add_security_scheme(JWT_SCHEME, location.to_scheme())
    document.add_security_scheme(API_KEY_SCHEME, {"type": "apiKey", "in": "header", "name": API_KEY_HEADER})
    return document


__all__ = ["JWTLocation", "apply_security_addon", "BEARER", "HEADER", "QUERY", "COOKIE"]
