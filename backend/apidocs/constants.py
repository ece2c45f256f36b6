"""Centralized constants for spec aggregation and the visualizer mounts.

Kept apart from the builder modules so tests and the export script can import
them without pulling in Flask routing.
"""
from typing import Dict, Tuple

OPENAPI_VERSION = "3.1.0"

# Order follows the OpenAPI path item object; used for validation only.
HTTP_METHODS: Tuple[str, ...] = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Visualizer kinds in mount order
VISUALIZER_KINDS: Tuple[str, ...] = ("redoc", "scalar", "swagger")

DEFAULT_UI_URLS: Dict[str, str] = {
    "redoc": "/redoc",
    "scalar": "/scalar",
    "swagger": "/swagger",
}

DEFAULT_SPEC_JSON_URL = "/api-docs/openapi.json"

# Kinds whose UI can only fetch the spec over HTTP (no inline embedding)
SPEC_JSON_REQUIRED = frozenset({"swagger"})

JSON_CONTENT_TYPE = "application/json"
YAML_CONTENT_TYPE = "application/yaml"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"

# Security scheme names registered by the security addon
JWT_SCHEME = "jwt_token"
API_KEY_SCHEME = "api_key"
API_KEY_HEADER = "apikey"

# app.config keys
CONFIG_KEY = "OPENAPI_VISUALIZERS"
EXTENSION_KEY = "apidocs"

__all__ = [
    "OPENAPI_VERSION",
    "HTTP_METHODS",
    "VISUALIZER_KINDS",
    "DEFAULT_UI_URLS",
    "DEFAULT_SPEC_JSON_URL",
    "SPEC_JSON_REQUIRED",
    "JSON_CONTENT_TYPE",
    "YAML_CONTENT_TYPE",
    "HTML_CONTENT_TYPE",
    "JWT_SCHEME",
    "API_KEY_SCHEME",
    "API_KEY_HEADER",
    "CONFIG_KEY",
    "EXTENSION_KEY",
]
