"""Helper functions shared by descriptors, the accumulator and route modules.

These are deliberately tiny: path conversion between Flask rules and OpenAPI
templates, plus a few builders for common parameter / response objects.
"""
import re
from typing import Any, Dict, Optional

# <int:album_id>, <album_id>, :album_id
_FLASK_VAR = re.compile(r"<(?:[^:<>]+:)?([A-Za-z_][A-Za-z0-9_]*)>")
_COLON_VAR = re.compile(r"(?<=/):([A-Za-z_][A-Za-z0-9_]*)")
_TEMPLATE_VAR = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def normalize_path(path: str) -> str:
    """Return the OpenAPI template form of a route path.

    `/album/<int:id>`, `/album/:id` and `album/{id}/` all become `/album/{id}`.
    """
    path = _FLASK_VAR.sub(r"{\1}", path.strip())
    path = _COLON_VAR.sub(r"{\1}", path)
    path = "/" + "/".join(seg for seg in path.split("/") if seg)
    return path


def to_flask_rule(path: str) -> str:
    """Convert a documented path to a Flask rule; `{id}` becomes `<id>`."""
    return _TEMPLATE_VAR.sub(r"<\1>", normalize_path(path))


def join_paths(prefix: str, path: str) -> str:
    if not prefix:
        return path
    return prefix.rstrip("/") + "/" + path.lstrip("/")


def path_param(name: str, schema_type: str = "integer", description: Optional[str] = None) -> Dict[str, Any]:
    param: Dict[str, Any] = {"name": name, "in": "path", "required": True, "schema": {"type": schema_type}}
    if description:
        param["description"] = description
    return param


def query_param(name: str, schema_type: str = "string", default: Any = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": schema_type}
    if default is not None:
        schema["default"] = default
    return {"name": name, "in": "query", "schema": schema}


def schema_ref(name: str) -> Dict[str, Any]:
    return {"$ref": f"#/components/schemas/{name}"}


def json_response(description: str, schema: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    resp: Dict[str, Any] = {"description": description}
    if schema is not None:
        resp["content"] = {"application/json": {"schema": schema}}
    return resp


__all__ = [
    "normalize_path",
    "to_flask_rule",
    "join_paths",
    "path_param",
    "query_param",
    "schema_ref",
    "json_response",
]
