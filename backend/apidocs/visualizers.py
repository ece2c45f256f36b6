"""Visualizer mounts: Redoc, Scalar and Swagger UI.

Each enabled kind gets its own Blueprint (`apidocs_<kind>`) holding:
- GET <url>            -> HTML page loading the UI bundle from a CDN
- GET <spec_json_url>  -> cached JSON spec (if configured)
- GET <spec_yaml_url>  -> cached YAML spec (if configured)

Handlers only return strings cached in the `SpecRegistry`.
"""
from __future__ import annotations
import html
import logging
from typing import Callable, Dict, List, Optional

from flask import Blueprint, Flask, Response

from .config import OpenAPIConfig, VisualizerConfig
from .constants import HTML_CONTENT_TYPE, JSON_CONTENT_TYPE, YAML_CONTENT_TYPE
from .registry import SpecRegistry

logger = logging.getLogger(__name__)

SWAGGER_UI_VERSION = "5.18.2"

_REDOC_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{title}</title>
    <style>body {{ margin: 0; padding: 0; }}</style>
</head>
<body>
    {body}
    <script src="https://cdn.redoc.ly/redoc/latest/bundles/redoc.standalone.js"></script>
    {init}
</body>
</html>"""

_SCALAR_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{title}</title>
</head>
<body>
    {body}
    <script src="https://cdn.jsdelivr.net/npm/@scalar/api-reference"></script>
</body>
</html>"""

_SWAGGER_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{title}</title>
    <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/swagger-ui-dist@{version}/swagger-ui.css">
    <style>body {{ margin: 0; }}</style>
</head>
<body>
    <div id="swagger-ui"></div>
    <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@{version}/swagger-ui-bundle.js"></script>
    <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@{version}/swagger-ui-standalone-preset.js"></script>
    <script>
        window.onload = () => {{
            window.ui = SwaggerUIBundle({{
                url: '{spec_url}',
                dom_id: '#swagger-ui',
                deepLinking: true,
                presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset],
                plugins: [SwaggerUIBundle.plugins.DownloadUrl],
                layout: 'StandaloneLayout',
            }});
        }};
    </script>
</body>
</html>"""


def _inline_json(registry: SpecRegistry) -> str:
    # keep the payload from closing the surrounding <script> element
    return registry.get_json().replace("</", "<\\/")


def _spec_url(cfg: VisualizerConfig) -> Optional[str]:
    return cfg.spec_json_url or cfg.spec_yaml_url


def render_redoc(cfg: VisualizerConfig, registry: SpecRegistry, title: str) -> str:
    url = _spec_url(cfg)
    if url:
        body = f'<redoc spec-url="{html.escape(url)}"></redoc>'
        init = ""
    else:
        body = '<div id="redoc-container"></div>'
        init = (
            f'<script id="openapi-spec" type="application/json">{_inline_json(registry)}</script>\n'
            "    <script>Redoc.init(JSON.parse(document.getElementById('openapi-spec').textContent), {}, "
            "document.getElementById('redoc-container'));</script>"
        )
    return _REDOC_HTML.format(title=html.escape(title), body=body, init=init)


def render_scalar(cfg: VisualizerConfig, registry: SpecRegistry, title: str) -> str:
    url = _spec_url(cfg)
    if url:
        body = f'<script id="api-reference" data-url="{html.escape(url)}"></script>'
    else:
        body = f'<script id="api-reference" type="application/json">{_inline_json(registry)}</script>'
    return _SCALAR_HTML.format(title=html.escape(title), body=body)


def render_swagger(cfg: VisualizerConfig, registry: SpecRegistry, title: str) -> str:
    return _SWAGGER_HTML.format(
        title=html.escape(title),
        version=SWAGGER_UI_VERSION,
        spec_url=html.escape(cfg.spec_json_url or ""),
    )


RENDERERS: Dict[str, Callable[[VisualizerConfig, SpecRegistry, str], str]] = {
    "redoc": render_redoc,
    "scalar": render_scalar,
    "swagger": render_swagger,
}


def build_blueprint(cfg: VisualizerConfig, registry: SpecRegistry) -> Blueprint:
    bp = Blueprint(f"apidocs_{cfg.kind}", __name__)
    page = RENDERERS[cfg.kind](cfg, registry, registry.get().info.title)

    @bp.get(cfg.url, endpoint="ui")
    def ui():
        return Response(page, content_type=HTML_CONTENT_TYPE)

    if cfg.spec_json_url:
        @bp.get(cfg.spec_json_url, endpoint="spec_json")
        def spec_json():
            return Response(registry.get_json(), content_type=JSON_CONTENT_TYPE)

    if cfg.spec_yaml_url:
        @bp.get(cfg.spec_yaml_url, endpoint="spec_yaml")
        def spec_yaml():
            return Response(registry.get_yaml(), content_type=YAML_CONTENT_TYPE)

    return bp


def mount_visualizers(app: Flask, registry: SpecRegistry, config: OpenAPIConfig) -> List[str]:
    """Register every enabled kind; return the mounted URLs in order."""
    mounted: List[str] = []
    for cfg in config.enabled():
        app.register_blueprint(build_blueprint(cfg, registry))
        urls = [u for u in (cfg.url, cfg.spec_json_url, cfg.spec_yaml_url) if u]
        logger.info("OpenAPI %s mounted at %s", cfg.kind, ", ".join(urls))
        mounted.extend(urls)
    return mounted


__all__ = [
    "SWAGGER_UI_VERSION",
    "RENDERERS",
    "render_redoc",
    "render_scalar",
    "render_swagger",
    "build_blueprint",
    "mount_visualizers",
]
