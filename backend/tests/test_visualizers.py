import json
import pytest
import yaml
from flask import Flask
from apidocs import (
    ConfigurationError,
    Info,
    OpenAPIConfig,
    OpenAPIDocs,
    RouteDescriptor,
    SpecRegistry,
    routes,
)
from apidocs.visualizers import mount_visualizers


def _app(visualizers, album_base):
    app = Flask('viz')
    app.config['OPENAPI_VISUALIZERS'] = visualizers
    OpenAPIDocs(
        app,
        builder=lambda _app: album_base,
        collections=[routes(RouteDescriptor('get', '/album/:id', security=()))],
    )
    return app


def test_swagger_only_mount(album_base):
    app = _app({'swagger': {'url': '/swagger', 'spec_json_url': '/api-docs/openapi.json'}}, album_base)
    client = app.test_client()
    assert client.get('/redoc').status_code == 404
    assert client.get('/scalar').status_code == 404
    ui = client.get('/swagger')
    assert ui.status_code == 200
    assert ui.headers['Content-Type'] == 'text/html; charset=utf-8'
    assert b'SwaggerUIBundle' in ui.data
    assert b"url: '/api-docs/openapi.json'" in ui.data
    spec = client.get('/api-docs/openapi.json')
    assert spec.status_code == 200
    assert spec.headers['Content-Type'] == 'application/json'
    assert len(spec.get_json()['paths']) == 2


def test_all_kinds_with_json_and_yaml(album_base):
    app = _app({
        'redoc': {'url': '/redoc', 'spec_json_url': '/redoc/openapi.json', 'spec_yaml_url': '/redoc/openapi.yaml'},
        'scalar': {'url': '/scalar', 'spec_json_url': '/scalar/openapi.json', 'spec_yaml_url': '/scalar/openapi.yaml'},
        'swagger': {'url': '/swagger', 'spec_json_url': '/swagger/openapi.json', 'spec_yaml_url': '/swagger/openapi.yaml'},
    }, album_base)
    client = app.test_client()
    registry = SpecRegistry.of(app)
    for kind in ('redoc', 'scalar', 'swagger'):
        assert client.get(f'/{kind}').status_code == 200
        j = client.get(f'/{kind}/openapi.json')
        assert j.headers['Content-Type'] == 'application/json'
        assert j.get_data(as_text=True) == registry.get_json()
        y = client.get(f'/{kind}/openapi.yaml')
        assert y.status_code == 200
        assert y.headers['Content-Type'] == 'application/yaml'
        assert yaml.safe_load(y.get_data(as_text=True)) == json.loads(registry.get_json())


def test_ui_pages_reference_configured_spec_url(album_base):
    app = _app({
        'redoc': {'url': '/redoc', 'spec_yaml_url': '/redoc/openapi.yaml'},
        'scalar': {'url': '/scalar', 'spec_json_url': '/scalar/openapi.json'},
    }, album_base)
    client = app.test_client()
    assert b'spec-url="/redoc/openapi.yaml"' in client.get('/redoc').data
    assert b'data-url="/scalar/openapi.json"' in client.get('/scalar').data
    assert client.get('/redoc/openapi.json').status_code == 404


def test_ui_without_spec_url_embeds_spec(album_base):
    app = _app({'redoc': True, 'scalar': True}, album_base)
    client = app.test_client()
    redoc = client.get('/redoc').get_data(as_text=True)
    scalar = client.get('/scalar').get_data(as_text=True)
    assert 'Redoc.init' in redoc
    assert '"/album/{id}"' in redoc
    assert 'type="application/json"' in scalar
    assert '"jwt_token"' in scalar
    assert client.get('/api-docs/openapi.json').status_code == 404


def test_inline_spec_cannot_close_script_tag(album_base):
    album_base.add_route(RouteDescriptor('get', '/x', description='</script><b>'))
    app = _app({'scalar': True}, album_base)
    page = app.test_client().get('/scalar').get_data(as_text=True)
    assert '</script><b>' not in page


def test_title_is_escaped(album_base):
    album_base.info = Info('<Albums>', '1.0.0')
    app = _app({'swagger': True}, album_base)
    page = app.test_client().get('/swagger').get_data(as_text=True)
    assert '<title>&lt;Albums&gt;</title>' in page


def test_mount_returns_urls_in_order(bare_app, album_base):
    registry = SpecRegistry.initialize(bare_app, album_base)
    cfg = OpenAPIConfig.from_mapping({'swagger': True, 'redoc': {'url': '/docs'}})
    assert mount_visualizers(bare_app, registry, cfg) == ['/docs', '/swagger', '/api-docs/openapi.json']


def test_config_error_aborts_startup_before_builder_runs(album_base):
    calls = []

    def builder(app):
        calls.append(app)
        return album_base

    app = Flask('bad')
    app.config['OPENAPI_VISUALIZERS'] = {'swagger': {'url': '/swagger'}}
    with pytest.raises(ConfigurationError):
        OpenAPIDocs(app, builder=builder)
    assert calls == []
    assert 'apidocs' not in app.extensions
