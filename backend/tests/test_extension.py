import logging
import pytest
from flask import Flask
from apidocs import (
    DuplicateRouteError,
    OpenAPIConfig,
    OpenAPIDocs,
    RegistryAlreadyInitializedError,
    RouteAccumulator,
    RouteDescriptor,
    SpecRegistry,
    routes,
)


def _view():
    return {}


def test_builder_called_once_with_app(album_base):
    seen = []

    def builder(app):
        seen.append(app)
        return album_base

    app = Flask('ext')
    ext = OpenAPIDocs(app, builder=builder)
    assert seen == [app]
    assert ext.mounted == []
    assert len(SpecRegistry.of(app).get()) == 1


def test_automatic_routes_merge_before_manual(album_base):
    app = Flask('ext')
    acc = RouteAccumulator()
    acc.add(app, RouteDescriptor('get', '/track'), _view)
    OpenAPIDocs(
        app,
        builder=lambda _: album_base,
        accumulator=acc,
        collections=[routes(RouteDescriptor('get', '/artist'))],
    )
    keys = [d.key for d in SpecRegistry.of(app).get().routes()]
    assert keys == [('get', '/album'), ('get', '/track'), ('get', '/artist')]


def test_same_route_automatic_and_manual_aborts_startup(album_base, caplog):
    app = Flask('ext')
    acc = RouteAccumulator()
    acc.add(app, RouteDescriptor('get', '/track'), _view)
    with caplog.at_level(logging.ERROR):
        with pytest.raises(DuplicateRouteError) as exc:
            OpenAPIDocs(
                app,
                builder=lambda _: album_base,
                accumulator=acc,
                collections=[routes(RouteDescriptor('get', '/track'))],
            )
    assert exc.value.key == ('get', '/track')
    assert exc.value.source == 'manual'
    assert 'GET /track' in caplog.text
    assert 'apidocs' not in app.extensions


def test_warnings_exposed_on_extension(album_base):
    app = Flask('ext')
    ext = OpenAPIDocs(
        app,
        builder=lambda _: album_base,
        collections=[routes(RouteDescriptor('get', '/x', security='nonexistent_scheme'))],
    )
    assert [w.scheme for w in ext.warnings] == ['nonexistent_scheme']


def test_deferred_init_app_and_reinit(album_base):
    app = Flask('ext')
    ext = OpenAPIDocs(builder=lambda _: album_base, config=None)
    assert 'apidocs' not in app.extensions
    ext.init_app(app)
    with pytest.raises(RegistryAlreadyInitializedError):
        ext.init_app(app)


def test_failed_mount_leaves_app_retryable(album_base, monkeypatch):
    import apidocs.extension as extension

    real_mount = extension.mount_visualizers
    calls = []

    def failing_mount(app, registry, config):
        calls.append(app)
        if len(calls) == 1:
            raise RuntimeError('mount failed')
        return real_mount(app, registry, config)

    monkeypatch.setattr(extension, 'mount_visualizers', failing_mount)
    app = Flask('ext')
    ext = OpenAPIDocs(builder=lambda _: album_base, config=OpenAPIConfig.from_mapping({'swagger': True}))
    with pytest.raises(RuntimeError):
        ext.init_app(app)
    assert 'apidocs' not in app.extensions

    ext.init_app(app)
    assert len(calls) == 2
    assert SpecRegistry.of(app).get().route('get', '/album') is not None
    assert app.test_client().get('/swagger').status_code == 200


def test_missing_builder():
    with pytest.raises(TypeError):
        OpenAPIDocs(Flask('ext'))
