import json
import pytest
import yaml
from apidocs import (
    RegistryAlreadyInitializedError,
    RegistryNotInitializedError,
    RouteDescriptor,
    SpecRegistry,
    finalize,
    routes,
)


def _finalized(base):
    return finalize(base, [routes(RouteDescriptor('get', '/album/:id', security=()))]).document


def test_cached_reads_are_identical(bare_app, album_base):
    registry = SpecRegistry.initialize(bare_app, _finalized(album_base))
    assert registry.get_json() == registry.get_json()
    assert registry.get_yaml() == registry.get_yaml()
    assert registry.get_json() is registry.get_json()
    assert registry.get_yaml() is registry.get_yaml()


def test_serialized_forms_describe_same_document(bare_app, album_base):
    registry = SpecRegistry.initialize(bare_app, _finalized(album_base))
    from_json = json.loads(registry.get_json())
    from_yaml = yaml.safe_load(registry.get_yaml())
    assert from_json == from_yaml == registry.get().to_dict()
    # insertion order survives serialization
    assert list(from_json['paths']) == ['/album', '/album/{id}']


def test_second_initialize_fails_fast(bare_app, album_base):
    doc = _finalized(album_base)
    first = SpecRegistry.initialize(bare_app, doc)
    with pytest.raises(RegistryAlreadyInitializedError):
        SpecRegistry.initialize(bare_app, doc)
    assert SpecRegistry.of(bare_app) is first


def test_of_without_initialize(bare_app):
    with pytest.raises(RegistryNotInitializedError):
        SpecRegistry.of(bare_app)


def test_registry_freezes_unfinalized_input(bare_app, album_base):
    registry = SpecRegistry.initialize(bare_app, album_base)
    assert registry.get().frozen
    # caller's builder document stays usable
    assert not album_base.frozen


def test_registries_are_per_app(album_base):
    from flask import Flask
    a, b = Flask('a'), Flask('b')
    ra = SpecRegistry.initialize(a, _finalized(album_base))
    rb = SpecRegistry.initialize(b, album_base)
    assert SpecRegistry.of(a) is ra and SpecRegistry.of(b) is rb
    assert len(ra.get()) == 2 and len(rb.get()) == 1
