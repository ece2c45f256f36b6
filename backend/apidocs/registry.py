"""Per-application holder of the finalized spec and its serialized forms.

One write (`initialize`, from the extension's startup path) and any number of
reads afterwards. JSON and YAML are rendered eagerly so request handlers only
return cached strings.
"""
from __future__ import annotations
import json
from typing import Any, Dict

import yaml
from flask import Flask

from .constants import EXTENSION_KEY
from .document import SpecDocument
from .errors import RegistryAlreadyInitializedError, RegistryNotInitializedError


def render_json(spec: Dict[str, Any]) -> str:
    return json.dumps(spec, indent=2, ensure_ascii=False)


class _NoAliasDumper(yaml.SafeDumper):
    # shared parameter / response dicts must not turn into YAML anchors
    def ignore_aliases(self, data):
        return True


def render_yaml(spec: Dict[str, Any]) -> str:
    return yaml.dump(spec, Dumper=_NoAliasDumper, sort_keys=False, allow_unicode=True)


class SpecRegistry:
    __slots__ = ("_document", "_json", "_yaml")

    def __init__(self, document: SpecDocument):
        if not document.frozen:
            document = document.copy().freeze()
        spec = document.to_dict()
        self._document = document
        self._json = render_json(spec)
        self._yaml = render_yaml(spec)

    @staticmethod
    def ensure_uninitialized(app: Flask) -> None:
        if EXTENSION_KEY in app.extensions:
            raise RegistryAlreadyInitializedError(f"OpenAPI registry already initialized for app '{app.name}'")

    @classmethod
    def initialize(cls, app: Flask, document: SpecDocument) -> "SpecRegistry":
        cls.ensure_uninitialized(app)
        return cls(document).install(app)

    def install(self, app: Flask) -> "SpecRegistry":
        """Write this registry into the app; the single write of its lifetime."""
        self.ensure_uninitialized(app)
        app.extensions[EXTENSION_KEY] = self
        return self

    @classmethod
    def of(cls, app: Flask) -> "SpecRegistry":
        registry = app.extensions.get(EXTENSION_KEY)
        if registry is None:
            raise RegistryNotInitializedError(f"OpenAPI registry not initialized for app '{app.name}'")
        return registry

    def get(self) -> SpecDocument:
        return self._document

    def get_json(self) -> str:
        return self._json

    def get_yaml(self) -> str:
        return self._yaml


__all__ = ["SpecRegistry", "render_json", "render_yaml"]
