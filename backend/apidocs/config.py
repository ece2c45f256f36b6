"""Visualizer configuration.

Accepted shape (Flask `app.config["OPENAPI_VISUALIZERS"]`):

    {
        "redoc": True,                                   # all defaults
        "scalar": {"url": "/scalar", "spec_yaml_url": "/scalar/openapi.yaml"},
        "swagger": {"url": "/swagger", "spec_json_url": "/api-docs/openapi.json"},
    }

A kind that is absent, None or False is not mounted. `True` means the default
mount URL (and for swagger the default JSON URL). A mapping must name `url`;
swagger additionally needs `spec_json_url`.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .constants import DEFAULT_SPEC_JSON_URL, DEFAULT_UI_URLS, SPEC_JSON_REQUIRED, VISUALIZER_KINDS
from .errors import ConfigurationError

_FIELDS = ("url", "spec_json_url", "spec_yaml_url")


def _check_url(kind: str, field: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or not value.startswith("/"):
        raise ConfigurationError(
            f"openapi.{kind}.{field} must be an absolute path starting with '/', got {value!r}",
            kind=kind,
            field=field,
        )
    return value


@dataclass(frozen=True)
class VisualizerConfig:
    kind: str
    url: str
    spec_json_url: Optional[str] = None
    spec_yaml_url: Optional[str] = None

    def __post_init__(self):
        if self.kind not in VISUALIZER_KINDS:
            raise ConfigurationError(f"Unknown visualizer kind '{self.kind}'", kind=self.kind)
        if not self.url:
            raise ConfigurationError(f"openapi.{self.kind}.url is required", kind=self.kind, field="url")
        for f in _FIELDS:
            _check_url(self.kind, f, getattr(self, f))
        if self.kind in SPEC_JSON_REQUIRED and not self.spec_json_url:
            raise ConfigurationError(
                f"openapi.{self.kind}.spec_json_url is required",
                kind=self.kind,
                field="spec_json_url",
            )

    @classmethod
    def default(cls, kind: str) -> "VisualizerConfig":
        json_url = DEFAULT_SPEC_JSON_URL if kind in SPEC_JSON_REQUIRED else None
        return cls(kind=kind, url=DEFAULT_UI_URLS[kind], spec_json_url=json_url)

    @classmethod
    def from_value(cls, kind: str, value: Any) -> Optional["VisualizerConfig"]:
        if value is None or value is False:
            return None
        if value is True:
            return cls.default(kind)
        if isinstance(value, VisualizerConfig):
            return value
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"openapi.{kind} must be a mapping or boolean", kind=kind)
        unknown = set(value) - set(_FIELDS)
        if unknown:
            raise ConfigurationError(
                f"openapi.{kind} has unknown fields: {', '.join(sorted(unknown))}",
                kind=kind,
                field=sorted(unknown)[0],
            )
        return cls(
            kind=kind,
            url=value.get("url") or "",
            spec_json_url=value.get("spec_json_url"),
            spec_yaml_url=value.get("spec_yaml_url"),
        )


@dataclass(frozen=True)
class OpenAPIConfig:
    redoc: Optional[VisualizerConfig] = None
    scalar: Optional[VisualizerConfig] = None
    swagger: Optional[VisualizerConfig] = None

    def enabled(self) -> List[VisualizerConfig]:
        return [c for c in (self.redoc, self.scalar, self.swagger) if c is not None]

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "OpenAPIConfig":
        mapping = mapping or {}
        unknown = set(mapping) - set(VISUALIZER_KINDS)
        if unknown:
            raise ConfigurationError(f"Unknown visualizer kind(s): {', '.join(sorted(unknown))}")
        return cls(**{k: VisualizerConfig.from_value(k, mapping.get(k)) for k in VISUALIZER_KINDS})

    @classmethod
    def from_env(cls, prefix: str = "OPENAPI_", environ: Optional[Mapping[str, str]] = None) -> "OpenAPIConfig":
        """Build from OPENAPI_<KIND>_URL / _SPEC_JSON_URL / _SPEC_YAML_URL variables.

        A kind is enabled when any of its variables is set.
        """
        environ = os.environ if environ is None else environ
        mapping: Dict[str, Any] = {}
        for kind in VISUALIZER_KINDS:
            values = {}
            for f in _FIELDS:
                v = environ.get(f"{prefix}{kind.upper()}_{f.upper()}")
                if v:
                    values[f] = v
            if values:
                mapping[kind] = values
        return cls.from_mapping(mapping)


__all__ = ["VisualizerConfig", "OpenAPIConfig"]
