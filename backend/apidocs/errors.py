"""Error taxonomy for spec aggregation and visualizer mounting.

Everything here except `DanglingSecurityReference` aborts application startup.
`DanglingSecurityReference` is a warning value returned from the merge and
logged; it is never raised.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

RouteKey = Tuple[str, str]


class OpenAPIError(Exception):
    """Base class for all apidocs errors."""


class DuplicateRouteError(OpenAPIError):
    def __init__(self, key: RouteKey, source: str):
        self.key = key
        self.source = source
        method, path = key
        super().__init__(f"Duplicate route {method.upper()} {path} (registered again by '{source}')")


class ConfigurationError(OpenAPIError):
    def __init__(self, message: str, kind: Optional[str] = None, field: Optional[str] = None):
        self.kind = kind
        self.field = field
        super().__init__(message)


class FrozenDocumentError(OpenAPIError):
    """Raised on any mutation of a finalized document."""


class RegistryAlreadyInitializedError(OpenAPIError):
    pass


class RegistryNotInitializedError(OpenAPIError):
    pass


@dataclass(frozen=True)
class DanglingSecurityReference:
    key: RouteKey
    scheme: str

    def __str__(self) -> str:
        method, path = self.key
        return f"{method.upper()} {path} references undefined security scheme '{self.scheme}'"


__all__ = [
    "RouteKey",
    "OpenAPIError",
    "DuplicateRouteError",
    "ConfigurationError",
    "FrozenDocumentError",
    "RegistryAlreadyInitializedError",
    "RegistryNotInitializedError",
    "DanglingSecurityReference",
]
