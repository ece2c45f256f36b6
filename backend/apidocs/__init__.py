"""OpenAPI aggregation and visualizer mounts for Flask applications.

Public API re-exported here; implementation lives in the submodules.
"""
from .collector import RouteAccumulator, RouteCollection, routes  # noqa: F401
from .config import OpenAPIConfig, VisualizerConfig  # noqa: F401
from .document import Info, RouteDescriptor, SecurityScheme, SpecDocument, default_document  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    DanglingSecurityReference,
    DuplicateRouteError,
    FrozenDocumentError,
    OpenAPIError,
    RegistryAlreadyInitializedError,
    RegistryNotInitializedError,
)
from .extension import OpenAPIDocs  # noqa: F401
from .merge import MergeResult, finalize  # noqa: F401
from .registry import SpecRegistry  # noqa: F401
from .security import JWTLocation, apply_security_addon  # noqa: F401

__all__ = [
    "RouteAccumulator",
    "RouteCollection",
    "routes",
    "OpenAPIConfig",
    "VisualizerConfig",
    "Info",
    "RouteDescriptor",
    "SecurityScheme",
    "SpecDocument",
    "default_document",
    "ConfigurationError",
    "DanglingSecurityReference",
    "DuplicateRouteError",
    "FrozenDocumentError",
    "OpenAPIError",
    "RegistryAlreadyInitializedError",
    "RegistryNotInitializedError",
    "OpenAPIDocs",
    "MergeResult",
    "finalize",
    "SpecRegistry",
    "JWTLocation",
    "apply_security_addon",
]
