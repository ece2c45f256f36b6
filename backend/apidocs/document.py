"""In-memory OpenAPI specification document.

A `SpecDocument` is the aggregate root: metadata (`Info`), named security
schemes, component schemas, tags and the route mapping keyed by
`(method, path)`. Routes keep insertion order so serialization is
deterministic. Once `freeze()` has been called every mutator raises
`FrozenDocumentError`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .constants import HTTP_METHODS, OPENAPI_VERSION
from .errors import DuplicateRouteError, FrozenDocumentError, RouteKey
from .helpers import normalize_path


def route_key(method: str, path: str) -> RouteKey:
    return method.lower(), normalize_path(path)


def _freeze(value: Any) -> Any:
    """Deep read-only copy: mappings become MappingProxyType, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class RouteDescriptor:
    """Metadata for one HTTP endpoint.

    `security` semantics:
      None  -> no requirement declared (operation inherits nothing, key omitted)
      ()    -> explicit "no security" (rendered as an empty array)
      names -> one requirement object per scheme name

    `parameters`, `request_body` and `responses` are stored as deep read-only
    copies and left out of the hash.
    """

    method: str
    path: str
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = None
    parameters: Tuple[Mapping[str, Any], ...] = field(default=(), hash=False)
    request_body: Optional[Mapping[str, Any]] = field(default=None, hash=False)
    responses: Mapping[str, Mapping[str, Any]] = field(default_factory=dict, hash=False)
    security: Optional[Tuple[str, ...]] = None
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        method = self.method.lower()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method {self.method!r}")
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "path", normalize_path(self.path))
        object.__setattr__(self, "parameters", _freeze(tuple(self.parameters)))
        if self.request_body is not None:
            object.__setattr__(self, "request_body", _freeze(self.request_body))
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "responses", _freeze(self.responses))
        if isinstance(self.security, str):
            object.__setattr__(self, "security", (self.security,))
        elif self.security is not None:
            object.__setattr__(self, "security", tuple(self.security))

    @property
    def key(self) -> RouteKey:
        return self.method, self.path

    def security_names(self) -> Tuple[str, ...]:
        return self.security or ()

    def to_operation(self) -> Dict[str, Any]:
        op: Dict[str, Any] = {}
        if self.tags:
            op["tags"] = list(self.tags)
        if self.summary:
            op["summary"] = self.summary
        if self.description:
            op["description"] = self.description
        if self.operation_id:
            op["operationId"] = self.operation_id
        if self.parameters:
            op["parameters"] = _thaw(self.parameters)
        if self.request_body is not None:
            op["requestBody"] = _thaw(self.request_body)
        # OpenAPI requires at least one response
        op["responses"] = _thaw(self.responses) or {"default": {"description": "Default response"}}
        if self.security is not None:
            op["security"] = [{name: []} for name in self.security]
        return op


@dataclass(frozen=True)
class SecurityScheme:
    name: str
    definition: Dict[str, Any]


@dataclass(frozen=True)
class Info:
    title: str
    version: str = "0.1.0"
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"title": self.title, "version": self.version}
        if self.description:
            out["description"] = self.description
        return out


class SpecDocument:
    def __init__(self, info: Info, routes: Iterable[RouteDescriptor] = ()):
        self._frozen = False
        self.info = info
        self._routes: Dict[RouteKey, RouteDescriptor] = {}
        self._security_schemes: Dict[str, Mapping[str, Any]] = {}
        self._schemas: Dict[str, Mapping[str, Any]] = {}
        self._tags: Dict[str, Optional[str]] = {}
        for r in routes:
            self.add_route(r)

    @property
    def info(self) -> Info:
        return self._info

    @info.setter
    def info(self, value: Info):
        self._check_mutable()
        self._info = value

    # --- mutation ---
    def _check_mutable(self):
        if self._frozen:
            raise FrozenDocumentError("Specification document is finalized and can no longer be modified")

    def add_route(self, descriptor: RouteDescriptor, source: str = "base") -> "SpecDocument":
        self._check_mutable()
        if descriptor.key in self._routes:
            raise DuplicateRouteError(descriptor.key, source)
        self._routes[descriptor.key] = descriptor
        return self

    def add_security_scheme(self, name: str, definition: Dict[str, Any]) -> "SpecDocument":
        self._check_mutable()
        self._security_schemes[name] = _freeze(definition)
        return self

    def add_schema(self, name: str, schema: Dict[str, Any]) -> "SpecDocument":
        self._check_mutable()
        self._schemas[name] = _freeze(schema)
        return self

    def add_tag(self, name: str, description: Optional[str] = None) -> "SpecDocument":
        self._check_mutable()
        self._tags[name] = description
        return self

    def freeze(self) -> "SpecDocument":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # --- reads ---
    def routes(self) -> List[RouteDescriptor]:
        return list(self._routes.values())

    def route(self, method: str, path: str) -> Optional[RouteDescriptor]:
        return self._routes.get(route_key(method, path))

    def __contains__(self, key: RouteKey) -> bool:
        return route_key(*key) in self._routes

    def __iter__(self) -> Iterator[RouteDescriptor]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def security_schemes(self) -> List[SecurityScheme]:
        return [SecurityScheme(n, _thaw(d)) for n, d in self._security_schemes.items()]

    def has_security_scheme(self, name: str) -> bool:
        return name in self._security_schemes

    def copy(self) -> "SpecDocument":
        """Return an unfrozen shallow copy (descriptors and frozen schemas are shared)."""
        dup = SpecDocument(self.info)
        dup._routes = dict(self._routes)
        dup._security_schemes = dict(self._security_schemes)
        dup._schemas = dict(self._schemas)
        dup._tags = dict(self._tags)
        return dup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpecDocument):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> Dict[str, Any]:
        paths: Dict[str, Dict[str, Any]] = {}
        for (method, path), desc in self._routes.items():
            paths.setdefault(path, {})[method] = desc.to_operation()

        components: Dict[str, Any] = {}
        if self._schemas:
            components["schemas"] = {n: _thaw(s) for n, s in self._schemas.items()}
        if self._security_schemes:
            components["securitySchemes"] = {n: _thaw(d) for n, d in self._security_schemes.items()}

        spec: Dict[str, Any] = {
            "openapi": OPENAPI_VERSION,
            "info": self.info.to_dict(),
            "paths": paths,
        }
        if components:
            spec["components"] = components
        if self._tags:
            spec["tags"] = [
                {"name": n, "description": d} if d else {"name": n}
                for n, d in self._tags.items()
            ]
        return spec


def default_document(title: str, version: str = "0.1.0", description: Optional[str] = None) -> SpecDocument:
    return SpecDocument(Info(title=title, version=version, description=description))


__all__ = [
    "route_key",
    "RouteDescriptor",
    "SecurityScheme",
    "Info",
    "SpecDocument",
    "default_document",
]
