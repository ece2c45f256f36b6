"""Route collections and the registration-time accumulator.

Usage:

    acc = RouteAccumulator()
    album = acc.prefix("/api/album")

    @album.route(bp, RouteDescriptor("get", "/", summary="List albums", security="jwt_token"))
    def list_albums():
        ...

    extra = routes(RouteDescriptor("get", "/health", security=()), name="ops")

The accumulator is owned by the startup sequence and handed to the extension;
nothing here keeps process-wide state.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from .document import RouteDescriptor
from .helpers import join_paths, to_flask_rule


@dataclass(frozen=True)
class RouteCollection:
    """An ordered, immutable batch of descriptors from one source."""

    name: str
    descriptors: Tuple[RouteDescriptor, ...] = ()

    def __iter__(self) -> Iterator[RouteDescriptor]:
        return iter(self.descriptors)

    def __len__(self) -> int:
        return len(self.descriptors)


def routes(*descriptors: RouteDescriptor, name: str = "manual") -> RouteCollection:
    """Wrap explicitly built descriptors as a manual collection."""
    return RouteCollection(name=name, descriptors=tuple(descriptors))


def _endpoint_name(descriptor: RouteDescriptor, view_func: Callable[..., Any]) -> str:
    # includes the path so same-named handlers under different prefixes stay distinct
    return re.sub(r"\W", "_", f"{view_func.__name__}_{descriptor.method}_{descriptor.path}")


class RouteAccumulator:
    def __init__(self, name: str = "automatic", _prefix: str = "", _sink: Optional[List[RouteDescriptor]] = None):
        self.name = name
        self._prefix = _prefix
        self._descriptors: List[RouteDescriptor] = _sink if _sink is not None else []

    def prefix(self, prefix: str) -> "RouteAccumulator":
        """Scoped view sharing this accumulator's storage.

        The prefix applies to both the documented path and the Flask rule, so
        register the target Blueprint without its own `url_prefix`.
        """
        return RouteAccumulator(self.name, join_paths(self._prefix, prefix), self._descriptors)

    def add(
        self,
        target,
        descriptor: RouteDescriptor,
        view_func: Callable[..., Any],
        endpoint: Optional[str] = None,
        rule: Optional[str] = None,
    ) -> RouteDescriptor:
        """Register `view_func` on a Flask app or Blueprint and record its descriptor.

        `rule` overrides the Flask rule when the handler needs converters
        (e.g. `<int:album_id>`); it is prefixed the same way as the path.
        """
        if self._prefix:
            descriptor = replace(descriptor, path=join_paths(self._prefix, descriptor.path))
        if rule is not None:
            flask_rule = join_paths(self._prefix, rule)
        else:
            flask_rule = to_flask_rule(descriptor.path)
        target.add_url_rule(
            flask_rule,
            endpoint=endpoint or _endpoint_name(descriptor, view_func),
            view_func=view_func,
            methods=[descriptor.method.upper()],
        )
        self._descriptors.append(descriptor)
        return descriptor

    def route(self, target, descriptor: RouteDescriptor, endpoint: Optional[str] = None, rule: Optional[str] = None):
        def outer(fn):
            self.add(target, descriptor, fn, endpoint=endpoint, rule=rule)
            return fn
        return outer

    def extend(self, descriptors: Iterable[RouteDescriptor]) -> None:
        """Record descriptors whose handlers were registered elsewhere."""
        for d in descriptors:
            if self._prefix:
                d = replace(d, path=join_paths(self._prefix, d.path))
            self._descriptors.append(d)

    def __len__(self) -> int:
        return len(self._descriptors)

    def collection(self) -> RouteCollection:
        return RouteCollection(name=self.name, descriptors=tuple(self._descriptors))


__all__ = ["RouteCollection", "RouteAccumulator", "routes"]
