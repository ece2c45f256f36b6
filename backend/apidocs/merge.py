"""Merge engine: base document + route collections -> finalized document.

Order of work:
- copy the base (the caller's document is never touched)
- insert every descriptor of every collection in the order supplied
- stop at the first key collision (nothing partial is returned)
- collect dangling security references as warnings
- freeze
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .collector import RouteCollection
from .document import SpecDocument
from .errors import DanglingSecurityReference, DuplicateRouteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeResult:
    document: SpecDocument
    warnings: Tuple[DanglingSecurityReference, ...] = ()


def dangling_security_references(document: SpecDocument) -> Tuple[DanglingSecurityReference, ...]:
    found = []
    for desc in document.routes():
        for name in dict.fromkeys(desc.security_names()):
            if not document.has_security_scheme(name):
                found.append(DanglingSecurityReference(desc.key, name))
    return tuple(found)


def finalize(base: SpecDocument, extra_collections: Optional[Iterable[RouteCollection]] = None) -> MergeResult:
    merged = base.copy()
    for collection in extra_collections or ():
        for desc in collection:
            try:
                merged.add_route(desc, source=collection.name)
            except DuplicateRouteError as e:
                logger.error("OpenAPI merge aborted: %s", e)
                raise

    warnings = dangling_security_references(merged)
    for w in warnings:
        logger.warning("OpenAPI security reference: %s", w)
    return MergeResult(document=merged.freeze(), warnings=warnings)


__all__ = ["MergeResult", "finalize", "dangling_security_references"]
