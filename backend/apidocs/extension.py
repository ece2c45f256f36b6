"""Flask extension wiring the startup sequence.

    accumulator = RouteAccumulator()
    register_routes(app, accumulator)        # app routes record descriptors
    OpenAPIDocs(app, builder=build_doc, accumulator=accumulator,
                collections=[routes(...)])

`init_app` is the only place the registry gets written:
config -> builder(app) -> merge -> visualizer mounts -> registry.
"""
from __future__ import annotations
import logging
from typing import Callable, List, Optional, Sequence

from flask import Flask

from .collector import RouteAccumulator, RouteCollection
from .config import OpenAPIConfig
from .constants import CONFIG_KEY
from .document import SpecDocument
from .errors import DanglingSecurityReference
from .merge import finalize
from .registry import SpecRegistry
from .visualizers import mount_visualizers

logger = logging.getLogger(__name__)

Builder = Callable[[Flask], SpecDocument]


class OpenAPIDocs:
    def __init__(
        self,
        app: Optional[Flask] = None,
        builder: Optional[Builder] = None,
        collections: Optional[Sequence[RouteCollection]] = None,
        accumulator: Optional[RouteAccumulator] = None,
        config: Optional[OpenAPIConfig] = None,
    ):
        self.builder = builder
        self.collections = list(collections or [])
        self.accumulator = accumulator
        self.config = config
        self.warnings: List[DanglingSecurityReference] = []
        self.mounted: List[str] = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> SpecRegistry:
        if self.builder is None:
            raise TypeError("OpenAPIDocs requires a builder function")
        # config errors must surface before any other startup work
        config = self.config or app.config.get(CONFIG_KEY)
        if not isinstance(config, OpenAPIConfig):
            config = OpenAPIConfig.from_mapping(config)

        SpecRegistry.ensure_uninitialized(app)

        base = self.builder(app)
        extra: List[RouteCollection] = []
        if self.accumulator is not None:
            extra.append(self.accumulator.collection())
        extra.extend(self.collections)

        result = finalize(base, extra)
        self.warnings = list(result.warnings)

        # mount first: a failed mount must leave the app without a registry
        registry = SpecRegistry(result.document)
        self.mounted = mount_visualizers(app, registry, config)
        registry.install(app)
        logger.info(
            "OpenAPI spec finalized: %d routes, %d warnings",
            len(result.document),
            len(result.warnings),
        )
        return registry


__all__ = ["OpenAPIDocs", "Builder"]
