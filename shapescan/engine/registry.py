"""Transform registry — each pipeline stage is a standalone function registered via decorator.

Usage:
    @transform(id="T0.02", layer=Layer.PREPROCESSING, dependencies=["T0.01"])
    def edge_extraction(ctx: DetectionContext) -> None:
        ctx.edges = edge_map(ctx.gray, ctx.config.edge_threshold)
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from shapescan.engine.context import DetectionContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    PREPROCESSING = 0
    SEGMENTATION = 1
    SHAPE_ANALYSIS = 2


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["DetectionContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Registry of pipeline stages keyed by id."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return sorted((s for s in self._transforms.values() if s.layer == layer), key=lambda s: s.id)

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def resolve_order(self) -> list[TransformSpec]:
        """Dependency order (Kahn's algorithm). Ready stages run lowest (layer, id) first."""
        pool = self._transforms
        missing = {dep for s in pool.values() for dep in s.dependencies if dep not in pool}
        if missing:
            raise ValueError(f"Unknown dependencies: {sorted(missing)}")

        in_degree = {tid: len(spec.dependencies) for tid, spec in pool.items()}
        dependents: dict[str, list[str]] = {tid: [] for tid in pool}
        for tid, spec in pool.items():
            for dep in spec.dependencies:
                dependents[dep].append(tid)

        ready = [(pool[tid].layer, tid) for tid, d in in_degree.items() if d == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            _, tid = heapq.heappop(ready)
            ordered.append(pool[tid])
            for other in dependents[tid]:
                in_degree[other] -= 1
                if in_degree[other] == 0:
                    heapq.heappush(ready, (pool[other].layer, other))

        if len(ordered) != len(pool):
            stuck = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {stuck}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function in the shared registry."""

    def decorator(fn: Callable[["DetectionContext"], None]):
        _registry.register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
