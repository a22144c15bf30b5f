"""Debug drawing modes and box transforms for visualising hierarchies."""

from __future__ import annotations

from enum import Enum

from .aabb import Aabb
from .transform import Transform


class BvhDebugMode(Enum):
    """Which hierarchy to draw; ``DISABLED`` is the default."""

    DISABLED = "disabled"
    BVHS = "bvhs"
    TLAS = "tlas"

    def next(self, tlas_enabled: bool = True) -> "BvhDebugMode":
        """The mode that follows in the cycle; TLAS is skipped when not enabled."""
        if self is BvhDebugMode.DISABLED:
            return BvhDebugMode.BVHS
        if self is BvhDebugMode.BVHS and tlas_enabled:
            return BvhDebugMode.TLAS
        return BvhDebugMode.DISABLED


def aabb_global(aabb: Aabb) -> Transform:
    """Transform that maps the unit cube centred at the origin onto ``aabb``."""
    return Transform(translation=aabb.center(), scale=aabb.max - aabb.min)


def aabb_transform(aabb: Aabb, transform: Transform) -> Transform:
    """``aabb_global`` of a local box, followed by ``transform``."""
    return Transform(
        translation=transform.transform_point(aabb.center()),
        rotation=transform.rotation,
        scale=transform.scale * (aabb.max - aabb.min),
    )