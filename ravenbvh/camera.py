"""A simple pinhole camera that renders barycentric colours by ray casting a TLAS."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import product
from typing import Optional

from .ray import Ray
from .tlas import Tlas
from .transform import Transform
from .vector import Vec3

_VFOV_DEGREES = 45.0
_FOCUS_DIST = 1.0
_FAR = 1e30


def _to_u8(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(min(255.0, max(0.0, value)))


def ray_count_label(width: int, height: int) -> str:
    """Label for the number of rays per frame, in whole thousands or millions."""
    count = width * height
    if count >= 1_000_000:
        return f"{count // 1_000_000}m rays"
    if count >= 1_000:
        return f"{count // 1_000}k rays"
    return f"{count} rays"


@dataclass
class BvhCamera:
    """Renders an RGBA image of ``width`` by ``height`` pixels into ``image``."""

    width: int
    height: int
    image: Optional[bytearray] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("camera width and height must be positive")

    def _basis(self, transform: Transform) -> tuple[Vec3, Vec3, Vec3, Vec3]:
        aspect_ratio = self.width / self.height
        theta = math.radians(_VFOV_DEGREES)
        viewport_height = 2.0 * math.tan(theta / 2.0)
        viewport_width = aspect_ratio * viewport_height
        origin = transform.translation
        w = -transform.forward()
        horizontal = transform.right() * (_FOCUS_DIST * viewport_width)
        vertical = transform.up() * (_FOCUS_DIST * viewport_height)
        lower_left = origin - horizontal / 2.0 - vertical / 2.0 - w * _FOCUS_DIST
        return origin, lower_left, horizontal, vertical

    def _ray(self, basis: tuple[Vec3, Vec3, Vec3, Vec3], x: int, y: int) -> Ray:
        origin, lower_left, horizontal, vertical = basis
        u = x / self.width
        v = 1.0 - y / self.height
        direction = lower_left + horizontal * u + vertical * v - origin
        return Ray(origin, direction, _FAR)

    def primary_ray(self, transform: Transform, x: int, y: int) -> Ray:
        """The ray through pixel (``x``, ``y``), with row 0 at the top."""
        return self._ray(self._basis(transform), x, y)

    def render(self, tlas: Tlas, transform: Transform) -> bytearray:
        """Ray cast every pixel and store the RGBA bytes in ``image``."""
        basis = self._basis(transform)
        data = bytearray(self.width * self.height * 4)
        for index, (y, x) in enumerate(product(range(self.height), range(self.width))):
            result = tlas.intersect(self._ray(basis, x, y))
            if result is None:
                rgb = (0, 0, 0)
            else:
                hit = result[1]
                rgb = tuple(
                    _to_u8(c * 255.0) for c in (hit.u, hit.v, 1.0 - (hit.u + hit.v))
                )
            offset = index * 4
            data[offset : offset + 4] = bytes((*rgb, 255))
        self.image = data
        return data