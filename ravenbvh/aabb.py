"""Axis-aligned bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .vector import Vec3

_FAR = 1e30


@dataclass
class Aabb:
    """A mutable axis-aligned box given by its minimum and maximum corners."""

    min: Vec3
    max: Vec3

    @classmethod
    def empty(cls) -> "Aabb":
        """An inverted box that any expansion will overwrite."""
        return cls(Vec3.splat(_FAR), Vec3.splat(-_FAR))

    def area(self) -> float:
        """Half the surface area, as used by the surface area heuristic."""
        e = self.max - self.min
        return e.x * e.y + e.y * e.z + e.z * e.x

    def expand(self, point: Vec3) -> None:
        self.min = self.min.min(point)
        self.max = self.max.max(point)

    def expand_aabb(self, other: "Aabb") -> None:
        """Grow to include both corners of ``other``."""
        self.expand(other.min)
        self.expand(other.max)

    def merge(self, other: "Aabb") -> "Aabb":
        return Aabb(self.min.min(other.min), self.max.max(other.max))

    def center(self) -> Vec3:
        return (self.min + self.max) * 0.5

    def corners(self) -> Iterator[Vec3]:
        """The eight corners; bit 0 selects x, bit 1 y, bit 2 z from the maximum."""
        for i in range(8):
            yield Vec3(
                self.max.x if i & 1 else self.min.x,
                self.max.y if i & 2 else self.min.y,
                self.max.z if i & 4 else self.min.z,
            )