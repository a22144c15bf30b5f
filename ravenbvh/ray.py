"""Rays and their intersection with boxes, triangles and BVHs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Optional

from .aabb import Aabb
from .bvh import Bvh, Tri
from .transform import Transform
from .vector import Vec3


@dataclass
class Hit:
    """A ray hit: distance along the ray, barycentric u and v, and triangle index."""

    distance: float = 1e30
    u: float = 0.0
    v: float = 0.0
    tri_index: int = 0


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a > b else b


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a < b else b


def _recip(d: float) -> float:
    return math.copysign(math.inf, d) if d == 0.0 else 1.0 / d


@dataclass(frozen=True)
class Ray:
    """A ray with a unit direction and a maximum distance."""

    origin: Vec3
    direction: Vec3
    max: float = 1e30
    direction_recip: Vec3 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            direction = self.direction.normalized()
        except ValueError:
            raise ValueError("ray direction must be a non-zero finite vector") from None
        object.__setattr__(self, "direction", direction)
        object.__setattr__(self, "direction_recip", Vec3(*(_recip(d) for d in direction)))

    def get_point(self, distance: float) -> Vec3:
        return self.origin + self.direction * distance

    def to_local(self, transform: Transform) -> tuple["Ray", float]:
        """This ray in the local space of ``transform``, and how much distances scale by."""
        origin = transform.inverse_transform_point(self.origin)
        direction = transform.inverse_transform_vector(self.direction)
        dir_scale = direction.length() / self.direction.length()
        return Ray(origin, direction, self.max * dir_scale), dir_scale

    def aabb_intersection_at(self, aabb: Aabb) -> Optional[float]:
        """Distance at which the ray enters ``aabb`` (0 if it starts inside), or None."""
        near, far = [], []
        for axis in range(3):
            lo, hi = aabb.min[axis], aabb.max[axis]
            if math.copysign(1.0, self.direction[axis]) < 0:
                lo, hi = hi, lo
            o, r = self.origin[axis], self.direction_recip[axis]
            near.append((lo - o) * r)
            far.append((hi - o) * r)
        tmin = reduce(_fmax, (*near, 0.0))
        tmax = reduce(_fmin, (far[2], far[1], far[0], self.max))
        return tmin if tmin <= tmax else None

    def intersect_triangle(self, tri: Tri, tri_index: int) -> Optional[Hit]:
        edge1 = tri.vertex1 - tri.vertex0
        edge2 = tri.vertex2 - tri.vertex0
        h = self.direction.cross(edge2)
        a = edge1.dot(h)
        if abs(a) < 0.00001:
            return None
        f = 1.0 / a
        s = self.origin - tri.vertex0
        u = f * s.dot(h)
        if not 0.0 <= u <= 1.0:
            return None
        q = s.cross(edge1)
        v = f * self.direction.dot(q)
        if v < 0.0 or u + v > 1.0:
            return None
        t = f * edge2.dot(q)
        if t > 0.0001:
            return Hit(t, u, v, tri_index)
        return None

    def intersect_bvh(self, bvh: Bvh) -> Optional[Hit]:
        """The closest hit against the triangles of ``bvh``, if any."""
        ray = self
        best: Optional[Hit] = None
        stack = []
        node = bvh.nodes[0]
        while True:
            if node.is_leaf():
                span = bvh.triangle_indices[node.left_first : node.left_first + node.tri_count]
                for tri_index in span:
                    hit = ray.intersect_triangle(bvh.tris[tri_index], tri_index)
                    if hit is not None and (best is None or hit.distance < best.distance):
                        best = hit
                        ray = replace(ray, max=hit.distance)
                if not stack:
                    break
                node = stack.pop()
                continue

            child1 = bvh.nodes[node.left_first]
            child2 = bvh.nodes[node.left_first + 1]
            dist1 = ray.aabb_intersection_at(child1.aabb)
            dist2 = ray.aabb_intersection_at(child2.aabb)
            key1 = math.inf if dist1 is None else dist1
            key2 = math.inf if dist2 is None else dist2
            if key1 > key2:
                child1, child2 = child2, child1
                dist1, dist2 = dist2, dist1

            if dist1 is None:
                if not stack:
                    break
                node = stack.pop()
            else:
                node = child1
                if dist2 is not None:
                    stack.append(child2)
        return best