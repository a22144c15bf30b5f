"""Bounding volume hierarchy over triangles, built with a binned SAH."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .aabb import Aabb
from .vector import Vec3

BIN_COUNT = 8


@dataclass(frozen=True)
class Tri:
    """A triangle with its precomputed centroid."""

    vertex0: Vec3
    vertex1: Vec3
    vertex2: Vec3
    centroid: Vec3 = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "centroid", (self.vertex0 + self.vertex1 + self.vertex2) / 3.0
        )

    @property
    def vertices(self) -> tuple[Vec3, Vec3, Vec3]:
        return (self.vertex0, self.vertex1, self.vertex2)


@dataclass
class BvhNode:
    """A leaf when ``tri_count`` > 0, otherwise a branch whose children are
    ``left_first`` and ``left_first + 1``."""

    aabb: Aabb = field(default_factory=Aabb.empty)
    left_first: int = 0
    tri_count: int = 0

    def is_leaf(self) -> bool:
        return self.tri_count > 0

    def calculate_cost(self) -> float:
        return self.tri_count * self.aabb.area()


@dataclass
class _Bin:
    bounds: Aabb = field(default_factory=Aabb.empty)
    tri_count: int = 0


class Bvh:
    """A bounding volume hierarchy for fast ray casting against triangles."""

    def __init__(self, triangles: Iterable[Tri]) -> None:
        self.tris: list[Tri] = list(triangles)
        if not self.tris:
            raise ValueError("a BVH needs at least one triangle")
        self.triangle_indices: list[int] = list(range(len(self.tris)))
        self.nodes: list[BvhNode] = [BvhNode(left_first=0, tri_count=len(self.tris))]
        self._update_node_bounds(0)
        pending = [0]
        while pending:
            children = self._subdivide(pending.pop())
            if children is not None:
                left, right = children
                pending.append(right)
                pending.append(left)

    @classmethod
    def from_mesh(
        cls, positions: Iterable[Sequence[float]], indices: Optional[Iterable[int]]
    ) -> "Bvh":
        """Build from a triangle list: vertex positions and three indices per triangle."""
        if indices is None:
            raise ValueError("mesh has no indices")
        verts = [p if isinstance(p, Vec3) else Vec3(*p) for p in positions]
        index_list = list(indices)
        if len(index_list) % 3:
            raise ValueError("index count is not a multiple of three")
        for i in index_list:
            if not 0 <= i < len(verts):
                raise ValueError(f"index {i} is out of range for {len(verts)} vertices")
        corners = iter(index_list)
        return cls(Tri(verts[a], verts[b], verts[c]) for a, b, c in zip(corners, corners, corners))

    def _node_tris(self, node: BvhNode) -> list[Tri]:
        span = self.triangle_indices[node.left_first : node.left_first + node.tri_count]
        return [self.tris[i] for i in span]

    def _update_node_bounds(self, node_idx: int) -> None:
        node = self.nodes[node_idx]
        aabb = Aabb.empty()
        for tri in self._node_tris(node):
            for vertex in tri.vertices:
                aabb.expand(vertex)
        node.aabb = aabb

    def _subdivide(self, node_idx: int) -> Optional[tuple[int, int]]:
        node = self.nodes[node_idx]
        axis, split_pos, split_cost = self._find_best_split_plane(node)
        if split_cost >= node.calculate_cost():
            return None

        order = self.triangle_indices
        i = node.left_first
        j = i + node.tri_count - 1
        while i <= j:
            if self.tris[order[i]].centroid[axis] < split_pos:
                i += 1
            else:
                order[i], order[j] = order[j], order[i]
                j -= 1

        left_count = i - node.left_first
        if left_count in (0, node.tri_count):
            return None

        left_idx = len(self.nodes)
        self.nodes.append(BvhNode(left_first=node.left_first, tri_count=left_count))
        self.nodes.append(BvhNode(left_first=i, tri_count=node.tri_count - left_count))
        node.left_first = left_idx
        node.tri_count = 0
        self._update_node_bounds(left_idx)
        self._update_node_bounds(left_idx + 1)
        return left_idx, left_idx + 1

    def _find_best_split_plane(self, node: BvhNode) -> tuple[int, float, float]:
        best_axis, split_pos, best_cost = 0, 0.0, 1e30
        tris = self._node_tris(node)
        for axis in range(3):
            centroids = [tri.centroid[axis] for tri in tris]
            lo, hi = min(centroids), max(centroids)
            if lo == hi:
                continue

            bins = [_Bin() for _ in range(BIN_COUNT)]
            scale = BIN_COUNT / (hi - lo)
            for tri, c in zip(tris, centroids):
                b = bins[min(BIN_COUNT - 1, int((c - lo) * scale))]
                b.tri_count += 1
                for vertex in tri.vertices:
                    b.bounds.expand(vertex)

            left = self._sweep(bins[:-1])
            right = self._sweep(reversed(bins[1:]))
            right.reverse()

            step = (hi - lo) / BIN_COUNT
            for plane, ((lc, la), (rc, ra)) in enumerate(zip(left, right)):
                cost = lc * la + rc * ra
                if cost < best_cost:
                    best_axis = axis
                    split_pos = lo + step * (plane + 1)
                    best_cost = cost
        return best_axis, split_pos, best_cost

    @staticmethod
    def _sweep(bins: Iterable[_Bin]) -> list[tuple[int, float]]:
        box = Aabb.empty()
        count = 0
        stats = []
        for b in bins:
            count += b.tri_count
            box.expand_aabb(b.bounds)
            stats.append((count, box.area()))
        return stats