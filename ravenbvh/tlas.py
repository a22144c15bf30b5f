"""Top-level acceleration structure over transformed BVH instances."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Hashable, Iterable, Optional, Sequence, Union

from .aabb import Aabb
from .bvh import Bvh
from .ray import Hit, Ray
from .transform import Transform


@dataclass(frozen=True, eq=False)
class Instance:
    """A BVH placed in the world by a transform, identified by ``entity``."""

    entity: Hashable
    bvh: Bvh
    transform: Transform = field(default_factory=Transform)


@dataclass(frozen=True)
class TlasLeaf:
    """A leaf referring to one instance."""

    entity: Hashable


@dataclass(frozen=True)
class TlasBranch:
    """A branch holding the node indices of its two children."""

    left: int
    right: int


NodeType = Union[TlasLeaf, TlasBranch]


@dataclass(frozen=True)
class TlasNode:
    """A node of the top-level structure with its world-space bounds."""

    aabb: Aabb = field(default_factory=Aabb.empty)
    node_type: NodeType = field(default_factory=lambda: TlasBranch(0, 0))

    def is_leaf(self) -> bool:
        return isinstance(self.node_type, TlasLeaf)


def world_aabb(bvh: Bvh, transform: Transform) -> Aabb:
    """World-space bounds of ``bvh``'s root box, from its projected corners."""
    box = Aabb.empty()
    for corner in bvh.nodes[0].aabb.corners():
        box.expand(transform.transform_point(corner))
    return box


class Tlas:
    """Agglomeratively clustered hierarchy of instance bounds."""

    def __init__(self, instances: Optional[Iterable[Instance]] = None) -> None:
        self.tlas_nodes: list[TlasNode] = []
        self._instances: dict[Hashable, Instance] = {}
        if instances is not None:
            self.build(instances)

    def build(self, instances: Iterable[Instance]) -> None:
        """Rebuild the structure from scratch over ``instances``."""
        items = list(instances)
        by_entity: dict[Hashable, Instance] = {}
        for inst in items:
            if inst.entity in by_entity:
                raise ValueError(f"duplicate instance entity {inst.entity!r}")
            by_entity[inst.entity] = inst
        self._instances = by_entity

        count = len(items)
        node_index = [0] * (count + 1)
        remaining = count
        nodes: list[TlasNode] = [TlasNode()]
        self.tlas_nodes = nodes
        for i, inst in enumerate(items):
            node_index[i] = i + 1
            nodes.append(TlasNode(world_aabb(inst.bvh, inst.transform), TlasLeaf(inst.entity)))

        a = 0
        b = self.find_best_match(node_index, remaining, a)
        while remaining > 1:
            c = self.find_best_match(node_index, remaining, b)
            if a == c:
                index_a, index_b = node_index[a], node_index[b]
                merged = nodes[index_a].aabb.merge(nodes[index_b].aabb)
                nodes.append(TlasNode(merged, TlasBranch(index_a, index_b)))
                node_index[a] = len(nodes) - 1
                node_index[b] = node_index[remaining - 1]
                remaining -= 1
                b = self.find_best_match(node_index, remaining, a)
            else:
                a, b = b, c
        nodes[0] = nodes[node_index[a]]

    def find_best_match(self, indices: Sequence[int], n: int, a: int) -> int:
        """Slot among the first ``n`` whose merge with slot ``a`` is smallest, or -1."""
        smallest = 1e30
        best = -1
        for b in range(n):
            if b == a:
                continue
            node_a = self.tlas_nodes[indices[a]]
            node_b = self.tlas_nodes[indices[b]]
            area = node_a.aabb.merge(node_b.aabb).area()
            if area < smallest:
                smallest = area
                best = b
        return best

    def intersect(self, ray: Ray) -> Optional[tuple[Hashable, Hit]]:
        """The closest instance hit by ``ray`` and the world-space hit, if any."""
        if not self.tlas_nodes or not self._instances:
            return None
        nodes = self.tlas_nodes
        stack: list[TlasNode] = []
        node = nodes[0]
        best: Optional[Hit] = None
        best_entity: Hashable = None

        while True:
            kind = node.node_type
            if isinstance(kind, TlasLeaf):
                inst = self._instances[kind.entity]
                local_ray, dir_scale = ray.to_local(inst.transform)
                hit = local_ray.intersect_bvh(inst.bvh)
                if hit is not None:
                    hit.distance /= dir_scale
                    if best is None or hit.distance < best.distance:
                        best = hit
                        best_entity = kind.entity
                        ray = replace(ray, max=hit.distance)
                if not stack:
                    break
                node = stack.pop()
                continue

            child1 = nodes[kind.right]
            child2 = nodes[kind.left]
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

        if best is None:
            return None
        return best_entity, best