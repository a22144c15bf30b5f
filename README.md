# ravenbvh

Ray casting against triangle meshes in pure Python. Each mesh gets a
bounding volume hierarchy (BVH), and a top-level acceleration structure
(TLAS) sits over many placed meshes.

- `ravenbvh.bvh.Bvh` is built with the surface area heuristic over 8 bins
  per axis.
- `ravenbvh.tlas.Tlas` clusters the instance bounds agglomeratively. It
  returns the closest hit across all instances, together with the entity the
  hit belongs to.
- `ravenbvh.camera.BvhCamera` renders a TLAS into an RGBA byte buffer. Each
  pixel is coloured by the barycentric coordinates of its hit. This is useful
  for debugging and for benchmarking.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Building blocks

- `ravenbvh.vector.Vec3` is an immutable 3D vector. It supports `+`, `-`,
  and `*` and `/` by a scalar or component-wise by another vector. It also
  has `dot`, `cross`, `length`, `normalized`, `min`, `max` and
  `Vec3.splat(value)`.
- `ravenbvh.transform.Quat` is a rotation, made with `identity()`,
  `from_axis_angle(axis, angle)` or `from_rotation_y(angle)`. It has
  `rotate(vector)` and `inverse()`.
- `ravenbvh.transform.Transform` applies scale, then rotation, then
  translation.
  - It is made with `from_xyz`, `looking_at(target, up)`, `with_scale` and
    `with_rotation`.
  - It maps points and vectors with `transform_point` and `transform_vector`.
    `inverse_transform_point` and `inverse_transform_vector` map them back.
  - `forward()`, `right()` and `up()` give its axes; forward is −Z.
- `ravenbvh.aabb.Aabb` is a mutable axis-aligned box.
  - `Aabb.empty()` gives an inverted box.
  - It has `expand`, `expand_aabb`, `merge` and `center`.
  - `corners()` yields the eight corners.
  - `area()` returns half the surface area.

## Casting a ray against one mesh

```python
from ravenbvh.vector import Vec3
from ravenbvh.bvh import Bvh
from ravenbvh.ray import Ray

positions = [Vec3(-1, 0, -1), Vec3(1, 0, -1), Vec3(1, 0, 1), Vec3(-1, 0, 1)]
indices = [0, 1, 2, 0, 2, 3]
bvh = Bvh.from_mesh(positions, indices)

ray = Ray(Vec3(0, 5, 0), Vec3(0, -1, 0), 100.0)
hit = ray.intersect_bvh(bvh)
if hit is not None:
    print(hit.distance, hit.u, hit.v, hit.tri_index)
```

**Building a BVH.** `Bvh.from_mesh` takes positions, given as `Vec3`s or
3-sequences, and a flat index list with three indices per triangle. It raises
`ValueError` in these cases:

- the indices are `None`;
- the index count is not a multiple of three;
- an index is out of range;
- the mesh has no triangles.

You can also build a BVH directly from `ravenbvh.bvh.Tri` objects with
`Bvh(triangles)`.

**Ray directions.** `Ray` normalizes its direction and raises `ValueError`
for a zero direction.

**Ray methods.**

- `intersect_triangle(tri, tri_index)` and `intersect_bvh(bvh)` return a
  `Hit`, or `None` when nothing is hit.
- `aabb_intersection_at(aabb)` returns the entry distance into a box, or
  `None`.
- `get_point(distance)` returns the point at that distance along the ray.

### Meshes placed by a transform

When the mesh is placed by a `Transform`, first bring the ray into local
space. Afterwards, divide the hit distance by the returned scale to get the
world-space distance:

```python
from ravenbvh.transform import Transform

transform = Transform.from_xyz(2.0, 0.0, 0.0).with_scale(Vec3.splat(3.0))
local_ray, dir_scale = ray.to_local(transform)
hit = local_ray.intersect_bvh(bvh)
if hit is not None:
    world_distance = hit.distance / dir_scale
    point = ray.get_point(world_distance)
```

## Many meshes: the TLAS

```python
from ravenbvh.tlas import Instance, Tlas

tlas = Tlas()
tlas.build([
    Instance("ground", bvh, Transform.from_xyz(0, 0, 0)),
    Instance("box", bvh, Transform.from_xyz(0, 1, 0)),
])
result = tlas.intersect(ray)
if result is not None:
    entity, hit = result
```

**Instances.** Any hashable value can serve as an instance's entity. Entities
must be unique, and `build` raises `ValueError` on a duplicate. Calling
`build` again rebuilds the structure from scratch.

**Nodes.** `tlas.tlas_nodes` holds `TlasNode`s. Each has a world-space `aabb`
and a `node_type`, which is either a `TlasLeaf(entity)` or a
`TlasBranch(left, right)`.

**Bounds.** `world_aabb(bvh, transform)` gives the world bounds of a placed
BVH. It computes them from the projected corners of the BVH's root box.

## Rendering a debug image

```python
from ravenbvh.camera import BvhCamera, ray_count_label

camera = BvhCamera(256, 256)
eye = Transform.from_xyz(0.0, 2.0, 10.0).looking_at(Vec3(0, 0, 0), Vec3(0, 1, 0))
pixels = camera.render(tlas, eye)   # RGBA bytes, width * height * 4
print(ray_count_label(256, 256))    # "65k rays"
```

The camera has a 45° vertical field of view.

**Pixel colours.**

- A pixel that hits something is coloured `(u, v, 1 − u − v) × 255`, with
  alpha 255.
- A pixel that misses is black with alpha 255.

**Methods.**

- `render` returns the buffer and also stores it in `camera.image`.
- `primary_ray(transform, x, y)` returns the ray through one pixel. Row 0 is
  at the top.

## Debug modes

`ravenbvh.debug.BvhDebugMode` has three modes: `DISABLED`, `BVHS` and `TLAS`.
`next(tlas_enabled=True)` moves to the next mode in the cycle and skips `TLAS`
when `tlas_enabled` is false.

Two functions turn a box into the transform of a unit cube that covers it:

- `aabb_global(aabb)` for a box in world space;
- `aabb_transform(aabb, transform)` for a box in the local space of a
  transform.

## What this package does not do

It computes hierarchies, hits and pixel buffers only. It does not do the
following:

- load mesh or scene files;
- draw anything on screen;
- write image files;
- run a scene or update loop.

Loading meshes, drawing the debug boxes and saving rendered buffers are up to
the caller.

Bounds are not refitted when triangles move. Rebuild the `Bvh` or `Tlas`
instead.