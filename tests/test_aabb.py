from hypothesis import given
from hypothesis import strategies as st

from ravenbvh.aabb import Aabb
from ravenbvh.vector import Vec3

ints = st.integers(-1000, 1000).map(float)
vecs = st.builds(Vec3, ints, ints, ints)


def box_of(a, b):
    box = Aabb.empty()
    box.expand(a)
    box.expand(b)
    return box


def inside(box, p):
    return all(box.min[i] <= p[i] <= box.max[i] for i in range(3))


@given(vecs)
def test_expanding_empty_box_by_point(p):
    box = Aabb.empty()
    box.expand(p)
    assert box.min == p
    assert box.max == p
    assert box.area() == 0.0


def test_unit_cube_area():
    assert Aabb(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0)).area() == 3.0


def test_expanding_by_empty_box_spans_everything():
    box = Aabb(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0))
    box.expand_aabb(Aabb.empty())
    assert box.min == Vec3.splat(-1e30)
    assert box.max == Vec3.splat(1e30)


@given(vecs, vecs, vecs, vecs)
def test_merge_contains_both_and_matches_expand(a, b, c, d):
    first, second = box_of(a, b), box_of(c, d)
    merged = first.merge(second)
    for p in (a, b, c, d):
        assert inside(merged, p)
    grown = box_of(a, b)
    grown.expand_aabb(second)
    assert grown == merged
    assert first == box_of(a, b)


@given(vecs, vecs)
def test_center_is_equidistant(a, b):
    box = box_of(a, b)
    c = box.center()
    assert c - box.min == box.max - c
    assert inside(box, c)


@given(vecs, vecs)
def test_corners(a, b):
    box = box_of(a, b)
    corners = list(box.corners())
    assert len(corners) == 8
    assert corners[0] == box.min
    assert corners[-1] == box.max
    assert all(inside(box, p) for p in corners)


@given(vecs, vecs, vecs)
def test_area_grows_monotonically(a, b, c):
    box = box_of(a, b)
    before = box.area()
    box.expand(c)
    assert box.area() >= before