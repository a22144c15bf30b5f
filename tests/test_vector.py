import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ravenbvh.vector import Vec3

ints = st.integers(-1000, 1000).map(float)
triples = st.tuples(ints, ints, ints)
nonzero = triples.filter(lambda c: any(c))


def test_splat_sets_every_component():
    assert Vec3.splat(2.5) == Vec3(2.5, 2.5, 2.5)


@given(triples)
def test_iteration_and_indexing_agree(c):
    v = Vec3(*c)
    assert tuple(v) == c
    assert (v[0], v[1], v[2]) == c
    assert (v.x, v.y, v.z) == c


@given(triples, triples)
def test_add_sub_round_trip(p, q):
    a, b = Vec3(*p), Vec3(*q)
    assert (a + b) - b == a


@given(triples)
def test_negation_sums_to_zero(c):
    v = Vec3(*c)
    assert v + (-v) == Vec3()


@given(triples, st.integers(1, 50).map(float))
def test_scalar_mul_div_round_trip(c, s):
    v = Vec3(*c)
    assert (v * s) / s == v
    assert s * v == v * s


@given(triples, triples)
def test_cross_is_perpendicular(p, q):
    a, b = Vec3(*p), Vec3(*q)
    c = a.cross(b)
    assert c.dot(a) == 0.0
    assert c.dot(b) == 0.0


@given(triples, triples)
def test_cross_is_anticommutative(p, q):
    a, b = Vec3(*p), Vec3(*q)
    assert a.cross(b) == -(b.cross(a))


@given(triples)
def test_length_squared_is_self_dot(c):
    v = Vec3(*c)
    assert v.length() ** 2 == pytest.approx(v.dot(v))


@given(nonzero)
def test_normalized_has_unit_length(c):
    v = Vec3(*c)
    n = v.normalized()
    assert math.isclose(n.length(), 1.0, rel_tol=1e-12)
    assert n.dot(v) > 0


def test_normalizing_zero_raises():
    with pytest.raises(ValueError):
        Vec3().normalized()


@given(triples, triples)
def test_min_max_are_componentwise(p, q):
    a, b = Vec3(*p), Vec3(*q)
    lo, hi = a.min(b), a.max(b)
    for axis in range(3):
        assert lo[axis] <= a[axis] and lo[axis] <= b[axis]
        assert hi[axis] >= a[axis] and hi[axis] >= b[axis]
    assert lo + hi == a + b