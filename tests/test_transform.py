import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ravenbvh.transform import Quat, Transform
from ravenbvh.vector import Vec3

coords = st.floats(-100, 100)
vecs = st.builds(Vec3, coords, coords, coords)
scales = st.floats(0.1, 10)
angles = st.floats(-math.pi, math.pi)
axes = vecs.filter(lambda v: v.length() > 0.1)


@given(vecs)
def test_identity_rotation_keeps_vectors(v):
    assert Quat.identity().rotate(v) == v


@given(axes, angles, vecs)
def test_rotation_preserves_length_and_inverts(axis, angle, v):
    q = Quat.from_axis_angle(axis, angle)
    r = q.rotate(v)
    assert math.isclose(r.length(), v.length(), rel_tol=1e-9, abs_tol=1e-9)
    assert tuple(q.inverse().rotate(r)) == pytest.approx(tuple(v), rel=1e-6, abs=1e-6)


def test_rotation_about_y_keeps_y_axis():
    up = Vec3(0.0, 1.0, 0.0)
    result = Quat.from_rotation_y(0.7).rotate(up)
    assert tuple(result) == pytest.approx((0.0, 1.0, 0.0), rel=1e-6, abs=1e-6)


def test_quarter_turn_about_y_maps_x_to_negative_z():
    r = Quat.from_rotation_y(math.pi / 2).rotate(Vec3(1.0, 0.0, 0.0))
    assert tuple(r) == pytest.approx((0.0, 0.0, -1.0), rel=1e-6, abs=1e-6)


def test_default_forward_is_negative_z():
    forward = Transform().forward()
    assert tuple(forward) == pytest.approx((0.0, 0.0, -1.0), rel=1e-6, abs=1e-6)


def test_from_xyz_sets_translation():
    t = Transform.from_xyz(1.5, -2.0, 3.0)
    assert t.translation == Vec3(1.5, -2.0, 3.0)
    assert t.transform_point(Vec3()) == Vec3(1.5, -2.0, 3.0)


@given(vecs, axes, angles, scales, scales, scales, vecs)
def test_point_round_trip(trans, axis, angle, sx, sy, sz, p):
    t = Transform(trans, Quat.from_axis_angle(axis, angle), Vec3(sx, sy, sz))
    back_point = t.inverse_transform_point(t.transform_point(p))
    back_vector = t.inverse_transform_vector(t.transform_vector(p))
    assert tuple(back_point) == pytest.approx(tuple(p), rel=1e-5, abs=1e-5)
    assert tuple(back_vector) == pytest.approx(tuple(p), rel=1e-5, abs=1e-5)


@given(vecs, angles, scales, vecs)
def test_vectors_ignore_translation(trans, angle, s, v):
    t = Transform(trans).with_rotation(Quat.from_rotation_y(angle)).with_scale(Vec3.splat(s))
    expected = t.transform_point(v) - t.transform_point(Vec3())
    result = t.transform_vector(v)
    assert tuple(result) == pytest.approx(tuple(expected), rel=1e-5, abs=1e-5)


def test_looking_at_points_forward_at_target():
    t = Transform.from_xyz(0.0, 2.0, 5.0).looking_at(Vec3(), Vec3(0.0, 1.0, 0.0))
    direction = (Vec3() - t.translation).normalized()
    forward = t.forward()
    assert tuple(forward) == pytest.approx(tuple(direction), rel=1e-6, abs=1e-6)


@given(vecs, vecs)
def test_looking_at_axes_are_orthonormal(origin, target):
    t = Transform(origin).looking_at(target, Vec3(0.0, 1.0, 0.0))
    f, r, u = t.forward(), t.right(), t.up()
    for axis in (f, r, u):
        assert math.isclose(axis.length(), 1.0, rel_tol=1e-9)
    assert abs(f.dot(r)) < 1e-9
    assert abs(f.dot(u)) < 1e-9
    assert abs(r.dot(u)) < 1e-9