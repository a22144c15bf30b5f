"""Rotations and scale-rotate-translate transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from .vector import Vec3

_X = Vec3(1.0, 0.0, 0.0)
_Y = Vec3(0.0, 1.0, 0.0)
_Z = Vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Quat:
    """A unit quaternion representing a rotation."""

    x: float
    y: float
    z: float
    w: float

    @classmethod
    def identity(cls) -> "Quat":
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_axis_angle(cls, axis: Vec3, angle: float) -> "Quat":
        a = axis.normalized()
        s = math.sin(angle * 0.5)
        return cls(a.x * s, a.y * s, a.z * s, math.cos(angle * 0.5))

    @classmethod
    def from_rotation_y(cls, angle: float) -> "Quat":
        return cls.from_axis_angle(_Y, angle)

    @classmethod
    def _from_axes(cls, x_axis: Vec3, y_axis: Vec3, z_axis: Vec3) -> "Quat":
        m00, m01, m02 = x_axis
        m10, m11, m12 = y_axis
        m20, m21, m22 = z_axis
        if m22 <= 0.0:
            dif10 = m11 - m00
            omm22 = 1.0 - m22
            if dif10 <= 0.0:
                four = omm22 - dif10
                inv = 0.5 / math.sqrt(four)
                return cls(four * inv, (m01 + m10) * inv, (m02 + m20) * inv, (m12 - m21) * inv)
            four = omm22 + dif10
            inv = 0.5 / math.sqrt(four)
            return cls((m01 + m10) * inv, four * inv, (m12 + m21) * inv, (m20 - m02) * inv)
        sum10 = m11 + m00
        opm22 = 1.0 + m22
        if sum10 <= 0.0:
            four = opm22 - sum10
            inv = 0.5 / math.sqrt(four)
            return cls((m02 + m20) * inv, (m12 + m21) * inv, four * inv, (m01 - m10) * inv)
        four = opm22 + sum10
        inv = 0.5 / math.sqrt(four)
        return cls((m12 - m21) * inv, (m20 - m02) * inv, (m01 - m10) * inv, four * inv)

    def rotate(self, vector: Vec3) -> Vec3:
        q = Vec3(self.x, self.y, self.z)
        t = q.cross(vector) * 2.0
        return vector + t * self.w + q.cross(t)

    def inverse(self) -> "Quat":
        return Quat(-self.x, -self.y, -self.z, self.w)


def _any_orthonormal(v: Vec3) -> Vec3:
    axis = _X if abs(v.x) < 0.9 else _Y
    return v.cross(axis).normalized()


@dataclass(frozen=True)
class Transform:
    """Scale, then rotation, then translation."""

    translation: Vec3 = field(default_factory=Vec3)
    rotation: Quat = field(default_factory=Quat.identity)
    scale: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))

    @classmethod
    def from_xyz(cls, x: float, y: float, z: float) -> "Transform":
        return cls(translation=Vec3(x, y, z))

    def looking_at(self, target: Vec3, up: Vec3) -> "Transform":
        """The same transform rotated so that its forward axis points at ``target``."""
        try:
            back = -(target - self.translation).normalized()
        except ValueError:
            back = _Z
        try:
            up_dir = up.normalized()
        except ValueError:
            up_dir = _Y
        try:
            right = up_dir.cross(back).normalized()
        except ValueError:
            right = _any_orthonormal(up_dir)
        new_up = back.cross(right)
        return replace(self, rotation=Quat._from_axes(right, new_up, back))

    def with_scale(self, scale: Vec3) -> "Transform":
        return replace(self, scale=scale)

    def with_rotation(self, rotation: Quat) -> "Transform":
        return replace(self, rotation=rotation)

    def transform_point(self, point: Vec3) -> Vec3:
        return self.rotation.rotate(point * self.scale) + self.translation

    def transform_vector(self, vector: Vec3) -> Vec3:
        return self.rotation.rotate(vector * self.scale)

    def _unscale(self, vector: Vec3) -> Vec3:
        if 0.0 in tuple(self.scale):
            raise ValueError("transform scale has a zero component")
        return vector / self.scale

    def inverse_transform_point(self, point: Vec3) -> Vec3:
        return self._unscale(self.rotation.inverse().rotate(point - self.translation))

    def inverse_transform_vector(self, vector: Vec3) -> Vec3:
        return self._unscale(self.rotation.inverse().rotate(vector))

    def forward(self) -> Vec3:
        return self.rotation.rotate(-_Z)

    def right(self) -> Vec3:
        return self.rotation.rotate(_X)

    def up(self) -> Vec3:
        return self.rotation.rotate(_Y)