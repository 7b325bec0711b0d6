## translation plus axis/angle rotation transforms for latticad

## Copyright (c) 2020 Richard W. DeVaul
## Copyright (c) 2020 latticad contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""translation and axis/angle rotation transforms for **latticad**

A ``Transform`` is a translation ``Vector`` plus an optional rotation
stored as a unit axis and an angle in degrees.  Transforms are
usually built from the flat numeric lists found in cell and surface
cards: ::

   t = Transform.from_inputs([1,2,3])             # translation only
   r = Transform.from_inputs([0,0,0, 0,1,0, -1,0,0])  # 90 deg about z
   d = Transform.from_inputs([0,0,0, 90,0,90, 180,90,90],
                             degree_format=True)  # same, as angles

The length of the list selects its interpretation:

* 3 values: a pure translation
* 9 values: translation, then two rows of direction cosines; the
  third row is the cross product of the first two
* 12 values: translation, then all nine direction cosines
* 13 values: as 12, and a final ``-1`` negates the translation

With ``degree_format`` every rotation entry is an angle in degrees
whose cosine is the direction cosine.  The nine direction cosines are
stored column by column, so the matrix that gets decomposed is the
transpose of the naive row assembly.

Any other length is tolerated: the result is a translation-only
transform and a warning is logged, since the geometry built from it
will be wrong.

"""

from __future__ import annotations

import logging
from math import acos, cos, degrees, pi, sin, sqrt
from typing import Optional, Sequence, Tuple

import numpy as np

from latticad.vector import Vector, epsilon, isgoodnum

log = logging.getLogger(__name__)

pi2 = 2.0*pi


## rotation matrix helpers
## -----------------------

# return the 3x3 arbitrary axis rotation matrix, angle in degrees
def rotation_matrix(axis, angle, inverse=False):
    u = axis if isinstance(axis, Vector) else Vector.from_sequence(axis)
    m = u.length()
    if m < epsilon:
        raise ValueError('zero-length rotation axis not allowed')
    if abs(m-1.0) >= epsilon:
        u = u / m

    if inverse:
        angle *= -1.0
    rad = (angle%360.0)*pi2/360.0

    ux, uy, uz = u

    cang = cos(rad)
    cmin = 1.0-cang
    sang = sin(rad)

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    return np.array([[cang + ux*ux*cmin, ux*uy*cmin-uz*sang, ux*uz*cmin+uy*sang],
                     [uy*ux*cmin+uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang],
                     [uz*ux*cmin-uy*sang, uz*uy*cmin+ux*sang, cang+uz*uz*cmin]])


def matrix_to_axis_angle(m) -> Optional[Tuple[Vector, float]]:
    """Decompose a 3x3 rotation matrix into ``(axis, angle)``.

    The angle is returned in degrees.  See
    en.wikipedia.org/wiki/Rotation_representation_(mathematics)

    ``axis = (M21-M12, M02-M20, M10-M01) / 2 sin(angle)`` is singular
    when ``sin(angle)`` vanishes.  For an angle of zero there is no
    rotation and ``None`` is returned.  For a half turn the axis is
    recovered from the diagonal instead, since ``M = 2uu' - I``.
    """

    mat = np.asarray(m, dtype=float)
    if mat.shape != (3, 3):
        raise ValueError('bad rotation matrix shape: {}'.format(mat.shape))

    cosang = (float(np.trace(mat)) - 1.0) / 2.0
    cosang = min(1.0, max(-1.0, cosang))
    theta = acos(cosang)
    sintheta = sin(theta)

    if abs(sintheta) < epsilon:
        if cosang > 0.0:
            return None
        return _half_turn_axis(mat), 180.0

    twoSinTheta = 2.0*sintheta
    axis = Vector(float(mat[2][1]-mat[1][2]) / twoSinTheta,
                  float(mat[0][2]-mat[2][0]) / twoSinTheta,
                  float(mat[1][0]-mat[0][1]) / twoSinTheta)
    return axis, degrees(theta)


def _half_turn_axis(mat) -> Vector:
    diag = np.diagonal(mat)
    k = int(np.argmax(diag))
    uk = sqrt(max(0.0, (float(diag[k]) + 1.0) / 2.0))
    if uk < epsilon:
        raise ValueError('bad half-turn rotation matrix: {}'.format(mat.tolist()))
    u = [0.0, 0.0, 0.0]
    for i in range(3):
        if i == k:
            u[i] = uk
        else:
            u[i] = float(mat[i][k] + mat[k][i]) / (4.0*uk)
    return Vector(*u).normalize()


def raw_matrix_from_inputs(inputs: Sequence[float], degree_format: bool = False) -> list:
    """Return the nine raw direction cosines from a 9, 12 or 13 value list.

    The values are the three column triples of the rotation, in input
    order.  For a 9 value list the third triple is ``v1 x v2``.
    """

    n = len(inputs)
    if n == 9:
        count = 6
    elif n in (12, 13):
        count = 9
    else:
        raise ValueError('bad transform input length for rotation: {}'.format(n))

    raw = []
    for value in inputs[3:3+count]:
        raw.append(cos(value * pi / 180.0) if degree_format else float(value))

    if n == 9:
        v1 = Vector.from_sequence(raw[0:3])
        v2 = Vector.from_sequence(raw[3:6])
        raw.extend(v1.cross(v2))
    return raw


## transforms
## ----------

class Transform:
    """translation plus optional axis/angle rotation (angle in degrees)"""

    def __init__(self, translation=None, axis=None, angle=0.0):
        if translation is None:
            translation = Vector()
        elif not isinstance(translation, Vector):
            translation = Vector.from_sequence(translation)
        self._translation = translation
        self._has_rot = axis is not None
        self._axis = None
        self._angle = None
        if self._has_rot:
            if not isinstance(axis, Vector):
                axis = Vector.from_sequence(axis)
            if axis.length() < epsilon:
                raise ValueError('zero-length rotation axis not allowed')
            if not isgoodnum(angle):
                raise ValueError('bad rotation angle: {}'.format(angle))
            self._axis = axis
            self._angle = float(angle)

    @classmethod
    def translation_only(cls, v) -> "Transform":
        return cls(v)

    @classmethod
    def from_inputs(cls, inputs: Sequence[float], degree_format: bool = False) -> "Transform":
        """Build a transform from a flat numeric input list.

        See the module documentation for how the list length selects
        the interpretation of the values.
        """

        values = list(inputs)
        for x in values:
            if not isgoodnum(x):
                raise ValueError('bad element in transform inputs: {}'.format(x))
        num_inputs = len(values)

        # translation is always the first three inputs
        padded = [float(x) for x in values[:3]] + [0.0]*max(0, 3-num_inputs)
        translation = Vector.from_sequence(padded)

        if num_inputs in (9, 12, 13):
            raw = raw_matrix_from_inputs(values, degree_format)
            if num_inputs == 13 and values[12] == -1.0:
                log.info('a transformation has M = -1; inverting the translation, '
                         'though this might not be what you wanted')
                translation = -translation

            # raw triples are columns
            mat = np.asarray(raw, dtype=float).reshape(3, 3).T
            rot = matrix_to_axis_angle(mat)
            if rot is None:
                return cls(translation)
            axis, angle = rot
            if axis.length() < epsilon:
                log.warning('transformation matrix has no rotation axis '
                            '(will pretend there is no rotation: expect incorrect geometry)')
                return cls(translation)
            return cls(translation, axis, angle)

        if num_inputs != 3:
            log.warning('transformation with %d input items is unsupported '
                        '(will pretend there is no rotation: expect incorrect geometry)',
                        num_inputs)
        return cls(translation)

    @property
    def translation(self) -> Vector:
        return self._translation

    @property
    def has_rotation(self) -> bool:
        return self._has_rot

    @property
    def axis(self) -> Vector:
        if not self._has_rot:
            raise ValueError('transform has no rotation axis')
        return self._axis

    @property
    def angle(self) -> float:
        if not self._has_rot:
            raise ValueError('transform has no rotation angle')
        return self._angle

    def reverse(self) -> "Transform":
        """Return the reverse placement: negated translation and axis.

        This is not a rigid-body inverse; it assumes consumers apply
        the translation and the rotation independently.
        """

        if self._has_rot:
            return Transform(-self._translation, -self._axis, self._angle)
        return Transform(-self._translation)

    def matrix(self):
        """3x3 rotation matrix, identity when there is no rotation"""
        if not self._has_rot:
            return np.identity(3)
        return rotation_matrix(self._axis, self._angle)

    def apply(self, p) -> Vector:
        """rotate ``p`` about the origin, then translate it"""
        v = p if isinstance(p, Vector) else Vector.from_sequence(p)
        if self._has_rot:
            r = self.matrix() @ np.asarray(tuple(v), dtype=float)
            v = Vector(float(r[0]), float(r[1]), float(r[2]))
        return v + self._translation

    def isclose(self, other: "Transform", tol: float = epsilon) -> bool:
        if not self._translation.isclose(other._translation, tol):
            return False
        if self._has_rot != other._has_rot:
            return False
        if not self._has_rot:
            return True
        return self._axis.isclose(other._axis, tol) and \
            abs(self._angle - other._angle) < tol

    def __eq__(self, other):
        if not isinstance(other, Transform):
            return NotImplemented
        return self._translation == other._translation and \
            self._has_rot == other._has_rot and \
            self._axis == other._axis and \
            self._angle == other._angle

    def __hash__(self):
        return hash((self._translation, self._has_rot, self._axis, self._angle))

    def __repr__(self):
        if self._has_rot:
            return "Transform({!r},{!r},{!r})".format(self._translation,
                                                     self._axis, self._angle)
        return "Transform({!r})".format(self._translation)

    def __str__(self):
        s = "[trans {}".format(self._translation)
        if self._has_rot:
            s += "({}:{})".format(self._angle, self._axis)
        return s + "]"


__all__ = [
    'Transform',
    'rotation_matrix',
    'matrix_to_axis_angle',
    'raw_matrix_from_inputs',
]
