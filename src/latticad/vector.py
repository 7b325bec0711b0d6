## three-component vector value type for latticad

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

"""three-component vectors for **latticad**

Unlike homogeneous ``[x,y,z,w]`` list vectors, a ``Vector`` is a small
immutable value with exactly three real components.  Lattice basis
vectors, translations and rotation axes are all ``Vector`` instances.

Arithmetic is available both as operators (``-a``, ``a + b``,
``a - b``, ``a * s``, ``a / s``) and as module level functions
(``negate``, ``add``, ``sub``, ``scale``, ``dot``, ``cross``,
``mag``), so either style can be used: ::

   v1 = Vector(1,0,0)
   v2 = Vector(0,1,0)
   assert cross(v1,v2) == Vector(0,0,1)
   assert v1*3 + v2 == Vector(3,1,0)

"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from math import sqrt
from typing import Iterator, Sequence

## constants
epsilon=0.000005

## operations on scalars
## -----------------------

## booleans are ints as far as isinstance() is concerned, but a
## boolean is never a good coordinate

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n,bool)) and isinstance(n,Real)

def close(a,b):
    """ are two scalars the same within epsilon
    """
    return abs(a-b) < epsilon


@dataclass(frozen=True)
class Vector:
    """Immutable three-component real vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        for c in (self.x, self.y, self.z):
            if not isgoodnum(c):
                raise ValueError('bad vector component: {}'.format(c))

    @classmethod
    def from_sequence(cls, seq: Sequence[float]) -> "Vector":
        """Make a vector from the first three values of ``seq``."""

        if len(seq) < 3:
            raise ValueError('sequence must have at least three components: {}'.format(seq))
        return cls(float(seq[0]), float(seq[1]), float(seq[2]))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __getitem__(self, i: int) -> float:
        return (self.x, self.y, self.z)[i]

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z)

    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> "Vector":
        if not isgoodnum(s):
            return NotImplemented
        return Vector(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> "Vector":
        if not isgoodnum(s):
            return NotImplemented
        return Vector(self.x / s, self.y / s, self.z / s)

    def dot(self, other: "Vector") -> float:
        """ 3 vector ``self`` dot ``other`` """
        return self.x*other.x + self.y*other.y + self.z*other.z

    def cross(self, other: "Vector") -> "Vector":
        """right-handed cross product, ``self x other``"""
        return Vector(self.y*other.z - self.z*other.y,
                      self.z*other.x - self.x*other.z,
                      self.x*other.y - self.y*other.x)

    def length(self) -> float:
        return sqrt(self.dot(self))

    def normalize(self) -> "Vector":
        """Return the unit vector pointing along ``self``."""

        m = self.length()
        if m < epsilon:
            raise ValueError('zero-length vector cannot be normalized')
        return self / m

    def isclose(self, other: "Vector", tol: float = epsilon) -> bool:
        return abs(self.x - other.x) < tol and \
            abs(self.y - other.y) < tol and \
            abs(self.z - other.z) < tol

    def __str__(self) -> str:
        return "({}, {}, {})".format(self.x, self.y, self.z)


## functional interface
## --------------------

def negate(a):
    """ 3 vector, `-a`"""
    return -a

def add(a,b):
    """ 3 vector, `a + b`"""
    return a + b

def sub(a,b):
    """ 3 vector, `a - b`"""
    return a - b

def scale(a,c):
    """ 3 vector, vector ``a`` times scalar ``c``, `a * c`"""
    return a * c

def dot(a,b):
    """ 3 vector ``a`` dot ``b`` """
    return a.dot(b)

def cross(a,b):
    """ 3 vector ``a`` cross ``b`` """
    return a.cross(b)

def mag(a):
    """ compute the magnitude of 3 vector ``a``"""
    return a.length()

## determine if two vectors are the same, to within epsilon
def vclose(a,b):
    return close(mag(sub(a,b)),0)

def vstr(a):
    """ format a vector as ``(x, y, z)``, same as ``str()``"""
    return str(a)


__all__ = [
    'epsilon',
    'isgoodnum',
    'close',
    'Vector',
    'negate',
    'add',
    'sub',
    'scale',
    'dot',
    'cross',
    'mag',
    'vclose',
    'vstr',
]
