## repeating lattices of fill content for latticad

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

"""repeating lattices for **latticad**

A ``Lattice`` repeats fill content along one, two or three basis
vectors.  For integer cell coordinates ``(x,y,z)`` it answers two
questions: where does the cell go (``get_tx_for_node``) and what goes
in it (``get_fill_for_node``).

The fill is held through a ``DataRef``.  A lattice built around a
single ``FillNode`` owns the fill it creates; a lattice built around
an existing ``Fill`` only refers to it, and the caller keeps that fill
alive.  Copying a lattice clones the reference: an owned fill is
copied, a referenced fill is shared. ::

   pins = Fill.grid((0,1),(0,1),(0,0),nodes)
   lat = Lattice(2, Vector(1.26,0,0), Vector(0,1.26,0), Vector(), pins)
   for x, y, z, tx, node in lat.cells():
       ...

"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Generic, Iterator, Tuple, TypeVar

from latticad.fill import Fill, FillNode
from latticad.vector import Vector
from latticad.xform import Transform

T = TypeVar("T")


class DataRef(ABC, Generic[T]):
    """Access to a value that is either owned or merely referenced."""

    @abstractmethod
    def get_data(self) -> T:
        """Return the held value."""

    @abstractmethod
    def clone(self) -> "DataRef[T]":
        """Return a reference that is safe to hand to a copied holder."""

    @property
    @abstractmethod
    def owns_data(self) -> bool:
        pass


class OwnedRef(DataRef[T]):
    """Holds its own value; clones deep-copy it."""

    def __init__(self, data: T):
        self._data = data

    def get_data(self) -> T:
        return self._data

    def clone(self) -> "OwnedRef[T]":
        return OwnedRef(copy.deepcopy(self._data))

    @property
    def owns_data(self) -> bool:
        return True


class BorrowedRef(DataRef[T]):
    """Refers to a value managed elsewhere; clones share the target."""

    def __init__(self, data: T):
        self._data = data

    def get_data(self) -> T:
        return self._data

    def clone(self) -> "BorrowedRef[T]":
        return BorrowedRef(self._data)

    @property
    def owns_data(self) -> bool:
        return False


def _check_vector(v) -> Vector:
    if isinstance(v, Vector):
        return v
    if isinstance(v, (tuple, list)):
        return Vector.from_sequence(v)
    raise ValueError('bad lattice basis vector: {}'.format(v))


class Lattice:
    """cells repeated along up to three basis vectors"""

    def __init__(self, dims: int, v1, v2, v3, fill):
        if isinstance(dims, bool) or dims not in (1, 2, 3):
            raise ValueError('bad lattice dimensionality: {}'.format(dims))
        self.num_finite_dims = dims
        self.v1 = _check_vector(v1)
        self.v2 = _check_vector(v2)
        self.v3 = _check_vector(v3)
        if isinstance(fill, FillNode):
            self._fill: DataRef[Fill] = OwnedRef(Fill(fill))
        elif isinstance(fill, Fill):
            self._fill = BorrowedRef(fill)
        elif isinstance(fill, DataRef):
            self._fill = fill
        else:
            raise ValueError('bad lattice fill: {}'.format(fill))

    @classmethod
    def owning(cls, dims: int, v1, v2, v3, fill: Fill) -> "Lattice":
        """Make a lattice that owns a private copy of ``fill``."""

        if not isinstance(fill, Fill):
            raise ValueError('bad lattice fill: {}'.format(fill))
        return cls(dims, v1, v2, v3, OwnedRef(copy.deepcopy(fill)))

    @property
    def fill(self) -> Fill:
        return self._fill.get_data()

    @property
    def owns_fill(self) -> bool:
        return self._fill.owns_data

    ## copying
    ## -------

    def copy(self) -> "Lattice":
        return Lattice(self.num_finite_dims, self.v1, self.v2, self.v3,
                       self._fill.clone())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        """same as ``copy()``: a referenced fill stays referenced"""
        return self.copy()

    def assign(self, other: "Lattice") -> "Lattice":
        """copy-assign ``other`` into this lattice"""
        if other is not self:
            self.num_finite_dims = other.num_finite_dims
            self._fill = other._fill.clone()
            self.v1 = other.v1
            self.v2 = other.v2
            self.v3 = other.v3
        return self

    ## cell queries
    ## ------------

    def get_tx_for_node(self, x: int, y: int, z: int) -> Transform:
        # every active dimension contributes; inactive coordinates are ignored
        v = Vector()
        if self.num_finite_dims >= 3:
            v = self.v3 * z
        if self.num_finite_dims >= 2:
            v = v + self.v2 * y
        if self.num_finite_dims >= 1:
            v = v + self.v1 * x
        return Transform.translation_only(v)

    def get_fill_for_node(self, x: int, y: int, z: int) -> FillNode:
        fill = self._fill.get_data()
        if fill.has_grid:
            return fill.get_node(x, y, z)
        return fill.get_origin_node()

    def cells(self) -> Iterator[Tuple[int, int, int, Transform, FillNode]]:
        """Yield ``(x, y, z, transform, node)`` for every cell of the fill.

        A single-node fill has no grid, so only the origin cell is
        produced.
        """

        fill = self._fill.get_data()
        if not fill.has_grid:
            yield (0, 0, 0, self.get_tx_for_node(0, 0, 0), fill.get_origin_node())
            return
        for x, y, z in fill.indices():
            yield (x, y, z, self.get_tx_for_node(x, y, z), fill.get_node(x, y, z))

    def __repr__(self):
        return "Lattice({},{!r},{!r},{!r},{!r})".format(
            self.num_finite_dims, self.v1, self.v2, self.v3, self.fill)

    def __str__(self):
        return "[lattice {}d v1 {} v2 {} v3 {} {} {}]".format(
            self.num_finite_dims, self.v1, self.v2, self.v3,
            "owned" if self.owns_fill else "referenced", self.fill)


__all__ = [
    'DataRef',
    'OwnedRef',
    'BorrowedRef',
    'Lattice',
]
