## lattice fill content for latticad

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

"""fill content for **latticad** lattices

A ``FillNode`` names the universe that occupies a lattice cell, with
an optional placement ``Transform`` and an arbitrary content payload.

A ``Fill`` is either a single node, used for every cell, or a grid of
nodes over three inclusive integer ranges.  Grid nodes are stored
flat, z-major, then y, with x varying fastest: ::

   f = Fill.grid((0,1), (0,1), (0,0),
                 [FillNode(1), FillNode(2), FillNode(3), FillNode(4)])
   f.get_node(1,0,0)   # FillNode(universe=2)
   f.get_node(0,1,0)   # FillNode(universe=3)

Asking for a cell outside the declared ranges, or for grid access on
a single-node fill, is a caller bug and raises.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence, Tuple

from latticad.errors import FillIndexError, FillStateError
from latticad.xform import Transform

Range = Tuple[int, int]


@dataclass(frozen=True)
class FillNode:
    """Content of one lattice cell."""

    universe: int = 0
    transform: Optional[Transform] = None
    content: Any = None

    @property
    def has_transform(self) -> bool:
        return self.transform is not None

    def __str__(self) -> str:
        s = "universe {}".format(self.universe)
        if self.transform is not None:
            s += " {}".format(self.transform)
        return s


def _check_range(r) -> Range:
    if not isinstance(r, (tuple, list)) or len(r) != 2:
        raise ValueError('bad fill range: {}'.format(r))
    first, second = r
    for v in (first, second):
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError('bad fill range bound: {}'.format(v))
    if second < first:
        raise ValueError('bad fill range, second < first: {}'.format(r))
    return (first, second)


def _extent(r: Range) -> int:
    return r[1] - r[0] + 1


class Fill:
    """single-node or gridded fill content, read-only after construction"""

    def __init__(self, node: FillNode):
        if not isinstance(node, FillNode):
            raise ValueError('bad fill node: {}'.format(node))
        self.has_grid = False
        self.xrange = None
        self.yrange = None
        self.zrange = None
        self._nodes = (node,)

    @classmethod
    def grid(cls, xrange, yrange, zrange, nodes: Sequence[FillNode]) -> "Fill":
        """Make a gridded fill; ``nodes`` is flat, x fastest, z slowest."""

        xrange = _check_range(xrange)
        yrange = _check_range(yrange)
        zrange = _check_range(zrange)
        nodes = tuple(nodes)
        expected = _extent(xrange) * _extent(yrange) * _extent(zrange)
        if len(nodes) != expected:
            raise ValueError('fill grid needs {} nodes, got {}'.format(expected, len(nodes)))
        for n in nodes:
            if not isinstance(n, FillNode):
                raise ValueError('bad fill node: {}'.format(n))

        f = cls.__new__(cls)
        f.has_grid = True
        f.xrange = xrange
        f.yrange = yrange
        f.zrange = zrange
        f._nodes = nodes
        return f

    @property
    def nodes(self) -> Tuple[FillNode, ...]:
        return self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def contains(self, x: int, y: int, z: int) -> bool:
        if not self.has_grid:
            return True
        return self.xrange[0] <= x <= self.xrange[1] and \
            self.yrange[0] <= y <= self.yrange[1] and \
            self.zrange[0] <= z <= self.zrange[1]

    def indices_to_serial_index(self, x: int, y: int, z: int) -> int:
        if not self.has_grid:
            raise FillStateError('serial indices are only defined for gridded fills')
        if not self.contains(x, y, z):
            raise FillIndexError((x, y, z), self.xrange, self.yrange, self.zrange)

        grid_x = x - self.xrange[0]
        grid_y = y - self.yrange[0]
        grid_z = z - self.zrange[0]

        dx = _extent(self.xrange)
        dy = _extent(self.yrange)

        index = grid_z * (dy*dx) + grid_y * dx + grid_x
        assert 0 <= index < len(self._nodes)
        return index

    def indices(self) -> Iterator[Tuple[int, int, int]]:
        """all cell coordinates of a gridded fill, in serial order"""
        if not self.has_grid:
            raise FillStateError('cell coordinates are only defined for gridded fills')
        for z in range(self.zrange[0], self.zrange[1] + 1):
            for y in range(self.yrange[0], self.yrange[1] + 1):
                for x in range(self.xrange[0], self.xrange[1] + 1):
                    yield (x, y, z)

    def get_origin_node(self) -> FillNode:
        if not self.has_grid:
            return self._nodes[0]
        # gridded fills must include 0 on every axis
        return self._nodes[self.indices_to_serial_index(0, 0, 0)]

    def get_node(self, x: int, y: int, z: int) -> FillNode:
        if not self.has_grid:
            raise FillStateError('get_node() requires a gridded fill')
        return self._nodes[self.indices_to_serial_index(x, y, z)]

    def __eq__(self, other):
        if not isinstance(other, Fill):
            return NotImplemented
        return self.has_grid == other.has_grid and \
            self.xrange == other.xrange and \
            self.yrange == other.yrange and \
            self.zrange == other.zrange and \
            self._nodes == other._nodes

    __hash__ = None

    def __repr__(self):
        if self.has_grid:
            return "Fill.grid({},{},{},{!r})".format(self.xrange, self.yrange,
                                                     self.zrange, list(self._nodes))
        return "Fill({!r})".format(self._nodes[0])

    def __str__(self):
        if self.has_grid:
            return "fill grid x:{} y:{} z:{} ({} nodes)".format(
                self.xrange, self.yrange, self.zrange, len(self._nodes))
        return "fill {}".format(self._nodes[0])


__all__ = [
    'FillNode',
    'Fill',
    'FillIndexError',
    'FillStateError',
]
