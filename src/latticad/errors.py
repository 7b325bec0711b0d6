"""Exceptions raised by latticad for violated lookup contracts.

Tolerated input problems (for example a transform input list of an
unsupported length) are logged rather than raised; the classes here
signal caller bugs such as addressing a fill cell that does not exist.
"""


class LatticeError(Exception):
    """Base class for latticad contract violations."""


class FillIndexError(LatticeError, IndexError):
    """Cell coordinates fall outside the ranges declared by a fill."""

    def __init__(self, coords, xrange=None, yrange=None, zrange=None):
        self.coords = tuple(coords)
        self.ranges = (xrange, yrange, zrange)
        super().__init__(
            f"cell {self.coords} outside fill ranges "
            f"x:{xrange} y:{yrange} z:{zrange}"
        )


class FillStateError(LatticeError, RuntimeError):
    """A gridded-only operation was requested on a single-node fill."""


__all__ = [
    "LatticeError",
    "FillIndexError",
    "FillStateError",
]
