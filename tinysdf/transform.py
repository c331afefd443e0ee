"""Squared Euclidean distance transform (Felzenszwalb & Huttenlocher).

Reference: P. Felzenszwalb, D. Huttenlocher, *Distance Transforms of Sampled
Functions*, Theory of Computing 8 (2012). https://cs.brown.edu/~pff/papers/dt-final.pdf

Algorithm overview
------------------
Every sample ``r`` of a line defines a parabola ``y = (x - r)**2 + f[r]``.
The transform of the line is the lower envelope of those parabolas, built
left to right on a stack:

* ``v[k]`` — index of the k-th parabola on the envelope.
* ``z[k]`` — x where parabola ``v[k]`` starts to dominate (``z[0] = -INF``);
  ``z[k + 1]`` is the provisional ``+INF`` bound of the newest parabola.

The 2-D transform is separable: one pass along every row, then one along
every column of the row-transformed grid.  Both passes are O(n) per line.

Grids are flat, row-major ``float64`` arrays.  Lines are addressed with
``offset + i * stride`` so rows and columns share one backing buffer.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

_Array = npt.NDArray[np.floating]

# Stand-in for +inf in cost grids.  For a grid of largest dimension n every
# real squared distance is at most 2 * n**2, far below INF for any canvas
# that fits in memory, and INF - INF stays finite in the intersection formula.
INF = 1e20

__all__ = ["INF", "ScratchBuffers", "edt1d", "edt"]


@dataclass
class ScratchBuffers:
    """Per-line work arrays reused by every :func:`edt1d` call.

    ``f`` holds the sampled costs, ``z`` the envelope boundaries (one longer
    than a line) and ``v`` the indices of the envelope parabolas.
    """

    f: _Array
    z: _Array
    v: npt.NDArray[np.int32]

    @classmethod
    def allocate(cls, size: int) -> "ScratchBuffers":
        """Buffers for lines of up to *size* samples."""
        return cls(
            f=np.zeros(size, dtype=np.float64),
            z=np.zeros(size + 1, dtype=np.float64),
            v=np.zeros(size, dtype=np.int32),
        )

    @property
    def capacity(self) -> int:
        return len(self.f)


def edt1d(
    grid: _Array,
    offset: int,
    stride: int,
    length: int,
    f: _Array,
    v: np.ndarray,
    z: _Array,
) -> None:
    """1-D squared distance transform of one line of *grid*, in place.

    Sample ``i`` of the line lives at ``grid[offset + i * stride]`` and is
    replaced by ``min_r grid[r] + (i - r)**2`` over the whole line.
    """
    if length <= 0:
        return

    line = grid[offset:offset + (length - 1) * stride + 1:stride]
    f[:length] = line
    # plain floats avoid boxing a numpy scalar on every read below
    costs = f[:length].tolist()

    v[0] = 0
    z[0] = -INF
    z[1] = INF

    k = 0
    for q in range(1, length):
        while True:
            r = int(v[k])
            # q > r always, so the denominator never vanishes
            s = (costs[q] - costs[r] + q * q - r * r) / (q - r) / 2
            if s > z[k]:
                break
            k -= 1
            if k < 0:
                break
        k += 1
        v[k] = q
        z[k] = s
        z[k + 1] = INF

    out = [0.0] * length
    k = 0
    for q in range(length):
        while z[k + 1] < q:
            k += 1
        r = int(v[k])
        out[q] = costs[r] + (q - r) * (q - r)
    line[:] = out


def edt(grid: _Array, width: int, height: int, buffers: ScratchBuffers) -> None:
    """2-D squared distance transform of a ``width x height`` grid, in place.

    Rows are transformed first, then columns.  Only the leading
    ``width * height`` cells of *grid* are touched.

    Raises
    ------
    ValueError
        If *grid* or *buffers* are too small for the requested extent.
    """
    if width * height > len(grid):
        raise ValueError(
            f"grid holds {len(grid)} cells, need {width}x{height}={width * height}"
        )
    if max(width, height) > buffers.capacity:
        raise ValueError(
            f"scratch buffers hold lines of {buffers.capacity}, need {max(width, height)}"
        )

    f, v, z = buffers.f, buffers.v, buffers.z
    for y in range(height):
        edt1d(grid, y * width, 1, width, f, v, z)
    for x in range(width):
        edt1d(grid, x, width, height, f, v, z)
