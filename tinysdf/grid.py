"""Cost-grid construction and byte quantization for glyph SDFs."""

from __future__ import annotations

from typing import Tuple

import numpy as np
import numpy.typing as npt

from .transform import INF

_Array = npt.NDArray[np.floating]

__all__ = ["build_cost_grids", "quantize_sdf"]


def build_cost_grids(
    alpha: _Array,
    width: int,
    height: int,
    outer: _Array,
    inner: _Array,
) -> Tuple[_Array, _Array]:
    """Seed the *outer* and *inner* cost grids from an alpha-coverage bitmap.

    *alpha* has shape ``(glyph_height, glyph_width)`` with coverage in
    ``[0, 1]``.  It is centred in the ``width x height`` canvas with the
    same integer offset ``(width - glyph_width) // 2`` on both axes.

    Outside the glyph rectangle ``outer = INF`` and ``inner = 0``.  Inside,
    full and empty pixels get ``0`` / ``INF`` seeds; partial coverage is
    treated as a sub-pixel offset from the 0.5 contour:

    ============  ==========================  ==========================
    alpha         outer                       inner
    ============  ==========================  ==========================
    ``a == 1``    ``0``                       ``INF``
    ``a == 0``    ``INF``                     ``0``
    otherwise     ``max(0, 0.5 - a)**2``      ``max(0, a - 0.5)**2``
    ============  ==========================  ==========================

    Only the leading ``width * height`` cells of the flat grids are written.

    Returns
    -------
    tuple
        ``(height, width)`` views of the written part of *outer* and
        *inner*.
    """
    a = np.asarray(alpha, dtype=np.float64)
    glyph_height, glyph_width = a.shape
    n = width * height

    outer_view = outer[:n].reshape(height, width)
    inner_view = inner[:n].reshape(height, width)
    outer_view.fill(INF)
    inner_view.fill(0.0)

    offset = (width - glyph_width) // 2
    rows = slice(offset, offset + glyph_height)
    cols = slice(offset, offset + glyph_width)

    outer_view[rows, cols] = np.where(
        a == 1.0, 0.0,
        np.where(a == 0.0, INF, np.maximum(0.0, 0.5 - a) ** 2),
    )
    inner_view[rows, cols] = np.where(
        a == 1.0, INF,
        np.where(a == 0.0, 0.0, np.maximum(0.0, a - 0.5) ** 2),
    )
    return outer_view, inner_view


def quantize_sdf(
    outer: _Array,
    inner: _Array,
    radius: float,
    cutoff: float,
) -> npt.NDArray[np.uint8]:
    """Combine two transformed grids into signed distance bytes.

    ``d = sqrt(outer) - sqrt(inner)`` is positive outside the glyph and
    negative inside; the byte is ``255 - 255 * (d / radius + cutoff)``
    rounded half up and clamped to ``[0, 255]``.
    """
    d = np.sqrt(outer) - np.sqrt(inner)
    value = np.floor(255.0 - 255.0 * (d / radius + cutoff) + 0.5)
    return np.clip(value, 0, 255).astype(np.uint8)
