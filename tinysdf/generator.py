"""Glyph SDF generator.

:class:`TinySDF` ties the pieces together: it measures a character with a
:class:`~tinysdf.rasterizer.GlyphRasterizer`, paints its alpha coverage,
seeds the outer/inner cost grids, runs the distance transform on each and
quantizes ``sqrt(outer) - sqrt(inner)`` into one byte per pixel.

All working memory (cost grids, scratch buffers, rasterizer surface) is
allocated once per instance and reused for every glyph.  An instance is
therefore not safe to share between threads; give each worker its own.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import numpy.typing as npt

from .grid import build_cost_grids, quantize_sdf
from .rasterizer import GlyphRasterizer, PillowRasterizer
from .transform import ScratchBuffers, edt

log = logging.getLogger(__name__)

__all__ = ["GlyphMetrics", "Glyph", "TinySDF"]


@dataclass(frozen=True)
class GlyphMetrics:
    """Placement of a glyph bitmap.

    ``width`` and ``height`` are the full output size, i.e. the drawn
    ``glyph_width x glyph_height`` rectangle plus ``buffer`` pixels on each
    side.  ``glyph_top`` is the integer part of the ascent above the
    baseline; the fractional part is left in the rasterization.
    """

    width: int
    height: int
    glyph_width: int
    glyph_height: int
    glyph_top: int
    glyph_left: int
    glyph_advance: float


@dataclass
class Glyph:
    """A rendered SDF glyph; ``data`` is row-major, one byte per pixel."""

    data: npt.NDArray[np.uint8]
    width: int
    height: int
    glyph_width: int
    glyph_height: int
    glyph_top: int
    glyph_left: int
    glyph_advance: float

    @property
    def image(self) -> npt.NDArray[np.uint8]:
        """``(height, width)`` view of :attr:`data`."""
        return self.data.reshape(self.height, self.width)


class TinySDF:
    """Render characters to single-channel signed distance fields.

    Parameters
    ----------
    font_size:
        Font size in pixels.
    buffer:
        Padding in pixels around each glyph (room for halos and outlines).
    radius:
        Distance in pixels at which the field saturates.
    cutoff:
        Fraction in ``[0, 1]`` shifting the edge (byte ``255 * (1 - cutoff)``).
    font_family, font_weight:
        Passed unchanged to the default :class:`PillowRasterizer`.
    rasterizer:
        Optional :class:`GlyphRasterizer` to use instead of the default.
        It must accept drawing anywhere on a ``size x size`` surface.

    Raises
    ------
    ValueError
        On a non-positive ``font_size`` or ``radius``, a negative ``buffer``
        or a ``cutoff`` outside ``[0, 1]``.

    Examples
    --------
    >>> sdf = TinySDF(font_size=24, buffer=3, radius=8, cutoff=0.25)
    >>> glyph = sdf.draw("A")
    >>> glyph.image.shape == (glyph.height, glyph.width)
    True
    """

    def __init__(
        self,
        font_size: int = 24,
        buffer: int = 3,
        radius: float = 8,
        cutoff: float = 0.25,
        font_family: str = "sans-serif",
        font_weight: Union[str, int] = "normal",
        rasterizer: Optional[GlyphRasterizer] = None,
    ) -> None:
        if font_size <= 0:
            raise ValueError(f"font_size must be positive, got {font_size}")
        if buffer < 0:
            raise ValueError(f"buffer must be non-negative, got {buffer}")
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        if not 0.0 <= cutoff <= 1.0:
            raise ValueError(f"cutoff must lie in [0, 1], got {cutoff}")

        self.font_size = font_size
        self.buffer = buffer
        self.radius = radius
        self.cutoff = cutoff
        self.font_family = font_family
        self.font_weight = font_weight

        # Room for the buffer halo plus glyphs somewhat larger than font_size.
        self.size = size = font_size + buffer * 4

        self.rasterizer = rasterizer if rasterizer is not None else self._create_rasterizer(size)

        # Clipped glyphs are at most size - buffer wide, so output sides
        # never exceed size + buffer.
        capacity = size + buffer
        self.grid_outer = np.zeros(capacity * capacity, dtype=np.float64)
        self.grid_inner = np.zeros(capacity * capacity, dtype=np.float64)
        self.buffers = ScratchBuffers.allocate(capacity)

    def _create_rasterizer(self, size: int) -> GlyphRasterizer:
        return PillowRasterizer(size, self.font_size, self.font_family, self.font_weight)

    def get_metrics(self, char: str) -> GlyphMetrics:
        """Measure *char* and lay it out on the working canvas.

        Glyphs larger than ``size - buffer`` are clipped at the bottom/right.
        """
        if not isinstance(char, str):
            raise TypeError(f"expected str, got {type(char).__name__}")

        m = self.rasterizer.measure(char)

        glyph_top = math.floor(m.ascent)
        glyph_left = 0

        limit = self.size - self.buffer
        ink_width = max(0, math.ceil(m.right - m.left))
        ink_height = max(0, math.ceil(m.ascent + m.descent))
        glyph_width = min(limit, ink_width)
        glyph_height = min(limit, ink_height)
        if (glyph_width, glyph_height) != (ink_width, ink_height):
            log.debug(
                "Glyph %r (%dx%d) clipped to %dx%d",
                char, ink_width, ink_height, glyph_width, glyph_height,
            )

        return GlyphMetrics(
            width=glyph_width + 2 * self.buffer,
            height=glyph_height + 2 * self.buffer,
            glyph_width=glyph_width,
            glyph_height=glyph_height,
            glyph_top=glyph_top,
            glyph_left=glyph_left,
            glyph_advance=m.advance,
        )

    def draw(self, char: str, metrics: Optional[GlyphMetrics] = None) -> Glyph:
        """Render *char* to an SDF glyph.

        Parameters
        ----------
        char:
            Character (or string) to render.
        metrics:
            Layout from :meth:`get_metrics`; computed when omitted.

        Returns
        -------
        Glyph
            Bytes are 255 deep inside the glyph, 0 far outside.  Glyphs with
            no ink (e.g. a space) come back with an all-zero buffer.
        """
        if metrics is None:
            metrics = self.get_metrics(char)
        width, height = metrics.width, metrics.height
        glyph_width, glyph_height = metrics.glyph_width, metrics.glyph_height

        glyph = Glyph(
            data=np.zeros(width * height, dtype=np.uint8),
            width=width,
            height=height,
            glyph_width=glyph_width,
            glyph_height=glyph_height,
            glyph_top=metrics.glyph_top,
            glyph_left=metrics.glyph_left,
            glyph_advance=metrics.glyph_advance,
        )
        if glyph_width == 0 or glyph_height == 0:
            return glyph

        buffer = self.buffer
        alpha = self.rasterizer.rasterize(
            char,
            (buffer, buffer + metrics.glyph_top + 1),
            (buffer, buffer, glyph_width, glyph_height),
        )

        outer, inner = build_cost_grids(
            alpha, width, height, self.grid_outer, self.grid_inner
        )
        edt(self.grid_outer, width, height, self.buffers)
        edt(self.grid_inner, width, height, self.buffers)

        glyph.data[:] = quantize_sdf(outer, inner, self.radius, self.cutoff).ravel()
        return glyph
