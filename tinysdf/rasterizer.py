"""Glyph rasterizers: the alpha-coverage source for :class:`tinysdf.TinySDF`.

The generator only relies on the :class:`GlyphRasterizer` protocol.
:class:`PillowRasterizer` is the default implementation, drawing with
Pillow's FreeType bindings onto a private 8-bit surface.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union

import numpy as np
import numpy.typing as npt
from PIL import Image, ImageDraw, ImageFont

log = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
_Box = Tuple[int, int, int, int]

__all__ = ["TextMetrics", "GlyphRasterizer", "PillowRasterizer", "load_font"]

# Font file stems tried for CSS-style generic family names, in order.
_GENERIC_FAMILIES = {
    "sans-serif": ("DejaVuSans", "LiberationSans", "Arial", "Helvetica"),
    "serif": ("DejaVuSerif", "LiberationSerif", "Times New Roman", "Times"),
    "monospace": ("DejaVuSansMono", "LiberationMono", "Courier New", "Courier"),
}

_BOLD_WEIGHTS = {"bold", "bolder", "600", "700", "800", "900"}


@dataclass(frozen=True)
class TextMetrics:
    """Actual bounding box of a drawn string, relative to its baseline origin.

    Same conventions as the HTML canvas ``measureText`` result: ``ascent``
    grows upwards, ``descent`` downwards, and ``left`` is positive when ink
    extends to the left of the origin.
    """

    ascent: float
    descent: float
    left: float
    right: float
    advance: float


class GlyphRasterizer(Protocol):
    """Anything that can measure a character and paint its alpha coverage."""

    def measure(self, char: str) -> TextMetrics:
        ...

    def rasterize(self, char: str, origin: Tuple[float, float], box: _Box) -> _Array:
        """Draw *char* with its baseline-left point at *origin* and read back *box*.

        *box* is ``(left, top, width, height)`` in surface pixels.  Returns
        a ``(height, width)`` float array of coverage in ``[0, 1]``.
        """
        ...


def _weight_suffixes(font_weight: Union[str, int]) -> Tuple[str, ...]:
    if str(font_weight).lower() in _BOLD_WEIGHTS:
        return ("-Bold", "Bold", " Bold")
    return ("", "-Regular", "Regular")


def load_font(
    font_family: str,
    font_size: int,
    font_weight: Union[str, int] = "normal",
) -> ImageFont.FreeTypeFont:
    """Resolve a family name or font file path to a Pillow font.

    *font_family* may be a path, a font file name known to FreeType, or one
    of the generic names ``sans-serif``, ``serif`` and ``monospace``.  When
    nothing matches, Pillow's bundled default font is used.
    """
    if os.path.splitext(font_family)[1].lower() in (".ttf", ".otf", ".ttc"):
        candidates = [font_family]
    else:
        stems = _GENERIC_FAMILIES.get(font_family.lower(), (font_family,))
        candidates = [
            f"{stem}{suffix}.ttf"
            for stem in stems
            for suffix in _weight_suffixes(font_weight)
        ]

    for candidate in candidates:
        try:
            font = ImageFont.truetype(candidate, font_size)
        except OSError:
            continue
        log.debug("Loaded font %s (size=%d)", candidate, font_size)
        return font

    log.warning(
        "No font found for family=%r weight=%r, using Pillow default font",
        font_family, font_weight,
    )
    return ImageFont.load_default(size=font_size)


class PillowRasterizer:
    """Rasterize glyphs onto a reusable ``size x size`` Pillow surface.

    Parameters
    ----------
    size:
        Side length of the working surface in pixels.
    font_size:
        Font size in pixels.
    font_family, font_weight:
        Passed to :func:`load_font`.
    font:
        Optional pre-loaded Pillow font; overrides the family/weight lookup.
    """

    def __init__(
        self,
        size: int,
        font_size: int,
        font_family: str = "sans-serif",
        font_weight: Union[str, int] = "normal",
        font: Optional[ImageFont.FreeTypeFont] = None,
    ) -> None:
        self.size = size
        self.font = font if font is not None else load_font(font_family, font_size, font_weight)
        self.surface = Image.new("L", (size, size), 0)
        self._draw = ImageDraw.Draw(self.surface)

    def measure(self, char: str) -> TextMetrics:
        """Ink bounding box of *char*, found by drawing it on a scratch image.

        ``font.getbbox`` spans the advance horizontally rather than the ink,
        so the horizontal extent comes from the rendered pixels.  Strings
        with no ink (e.g. a space) measure as all zeros apart from the
        advance.
        """
        advance = float(self.font.getlength(char))
        left, top, right, bottom = map(int, self.font.getbbox(char, anchor="ls"))
        pad = int(getattr(self.font, "size", 16))
        ox, oy = pad - left, pad - top
        scratch = Image.new("L", (right - left + 2 * pad, bottom - top + 2 * pad), 0)
        ImageDraw.Draw(scratch).text((ox, oy), char, fill=255, font=self.font, anchor="ls")

        ink = scratch.getbbox()
        if ink is None:
            return TextMetrics(ascent=0.0, descent=0.0, left=0.0, right=0.0, advance=advance)
        x0, y0, x1, y1 = ink
        return TextMetrics(
            ascent=float(oy - y0),
            descent=float(y1 - oy),
            left=float(ox - x0),
            right=float(x1 - ox),
            advance=advance,
        )

    def rasterize(self, char: str, origin: Tuple[float, float], box: _Box) -> _Array:
        left, top, width, height = box
        self._draw.rectangle((0, 0, self.size, self.size), fill=0)
        self._draw.text(origin, char, fill=255, font=self.font, anchor="ls")
        crop = self.surface.crop((left, top, left + width, top + height))
        return np.asarray(crop, dtype=np.float64) / 255.0
