"""
tinysdf — Signed Distance Field glyph rendering
===============================================

Turns anti-aliased glyph rasterizations into single-channel signed distance
fields for resolution-independent text rendering on the GPU.

Implemented features
--------------------
- Exact squared Euclidean distance transform (Felzenszwalb & Huttenlocher):
  :func:`edt1d`, :func:`edt`
- Sub-pixel cost seeding from alpha coverage: :func:`build_cost_grids`
- Byte quantization with radius/cutoff: :func:`quantize_sdf`
- Glyph generator with reusable buffers: :class:`TinySDF`
- Pillow/FreeType rasterizer: :class:`PillowRasterizer`

Quick start
-----------

::

    from tinysdf import TinySDF

    sdf   = TinySDF(font_size=24, buffer=3, radius=8, cutoff=0.25)
    glyph = sdf.draw("A")
    img   = glyph.image          # (height, width) uint8, 255 = inside

Any object implementing :class:`GlyphRasterizer` can replace the Pillow
rasterizer::

    sdf = TinySDF(font_size=32, rasterizer=my_rasterizer)
"""

from .generator import Glyph, GlyphMetrics, TinySDF
from .grid import build_cost_grids, quantize_sdf
from .rasterizer import GlyphRasterizer, PillowRasterizer, TextMetrics, load_font
from .transform import INF, ScratchBuffers, edt, edt1d

__version__ = "0.1.0"

__all__ = [
    # Generator
    "TinySDF",
    "Glyph",
    "GlyphMetrics",

    # Rasterizers
    "GlyphRasterizer",
    "PillowRasterizer",
    "TextMetrics",
    "load_font",

    # Distance transform
    "INF",
    "ScratchBuffers",
    "edt1d",
    "edt",

    # Cost grids
    "build_cost_grids",
    "quantize_sdf",
]
