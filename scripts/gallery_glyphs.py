"""Render a string of characters as SDF glyphs on one page.

Usage::

    python scripts/gallery_glyphs.py                          # saves gallery_glyphs.png
    python scripts/gallery_glyphs.py --text "Hello" --out hello.png
    python scripts/gallery_glyphs.py --font-family DejaVuSerif --font-weight bold

Each panel shows the byte field with the edge level (``255 * (1 - cutoff)``)
drawn as a contour.

Requirements: numpy, Pillow, matplotlib
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np

from tinysdf import Glyph, TinySDF

log = logging.getLogger("gallery_glyphs")

_DEFAULT_TEXT = "AaBbGgQqRr@&%?!05"


def render_gallery(
    glyphs: list[tuple[str, Glyph]],
    out_path: str,
    edge: float,
    ncols: int = 8,
) -> None:
    nrows = max(1, (len(glyphs) + ncols - 1) // ncols)
    fig, axes = plt.subplots(
        nrows, ncols,
        figsize=(ncols * 2.0, nrows * 2.2),
        facecolor="#111111",
    )
    axes = np.asarray(axes).ravel()

    for ax, (char, glyph) in zip(axes, glyphs):
        ax.set_facecolor("#111111")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(
            f"{char!r}  {glyph.width}x{glyph.height}", color="white", fontsize=7, pad=3
        )
        for spine in ax.spines.values():
            spine.set_edgecolor("#444444")

        if glyph.glyph_width == 0 or glyph.glyph_height == 0:
            ax.text(0.5, 0.5, "empty", ha="center", va="center",
                    color="#888888", transform=ax.transAxes, fontsize=8)
            continue

        img = glyph.image
        ax.imshow(img, cmap="magma", vmin=0, vmax=255, interpolation="nearest")
        if img.min() < edge < img.max():
            ax.contour(img, levels=[edge], colors="cyan", linewidths=0.8)

    for ax in axes[len(glyphs):]:
        ax.set_visible(False)

    fig.suptitle("tinysdf — glyph signed distance fields", color="white",
                 fontsize=12, y=1.002)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=200, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    log.info("Saved: %s", out_path)


def main() -> None:
    parser = argparse.ArgumentParser(description="Render characters as SDF glyphs to a PNG gallery.")
    parser.add_argument("--text", default=_DEFAULT_TEXT, help="Characters to render")
    parser.add_argument("--out", default="gallery_glyphs.png", help="Output PNG path")
    parser.add_argument("--cols", type=int, default=8, help="Number of columns (default 8)")
    parser.add_argument("--font-size", type=int, default=48)
    parser.add_argument("--buffer", type=int, default=6)
    parser.add_argument("--radius", type=float, default=12.0)
    parser.add_argument("--cutoff", type=float, default=0.25)
    parser.add_argument("--font-family", default="sans-serif")
    parser.add_argument("--font-weight", default="normal")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        sdf = TinySDF(
            font_size=args.font_size,
            buffer=args.buffer,
            radius=args.radius,
            cutoff=args.cutoff,
            font_family=args.font_family,
            font_weight=args.font_weight,
        )
    except ValueError as exc:
        parser.error(str(exc))

    glyphs = [(char, sdf.draw(char)) for char in args.text]
    render_gallery(glyphs, args.out, edge=255.0 * (1.0 - args.cutoff), ncols=args.cols)


if __name__ == "__main__":
    main()
