"""
Rasterise strokes into a PNG with Pillow.
"""

from __future__ import annotations

import io
from collections.abc import Sequence

from PIL import Image, ImageDraw

from checkout_flow.signature._types import Stroke, SignatureImage

INK = (0, 0, 0)
PAPER = (255, 255, 255)
LINE_WIDTH = 2


def rasterize(
    strokes: Sequence[Stroke],
    width: int,
    height: int,
    line_width: int = LINE_WIDTH,
) -> SignatureImage:
    """
    Draw every stroke as a polyline on an opaque white canvas.

    Strokes with a single point carry no ink and are skipped.
    """
    image = Image.new("RGB", (width, height), PAPER)
    draw = ImageDraw.Draw(image)

    for stroke in strokes:
        if len(stroke) < 2:
            continue
        draw.line(
            [(p.x, p.y) for p in stroke],
            fill=INK,
            width=line_width,
            joint="curve",
        )

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return SignatureImage(png=buffer.getvalue(), width=width, height=height)


__all__ = ("rasterize",)
