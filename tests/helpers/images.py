"""In-memory fixture images."""

from __future__ import annotations

import io

from PIL import Image


def make_image_bytes(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    """Encode a solid-color image of the given size."""
    color = (200, 40, 40, 255) if mode == "RGBA" else (200, 40, 40)
    if mode == "L":
        color = 128
    image = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()
