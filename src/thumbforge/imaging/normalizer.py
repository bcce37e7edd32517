"""Normalize arbitrary uploads to the canonical 16:9 raster.

The source is center-cropped to the target aspect ratio and resampled onto a
fixed canvas (1280x720 by default). JPEG uploads are re-encoded as JPEG, every
other format as PNG.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from thumbforge.config.settings import ImageSettings
from thumbforge.exceptions import DecodeError

logger = logging.getLogger(__name__)

JPEG_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/pjpeg"})
PNG_MIME_TYPE = "image/png"
JPEG_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class ReferenceImage:
    """Normalized image ready to be sent as a generation reference."""

    data: bytes
    mime_type: str


@dataclass(frozen=True)
class CropBox:
    """Source region, in source pixels, that is resampled onto the canvas."""

    x: float
    y: float
    width: float
    height: float

    def as_pil_box(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


def compute_crop_box(width: int, height: int, aspect: tuple[int, int] = (16, 9)) -> CropBox:
    """Return the centered crop of a ``width`` x ``height`` image matching ``aspect``.

    Wider sources lose their sides, taller sources lose top and bottom. A
    source that already matches the ratio is returned whole at origin (0, 0).
    The ratio comparison is done on integers so exact matches never crop.
    """
    if width <= 0 or height <= 0:
        msg = f"Image has invalid dimensions: {width}x{height}"
        raise DecodeError(msg)

    ratio_w, ratio_h = aspect
    target = ratio_w / ratio_h
    source_scaled = width * ratio_h
    target_scaled = height * ratio_w

    if source_scaled > target_scaled:
        crop_width = height * target
        return CropBox(x=(width - crop_width) / 2, y=0.0, width=crop_width, height=float(height))
    if source_scaled < target_scaled:
        crop_height = width / target
        return CropBox(x=0.0, y=(height - crop_height) / 2, width=float(width), height=crop_height)
    return CropBox(x=0.0, y=0.0, width=float(width), height=float(height))


def output_mime_type_for(source_mime_type: str | None) -> str:
    """JPEG sources stay JPEG; everything else is encoded as PNG."""
    if source_mime_type and source_mime_type.strip().lower() in JPEG_MIME_TYPES:
        return JPEG_MIME_TYPE
    return PNG_MIME_TYPE


def _open(source: bytes, label: str = "reference image") -> Image.Image:
    if not source:
        msg = f"Failed to load the {label}. The file is empty."
        raise DecodeError(msg)
    try:
        image = Image.open(io.BytesIO(source))
        image.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        msg = (
            f"Failed to load the {label}. The file may be corrupt "
            f"or in an unsupported format: {e}"
        )
        raise DecodeError(msg) from e
    return image


def _decode(source: bytes) -> Image.Image:
    return ImageOps.exif_transpose(_open(source))


def _prepare_mode(image: Image.Image, mime_type: str) -> Image.Image:
    if mime_type == JPEG_MIME_TYPE:
        return image if image.mode == "RGB" else image.convert("RGB")
    if image.mode in ("RGB", "RGBA"):
        return image
    has_alpha = "A" in image.getbands() or "transparency" in image.info
    return image.convert("RGBA" if has_alpha else "RGB")


def normalize(
    source: bytes,
    source_mime_type: str | None,
    settings: ImageSettings | None = None,
) -> ReferenceImage:
    """Center-crop ``source`` to the canonical aspect ratio and resize it.

    Args:
        source: Raw bytes of the uploaded file.
        source_mime_type: Mime type reported for the upload. Only used to pick
            the output encoding.
        settings: Canonical canvas settings; defaults to 1280x720 16:9.

    Returns:
        ReferenceImage holding the encoded canvas and its mime type.

    Raises:
        DecodeError: If the bytes are not a readable raster image.

    """
    settings = settings or ImageSettings()
    image = _decode(source)
    width, height = image.size
    ratio_w, ratio_h = (int(p) for p in settings.aspect_ratio.split(":"))
    box = compute_crop_box(width, height, (ratio_w, ratio_h))

    mime_type = output_mime_type_for(source_mime_type)
    image = _prepare_mode(image, mime_type)
    canvas = image.resize(
        (settings.width, settings.height),
        resample=Image.Resampling.BILINEAR,
        box=box.as_pil_box(),
    )
    logger.debug(
        "Normalized %sx%s image (crop %s) to %sx%s %s",
        width,
        height,
        box,
        settings.width,
        settings.height,
        mime_type,
    )

    buffer = io.BytesIO()
    if mime_type == JPEG_MIME_TYPE:
        canvas.save(buffer, format="JPEG", quality=settings.jpeg_quality)
    else:
        canvas.save(buffer, format="PNG")
    return ReferenceImage(data=buffer.getvalue(), mime_type=mime_type)


def ensure_png(source: bytes) -> bytes:
    """Return ``source`` as PNG bytes, re-encoding other raster formats.

    Used for a previously generated image that is sent back as the first
    reference, which always travels as ``image/png``.

    Raises:
        DecodeError: If the bytes are not a readable raster image.

    """
    image = _open(source, "previous thumbnail")
    if image.format == "PNG":
        return source

    logger.debug("Re-encoding %s previous thumbnail as PNG", image.format)
    image = _prepare_mode(ImageOps.exif_transpose(image), PNG_MIME_TYPE)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
