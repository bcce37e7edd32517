"""Client-side image normalization."""

from thumbforge.imaging.normalizer import (
    CropBox,
    ReferenceImage,
    compute_crop_box,
    ensure_png,
    normalize,
    output_mime_type_for,
)

__all__ = ["CropBox", "ReferenceImage", "compute_crop_box", "ensure_png", "normalize", "output_mime_type_for"]
