"""Hand generated images to the user: data URLs and saved files."""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"


def to_data_url(image: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Encode ``image`` as ``data:<mime>;base64,<payload>``."""
    encoded = base64.b64encode(image).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def from_data_url(data_url: str) -> tuple[bytes, str]:
    """Decode a base64 data URL back into ``(bytes, mime_type)``.

    Raises:
        ValueError: If ``data_url`` is not a base64 data URL.

    """
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        msg = "Expected a base64 data URL (data:<mime>;base64,<payload>)"
        raise ValueError(msg)
    mime_type = header[len("data:") : -len(";base64")] or DEFAULT_MIME_TYPE
    try:
        return base64.b64decode(payload, validate=True), mime_type
    except binascii.Error as e:
        msg = f"Invalid base64 payload in data URL: {e}"
        raise ValueError(msg) from e


def save_thumbnail(image: bytes, directory: Path, filename: str) -> Path:
    """Write ``image`` to ``directory / filename``, creating the directory."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_bytes(image)
    logger.info("Thumbnail saved to: %s", path)
    return path
