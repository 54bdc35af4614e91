"""Image loading for the alt-text request variant.

Reads an image file, identifies its MIME type from the leading bytes (falling
back to the file extension) and returns a base64-encoded
:class:`~llmroute.base.models.ImagePart` ready for a structured prompt.
"""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path
from typing import Optional, Union

from ..base.errors import CallerError
from ..base.models import ImagePart

# (prefix, mime type); WEBP is checked separately because its marker is at offset 8
_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
)


def sniff_image_type(data: bytes) -> Optional[str]:
    """Return the MIME type implied by the magic bytes, or ``None``."""
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for prefix, mime in _SIGNATURES:
        if data.startswith(prefix):
            return mime
    return None


def load_image_part(path: Union[str, Path]) -> ImagePart:
    """Read ``path`` and return it as an inline image part.

    Raises:
        CallerError: if the file is missing, unreadable or not an image.
    """
    p = Path(path).expanduser()
    if not p.is_file():
        raise CallerError(f"image file not found: {p}")
    try:
        data = p.read_bytes()
    except OSError as exc:
        raise CallerError(f"cannot read image file {p}: {exc}") from exc
    mime = sniff_image_type(data) or mimetypes.guess_type(p.name)[0]
    if not mime or not mime.startswith("image/"):
        raise CallerError(f"not a supported image file: {p}")
    return ImagePart(mime_type=mime, base64_data=base64.b64encode(data).decode("ascii"))


__all__ = ["sniff_image_type", "load_image_part"]
