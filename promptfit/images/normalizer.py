# promptfit/images/normalizer.py
"""
Image normalization and validation.

Turns the accepted raw image shapes into Image models:
- bytes / bytearray / memoryview
- base64 text, optionally a data URL (data:image/<subtype>;base64,<payload>)
- a mapping {"buffer": ..., "mimeType": ...} (also "mime_type" or "mime")
- an Image, passed through unchanged

No decoding of the image format happens here; only the payload bytes and
MIME type are captured.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Any, List, Mapping, Optional, Sequence

from promptfit.core.chunk import Image
from promptfit.core.exceptions import ImageLimitError, InvalidInputError
from promptfit.core.limits import LimitDimension, Limits
from promptfit.logging.logger import get_logger
from promptfit.logging.tags import IMAGES

logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "image/png"

_DATA_URL_RE = re.compile(
    r"^data:(?P<mime>image/[\w.+-]+);base64,(?P<payload>.*)$",
    re.DOTALL | re.IGNORECASE,
)
_MIME_KEYS = ("mimeType", "mime_type", "mime")
_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


def _decode_base64(text: str) -> tuple[bytes, Optional[str]]:
    """Decode base64 or data-URL text. Returns (bytes, mime type from the URL if any)."""
    mime = None
    payload = text.strip()

    match = _DATA_URL_RE.match(payload)
    if match:
        mime = match.group("mime").lower()
        payload = match.group("payload")

    # Accept the URL-safe alphabet and missing padding
    payload = "".join(payload.split()).translate(_URLSAFE_TO_STANDARD)
    payload += "=" * (-len(payload) % 4)

    try:
        return base64.b64decode(payload, validate=True), mime
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"Image string is not valid base64: {e}") from e


def normalize_image(image: Any) -> Image:
    """
    Normalize one raw image into an Image.

    Raises:
        InvalidInputError: If the shape is unsupported or base64 is invalid.
    """
    if isinstance(image, Image):
        return image

    if isinstance(image, (bytes, bytearray, memoryview)):
        return Image(data=bytes(image), mime_type=DEFAULT_MIME_TYPE)

    if isinstance(image, str):
        data, mime = _decode_base64(image)
        return Image(data=data, mime_type=mime or DEFAULT_MIME_TYPE)

    if isinstance(image, Mapping) and image.get("buffer") is not None:
        buffer = image["buffer"]
        mime = next((image[key] for key in _MIME_KEYS if image.get(key)), None)

        if isinstance(buffer, str):
            data, url_mime = _decode_base64(buffer)
            mime = mime or url_mime
        elif isinstance(buffer, (bytes, bytearray, memoryview)):
            data = bytes(buffer)
        else:
            raise InvalidInputError(
                f"Image buffer must be bytes or base64 text, got {type(buffer).__name__}"
            )
        return Image(data=data, mime_type=mime or DEFAULT_MIME_TYPE)

    raise InvalidInputError(
        "Invalid image format. Expected bytes, base64 string, or {buffer, mimeType}"
    )


def validate_images(
    images: Optional[Sequence[Any]],
    limits: Limits,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> List[Image]:
    """
    Normalize images and check them against image limits.

    The count is checked before any image is decoded.

    Raises:
        ImageLimitError: Too many images, or an image larger than image_byte_limit.
        InvalidInputError: A single image was passed instead of a sequence,
            or an image could not be normalized.
    """
    if isinstance(images, (str, bytes, bytearray, memoryview, Mapping, Image)):
        raise InvalidInputError(
            f"Images must be a list of images, got a single {type(images).__name__}",
            provider=provider,
            model=model,
        )

    if not images:
        return []

    if len(images) > limits.max_images:
        raise ImageLimitError(
            limit=LimitDimension.MAX_IMAGES,
            actual=len(images),
            allowed=limits.max_images,
            provider=provider,
            model=model,
        )

    normalized: List[Image] = []
    for index, raw in enumerate(images):
        image = normalize_image(raw)
        if image.size_bytes > limits.image_byte_limit:
            raise ImageLimitError(
                limit=LimitDimension.IMAGE_BYTE_LIMIT,
                actual=image.size_bytes,
                allowed=limits.image_byte_limit,
                image_index=index,
                provider=provider,
                model=model,
            )
        normalized.append(image)

    logger.debug(
        f"{IMAGES} Normalized {len(normalized)} images "
        f"({sum(i.size_bytes for i in normalized)} bytes)"
    )
    return normalized


__all__ = ["DEFAULT_MIME_TYPE", "normalize_image", "validate_images"]
