"""
Shared validators for request payloads.
"""

import base64
import binascii
import re
from dataclasses import dataclass

from shared.config.constants import Limits

# Image subtypes accepted in data URIs, mapped to the stored file extension
ALLOWED_IMAGE_TYPES: dict[str, str] = {
    "png": ".png",
    "jpeg": ".jpg",
    "jpg": ".jpg",
    "gif": ".gif",
    "webp": ".webp",
}

DATA_URI_PATTERN = re.compile(
    r"^data:image/(?P<subtype>[a-zA-Z0-9.+-]+)(;[^,;]+)*;base64,(?P<payload>.*)$",
    re.DOTALL,
)


@dataclass(frozen=True)
class DecodedImage:
    """Image bytes extracted from a data URI."""

    extension: str
    content: bytes


def is_image_data_uri(value: str | None) -> bool:
    """Cheap shape check: "data:image/" prefix and a "base64," marker."""
    if not value:
        return False
    return value.startswith("data:image/") and "base64," in value


def decode_image_data_uri(value: str, max_bytes: int = Limits.MAX_IMAGE_BYTES) -> DecodedImage:
    """
    Decode a "data:image/<type>;base64,<payload>" URI.

    Args:
        value: The data URI
        max_bytes: Upper bound for the decoded size

    Returns:
        DecodedImage with the file extension and raw bytes

    Raises:
        ValueError: If the URI is malformed, the type is not allowed, the
            payload is not valid base64, or the image is too large
    """
    if not is_image_data_uri(value):
        raise ValueError("must be a base64 image data URI (data:image/<type>;base64,...)")

    match = DATA_URI_PATTERN.match(value.strip())
    if match is None:
        raise ValueError("must be a base64 image data URI (data:image/<type>;base64,...)")

    subtype = match.group("subtype").lower()
    extension = ALLOWED_IMAGE_TYPES.get(subtype)
    if extension is None:
        allowed = ", ".join(sorted(ALLOWED_IMAGE_TYPES))
        raise ValueError(f"image type '{subtype}' is not allowed (allowed: {allowed})")

    payload = re.sub(r"\s+", "", match.group("payload"))
    if not payload:
        raise ValueError("image payload is empty")

    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("image payload is not valid base64")

    if len(content) > max_bytes:
        raise ValueError(f"image exceeds the maximum size of {max_bytes} bytes")

    return DecodedImage(extension=extension, content=content)
