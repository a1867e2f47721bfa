"""
Product image storage.

Product images arrive as base64 data URIs and are written to
settings.media_dir under a generated file name; Product.image keeps only
that name.
"""

from __future__ import annotations

import uuid
from pathlib import Path

from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.utils.validators import decode_image_data_uri

logger = get_logger(__name__)


class ImageStorage:
    """
    Writes decoded images below a base directory.

    Usage:
        storage = ImageStorage("media/products")
        file_name = storage.save(data_uri)   # "3f2a...e1.png"
    """

    def __init__(self, base_dir: str | Path):
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def save(self, data_uri: str) -> str:
        """
        Decode and store an image.

        Returns:
            The generated file name (relative to base_dir).

        Raises:
            ValueError: If the data URI is not a valid image.
            OSError: If the file cannot be written.
        """
        image = decode_image_data_uri(data_uri)

        self._base_dir.mkdir(parents=True, exist_ok=True)
        file_name = f"{uuid.uuid4().hex}{image.extension}"
        (self._base_dir / file_name).write_bytes(image.content)

        logger.info("Product image stored", file_name=file_name, size=len(image.content))
        return file_name

    def delete(self, file_name: str | None) -> None:
        """Remove a stored image. Missing files are ignored."""
        if not file_name:
            return
        path = self._base_dir / Path(file_name).name
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove product image", file_name=file_name, error=str(e))


def get_image_storage() -> ImageStorage:
    """FastAPI dependency for the product image storage."""
    return ImageStorage(settings.media_dir)
