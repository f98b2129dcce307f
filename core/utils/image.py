from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse
import logging
from typing import Optional, Tuple
from io import BytesIO

import requests
from PIL import Image, UnidentifiedImageError

from core.exceptions import ValidationError

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    'JPEG': 'image/jpeg',
    'PNG': 'image/png',
    'GIF': 'image/gif',
    'WEBP': 'image/webp',
}

EXTENSIONS = {
    'image/jpeg': '.jpg',
    'image/png': '.png',
    'image/gif': '.gif',
    'image/webp': '.webp',
}

MAX_COVER_BYTES = 10 * 1024 * 1024

@dataclass
class CoverImage:
    data: bytes
    content_type: str
    width: int
    height: int

    @property
    def extension(self) -> str:
        return EXTENSIONS.get(self.content_type, '.jpg')


def inspect_cover(data: bytes) -> CoverImage:
    """Check that uploaded bytes are an image we can serve as a cover.

    Args:
        data: Raw image bytes

    Returns:
        CoverImage with the detected content type and dimensions

    Raises:
        ValidationError: If the bytes are empty, too large or not a supported image
    """
    if not data:
        raise ValidationError("Cover image is empty")
    if len(data) > MAX_COVER_BYTES:
        raise ValidationError("Cover image is larger than 10 MB")

    try:
        with Image.open(BytesIO(data)) as img:
            image_format = img.format
            width, height = img.size
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationError(f"Cover image is not a valid image: {e}") from e

    content_type = CONTENT_TYPES.get(image_format)
    if content_type is None:
        raise ValidationError(f"Unsupported cover image format: {image_format}")

    return CoverImage(data=data, content_type=content_type, width=width, height=height)


def cover_filename(original: Optional[str], cover: CoverImage) -> str:
    """Pick a filename for a cover, keeping the original stem but the detected extension"""
    stem = Path(original).stem if original else 'cover'
    return f"{stem or 'cover'}{cover.extension}"


class ImageDownloader:
    """Fetches cover images from remote URLs."""

    def __init__(self, timeout: int = 10):
        self.timeout = timeout

    def _clean_image_url(self, url: str) -> str:
        """Strip whitespace; the scheme is kept as given"""
        return url.strip()

    def _filename_from_url(self, url: str) -> str:
        name = Path(urlparse(url).path).name
        return name or 'cover'

    def download_image(self, url: str) -> Tuple[CoverImage, str]:
        """Download an image and validate it as a cover.

        Args:
            url: The URL of the image to download

        Returns:
            Tuple of (cover image, suggested filename)

        Raises:
            ValidationError: If the URL cannot be fetched or does not serve an image
        """
        if not url:
            raise ValidationError("Cover URL is empty")

        url = self._clean_image_url(url)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Error downloading cover from {url}: {str(e)}")
            raise ValidationError(f"Could not download cover image: {e}") from e

        content_type = response.headers.get('content-type', '')
        if content_type and not content_type.startswith('image/'):
            raise ValidationError(f"URL did not return an image (content-type {content_type})")

        cover = inspect_cover(response.content)
        return cover, cover_filename(self._filename_from_url(url), cover)
