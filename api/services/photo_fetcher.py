"""
Photo fetching for embedded document previews.

Photos live in an external object store and are referenced by URL. Fetching is
best effort: a photo that cannot be fetched or decoded never stops a report,
the caller just keeps the link.
"""

import logging
from typing import NamedTuple, Optional

import requests
from requests.adapters import HTTPAdapter
from docx.image.image import Image
from urllib3.util.retry import Retry

from config import settings

logger = logging.getLogger(__name__)


class PhotoDimensions(NamedTuple):
    width: float
    height: float


PLACEHOLDER_DIMENSIONS = PhotoDimensions(width=400, height=300)


class PhotoFetcher:
    """Fetches photo bytes over HTTP GET with retries and a per-photo timeout."""

    def __init__(self, timeout: Optional[float] = None, max_width_px: Optional[int] = None):
        self.timeout = timeout if timeout is not None else settings.photo_fetch_timeout
        self.max_width_px = max_width_px or settings.photo_max_width_px

        self.session = requests.Session()
        retry_strategy = Retry(
            total=2,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def fetch(self, url: str) -> Optional[bytes]:
        """Download a photo.

        Args:
            url: Photo URL

        Returns:
            bytes: Photo content, or None if the photo could not be fetched
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Could not fetch photo {url}: {e}")
            return None

        if not response.content:
            logger.warning(f"Photo {url} returned an empty body")
            return None
        return response.content

    def scaled_dimensions(self, blob: bytes) -> PhotoDimensions:
        """Pixel size of an image scaled down to the maximum preview width.

        Falls back to the placeholder size when the image cannot be decoded.
        """
        try:
            image = Image.from_blob(blob)
        except Exception as e:
            logger.warning(f"Could not read photo dimensions, using placeholder: {e}")
            return PLACEHOLDER_DIMENSIONS

        width, height = image.px_width, image.px_height
        if not width or not height:
            return PLACEHOLDER_DIMENSIONS
        scale = min(1.0, self.max_width_px / width)
        return PhotoDimensions(width=width * scale, height=height * scale)

    def close(self):
        self.session.close()
