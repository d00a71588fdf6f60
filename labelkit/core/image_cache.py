# labelkit/core/image_cache.py
"""
Per-image memo of resized copies, keyed by requested size.
Entries are dropped when the source image is garbage collected.
"""

from __future__ import annotations

import logging
import weakref

from PIL import Image

from labelkit.core.config import RESAMPLE_FILTER
from labelkit.core.types import Size

logger = logging.getLogger(__name__)


def size_key(size: Size) -> str:
    return f"resized_{size.width}_{size.height}"


def _pixel_size(size: Size) -> tuple[int, int]:
    return (max(1, int(round(size.width))), max(1, int(round(size.height))))


class ImageResizeCache:
    """
    Resize each (image, size) pair at most once.

    Keyed by image identity rather than equality: PIL images compare by
    pixel content and are unhashable. Concurrent first requests for the
    same pair are not deduplicated; the last write wins.
    """

    def __init__(self, resample: str = RESAMPLE_FILTER) -> None:
        self._resample = getattr(Image.Resampling, resample)
        self._entries: dict[int, dict[str, Image.Image]] = {}
        self.resize_count = 0

    def __len__(self) -> int:
        return sum(len(v) for v in self._entries.values())

    def needs_resize(self, image: Image.Image, size: Size) -> bool:
        return (float(image.width), float(image.height)) != (size.width, size.height)

    def resized(self, image: Image.Image, size: Size) -> Image.Image:
        """Return image at size; the image itself when it already matches."""
        if not self.needs_resize(image, size):
            return image
        image_id = id(image)
        per_image = self._entries.get(image_id)
        if per_image is None:
            per_image = {}
            self._entries[image_id] = per_image
            weakref.finalize(image, self._entries.pop, image_id, None)
        key = size_key(size)
        scaled = per_image.get(key)
        if scaled is None:
            scaled = image.resize(_pixel_size(size), self._resample)
            per_image[key] = scaled
            self.resize_count += 1
            logger.debug("Resized image %s from %sx%s to %s", image_id, image.width, image.height, key)
        return scaled

    def clear(self) -> None:
        self._entries.clear()
