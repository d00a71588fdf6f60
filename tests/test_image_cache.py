# tests/test_image_cache.py
"""
Image resize cache: one resample per (image, size), eviction with the image.
"""

from __future__ import annotations

import gc

from PIL import Image

from labelkit.core.image_cache import ImageResizeCache, size_key
from labelkit.core.types import Size


def test_size_key_format() -> None:
    assert size_key(Size(10.0, 20.5)) == "resized_10.0_20.5"


def test_matching_size_returns_source() -> None:
    cache = ImageResizeCache()
    image = Image.new("RGB", (30, 20))
    assert cache.resized(image, Size(30.0, 20.0)) is image
    assert cache.resize_count == 0
    assert len(cache) == 0


def test_same_size_resized_once() -> None:
    cache = ImageResizeCache()
    image = Image.new("RGB", (30, 20), "blue")
    a = cache.resized(image, Size(15.0, 10.0))
    b = cache.resized(image, Size(15.0, 10.0))
    assert a is b
    assert a.size == (15, 10)
    assert cache.resize_count == 1


def test_distinct_sizes_and_images_cached_separately() -> None:
    cache = ImageResizeCache()
    one = Image.new("RGB", (30, 20))
    two = Image.new("RGB", (30, 20))
    cache.resized(one, Size(15.0, 10.0))
    cache.resized(one, Size(60.0, 40.0))
    cache.resized(two, Size(15.0, 10.0))
    assert cache.resize_count == 3
    assert len(cache) == 3


def test_fractional_size_rounds_pixels() -> None:
    cache = ImageResizeCache()
    image = Image.new("RGB", (30, 20))
    out = cache.resized(image, Size(12.6, 0.2))
    assert out.size == (13, 1)


def test_entries_dropped_with_image() -> None:
    cache = ImageResizeCache()
    image = Image.new("RGB", (30, 20))
    cache.resized(image, Size(15.0, 10.0))
    assert len(cache) == 1
    del image
    gc.collect()
    assert len(cache) == 0


def test_clear() -> None:
    cache = ImageResizeCache()
    image = Image.new("RGB", (30, 20))
    cache.resized(image, Size(15.0, 10.0))
    cache.clear()
    assert len(cache) == 0
