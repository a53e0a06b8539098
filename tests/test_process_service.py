from collections import Counter

import numpy as np
import pytest

from conftest import make_pixels
from rotator.errors import InvalidDimensions
from rotator.models.image_model import Raster
from rotator.services.process_service import ProcessService, rotate_clockwise_90

A = (255, 0, 0, 255)
B = (0, 0, 255, 128)


def _raster(rows):
    pixels = np.array(rows, dtype=np.uint8)
    height, width = pixels.shape[:2]
    return Raster(width=width, height=height, pixels=pixels)


def test_two_by_one_becomes_column():
    source = _raster([[A, B]])

    rotated = rotate_clockwise_90(source)

    assert (rotated.width, rotated.height) == (1, 2)
    assert rotated.pixel(0, 0) == A
    assert rotated.pixel(0, 1) == B


def test_two_by_two_rotates_clockwise():
    c, d = (1, 2, 3, 4), (5, 6, 7, 8)
    # A B      C A
    # C D  ->  D B
    rotated = rotate_clockwise_90(_raster([[A, B], [c, d]]))

    assert rotated.pixel(0, 0) == c
    assert rotated.pixel(1, 0) == A
    assert rotated.pixel(0, 1) == d
    assert rotated.pixel(1, 1) == B


def test_every_pixel_lands_on_mapped_coordinate(raster):
    rotated = ProcessService().rotate_clockwise_90(raster)

    assert (rotated.width, rotated.height) == (raster.height, raster.width)
    for y in range(raster.height):
        for x in range(raster.width):
            assert rotated.pixel(raster.height - 1 - y, x) == raster.pixel(x, y)


@pytest.mark.parametrize("size", [(1, 1), (1, 9), (9, 1), (6, 4), (13, 17)])
def test_four_rotations_restore_original(size):
    width, height = size
    original = Raster(width=width, height=height, pixels=make_pixels(width, height, seed=width * height))

    result = original
    for _ in range(4):
        result = rotate_clockwise_90(result)

    assert result == original


def test_pixel_multiset_is_preserved():
    source = Raster(width=8, height=5, pixels=make_pixels(8, 5, seed=11))

    rotated = rotate_clockwise_90(source)

    def multiset(r):
        return Counter(tuple(p) for p in r.pixels.reshape(-1, 4).tolist())

    assert multiset(rotated) == multiset(source)
    assert len(rotated.to_bytes()) == rotated.width * rotated.height * 4


def test_source_raster_is_not_modified(raster):
    before = raster.pixels.copy()

    rotated = rotate_clockwise_90(raster)
    rotated.pixels[:] = 0

    np.testing.assert_array_equal(raster.pixels, before)


@pytest.mark.parametrize("width,height", [(0, 0), (0, 3), (3, 0)])
def test_zero_area_raster_is_rejected(width, height):
    empty = Raster(width=width, height=height, pixels=np.zeros((height, width, 4), dtype=np.uint8))

    with pytest.raises(InvalidDimensions):
        rotate_clockwise_90(empty)
