"""
Shared fixtures: temporary input/output directories and small generated images.
"""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from rotator.models.image_model import Raster


def make_pixels(width, height, seed=0):
    """Deterministic RGBA noise of the given size."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)


def write_image(path, width=5, height=3, seed=0, mode="RGBA"):
    """Write a generated image to `path`; format follows the extension."""
    pixels = make_pixels(width, height, seed)
    image = Image.fromarray(pixels)
    if mode != "RGBA":
        image = image.convert(mode)
    image.save(path)
    return path


@pytest.fixture
def input_dir(tmp_path):
    path = tmp_path / "input"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "output"


@pytest.fixture
def raster():
    """A 4x3 raster with distinct pixels."""
    return Raster(width=4, height=3, pixels=make_pixels(4, 3, seed=7))


@pytest.fixture
def sample_batch(input_dir):
    """Three good PNG files with different sizes."""
    write_image(input_dir / "a.png", width=5, height=3, seed=1)
    write_image(input_dir / "b.png", width=2, height=7, seed=2)
    write_image(input_dir / "c.png", width=1, height=1, seed=3)
    return input_dir


class RecordingSink:
    """Progress sink that remembers every event it receives."""

    def __init__(self):
        self.total = None
        self.advanced = 0
        self.messages = []
        self.closed = False

    def start(self, total):
        self.total = total

    def advance(self):
        self.advanced += 1

    def set_message(self, text):
        self.messages.append(text)

    def close(self):
        self.closed = True


@pytest.fixture
def recording_sink():
    return RecordingSink()


def read_pixels(path: Path) -> np.ndarray:
    with Image.open(path) as img:
        return np.asarray(img.convert("RGBA"))
