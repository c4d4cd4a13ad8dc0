"""Tests for framebuffer rendering helpers."""

import numpy as np
import pytest
from chip8 import chip8_display_to_rgb, create_color_scheme, display_to_ascii


@pytest.fixture
def vram():
    pixels = np.zeros(2048, dtype=np.uint8)
    pixels[0] = 1        # top-left
    pixels[64 + 63] = 1  # right edge of row 1
    return pixels


def test_rgb_shape_and_colors(vram):
    frame = chip8_display_to_rgb(vram, scale=2, on_color=(1, 2, 3), off_color=(9, 9, 9))

    assert frame.shape == (64, 128, 3)
    assert frame.dtype == np.uint8
    assert frame[0, 0].tolist() == [1, 2, 3]
    assert frame[1, 1].tolist() == [1, 2, 3]
    assert frame[2, 126].tolist() == [1, 2, 3]
    assert frame[0, 2].tolist() == [9, 9, 9]


def test_rgb_default_scale(vram):
    assert chip8_display_to_rgb(vram).shape == (256, 512, 3)


def test_rgb_unscaled(vram):
    frame = chip8_display_to_rgb(vram, scale=1)
    assert frame.shape == (32, 64, 3)
    assert frame[1, 63].tolist() == [0, 121, 57]


@pytest.mark.parametrize("scheme", ["monochrome", "classic", "amber", "white", "blue", "retro"])
def test_color_schemes(scheme):
    on_color, off_color = create_color_scheme(scheme)
    assert len(on_color) == 3
    assert on_color != off_color


def test_unknown_color_scheme():
    with pytest.raises(ValueError):
        create_color_scheme("sepia")


def test_ascii(vram):
    rows = display_to_ascii(vram).split("\n")
    assert len(rows) == 32
    assert rows[0] == "#" + "." * 63
    assert rows[1] == "." * 63 + "#"
