"""CHIP-8 rendering utilities for visualization."""

import numpy as np
from typing import Tuple

from chip8.constants import SCREEN_WIDTH, SCREEN_HEIGHT


def vram_to_pixels(vram) -> np.ndarray:
    """Reshape a flat row-major framebuffer into a ``(32, 64)`` boolean grid."""
    pixels = np.asarray(vram).reshape(SCREEN_HEIGHT, SCREEN_WIDTH)
    return pixels.astype(np.bool_)


def chip8_display_to_rgb(
    vram,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 121, 57),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert a CHIP-8 framebuffer to an RGB array with optional upscaling.

    Args:
        vram: 2048 row-major pixel values, as returned by ``CPU.vram_view``
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels
        off_color: RGB color for "off" pixels

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    pixels = vram_to_pixels(vram)
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Apply upscaling using nearest neighbor interpolation
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "monochrome",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("monochrome", "classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "monochrome": ((0, 121, 57), (0, 0, 0)),  # Dark green on black
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def display_to_ascii(vram, on: str = "#", off: str = ".") -> str:
    """Text rendering of the framebuffer, one line per row."""
    pixels = vram_to_pixels(vram)
    return "\n".join("".join(on if p else off for p in row) for row in pixels)
