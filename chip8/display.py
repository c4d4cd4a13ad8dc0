"""pygame display surface and keypad input for the CHIP-8 host."""

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pygame

from chip8.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8.rendering import chip8_display_to_rgb, create_color_scheme

# Keypad index -> physical key, in keypad order 0..F.
KEY_MAP = [
    pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4,
    pygame.K_q, pygame.K_w, pygame.K_e, pygame.K_r,
    pygame.K_a, pygame.K_s, pygame.K_d, pygame.K_f,
    pygame.K_z, pygame.K_x, pygame.K_c, pygame.K_v,
]


class PygameDisplay:
    """Scaled window that shows the framebuffer and reports keys and quit events."""

    def __init__(
        self,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        scale: int = 8,
        color_scheme: str = "monochrome",
        title: str = "CHIP8",
    ):
        self.width = width
        self.height = height
        self.scale = scale
        self.on_color, self.off_color = create_color_scheme(color_scheme)

        pygame.init()
        self.screen = pygame.display.set_mode((width * scale, height * scale))
        pygame.display.set_caption(title)
        self.clear()

    def clear(self):
        self.screen.fill(self.off_color)
        pygame.display.flip()

    def update_screen(self, vram: np.ndarray):
        """Blit a 2048-entry row-major framebuffer."""
        frame = chip8_display_to_rgb(vram, self.scale, self.on_color, self.off_color)
        # surfarray expects (width, height, 3)
        surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))
        self.screen.blit(surface, (0, 0))
        pygame.display.flip()

    def update_keys(self, keys: np.ndarray):
        """Write the current state of the 16 mapped keys into ``keys``."""
        pressed = pygame.key.get_pressed()
        for index, key in enumerate(KEY_MAP):
            keys[index] = bool(pressed[key])

    def get_ticks(self) -> int:
        """Milliseconds since the window was opened."""
        return pygame.time.get_ticks()

    def should_quit(self) -> bool:
        """Drain the event queue; True on window close or Escape."""
        quit_requested = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                quit_requested = True
        return quit_requested

    def close(self):
        pygame.quit()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
