"""Tests for the pygame host window, run on SDL's dummy video driver."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest
from chip8.display import KEY_MAP, PygameDisplay


@pytest.fixture
def window():
    with PygameDisplay(scale=2, color_scheme="white") as display:
        yield display


def test_key_layout():
    assert len(KEY_MAP) == 16
    assert KEY_MAP[0x0] == pygame.K_1
    assert KEY_MAP[0x5] == pygame.K_w
    assert KEY_MAP[0xA] == pygame.K_d
    assert KEY_MAP[0xF] == pygame.K_v


def test_window_size(window):
    assert window.screen.get_size() == (128, 64)


def test_update_screen(window):
    vram = np.zeros(2048, dtype=np.uint8)
    vram[64 + 3] = 1  # x=3, y=1

    window.update_screen(vram)

    assert tuple(window.screen.get_at((6, 2)))[:3] == (255, 255, 255)
    assert tuple(window.screen.get_at((0, 0)))[:3] == (0, 0, 0)


def test_update_keys_without_input(window):
    keys = np.ones(16, dtype=np.bool_)
    window.update_keys(keys)
    assert not keys.any()


def test_quit_event(window):
    assert not window.should_quit()
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert window.should_quit()
