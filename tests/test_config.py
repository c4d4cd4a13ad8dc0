"""Tests for the host configuration."""

import pytest
from omegaconf.errors import OmegaConfBaseException

from chip8.config import load_config


def test_defaults():
    cfg = load_config()
    assert cfg.scale == 8
    assert cfg.color_scheme == "monochrome"
    assert cfg.cpu_frequency == 600
    assert cfg.timer_frequency == 60
    assert not cfg.modern_mode
    assert not cfg.debug
    assert not cfg.headless


def test_overrides_are_typed():
    cfg = load_config(["scale=4", "modern_mode=true", "cycles=10", "color_scheme=amber"])
    assert cfg.scale == 4
    assert cfg.modern_mode is True
    assert cfg.cycles == 10
    assert cfg.color_scheme == "amber"


def test_unknown_key_rejected():
    with pytest.raises(OmegaConfBaseException):
        load_config(["turbo=true"])


def test_bad_type_rejected():
    with pytest.raises(OmegaConfBaseException):
        load_config(["scale=big"])


@pytest.mark.parametrize("override", ["scale=0", "cpu_frequency=0", "timer_frequency=-1", "cycles=-5"])
def test_out_of_range_values(override):
    with pytest.raises(ValueError):
        load_config([override])
