"""Host configuration.

The schema is a plain dataclass turned into an OmegaConf structured config;
``key=value`` tokens from the command line are merged on top as a dotlist,
so unknown keys and badly typed values are rejected.
"""

from dataclasses import dataclass
from typing import List, Optional

from omegaconf import OmegaConf, DictConfig

from chip8.constants import CPU_FREQUENCY, TIMER_FREQUENCY


@dataclass
class EmulatorConfig:
    """Settings for the ``chip8`` shell."""
    scale: int = 8
    color_scheme: str = "monochrome"
    modern_mode: bool = False
    debug: bool = False
    seed: int = 0
    cpu_frequency: int = CPU_FREQUENCY
    timer_frequency: int = TIMER_FREQUENCY
    headless: bool = False
    cycles: int = 600
    disassemble: bool = False
    log_level: str = "INFO"


def load_config(overrides: Optional[List[str]] = None) -> DictConfig:
    """Build the config from defaults plus ``key=value`` overrides."""
    cfg = OmegaConf.structured(EmulatorConfig)
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    if cfg.scale < 1:
        raise ValueError(f"scale must be a positive integer, got {cfg.scale}")
    if cfg.cpu_frequency < 1 or cfg.timer_frequency < 1:
        raise ValueError("cpu_frequency and timer_frequency must be positive")
    if cfg.cycles < 0:
        raise ValueError(f"cycles must not be negative, got {cfg.cycles}")
    return cfg
