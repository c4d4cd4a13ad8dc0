"""CHIP-8 interpreter package."""

from chip8.state import EmulatorState, create_state
from chip8.emulator import execute, load_rom, fetch, tick_timers, assemble
from chip8.decode import DecodedInstruction, Operation, decode, classify
from chip8.disassemble import disassemble
from chip8.errors import (
    Chip8Error, LoadError, InvalidOpcode, StackUnderflow, StackOverflow, MemoryOutOfRange,
)
from chip8.cpu import CPU
from chip8.constants import *
from chip8.rendering import chip8_display_to_rgb, create_color_scheme, display_to_ascii

__all__ = [
    "EmulatorState",
    "create_state",
    "fetch",
    "execute",
    "tick_timers",
    "load_rom",
    "assemble",
    "DecodedInstruction",
    "Operation",
    "decode",
    "classify",
    "disassemble",
    "CPU",
    "Chip8Error",
    "LoadError",
    "InvalidOpcode",
    "StackUnderflow",
    "StackOverflow",
    "MemoryOutOfRange",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "display_to_ascii",
]
