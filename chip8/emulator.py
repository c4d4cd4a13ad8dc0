"""Main CHIP-8 emulator execution engine."""

import jax
import jax.lax
import jax.numpy as jnp
from chip8.state import EmulatorState
from chip8.decode import decode
from chip8.constants import PROGRAM_START, MAX_PROGRAM_SIZE
from chip8.errors import LoadError
from chip8.instructions.system import execute_system_instruction
from chip8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chip8.instructions.alu import execute_alu_operation
from chip8.instructions.memory import (
    execute_load_byte, execute_add_byte, execute_load_index, execute_random_byte,
)
from chip8.instructions.display import execute_display
from chip8.instructions.misc import execute_misc_instruction


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Pure and jit-compatible. Words the decoder would reject leave the state
    unchanged and addresses wrap at 4 KiB; ``chip8.cpu.CPU`` checks for those
    faults before calling this.
    """
    decoded_instruction = decode(instruction)

    return jax.lax.switch(
        decoded_instruction.opcode,
        [
            execute_system_instruction,
            execute_jump,
            execute_call,
            execute_skip_if_equal_immediate,
            execute_skip_if_not_equal_immediate,
            execute_skip_if_equal_register,
            execute_load_byte,
            execute_add_byte,
            execute_alu_operation,
            execute_skip_if_not_equal_register,
            execute_load_index,
            execute_jump_with_offset,
            execute_random_byte,
            execute_display,
            execute_skip_if_key,
            execute_misc_instruction,
        ],
        state, decoded_instruction
    )


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def _unpack_u16(value: int) -> tuple[int, int]:
    """Unpack a 16-bit word into its big-endian bytes."""
    return (value >> 8) & 0xFF, value & 0xFF


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory, high byte first."""
    instruction = _pack_u16(state.memory[state.pc], state.memory[state.pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Count both timers down by one, stopping at zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def place_program(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Copy ROM bytes to 0x200; anything past the end of memory is dropped."""
    rom_data = bytes(rom_data[:MAX_PROGRAM_SIZE])
    if not rom_data:
        return state
    rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return state.replace(memory=new_memory)


def read_rom(filename) -> bytes:
    """Read at most one address space worth of program bytes from ``filename``."""
    try:
        with open(filename, 'rb') as f:
            return f.read(MAX_PROGRAM_SIZE)
    except OSError as e:
        raise LoadError(filename, e) from e


def load_rom(state: EmulatorState, filename) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    return place_program(state, read_rom(filename))


def assemble(*instructions: int) -> bytes:
    """Lay out 16-bit words as big-endian ROM bytes."""
    return bytes(byte for word in instructions for byte in _unpack_u16(word))
