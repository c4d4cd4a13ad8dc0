"""CHIP-8 register loads: 6XNN, 7XNN, ANNN and CXNN."""

import jax
import jax.numpy as jnp
from chip8.state import EmulatorState
from chip8.decode import DecodedInstruction


def _write_register(state: EmulatorState, register, value) -> EmulatorState:
    """Store the low byte of ``value`` in V[register]."""
    byte = jnp.astype(jnp.asarray(value, dtype=jnp.int32) & 0xFF, jnp.uint8)
    return state.replace(V=state.V.at[register].set(byte))


def execute_load_byte(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - VX = NN."""
    return _write_register(state, instruction.x, instruction.nn)


def execute_add_byte(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - VX = (VX + NN) mod 256. This add never touches VF."""
    total = jnp.astype(state.V[instruction.x], jnp.int32) + instruction.nn
    return _write_register(state, instruction.x, total)


def execute_load_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - I = NNN."""
    return state.replace(I=jnp.astype(instruction.nnn, jnp.uint16))


def execute_random_byte(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - VX = uniform random byte AND NN.

    Each draw splits the state's key, so a given seed replays the same
    sequence.
    """
    next_rng, draw_key = jax.random.split(state.rng)
    sample = jax.random.bits(draw_key, dtype=jnp.uint8)
    masked = jnp.astype(sample, jnp.int32) & instruction.nn
    return _write_register(state, instruction.x, masked).replace(rng=next_rng)
