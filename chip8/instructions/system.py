"""CHIP-8 system instructions (0x0xxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chip8.state import EmulatorState
from chip8.decode import DecodedInstruction
from chip8.stack import pop


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """No operation."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(
        display=jnp.zeros_like(state.display),
        update_gui=jnp.ones((), dtype=jnp.bool_),
    )


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions on the low byte; 0NNN machine calls are ignored."""
    return jax.lax.cond(
        instruction.nn == 0xE0,
        execute_clear_screen,
        lambda state, instruction: jax.lax.cond(
            instruction.nn == 0xEE,
            execute_return,
            no_op,
            state, instruction
        ),
        state, instruction
    )
