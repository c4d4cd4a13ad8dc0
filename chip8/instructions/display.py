"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8.state import EmulatorState
from chip8.decode import DecodedInstruction
from chip8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER, ADDRESS_MASK

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    The origin is taken as-is from the registers and the sprite is clipped at
    the right and bottom edges, so nothing wraps around. VF is set when a lit
    pixel inside the screen is switched off.
    """
    sprite_x = jnp.astype(state.V[instruction.x], jnp.int32)
    sprite_y = jnp.astype(state.V[instruction.y], jnp.int32)

    in_screen = (xx >= sprite_x) & (xx < sprite_x + 8) & (yy >= sprite_y) & (yy < sprite_y + instruction.n)

    row_offset = jnp.where(in_screen, yy - sprite_y, 0)
    col_offset = jnp.where(in_screen, xx - sprite_x, 0)
    sprite_bytes = state.memory[(state.I + row_offset) & ADDRESS_MASK]
    sprite = ((sprite_bytes >> (7 - col_offset)) & 1).astype(jnp.bool_) & in_screen

    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(jnp.any(state.display & sprite), jnp.uint8)),
        update_gui=jnp.ones((), dtype=jnp.bool_),
    )
