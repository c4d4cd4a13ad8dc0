"""CHIP-8 ALU operations (8xxx).

Every ALU function takes ``(vx, vy, vf)`` and returns ``(result, flag)``.
Bitwise operations hand back ``vf`` untouched.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chip8.state import EmulatorState
from chip8.decode import DecodedInstruction
from chip8.constants import FLAG_REGISTER


def alu_set(vx, vy, vf):
    """8XY0 - Set: VX = VY."""
    return vy, vf


def alu_or(vx, vy, vf):
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, vf


def alu_and(vx, vy, vf):
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, vf


def alu_xor(vx, vy, vf):
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, vf


def alu_add(vx, vy, vf):
    """8XY4 - Add: VX += VY, set carry flag."""
    result = jnp.astype(vx, jnp.int32) + vy
    carry = jnp.astype(result > 255, jnp.uint8)
    return jnp.astype(result & 0xFF, jnp.uint8), carry


def alu_sub_xy(vx, vy, vf):
    """8XY5 - Subtract: VX -= VY, VF = 1 only when VX > VY."""
    no_borrow = jnp.astype(vx > vy, jnp.uint8)
    result = (vx - vy) & 0xFF
    return result, no_borrow


def alu_shift_right(vx, vy, vf):
    """8XY6 - Shift right: VX >>= 1."""
    shifted_bit = vx & 1
    result = vx >> 1
    return result, shifted_bit


def alu_sub_yx(vx, vy, vf):
    """8XY7 - Subtract: VX = VY - VX, VF = 1 only when VY > VX."""
    no_borrow = jnp.astype(vy > vx, jnp.uint8)
    result = (vy - vx) & 0xFF
    return result, no_borrow


def alu_shift_left(vx, vy, vf):
    """8XYE - Shift left: VX <<= 1."""
    shifted_bit = (vx & 0x80) >> 7
    result = (vx << 1) & 0xFF
    return result, shifted_bit


def alu_undefined(vx, vy, vf):
    """Undefined ALU operation, rejected by the decoder before dispatch."""
    return vx, vf


# Low nibble -> branch index; 9 is the undefined handler.
ALU_BRANCH = jnp.array([0, 1, 2, 3, 4, 5, 6, 7, 9, 9, 9, 9, 9, 9, 8, 9], dtype=jnp.int32)
ALU_WRITES_FLAG = jnp.array([0, 0, 0, 0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 1, 0], dtype=jnp.bool_)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = state.V[instruction.x]
    vy = state.V[instruction.y]
    vf = state.V[FLAG_REGISTER]

    def _alu_shift_left(vx, vy, vf):
        if not state.modern_mode:
            vx = vy
        return alu_shift_left(vx, vy, vf)

    def _alu_shift_right(vx, vy, vf):
        if not state.modern_mode:
            vx = vy
        return alu_shift_right(vx, vy, vf)

    result, flag = jax.lax.switch(
        ALU_BRANCH[instruction.n],
        [alu_set, alu_or, alu_and, alu_xor, alu_add,
         alu_sub_xy, _alu_shift_right, alu_sub_yx, _alu_shift_left, alu_undefined],
        vx, vy, vf
    )

    # Flag first, result second: when X is F the result is what VF keeps.
    new_V = state.V.at[FLAG_REGISTER].set(
        jnp.where(ALU_WRITES_FLAG[instruction.n], flag, vf)
    )
    new_V = new_V.at[instruction.x].set(result)
    return state.replace(V=new_V)
