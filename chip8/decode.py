"""CHIP-8 instruction decoding."""

from enum import Enum

from chex import dataclass

from chip8.errors import InvalidOpcode


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


class Operation(Enum):
    """The 35 CHIP-8 operations."""
    SYS = "SYS"
    CLS = "CLS"
    RET = "RET"
    JP = "JP"
    CALL = "CALL"
    SE_BYTE = "SE_BYTE"
    SNE_BYTE = "SNE_BYTE"
    SE_REG = "SE_REG"
    LD_BYTE = "LD_BYTE"
    ADD_BYTE = "ADD_BYTE"
    LD_REG = "LD_REG"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD_REG = "ADD_REG"
    SUB = "SUB"
    SHR = "SHR"
    SUBN = "SUBN"
    SHL = "SHL"
    SNE_REG = "SNE_REG"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND = "RND"
    DRW = "DRW"
    SKP = "SKP"
    SKNP = "SKNP"
    LD_VX_DT = "LD_VX_DT"
    LD_VX_K = "LD_VX_K"
    LD_DT_VX = "LD_DT_VX"
    LD_ST_VX = "LD_ST_VX"
    ADD_I = "ADD_I"
    LD_F = "LD_F"
    LD_B = "LD_B"
    LD_STORE = "LD_STORE"
    LD_LOAD = "LD_LOAD"


_SINGLE = {
    0x1: Operation.JP,
    0x2: Operation.CALL,
    0x3: Operation.SE_BYTE,
    0x4: Operation.SNE_BYTE,
    0x6: Operation.LD_BYTE,
    0x7: Operation.ADD_BYTE,
    0x9: Operation.SNE_REG,
    0xA: Operation.LD_I,
    0xB: Operation.JP_V0,
    0xC: Operation.RND,
    0xD: Operation.DRW,
}

ALU_OPERATIONS = {
    0x0: Operation.LD_REG,
    0x1: Operation.OR,
    0x2: Operation.AND,
    0x3: Operation.XOR,
    0x4: Operation.ADD_REG,
    0x5: Operation.SUB,
    0x6: Operation.SHR,
    0x7: Operation.SUBN,
    0xE: Operation.SHL,
}

KEY_OPERATIONS = {
    0x9E: Operation.SKP,
    0xA1: Operation.SKNP,
}

MISC_OPERATIONS = {
    0x07: Operation.LD_VX_DT,
    0x0A: Operation.LD_VX_K,
    0x15: Operation.LD_DT_VX,
    0x18: Operation.LD_ST_VX,
    0x1E: Operation.ADD_I,
    0x29: Operation.LD_F,
    0x33: Operation.LD_B,
    0x55: Operation.LD_STORE,
    0x65: Operation.LD_LOAD,
}


def classify(instruction: int) -> Operation:
    """Map a 16-bit word to its operation.

    Raises:
        InvalidOpcode: for ``5XY?`` with a nonzero low nibble, ``8XY?`` with an
            undefined low nibble, and unknown ``EX??`` / ``FX??`` words.
    """
    instruction = int(instruction) & 0xFFFF
    d = decode(instruction)

    if d.opcode == 0x0:
        if d.nn == 0xE0:
            return Operation.CLS
        if d.nn == 0xEE:
            return Operation.RET
        return Operation.SYS

    if d.opcode in _SINGLE:
        return _SINGLE[d.opcode]

    operation = None
    if d.opcode == 0x5:
        operation = Operation.SE_REG if d.n == 0 else None
    elif d.opcode == 0x8:
        operation = ALU_OPERATIONS.get(d.n)
    elif d.opcode == 0xE:
        operation = KEY_OPERATIONS.get(d.nn)
    elif d.opcode == 0xF:
        operation = MISC_OPERATIONS.get(d.nn)

    if operation is None:
        raise InvalidOpcode(instruction)
    return operation
