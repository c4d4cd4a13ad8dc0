"""CHIP-8 disassembler."""

from typing import Iterator, Tuple

from chip8.constants import PROGRAM_START
from chip8.decode import Operation, classify, decode
from chip8.errors import InvalidOpcode


def _reg(index: int) -> str:
    return f"V{index:X}"


_FORMATS = {
    Operation.SYS: lambda d: f"SYS  0x{d.nnn:03X}",
    Operation.CLS: lambda d: "CLS",
    Operation.RET: lambda d: "RET",
    Operation.JP: lambda d: f"JP   0x{d.nnn:03X}",
    Operation.CALL: lambda d: f"CALL 0x{d.nnn:03X}",
    Operation.SE_BYTE: lambda d: f"SE   {_reg(d.x)}, 0x{d.nn:02X}",
    Operation.SNE_BYTE: lambda d: f"SNE  {_reg(d.x)}, 0x{d.nn:02X}",
    Operation.SE_REG: lambda d: f"SE   {_reg(d.x)}, {_reg(d.y)}",
    Operation.LD_BYTE: lambda d: f"LD   {_reg(d.x)}, 0x{d.nn:02X}",
    Operation.ADD_BYTE: lambda d: f"ADD  {_reg(d.x)}, 0x{d.nn:02X}",
    Operation.LD_REG: lambda d: f"LD   {_reg(d.x)}, {_reg(d.y)}",
    Operation.OR: lambda d: f"OR   {_reg(d.x)}, {_reg(d.y)}",
    Operation.AND: lambda d: f"AND  {_reg(d.x)}, {_reg(d.y)}",
    Operation.XOR: lambda d: f"XOR  {_reg(d.x)}, {_reg(d.y)}",
    Operation.ADD_REG: lambda d: f"ADD  {_reg(d.x)}, {_reg(d.y)}",
    Operation.SUB: lambda d: f"SUB  {_reg(d.x)}, {_reg(d.y)}",
    Operation.SHR: lambda d: f"SHR  {_reg(d.x)}, {_reg(d.y)}",
    Operation.SUBN: lambda d: f"SUBN {_reg(d.x)}, {_reg(d.y)}",
    Operation.SHL: lambda d: f"SHL  {_reg(d.x)}, {_reg(d.y)}",
    Operation.SNE_REG: lambda d: f"SNE  {_reg(d.x)}, {_reg(d.y)}",
    Operation.LD_I: lambda d: f"LD   I, 0x{d.nnn:03X}",
    Operation.JP_V0: lambda d: f"JP   V0, 0x{d.nnn:03X}",
    Operation.RND: lambda d: f"RND  {_reg(d.x)}, 0x{d.nn:02X}",
    Operation.DRW: lambda d: f"DRW  {_reg(d.x)}, {_reg(d.y)}, {d.n}",
    Operation.SKP: lambda d: f"SKP  {_reg(d.x)}",
    Operation.SKNP: lambda d: f"SKNP {_reg(d.x)}",
    Operation.LD_VX_DT: lambda d: f"LD   {_reg(d.x)}, DT",
    Operation.LD_VX_K: lambda d: f"LD   {_reg(d.x)}, K",
    Operation.LD_DT_VX: lambda d: f"LD   DT, {_reg(d.x)}",
    Operation.LD_ST_VX: lambda d: f"LD   ST, {_reg(d.x)}",
    Operation.ADD_I: lambda d: f"ADD  I, {_reg(d.x)}",
    Operation.LD_F: lambda d: f"LD   F, {_reg(d.x)}",
    Operation.LD_B: lambda d: f"LD   B, {_reg(d.x)}",
    Operation.LD_STORE: lambda d: f"LD   [I], {_reg(d.x)}",
    Operation.LD_LOAD: lambda d: f"LD   {_reg(d.x)}, [I]",
}


def disassemble(instruction: int) -> str:
    """Render one instruction word as assembly text.

    Words that do not decode are rendered as a raw data directive.
    """
    instruction = int(instruction) & 0xFFFF
    try:
        operation = classify(instruction)
    except InvalidOpcode:
        return f"DW   0x{instruction:04X}"
    return _FORMATS[operation](decode(instruction))


def iter_program(rom_data: bytes, start: int = PROGRAM_START) -> Iterator[Tuple[int, int, str]]:
    """Yield ``(address, word, text)`` for every aligned word in ``rom_data``.

    A trailing odd byte is padded with zero.
    """
    for offset in range(0, len(rom_data), 2):
        high = rom_data[offset]
        low = rom_data[offset + 1] if offset + 1 < len(rom_data) else 0
        word = (high << 8) | low
        yield start + offset, word, disassemble(word)


def format_listing(rom_data: bytes, start: int = PROGRAM_START) -> str:
    """Full listing, one ``ADDR: WORD  TEXT`` line per instruction."""
    return "\n".join(
        f"{address:03X}: {word:04X}  {text}" for address, word, text in iter_program(rom_data, start)
    )
