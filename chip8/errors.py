"""CHIP-8 faults surfaced to the host."""


class Chip8Error(Exception):
    """Base class for every interpreter fault."""


class LoadError(Chip8Error):
    """ROM file could not be opened."""

    def __init__(self, path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"could not open ROM '{path}': {cause}")


class InvalidOpcode(Chip8Error):
    """Instruction word matches no known pattern."""

    def __init__(self, word: int):
        self.word = word
        super().__init__(f"invalid opcode: 0x{word:04X}")


class StackUnderflow(Chip8Error):
    """RET executed with an empty call stack."""

    def __init__(self):
        super().__init__("stack underflow: return with empty call stack")


class StackOverflow(Chip8Error):
    """CALL executed with a full call stack."""

    def __init__(self):
        super().__init__("stack overflow: call with full call stack")


class MemoryOutOfRange(Chip8Error):
    """Memory access beyond the 4 KiB address space."""

    def __init__(self, addr: int):
        self.addr = addr
        super().__init__(f"memory access out of range: 0x{addr:04X}")
