"""CHIP-8 CPU core.

``CPU`` is the object a host drives. It owns an immutable ``EmulatorState``
and swaps it for a new one on every step; instruction semantics live in the
pure, jit-compiled ``chip8.emulator.execute``. Everything that can fault is
checked here in Python, on concrete values, before the compiled step runs.
"""

import sys
from typing import Optional, TextIO

import jax
import jax.numpy as jnp
import numpy as np

from chip8.constants import (
    ADDRESS_MASK, CPU_FREQUENCY, NUM_KEYS, NUM_REGISTERS, STACK_SIZE, TIMER_FREQUENCY,
)
from chip8.decode import Operation, classify, decode
from chip8.disassemble import disassemble
from chip8.emulator import execute, fetch, place_program, read_rom, tick_timers
from chip8.errors import MemoryOutOfRange, StackOverflow, StackUnderflow
from chip8.state import EmulatorState, create_state

TICK_MASK = 0xFFFFFFFF

_execute = jax.jit(execute)
_fetch = jax.jit(fetch)
_tick_timers = jax.jit(tick_timers)


def format_registers(state: EmulatorState) -> str:
    """Register dump: two rows of V registers, then I, SP, PC and the timers."""
    registers = [int(v) for v in np.asarray(state.V)]
    lines = []
    for index, value in enumerate(registers):
        lines.append(f"V{index:X}: {value:02X}\t")
        if index == NUM_REGISTERS // 2 - 1:
            lines.append("\n")
    lines.append(
        f"\nI: {int(state.I):04X}    SP: {int(state.stack.pointer):04X}    "
        f"PC: {int(state.pc):04X}    DT: {int(state.delay_timer):04X}    "
        f"ST: {int(state.sound_timer):04X}\n\n"
    )
    return "".join(lines)


class CPU:
    """Fetch/decode/execute loop with 600 Hz instruction and 60 Hz timer pacing.

    Args:
        seed: Seed of the PRNG key used by RND; reset restores it.
        modern_mode: Select CHIP-48 shift, BXNN and load/store behavior.
        cpu_frequency: Instructions per second targeted by ``cycle``.
        timer_frequency: Timer decrements per second targeted by ``cycle``.
        debug: Print a trace line and register dump after every instruction.
        output: Stream for the debug trace, stdout when ``None``.
    """

    def __init__(
        self,
        seed: int = 0,
        modern_mode: bool = False,
        cpu_frequency: int = CPU_FREQUENCY,
        timer_frequency: int = TIMER_FREQUENCY,
        debug: bool = False,
        output: Optional[TextIO] = None,
    ):
        self.seed = seed
        self.modern_mode = modern_mode
        self.cpu_period = 1000.0 / cpu_frequency
        self.timer_period = 1000.0 / timer_frequency
        self.output = output
        self._debug = debug
        self._keys = np.zeros(NUM_KEYS, dtype=np.bool_)
        self.last_cpu_ticks = 0
        self.last_timer_ticks = 0
        self.state = None
        self.reset()

    # Lifecycle

    def reset(self):
        """Zero the machine, reload the font and put pc back at 0x200."""
        self.state = create_state(jax.random.PRNGKey(self.seed), modern_mode=self.modern_mode)
        self._keys[:] = False

    def load_program(self, path):
        """Reset and copy the ROM at ``path`` to 0x200.

        Raises:
            LoadError: if the file cannot be opened; the machine is left as it was.
        """
        rom_data = read_rom(path)
        self.load_bytes(rom_data)

    def load_bytes(self, rom_data: bytes):
        """Reset and copy an in-memory ROM to 0x200."""
        self.reset()
        self.state = place_program(self.state, rom_data)

    # Execution

    def fetch(self) -> int:
        """Read the big-endian word at pc and advance pc by two."""
        pc = int(self.state.pc)
        if pc + 1 > ADDRESS_MASK:
            raise MemoryOutOfRange(pc + 1)
        self.state, instruction = _fetch(self.state)
        return int(instruction)

    def interpret(self, instruction: int):
        """Execute one already-fetched word against the current keypad."""
        instruction = int(instruction) & 0xFFFF
        operation = classify(instruction)
        self._check_faults(operation, instruction)
        state = self.state.replace(keypad=jnp.asarray(self._keys))
        self.state = _execute(state, instruction)

    def step(self) -> int:
        """Fetch and execute one instruction, ignoring pacing. Returns the word.

        Raises:
            MemoryOutOfRange: if the instruction would leave pc past 0xFFF; the
                machine is rolled back to before the fetch.
        """
        previous = self.state
        instruction = self.fetch()
        self.state = self.state.replace(update_gui=jnp.zeros((), dtype=jnp.bool_))
        self.interpret(instruction)
        pc = int(self.state.pc)
        if pc > ADDRESS_MASK:
            self.state = previous
            raise MemoryOutOfRange(pc)
        if self._debug:
            self._trace(instruction)
        return instruction

    def tick_timers(self):
        """Decrement delay and sound timers if non-zero."""
        self.state = _tick_timers(self.state)

    def cycle(self, now_ms: int):
        """Advance the machine to host time ``now_ms``.

        Steps the timers at most once and executes at most one instruction;
        the timer gate is evaluated first.
        """
        now_ms = int(now_ms) & TICK_MASK

        if ((now_ms - self.last_timer_ticks) & TICK_MASK) > self.timer_period:
            self.tick_timers()
            self.last_timer_ticks = now_ms

        if ((now_ms - self.last_cpu_ticks) & TICK_MASK) > self.cpu_period:
            self.step()
            self.last_cpu_ticks = now_ms

    def _check_faults(self, operation: Operation, instruction: int):
        d = decode(instruction)

        if operation is Operation.RET and int(self.state.stack.pointer) <= 0:
            raise StackUnderflow()
        if operation is Operation.CALL and int(self.state.stack.pointer) >= STACK_SIZE:
            raise StackOverflow()

        last_address = None
        if operation is Operation.DRW and d.n > 0:
            last_address = int(self.state.I) + d.n - 1
        elif operation is Operation.LD_B:
            last_address = int(self.state.I) + 2
        elif operation in (Operation.LD_STORE, Operation.LD_LOAD):
            last_address = int(self.state.I) + d.x
        elif operation is Operation.JP_V0:
            register = d.x if self.modern_mode else 0
            last_address = d.nnn + int(self.state.V[register])

        if last_address is not None and last_address > ADDRESS_MASK:
            raise MemoryOutOfRange(last_address)

    # Debug

    @property
    def debug(self) -> bool:
        return self._debug

    def set_debug(self, flag: bool):
        """Toggle the per-instruction trace."""
        self._debug = bool(flag)

    def _trace(self, instruction: int):
        out = self.output if self.output is not None else sys.stdout
        print(disassemble(instruction), file=out)
        print(format_registers(self.state), end="", file=out)

    # Host views

    def vram_view(self) -> np.ndarray:
        """Read-only framebuffer: 2048 bytes of 0/1, row-major, row 0 on top."""
        view = np.asarray(self.state.display, dtype=np.uint8).T.reshape(-1)
        view.flags.writeable = False
        return view

    def keys_view(self) -> np.ndarray:
        """Writable keypad array; the host sets entries, the CPU reads them each step."""
        return self._keys

    @property
    def update_gui(self) -> bool:
        """Whether the last executed instruction touched the framebuffer."""
        return bool(self.state.update_gui)

    @property
    def sound_active(self) -> bool:
        """Whether a tone should currently be playing."""
        return int(self.state.sound_timer) > 0
