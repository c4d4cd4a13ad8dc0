"""``chip8`` command line entry point."""

import sys
from typing import List, Optional

from omegaconf import DictConfig
from omegaconf.errors import OmegaConfBaseException

from chip8.config import load_config
from chip8.cpu import CPU
from chip8.disassemble import format_listing
from chip8.emulator import read_rom
from chip8.errors import Chip8Error
from chip8.logging import ConsoleLogger, build_tqdm_progress_bar
from chip8.rendering import display_to_ascii

USAGE = "Usage: chip8 ROM"


def run_window(cpu: CPU, cfg: DictConfig, logger: ConsoleLogger):
    """Drive the CPU from a pygame window until it is closed."""
    from chip8.display import PygameDisplay

    with PygameDisplay(scale=cfg.scale, color_scheme=cfg.color_scheme) as display:
        logger.info(f"Window opened at {cfg.scale}x scale")
        first_frame = True
        while True:
            if display.should_quit():
                logger.info("Quit requested")
                return

            cpu.cycle(display.get_ticks())

            if first_frame or cpu.update_gui:
                display.update_screen(cpu.vram_view())
                first_frame = False
            display.update_keys(cpu.keys_view())


def run_headless(cpu: CPU, cycles: int, logger: ConsoleLogger) -> int:
    """Execute ``cycles`` instructions without a window. Returns how many ran.

    Timers are stepped once every ``cpu_frequency / timer_frequency``
    instructions so their rate relative to the CPU matches a windowed run.
    """
    timer_every = max(1, round(cpu.timer_period / cpu.cpu_period))
    update, close = build_tqdm_progress_bar(cycles, desc="chip8")
    executed = 0
    try:
        for i in range(cycles):
            update(i)
            if i > 0 and i % timer_every == 0:
                cpu.tick_timers()
            cpu.step()
            executed += 1
    finally:
        close(executed)
    logger.debug(f"Executed {executed} instructions")
    return executed


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 1:
        print(USAGE)
        return 0

    rom_path, overrides = args[0], args[1:]
    try:
        cfg = load_config(overrides)
        logger = ConsoleLogger(log_level=cfg.log_level, stream=sys.stderr)
    except (OmegaConfBaseException, ValueError) as e:
        print(f"chip8: invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        if cfg.disassemble:
            print(format_listing(read_rom(rom_path)))
            return 0

        cpu = CPU(
            seed=cfg.seed,
            modern_mode=cfg.modern_mode,
            cpu_frequency=cfg.cpu_frequency,
            timer_frequency=cfg.timer_frequency,
            debug=cfg.debug,
        )
        cpu.load_program(rom_path)
        logger.info(f"Loaded {rom_path}")

        if cfg.headless:
            run_headless(cpu, cfg.cycles, logger)
            print(display_to_ascii(cpu.vram_view()))
        else:
            run_window(cpu, cfg, logger)
    except Chip8Error as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
