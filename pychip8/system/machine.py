"""CHIP-8 machine assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.bus import PROGRAM_START, Memory, Timers
from pychip8.cpu import Chip8CPU
from pychip8.cpu.core import default_random_byte
from pychip8.io import Keypad
from pychip8.loader import validate_program_image
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, FONT_SET, DisplayBuffer


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    program_image: Optional[bytes] = None
    program_name: str = "<memory>"
    display_width: int = DISPLAY_WIDTH
    display_height: int = DISPLAY_HEIGHT
    random_source: Callable[[], int] = field(default=default_random_byte)


@dataclass
class Machine:
    """Aggregates the state of one loaded program."""

    memory: Memory
    cpu: Chip8CPU
    display: DisplayBuffer
    keypad: Keypad
    timers: Timers
    program: bytes = b""

    def reset(self) -> None:
        """Return every component to its power-on state and reload the program."""

        self.memory.clear()
        self.memory.install_font(FONT_SET)
        if self.program:
            self.memory.load_program(self.program, PROGRAM_START)
        self.display.clear()
        self.keypad.reset()
        self.timers.reset()
        self.cpu.reset(PROGRAM_START)

    def step(self) -> int:
        return self.cpu.step()

    def tick_timers(self) -> bool:
        """Advance the 60 Hz timers once; True while the tone should sound."""

        return self.timers.tick()

    def run_frame(self, steps: int) -> bool:
        """Run ``steps`` instructions, then tick the timers exactly once."""

        executed = 0
        for _ in range(steps):
            executed += self.cpu.step()
        if debug_enabled("perf"):
            debug_log("perf", "frame steps=%d executed=%d", steps, executed)
        return self.tick_timers()


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a CHIP-8 machine; raises ``LoadFault`` for bad images."""

    program = b""
    if config.program_image is not None:
        program = validate_program_image(config.program_image, name=config.program_name)

    memory = Memory()
    display = DisplayBuffer(config.display_width, config.display_height)
    keypad = Keypad()
    timers = Timers()
    cpu = Chip8CPU(memory, display, keypad, timers, random_source=config.random_source)

    machine = Machine(
        memory=memory,
        cpu=cpu,
        display=display,
        keypad=keypad,
        timers=timers,
        program=program,
    )
    machine.reset()
    if debug_enabled("loader"):
        debug_log("loader", "machine ready program=%s size=%d", config.program_name, len(program))
    return machine
