"""Pygame front end for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Optional

from pychip8.audio import SquareWaveBeeper
from pychip8.bus import TIMER_RATE
from pychip8.cpu import StackFault, disassemble
from pychip8.loader import LoadFault, load_rom_from_path
from pychip8.system import DEFAULT_CLOCK_SPEED, FrameScheduler, Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import MONOCHROME, Renderer, validate_palette
from pychip8.video.palette import RGBColor


@dataclass
class AppConfig:
    """Host-side settings; only clock rates and display size reach the core."""

    rom_path: Optional[Path] = None
    scale: int = 20
    fullscreen: bool = False
    foreground: RGBColor = MONOCHROME[1]
    background: RGBColor = MONOCHROME[0]
    clock_speed: int = DEFAULT_CLOCK_SPEED
    timer_rate: int = TIMER_RATE
    tone_frequency: float = 440.0
    sample_rate: int = 44_100
    volume: float = 0.1
    start_in_debugger: bool = False


class RunState(Enum):
    RUNNING = auto()
    PAUSED = auto()
    STOPPED = auto()


class Chip8App:
    """Owns the window, audio and event loop around one :class:`Machine`."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._state = RunState.STOPPED
        self._machine: Machine | None = None
        self._beeper: SquareWaveBeeper | None = None
        self._pygame = None
        self._scheduler = FrameScheduler(config.clock_speed, config.timer_rate)
        self._renderer = Renderer(validate_palette((config.background, config.foreground)))
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)
        self._perf_enabled = debug_enabled("perf")
        self._frame_counter = 0
        self._last_revision = -1

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> None:
        if not self._config.rom_path:
            raise RuntimeError("ROM image is required; pass a ROM path")
        machine = self._create_machine(self._config.rom_path)
        self._machine = machine

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        pygame.mixer.pre_init(self._config.sample_rate, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.rom_path.name}")
        self._pygame = pygame
        self._initialise_audio(pygame)

        size = (
            machine.display.width * self._config.scale,
            machine.display.height * self._config.scale,
        )
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode(size, flags)
        clock = pygame.time.Clock()

        self._state = RunState.RUNNING
        if self._config.start_in_debugger:
            self._enter_debug_shell(machine)

        try:
            while self._state is not RunState.STOPPED:
                for event in pygame.event.get():
                    self._handle_event(pygame, event)

                if self._state is RunState.PAUSED:
                    clock.tick(self._config.timer_rate)
                    continue

                frame_start = time.perf_counter()
                self._run_frame(machine)
                self._present(screen, machine)

                if self._perf_enabled:
                    debug_log(
                        "perf",
                        "frame=%d frame_ms=%.3f",
                        self._frame_counter,
                        (time.perf_counter() - frame_start) * 1000.0,
                    )

                clock.tick(self._config.timer_rate)
                self._frame_counter += 1
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    # ------------------------------------------------------------------
    # Setup

    def _create_machine(self, rom_path: Path) -> Machine:
        try:
            image = load_rom_from_path(rom_path)
            return create_machine(MachineConfig(program_image=image.data, program_name=image.name))
        except LoadFault as exc:
            raise RuntimeError(str(exc)) from exc

    def _initialise_audio(self, pygame) -> None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(self._config.sample_rate, -16, 1)
            except pygame.error as exc:  # pragma: no cover - hardware dependent
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)
                return

        mixer_state = pygame.mixer.get_init()
        if mixer_state is None:
            if debug_enabled("audio"):
                debug_log("audio", "mixer_unavailable")
            return
        try:
            self._beeper = SquareWaveBeeper(
                frequency=self._config.tone_frequency,
                sample_rate=mixer_state[0],
                volume=self._config.volume,
            )
        except (RuntimeError, pygame.error) as exc:
            self._beeper = None
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)

    # ------------------------------------------------------------------
    # Event handling

    def _handle_event(self, pygame, event) -> None:
        if event.type == pygame.QUIT:
            self._state = RunState.STOPPED
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self._state = RunState.STOPPED
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
            self.toggle_pause()
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_F12:
            if self._machine is not None:
                self._enter_debug_shell(self._machine)
        elif event.type == pygame.KEYDOWN:
            self.handle_key(pygame.key.name(event.key), pressed=True)
        elif event.type == pygame.KEYUP:
            self.handle_key(pygame.key.name(event.key), pressed=False)

    def toggle_pause(self) -> None:
        if self._state is RunState.RUNNING:
            self._state = RunState.PAUSED
            print("=== EMULATION PAUSED ===")
            if self._beeper is not None:
                self._beeper.set_state(False)
        elif self._state is RunState.PAUSED:
            self._state = RunState.RUNNING
            print("=== EMULATION RESUMED ===")

    def handle_key(self, key_name: str, *, pressed: bool) -> None:
        if self._machine is None:
            return
        if pressed:
            self._machine.keypad.press(key_name)
        else:
            self._machine.keypad.release(key_name)

    # ------------------------------------------------------------------
    # Frame loop

    def _run_frame(self, machine: Machine) -> None:
        steps = self._scheduler.steps_for_frame()
        trace = self._trace_recorder
        try:
            if trace is None:
                tone = machine.run_frame(steps)
            else:
                for _ in range(steps):
                    self._traced_step(machine, trace)
                tone = machine.tick_timers()
        except StackFault as exc:
            self._state = RunState.STOPPED
            if trace is not None:
                trace.dump("trace", limit=32)
            raise RuntimeError(f"Stack fault at PC={machine.cpu.state.pc:04X}: {exc}") from exc

        if self._beeper is not None:
            self._beeper.set_state(tone)

    def _traced_step(self, machine: Machine, trace: TraceRecorder) -> None:
        cpu = machine.cpu
        state_before = cpu.state.clone()
        waiting = cpu.awaiting_key
        opcode = machine.memory.load16(state_before.pc)
        executed = cpu.step()
        if waiting and executed == 0:
            return
        trace.record_step(
            state_before,
            opcode,
            stack_depth=cpu.stack.depth,
            delay=machine.timers.delay,
            sound=machine.timers.sound,
            waiting=cpu.awaiting_key,
            mnemonic=disassemble(opcode),
            note="key" if waiting else "",
        )

    def _present(self, screen, machine: Machine) -> None:
        revision = machine.display.revision
        if revision == self._last_revision:
            return
        self._last_revision = revision
        frame = self._renderer.render(machine.display, scale=self._config.scale)
        screen.blit(frame.to_surface(), (0, 0))
        self._pygame.display.flip()

    # ------------------------------------------------------------------
    # Debug shell

    def _enter_debug_shell(self, machine: Machine) -> None:
        print("\n=== CHIP-8 Debug Menu ===")
        print("Enter command: [c]pu, [m]em, [d]isplay, [t]race, [q]uit, [Enter] resume")
        paused = True
        while paused and self._state is not RunState.STOPPED:
            try:
                command = input("debug> ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print("Resuming emulator.")
                break

            if command in {"", "resume"}:
                paused = False
            elif command in {"c", "cpu"}:
                for line in self.format_cpu(machine):
                    print(line)
            elif command in {"d", "display"}:
                print(machine.display.render_text())
            elif command in {"t", "trace"}:
                self._dump_trace()
            elif command.startswith("m"):
                self._dump_memory(machine, command[1:].strip())
            elif command in {"q", "quit", "exit"}:
                print("Exiting emulator.")
                self._state = RunState.STOPPED
            else:
                print("Commands: [Enter]=resume, [c]pu, [m]em, [d]isplay, [t]race, [q]uit")

        if self._pygame is not None:
            self._pygame.event.clear()

    @staticmethod
    def format_cpu(machine: Machine) -> list[str]:
        cpu = machine.cpu
        state = cpu.state
        registers = " ".join(f"V{index:X}={value:02X}" for index, value in enumerate(state.v))
        stack = " ".join(f"{address:04X}" for address in cpu.stack.snapshot()) or "-"
        return [
            f"PC={state.pc:04X} I={state.i:04X} DT={machine.timers.delay:02X} "
            f"ST={machine.timers.sound:02X} status={cpu.status.name}",
            registers,
            f"stack[{cpu.stack.depth}]: {stack}",
            f"next: {disassemble(machine.memory.load16(state.pc))}",
        ]

    def _dump_trace(self, limit: int = 64) -> None:
        if self._trace_recorder is None:
            print("Trace recorder is disabled. Set CHIP8_DEBUG=trace to enable it.")
            return
        lines = list(self._trace_recorder.format_entries(limit))
        if not lines:
            print("Trace buffer is empty.")
            return
        print("Last trace entries:")
        for line in lines:
            print(f"  {line}")

    def _dump_memory(self, machine: Machine, args: str) -> None:
        parts = args.split()
        try:
            start = int(parts[0], 16) if parts else machine.cpu.state.pc
            length = int(parts[1], 0) if len(parts) > 1 else 0x40
        except ValueError:
            print("Usage: m [start_hex] [length]")
            return
        if length <= 0:
            print("Length must be positive.")
            return
        for line in format_hexdump(machine, start, length):
            print(line)


def format_hexdump(machine: Machine, start: int, length: int) -> list[str]:
    lines: list[str] = []
    end = start + length
    for addr in range(start, end, 16):
        chunk = machine.memory.load_block(addr, min(16, end - addr))
        hex_part = " ".join(f"{value:02X}" for value in chunk)
        lines.append(f"{addr & 0xFFF:03X}: {hex_part}")
    return lines
