"""Host application wiring that does not need a window."""

from __future__ import annotations

import pytest

import run
from pychip8.system import MachineConfig, create_machine
from pychip8.ui.app import AppConfig, Chip8App, RunState, format_hexdump


def _write_rom(tmp_path, payload: bytes):
    rom_path = tmp_path / "test.ch8"
    rom_path.write_bytes(payload)
    return rom_path


def test_app_creates_machine_from_rom(tmp_path) -> None:
    rom_path = _write_rom(tmp_path, b"\x60\x07")
    app = Chip8App(AppConfig(rom_path=rom_path))

    machine = app._create_machine(rom_path)

    assert machine.memory.load16(0x200) == 0x6007


def test_app_reports_load_fault_as_runtime_error(tmp_path) -> None:
    rom_path = _write_rom(tmp_path, bytes(4000))
    app = Chip8App(AppConfig(rom_path=rom_path))

    with pytest.raises(RuntimeError, match="too large"):
        app._create_machine(rom_path)


def test_app_requires_rom_path() -> None:
    with pytest.raises(RuntimeError):
        Chip8App(AppConfig()).run()


def test_frame_runs_scheduled_steps_and_ticks_timers(tmp_path) -> None:
    rom_path = _write_rom(tmp_path, bytes([0x70, 0x01, 0x12, 0x00]))
    app = Chip8App(AppConfig(rom_path=rom_path, clock_speed=120, timer_rate=60))
    machine = app._create_machine(rom_path)
    machine.timers.set_delay(3)

    app._run_frame(machine)

    assert machine.cpu.state.v[0] == 1
    assert machine.timers.delay == 2


def test_stack_fault_stops_app(tmp_path) -> None:
    rom_path = _write_rom(tmp_path, b"\x00\xEE")
    app = Chip8App(AppConfig(rom_path=rom_path))
    machine = app._create_machine(rom_path)

    with pytest.raises(RuntimeError, match="Stack fault"):
        app._run_frame(machine)
    assert app.state is RunState.STOPPED


def test_handle_key_updates_latch(tmp_path) -> None:
    rom_path = _write_rom(tmp_path, b"\x00\xE0")
    app = Chip8App(AppConfig(rom_path=rom_path))
    app._machine = app._create_machine(rom_path)

    app.handle_key("x", pressed=True)
    assert app._machine.keypad.is_pressed(0x0)
    app.handle_key("x", pressed=False)
    assert not app._machine.keypad.is_pressed(0x0)


def test_toggle_pause(tmp_path, capsys) -> None:
    app = Chip8App(AppConfig())
    app._state = RunState.RUNNING

    app.toggle_pause()
    assert app.state is RunState.PAUSED
    app.toggle_pause()
    assert app.state is RunState.RUNNING
    assert "PAUSED" in capsys.readouterr().out


def test_format_cpu_and_hexdump() -> None:
    machine = create_machine(MachineConfig(program_image=bytes([0x2A, 0x00])))
    machine.step()

    lines = Chip8App.format_cpu(machine)
    assert lines[0].startswith("PC=0A00 I=0000")
    assert lines[2] == "stack[1]: 0202"
    assert lines[3] == "next: SYS 0x000"

    dump = format_hexdump(machine, 0x200, 4)
    assert dump == ["200: 2A 00 00 00"]


def test_cli_builds_config(tmp_path) -> None:
    rom_path = _write_rom(tmp_path, b"\x00\xE0")
    parser = run.build_arg_parser()
    args = parser.parse_args(
        [str(rom_path), "--scale", "10", "--clock-speed", "1000", "--foreground", "00FF00"]
    )

    config = run.build_config(args)

    assert config.rom_path == rom_path
    assert config.scale == 10
    assert config.clock_speed == 1000
    assert config.foreground == (0, 255, 0)
    assert config.background == (0, 0, 0)


def test_cli_rejects_missing_rom(tmp_path) -> None:
    with pytest.raises(SystemExit):
        run.main([str(tmp_path / "missing.ch8")])
