"""Baseline tests ensuring the package layout loads correctly."""

import pychip8


def test_package_exports() -> None:
    for name in ("cpu", "bus", "video", "audio", "io", "system", "loader", "ui", "utils"):
        assert hasattr(pychip8, name), f"missing submodule: {name}"


def test_core_exports() -> None:
    from pychip8 import bus, cpu, system

    for name in ("Memory", "Timers", "PROGRAM_START"):
        assert hasattr(bus, name), f"bus missing symbol: {name}"
    for name in ("Chip8CPU", "StackFault", "decode"):
        assert hasattr(cpu, name), f"cpu missing symbol: {name}"
    for name in ("Machine", "MachineConfig", "create_machine"):
        assert hasattr(system, name), f"system missing symbol: {name}"
