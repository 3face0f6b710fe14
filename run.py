"""Command-line entry point for the CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.system import DEFAULT_CLOCK_SPEED
from pychip8.ui.app import AppConfig, Chip8App
from pychip8.utils import enable_categories
from pychip8.video import MONOCHROME, parse_color


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter",
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to the CHIP-8 program image",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=20,
        help="Integer window scale factor (default: 20)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the interpreter in fullscreen mode",
    )
    parser.add_argument(
        "--clock-speed",
        type=int,
        default=DEFAULT_CLOCK_SPEED,
        help=f"Instructions executed per second (default: {DEFAULT_CLOCK_SPEED})",
    )
    parser.add_argument(
        "--foreground",
        type=parse_color,
        default=MONOCHROME[1],
        help="Pixel colour as RRGGBB (default: FFFFFF)",
    )
    parser.add_argument(
        "--background",
        type=parse_color,
        default=MONOCHROME[0],
        help="Background colour as RRGGBB (default: 000000)",
    )
    parser.add_argument(
        "--tone",
        type=float,
        default=440.0,
        help="Beeper frequency in Hz (default: 440)",
    )
    parser.add_argument(
        "--volume",
        type=float,
        default=0.1,
        help="Beeper volume between 0.0 and 1.0 (default: 0.1)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Open the debug shell before the first frame",
    )
    parser.add_argument(
        "--log",
        metavar="CATEGORIES",
        default="",
        help="Comma-separated debug log categories, e.g. cpu,input (adds to CHIP8_DEBUG)",
    )
    return parser


def build_config(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        fullscreen=args.fullscreen,
        foreground=args.foreground,
        background=args.background,
        clock_speed=args.clock_speed,
        tone_frequency=args.tone,
        volume=args.volume,
        start_in_debugger=args.debug,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.clock_speed <= 0:
        parser.error("--clock-speed must be positive")

    if args.log:
        enable_categories(args.log)

    app = Chip8App(build_config(args))
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
