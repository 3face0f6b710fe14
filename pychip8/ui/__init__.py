"""Pygame presentation layer."""

from .app import AppConfig, Chip8App, RunState

__all__ = ["AppConfig", "Chip8App", "RunState"]
