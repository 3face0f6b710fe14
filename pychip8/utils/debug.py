"""Category-gated debug output for the CHIP-8 interpreter.

Categories come from the comma-separated ``CHIP8_DEBUG`` environment variable
(``cpu``, ``input``, ``audio``, ``memory``, ``loader``, ``perf``, ``trace`` or
``all``) and can be extended at runtime with :func:`enable_categories`.
"""

from __future__ import annotations

import os
from typing import Iterable

ENV_VAR = "CHIP8_DEBUG"

_CATEGORIES: set[str] | None = None


def _parse(value: str) -> set[str]:
    parts: Iterable[str] = (part.strip().lower() for part in value.split(","))
    return {part for part in parts if part}


def _load_categories() -> set[str]:
    global _CATEGORIES
    if _CATEGORIES is None:
        _CATEGORIES = _parse(os.environ.get(ENV_VAR, ""))
    return _CATEGORIES


def enable_categories(names: str) -> None:
    """Switch on the categories in ``names`` in addition to the environment."""

    _load_categories().update(_parse(names))


def reload_categories() -> None:
    """Forget enabled categories so ``CHIP8_DEBUG`` is re-read on next use."""

    global _CATEGORIES
    _CATEGORIES = None


def debug_enabled(category: str | None = None) -> bool:
    categories = _load_categories()
    if not categories:
        return False
    if category is None or "all" in categories:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[CHIP8][{category}] {message}")
