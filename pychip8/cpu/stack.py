"""Bounded return-address stack."""

from __future__ import annotations

STACK_DEPTH = 16


class CPUError(Exception):
    """Base error for CPU-related failures."""


class StackFault(CPUError):
    """Raised on a call with a full stack or a return with an empty one."""


class CallStack:
    """Fixed-capacity stack of 16-bit return addresses with a depth cursor."""

    def __init__(self, capacity: int = STACK_DEPTH) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._entries = [0] * capacity
        self._depth = 0

    @property
    def capacity(self) -> int:
        return len(self._entries)

    @property
    def depth(self) -> int:
        return self._depth

    def __len__(self) -> int:
        return self._depth

    def push(self, address: int) -> None:
        if self._depth >= len(self._entries):
            raise StackFault(f"stack overflow pushing {address & 0xFFFF:#06x} (depth {self._depth})")
        self._entries[self._depth] = address & 0xFFFF
        self._depth += 1

    def pop(self) -> int:
        if self._depth == 0:
            raise StackFault("stack underflow on return")
        self._depth -= 1
        return self._entries[self._depth]

    def peek(self) -> int | None:
        if self._depth == 0:
            return None
        return self._entries[self._depth - 1]

    def clear(self) -> None:
        self._entries = [0] * len(self._entries)
        self._depth = 0

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._entries[: self._depth])
