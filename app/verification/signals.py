"""
Explicit outcome of one external sub-check.

A failed check still carries a value: the conservative default the engine
must use. Callers never need try/except around a sub-check.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class SignalResult:
    value: bool
    ok: bool = True
    error: Optional[str] = None

    @classmethod
    def success(cls, value: bool) -> "SignalResult":
        return cls(value=value)

    @classmethod
    def failure(cls, default: bool, error: str) -> "SignalResult":
        return cls(value=default, ok=False, error=error)
