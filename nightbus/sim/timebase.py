"""
Simulation time abstraction.

Session code should prefer `now_ms()` over `pygame.time.get_ticks()` so we can:
- drive transition locks from a fixed clock in headless runs and tests
- keep scenes free to use real wall-clock time when a window is open
"""

from __future__ import annotations

from typing import Optional

import pygame

_SIM_NOW_MS: Optional[int] = None


def set_sim_now_ms(now_ms: Optional[int]) -> None:
    """
    Set the current simulation time in milliseconds.

    If set to None, `now_ms()` falls back to pygame's real-time ticks.
    """
    global _SIM_NOW_MS
    _SIM_NOW_MS = None if now_ms is None else int(now_ms)


def advance_sim_ms(delta_ms: int) -> int:
    """Move sim time forward by `delta_ms` (starting from 0 if unset) and return the new time."""
    global _SIM_NOW_MS
    base = 0 if _SIM_NOW_MS is None else _SIM_NOW_MS
    _SIM_NOW_MS = base + max(0, int(delta_ms))
    return _SIM_NOW_MS


def now_ms() -> int:
    """Return sim time (if provided), otherwise pygame's wall-clock-ish ticks."""
    if _SIM_NOW_MS is not None:
        return int(_SIM_NOW_MS)
    # get_ticks() stays at 0 until SDL is up.
    if not pygame.get_init():
        pygame.init()
    return int(pygame.time.get_ticks())
