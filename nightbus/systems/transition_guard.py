"""
Single-flight guard for scene-advancing actions.

Double clicks and overlapping timers can fire the same "go to next scene" callback twice.
The guard lets the first call through and drops every other guarded call until the lock
expires (TRANSITION_LOCK_MS after it was taken) or `reset()` is called.

The lock is time-based, not completion-based: it does not know when an animated scene
change actually finishes. `reset()` is the manual escape hatch (and the place to hook an
explicit "transition finished" signal).
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from config import DEBUG_SESSION, TRANSITION_LOCK_MS
from nightbus.sim.timebase import now_ms

SceneStarter = Callable[[str, dict], Any]


def debug_log(msg: str) -> None:
    if DEBUG_SESSION:
        print(f"[guard] {msg}")


class TransitionGuard:
    """Process-wide IDLE/LOCKED switch shared by every scene that triggers a transition."""

    def __init__(
        self,
        start_scene: Optional[SceneStarter] = None,
        *,
        lock_ms: int = TRANSITION_LOCK_MS,
        clock: Callable[[], int] = now_ms,
    ):
        self.start_scene = start_scene
        self.lock_ms = max(0, int(lock_ms))
        self._clock = clock
        self._locked = False
        self.transition_time: Optional[int] = None  # ms timestamp of the last accepted call
        self.dropped_calls = 0

    def _refresh(self) -> None:
        # Scheduled unlock: the lock lapses once lock_ms has elapsed since it was taken.
        if self._locked and self.transition_time is not None:
            elapsed = int(self._clock()) - self.transition_time
            # A clock that moved backwards (sim time reset) also ends the lock.
            if elapsed < 0 or elapsed >= self.lock_ms:
                self._locked = False
                debug_log("lock expired")

    def guard(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Wrap `fn` so that calls made while a transition is in flight are dropped."""

        def guarded(*args, **kwargs):
            self._refresh()
            if self._locked:
                self.dropped_calls += 1
                debug_log(f"dropped call to {getattr(fn, '__name__', fn)!s}")
                return None

            self._locked = True
            self.transition_time = int(self._clock())
            return fn(*args, **kwargs)

        guarded.__wrapped__ = fn
        return guarded

    def guard_scene_transition(
        self,
        target: str,
        data: Optional[dict] = None,
        *,
        start_scene: Optional[SceneStarter] = None,
    ) -> Callable[..., Any]:
        """Guarded callable that moves to scene `target` with payload `data`."""
        starter = start_scene or self.start_scene
        if starter is None:
            raise RuntimeError("TransitionGuard has no scene starter configured")
        payload = dict(data or {})

        def _start(*_args, **_kwargs):
            debug_log(f"-> {target} {payload}")
            return starter(target, dict(payload))

        _start.__name__ = f"start_{target}"
        return self.guard(_start)

    def guard_button_click(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        return self.guard(fn)

    def is_in_transition(self) -> bool:
        self._refresh()
        return self._locked

    def reset(self) -> None:
        """Force the guard back to IDLE."""
        self._locked = False
