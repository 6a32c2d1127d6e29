"""
Thin, stable data contracts for scenes and tooling.

These are intentionally small "struct-like" dataclasses so:
- scenes can read the day without holding on to the live RunState
- results are easy to print as JSON from the headless runner
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Optional


@dataclass(slots=True)
class RunSnapshot:
    """
    Read-only view of a RunState.

    Hidden information (the anomaly) is only included when `reveal=True` was asked for.
    """

    day: int
    seed: int
    passenger_ids: list[str]
    dropoff_order: list[str]
    player_guess: Optional[str] = None
    anomaly_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class DayOutcome:
    """
    Result of one resolved day.

    `next_day` is the day the session moved on to (1 after a wrong guess or after the last day).
    """

    day: int
    correct: bool
    player_guess: Optional[str]
    anomaly_id: Optional[str]
    next_day: int
    dropped_off: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": int(self.day),
            "correct": bool(self.correct),
            "player_guess": self.player_guess,
            "anomaly_id": self.anomaly_id,
            "next_day": int(self.next_day),
            "dropped_off": list(self.dropped_off),
        }
