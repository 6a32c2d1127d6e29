"""
Per-day run state: roster snapshot, hidden anomaly, dropoff order, player guess.

A RunState lives for exactly one day. When the day resolves, the session builds a
brand-new RunState for the next day instead of reusing this one.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from config import DEBUG_SESSION, FIRST_DAY, NO_ANOMALY_GUESS
from nightbus.sim.determinism import SeededRandomStream, day_seed


def debug_log(msg: str) -> None:
    if DEBUG_SESSION:
        print(f"[run_state] {msg}")


def passenger_id(passenger: Any) -> str:
    """Id of a Passenger record (or of a plain roster dict)."""
    pid = getattr(passenger, "id", None)
    if pid is None:
        pid = passenger["id"]
    return str(pid)


class RunState:
    """
    Session object for one day.

    Draw order on the day's RNG stream is fixed: the anomaly pick (days >= 2) consumes
    one value, then the Fisher-Yates dropoff shuffle continues on the same stream.
    Changing that order changes every day's outcome.
    """

    def __init__(self, day: int = FIRST_DAY):
        day = int(day)
        if day < FIRST_DAY:
            raise ValueError(f"day must be >= {FIRST_DAY}, got {day}")
        self.day = day
        self.seed = day_seed(day)
        self.rng = SeededRandomStream(self.seed)
        self.passengers: list = []
        self.anomaly_id: Optional[str] = None
        self.dropoff_order: list[str] = []
        self.player_guess: Optional[str] = None
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self, passengers: Iterable) -> None:
        """Snapshot the roster, pick the anomaly and shuffle the dropoff order (once)."""
        if self._initialized:
            raise RuntimeError(f"RunState for day {self.day} is already initialized")
        roster = list(passengers)
        for p in roster:
            passenger_id(p)  # a bad entry fails here, before any state or RNG draw changes
        self.passengers = roster

        if self.day == FIRST_DAY:
            self.anomaly_id = None
        else:
            self._choose_anomaly()

        self._shuffle_dropoff_order()
        self._initialized = True

    def _choose_anomaly(self) -> None:
        ids = [passenger_id(p) for p in self.passengers]
        if not ids:
            # Nothing to pick from: behave like a no-anomaly day, leave the stream untouched.
            debug_log(f"day {self.day}: empty roster, no anomaly possible")
            self.anomaly_id = None
            return
        self.anomaly_id = ids[self.rng.next_index(len(ids))]

    def _shuffle_dropoff_order(self) -> None:
        order = [passenger_id(p) for p in self.passengers]
        for i in range(len(order) - 1, 0, -1):
            j = self.rng.next_index(i + 1)
            order[i], order[j] = order[j], order[i]
        self.dropoff_order = order

    def is_correct(self) -> bool:
        """True iff the player's guess matches the hidden truth ("NONE" on no-anomaly days)."""
        if self.anomaly_id is None:
            return self.player_guess == NO_ANOMALY_GUESS
        return self.player_guess == self.anomaly_id

    def get_passenger(self, pid: str):
        """Passenger with this id from the current roster, or None."""
        for p in self.passengers:
            if passenger_id(p) == pid:
                return p
        return None

    def get_anomaly_passenger(self):
        """The anomaly's Passenger record, or None on a no-anomaly day."""
        if self.anomaly_id is None:
            return None
        return self.get_passenger(self.anomaly_id)

    def is_anomaly(self, pid: Optional[str]) -> bool:
        return self.anomaly_id is not None and pid == self.anomaly_id

    def remove_from_dropoff(self, pid: Optional[str]) -> list[str]:
        """Drop an already-processed passenger from the dropoff queue; returns the new order."""
        self.dropoff_order = [x for x in self.dropoff_order if x != pid]
        return self.dropoff_order

    def __repr__(self) -> str:
        return (
            f"RunState(day={self.day}, seed={self.seed}, passengers={len(self.passengers)}, "
            f"anomaly_id={self.anomaly_id!r}, player_guess={self.player_guess!r})"
        )
