"""
Game session - owns the current day and moves the bus through its scenes.

The session is the one explicit context object: scenes get the session (or its
`run_state` / `guard`) handed to them instead of reaching into globals.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from config import DEBUG_SESSION, DEFAULT_START_DAY, FIRST_DAY, MAX_DAY, NO_ANOMALY_GUESS
from nightbus.entities import DEFAULT_ROSTER, DEFAULT_STOPS, roster_from_dicts
from nightbus.sim.contracts import DayOutcome, RunSnapshot
from nightbus.systems.dropoff import DropoffQueue
from nightbus.systems.run_state import RunState, passenger_id
from nightbus.systems.transition_guard import TransitionGuard


def debug_log(msg: str) -> None:
    if DEBUG_SESSION:
        print(f"[session] {msg}")


class Scene(str, Enum):
    BOOT = "Boot"
    DAY_SPLASH = "DaySplash"
    PICKUP = "Pickup"
    INVESTIGATION = "Investigation"
    DRIVER_RETURN = "DriverReturn"
    DROPOFF = "Dropoff"


# Linear flow inside a day. Dropoff leaves through resolve_day().
SCENE_FLOW = {
    Scene.DAY_SPLASH: Scene.PICKUP,
    Scene.PICKUP: Scene.INVESTIGATION,
    Scene.INVESTIGATION: Scene.DRIVER_RETURN,
    Scene.DRIVER_RETURN: Scene.DROPOFF,
}


def next_day(day: int, correct: bool, max_day: int = MAX_DAY) -> int:
    """Correct: day + 1, wrapping to day 1 after the last day. Wrong: back to day 1."""
    if not correct:
        return FIRST_DAY
    nxt = int(day) + 1
    return nxt if nxt <= max_day else FIRST_DAY


class GameSession:
    """Main session class."""

    def __init__(
        self,
        roster: Optional[Iterable] = None,
        stops: Optional[Iterable] = None,
        *,
        start_day: int = DEFAULT_START_DAY,
        guard: Optional[TransitionGuard] = None,
    ):
        # Templates are never mutated; every new day starts from the full roster.
        self.passenger_templates = tuple(roster_from_dicts(DEFAULT_ROSTER if roster is None else roster))
        self.stops = tuple(DEFAULT_STOPS if stops is None else stops)
        self.guard = guard if guard is not None else TransitionGuard()

        self.scene = Scene.BOOT
        self.scene_data: dict = {}
        self.events: list[dict] = []
        self.outcomes: list[DayOutcome] = []
        self.dropoff: Optional[DropoffQueue] = None
        self.run_state = self._new_run_state(start_day)

    # ------------------------------------------------------------------ state

    def _new_run_state(self, day: int) -> RunState:
        rs = RunState(day)
        rs.initialize(self.passenger_templates)
        debug_log(f"day {rs.day}: seed={rs.seed} dropoff={rs.dropoff_order}")
        return rs

    @property
    def day(self) -> int:
        return self.run_state.day

    def _emit(self, event_type: str, **data) -> None:
        self.events.append({"type": event_type, "day": self.run_state.day, **data})

    def drain_events(self) -> list[dict]:
        events, self.events = self.events, []
        return events

    def snapshot(self, *, reveal: bool = False) -> RunSnapshot:
        rs = self.run_state
        return RunSnapshot(
            day=rs.day,
            seed=rs.seed,
            passenger_ids=[passenger_id(p) for p in rs.passengers],
            dropoff_order=list(rs.dropoff_order),
            player_guess=rs.player_guess,
            anomaly_id=rs.anomaly_id if reveal else None,
        )

    # ------------------------------------------------------------------ scenes

    def _start_scene(self, target, data: dict) -> bool:
        scene = Scene(target)
        self.scene = scene
        self.scene_data = dict(data)
        debug_log(f"scene -> {scene.value} {self.scene_data}")

        if scene == Scene.DAY_SPLASH:
            self.dropoff = None
            self._emit("day_started", has_anomaly=self.run_state.day != FIRST_DAY)
        elif scene == Scene.PICKUP:
            for stop, riders in self.boarding_order():
                for p in riders:
                    self._emit("passenger_boarded", passenger_id=passenger_id(p), stop_id=stop.id)
        elif scene == Scene.DROPOFF:
            self.dropoff = DropoffQueue(self.run_state)
        return True

    def boot(self) -> None:
        """Enter the first day splash. Unguarded: nothing can be in flight yet."""
        if self.scene != Scene.BOOT:
            return
        self._start_scene(Scene.DAY_SPLASH, {"day": self.run_state.day})

    def advance(self) -> bool:
        """
        Guarded move to the next scene of the day.

        Returns False when there is no next scene, the investigation has no accusation yet,
        or the guard dropped the call because a transition is still in flight.
        """
        target = SCENE_FLOW.get(self.scene)
        if target is None:
            return False
        if self.scene == Scene.INVESTIGATION and self.run_state.player_guess is None:
            return False
        moved = self.guard.guard_scene_transition(
            target.value, {"day": self.run_state.day}, start_scene=self._start_scene
        )()
        return bool(moved)

    def boarding_order(self) -> list:
        """[(stop, [passengers boarding there])] in route order; empty stops are kept."""
        out = []
        for stop in self.stops:
            riders = [p for p in self.run_state.passengers if getattr(p, "stop_id", None) == stop.id]
            out.append((stop, riders))
        return out

    # ------------------------------------------------------------------ player actions

    def accuse(self, pid: str) -> bool:
        """Record the player's accusation (a passenger id or "NONE")."""
        rs = self.run_state
        if self.scene != Scene.INVESTIGATION or rs.player_guess is not None:
            return False
        if pid != NO_ANOMALY_GUESS and rs.get_passenger(pid) is None:
            debug_log(f"accuse: unknown passenger {pid!r}")
            return False
        rs.player_guess = pid
        self._emit("passenger_accused", passenger_id=pid)
        return True

    def drop_off_next(self):
        """Put off the next passenger during the dropoff scene; None when nobody else leaves."""
        if self.scene != Scene.DROPOFF or self.dropoff is None:
            return None
        p = self.dropoff.next_passenger()
        if p is not None:
            self._emit("passenger_dropped_off", passenger_id=passenger_id(p))
        return p

    def resolve_day(self) -> Optional[DayOutcome]:
        """
        Finish the dropoff, judge the guess and start the next day.

        Guarded like any other transition: returns None (and changes nothing) while a
        previous transition is still in flight or outside the dropoff scene.
        """
        if self.scene != Scene.DROPOFF or self.dropoff is None:
            return None
        return self.guard.guard(self._resolve)()

    def _resolve(self) -> DayOutcome:
        rs = self.run_state
        while self.drop_off_next() is not None:
            pass

        correct = rs.is_correct()
        revealed = self.dropoff.revealed_anomaly() if self.dropoff is not None else None
        if revealed is not None:
            self._emit("anomaly_revealed", passenger_id=passenger_id(revealed))

        outcome = DayOutcome(
            day=rs.day,
            correct=correct,
            player_guess=rs.player_guess,
            anomaly_id=rs.anomaly_id,
            next_day=next_day(rs.day, correct),
            dropped_off=list(self.dropoff.dropped) if self.dropoff is not None else [],
        )
        self._emit("day_resolved", correct=correct, next_day=outcome.next_day)
        self.outcomes.append(outcome)

        self.run_state = self._new_run_state(outcome.next_day)
        self._start_scene(Scene.DAY_SPLASH, {"day": outcome.next_day})
        return outcome
