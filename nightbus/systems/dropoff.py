"""
Dropoff phase: passengers leave the bus one at a time in the day's dropoff order.

- The accused passenger was already put off during the investigation, so they leave the queue first.
- Each processed passenger is removed from `run_state.dropoff_order`, which therefore always
  holds exactly the passengers still on board.
- On a wrong guess the anomaly never gets off: it stays in the queue and is revealed at the end.
"""

from __future__ import annotations

from typing import Optional

from nightbus.systems.run_state import RunState, passenger_id


class DropoffQueue:
    def __init__(self, run_state: RunState):
        self.run_state = run_state
        self.accused: Optional[str] = run_state.player_guess
        self.dropped: list[str] = []
        run_state.remove_from_dropoff(self.accused)

    def remaining_passengers(self) -> list:
        """Passengers on board when the dropoff began (roster order): everyone but the accused."""
        return [p for p in self.run_state.passengers if passenger_id(p) != self.accused]

    def _held_back(self, pid: str) -> bool:
        rs = self.run_state
        return not rs.is_correct() and rs.is_anomaly(pid)

    def next_passenger(self):
        """
        Put off the next passenger and return their record.

        Returns None once only the held-back anomaly (or nobody) is left on board.
        """
        rs = self.run_state
        for pid in list(rs.dropoff_order):
            if self._held_back(pid):
                continue
            rs.remove_from_dropoff(pid)
            self.dropped.append(pid)
            return rs.get_passenger(pid)
        return None

    def revealed_anomaly(self):
        """The anomaly left on board after a wrong guess, or None."""
        rs = self.run_state
        if rs.is_correct() or rs.anomaly_id is None:
            return None
        if rs.anomaly_id not in rs.dropoff_order:
            return None
        return rs.get_anomaly_passenger()
