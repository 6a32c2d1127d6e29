"""
Passenger records and the default roster.

Passengers are plain data: the day logic only ever reads `id`; seats and stops are
carried along for the scenes that draw the bus and run the pickup route.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class Passenger:
    """A rider on the night bus (immutable)."""

    id: str
    display_name: str
    seat_index: int = 0
    stop_id: str = ""

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Passenger":
        """Build from a roster entry; accepts the data files' camelCase keys too."""
        return cls(
            id=str(d["id"]),
            display_name=str(d.get("display_name", d.get("displayName")) or d["id"]),
            seat_index=int(d.get("seat_index", d.get("seatIndex")) or 0),
            stop_id=str(d.get("stop_id", d.get("stopId")) or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "seat_index": int(self.seat_index),
            "stop_id": self.stop_id,
        }


@dataclass(frozen=True, slots=True)
class Stop:
    """A pickup stop on the route."""

    id: str
    name: str


DEFAULT_STOPS: tuple[Stop, ...] = (
    Stop("elm_street", "Elm Street"),
    Stop("old_mill", "Old Mill"),
    Stop("hospital", "St. Agnes Hospital"),
    Stop("depot_road", "Depot Road"),
)

DEFAULT_ROSTER: tuple[Passenger, ...] = (
    Passenger("grandma", "Grandma", seat_index=0, stop_id="elm_street"),
    Passenger("man", "Mr. Lane", seat_index=2, stop_id="old_mill"),
    Passenger("kid", "Ari", seat_index=3, stop_id="old_mill"),
    Passenger("dog", "Dex", seat_index=5, stop_id="hospital"),
)


def roster_from_dicts(entries) -> list[Passenger]:
    """Convert already-loaded roster entries (dicts or Passengers) into Passenger records."""
    out: list[Passenger] = []
    for e in entries:
        out.append(e if isinstance(e, Passenger) else Passenger.from_dict(e))
    return out
