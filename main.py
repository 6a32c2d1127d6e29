"""
Night Bus - a day-by-day anomaly hunt on a late-night bus route.

Headless runner: plays days without a window, driving the sim clock past the
transition lock between scenes.

Usage:
    python main.py [--days N] [--strategy <strategy>] [--start-day D] [--json] [--table]

Strategies:
    oracle  - always accuse the real anomaly ("NONE" on day 1)
    trust   - always answer "NONE" (no anomaly)
    wrong   - always accuse an innocent passenger
"""
import argparse
import json
import os
import sys

# Headless pygame setup (safe for CI / no-window environments)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from config import DEFAULT_START_DAY, FIRST_DAY, GAME_TITLE, MAX_DAY, NO_ANOMALY_GUESS
from nightbus.engine import GameSession, Scene
from nightbus.entities import DEFAULT_ROSTER
from nightbus.sim.timebase import advance_sim_ms, set_sim_now_ms
from nightbus.systems.run_state import RunState, passenger_id

STRATEGIES = ("oracle", "trust", "wrong")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description=f"{GAME_TITLE} - headless day runner")
    parser.add_argument("--days", type=int, default=MAX_DAY, help="number of days to play (default: %(default)s)")
    parser.add_argument(
        "--strategy",
        type=str,
        default="oracle",
        choices=STRATEGIES,
        help="how the simulated player accuses (default: oracle)",
    )
    parser.add_argument("--start-day", type=int, default=DEFAULT_START_DAY, help="day to start on")
    parser.add_argument("--json", action="store_true", help="emit machine-readable JSON")
    parser.add_argument("--table", action="store_true", help="print the anomaly/dropoff table for every day and exit")
    return parser.parse_args(argv)


def pick_guess(session: GameSession, strategy: str) -> str:
    rs = session.run_state
    if strategy == "trust":
        return NO_ANOMALY_GUESS
    if strategy == "oracle":
        return rs.anomaly_id if rs.anomaly_id is not None else NO_ANOMALY_GUESS
    for p in rs.passengers:
        if not rs.is_anomaly(passenger_id(p)):
            return passenger_id(p)
    return NO_ANOMALY_GUESS


def play_day(session: GameSession, strategy: str):
    """Run the current day from its splash screen to resolution; returns the DayOutcome."""
    step_ms = session.guard.lock_ms
    while session.scene != Scene.DROPOFF:
        if session.scene == Scene.INVESTIGATION and session.run_state.player_guess is None:
            session.accuse(pick_guess(session, strategy))
        advance_sim_ms(step_ms)
        if not session.advance():
            raise RuntimeError(f"session stuck in scene {session.scene.value}")
    advance_sim_ms(step_ms)
    return session.resolve_day()


def day_table(roster=DEFAULT_ROSTER) -> list[dict]:
    rows = []
    for day in range(FIRST_DAY, MAX_DAY + 1):
        rs = RunState(day)
        rs.initialize(roster)
        rows.append({"day": day, "seed": rs.seed, "anomaly_id": rs.anomaly_id, "dropoff_order": rs.dropoff_order})
    return rows


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.table:
        rows = day_table()
        if args.json:
            print(json.dumps(rows, indent=2))
        else:
            for r in rows:
                print(f"[nightbus] day={r['day']} seed={r['seed']} anomaly={r['anomaly_id']} dropoff={r['dropoff_order']}")
        return 0

    if args.start_day < FIRST_DAY:
        print(f"[nightbus] ERROR: --start-day must be >= {FIRST_DAY}", file=sys.stderr)
        return 2

    set_sim_now_ms(0)
    session = GameSession(start_day=args.start_day)
    session.boot()
    outcomes = []
    for _ in range(max(0, args.days)):
        outcome = play_day(session, args.strategy)
        outcomes.append(outcome)
        if not args.json:
            verdict = "correct" if outcome.correct else "WRONG"
            print(
                f"[nightbus] day {outcome.day}: guess={outcome.player_guess} anomaly={outcome.anomaly_id} "
                f"-> {verdict}, next day {outcome.next_day}"
            )

    if args.json:
        print(json.dumps([o.to_dict() for o in outcomes], indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
