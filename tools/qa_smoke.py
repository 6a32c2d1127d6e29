"""
QA smoke runner (headless).

Runs the determinism guard plus a few standard headless day profiles so QA/regressions
can be run as a single command that returns a useful exit code.

Examples:
  python tools/qa_smoke.py --quick
  python tools/qa_smoke.py --days 12 --strategy wrong
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
MAIN = PROJECT_ROOT / "main.py"
DETERMINISM_GUARD = PROJECT_ROOT / "tools" / "determinism_guard.py"


def _run(cmd: list[str], *, title: str) -> int:
    env = os.environ.copy()
    env.setdefault("SDL_VIDEODRIVER", "dummy")
    env.setdefault("SDL_AUDIODRIVER", "dummy")

    print(f"\n[qa_smoke] === {title} ===")
    print("[qa_smoke] cmd:", " ".join(cmd))
    completed = subprocess.run(cmd, env=env, cwd=str(PROJECT_ROOT))
    print(f"[qa_smoke] exit_code={completed.returncode}")
    return int(completed.returncode)


def main() -> int:
    ap = argparse.ArgumentParser(description="Run headless QA smoke profiles")
    ap.add_argument("--days", type=int, default=6, help="days per profile")
    ap.add_argument("--strategy", default="oracle", choices=["oracle", "trust", "wrong"])
    ap.add_argument("--quick", action="store_true", help="run the standard set of profiles")
    ns = ap.parse_args()

    if not MAIN.exists():
        print(f"[qa_smoke] ERROR: missing {MAIN}")
        return 2

    runs: list[tuple[str, list[str]]] = [("determinism_guard", [sys.executable, str(DETERMINISM_GUARD)])]
    if ns.quick:
        runs += [
            ("day_table", [sys.executable, str(MAIN), "--table"]),
            ("oracle_full_loop", [sys.executable, str(MAIN), "--days", "7", "--strategy", "oracle"]),
            ("trust_everyone", [sys.executable, str(MAIN), "--days", "3", "--strategy", "trust"]),
            ("wrong_accusations", [sys.executable, str(MAIN), "--days", "3", "--strategy", "wrong"]),
        ]
    else:
        runs.append(
            ("custom", [sys.executable, str(MAIN), "--days", str(ns.days), "--strategy", ns.strategy])
        )

    failures = 0
    for title, cmd in runs:
        if _run(cmd, title=title) != 0:
            failures += 1

    print(f"\n[qa_smoke] {'PASS' if failures == 0 else 'FAIL'}: {len(runs) - failures}/{len(runs)} profiles ok")
    return 0 if failures == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
