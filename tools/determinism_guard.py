"""
Determinism guard (static check).

Purpose:
- Keep day logic reproducible: the same day number must always pick the same anomaly
  and the same dropoff order, and transition locks must run on sim time.

What we flag (in session code):
- Wall-clock time: pygame.time.get_ticks(), time.time(), time.monotonic(), datetime.now(), ...
- The global `random` module (use nightbus.sim.determinism.SeededRandomStream)
- Python's hash() (process-randomized by default)

We intentionally DO NOT scan:
- nightbus/sim/** (this contains the deterministic wrappers, incl. the pygame clock fallback)
"""

from __future__ import annotations

import argparse
import ast
import json
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable


PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SCAN_PATHS = [
    PROJECT_ROOT / "nightbus" / "systems",
    PROJECT_ROOT / "nightbus" / "entities",
    PROJECT_ROOT / "nightbus" / "engine.py",
]

DEFAULT_EXCLUDE_DIRS = [
    PROJECT_ROOT / "nightbus" / "sim",
]

_CLOCK_CALLS = {
    ("pygame", "time", "get_ticks"),
    ("time", "time"),
    ("time", "monotonic"),
    ("time", "perf_counter"),
}

_DATETIME_ATTRS = {"now", "utcnow", "today"}


@dataclass
class Finding:
    kind: str
    file: str
    line: int
    col: int
    detail: str


def _rel(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(PROJECT_ROOT))
    except ValueError:
        return str(path)


def _excluded(path: Path, exclude_dirs: list[Path]) -> bool:
    resolved = path.resolve()
    return any(ex.resolve() in resolved.parents for ex in exclude_dirs)


def iter_py_files(roots: Iterable[Path], *, exclude_dirs: list[Path]) -> list[Path]:
    out: set[Path] = set()
    for root in roots:
        if root.is_file() and root.suffix == ".py":
            out.add(root)
        elif root.is_dir():
            out.update(p for p in root.rglob("*.py") if not _excluded(p, exclude_dirs))
    return sorted(out)


def _dotted(node: ast.AST) -> tuple[str, ...] | None:
    if isinstance(node, ast.Name):
        return (node.id,)
    if isinstance(node, ast.Attribute):
        base = _dotted(node.value)
        return None if base is None else (*base, node.attr)
    return None


def scan_source(src: str, *, filename: str = "<string>") -> list[Finding]:
    try:
        tree = ast.parse(src, filename=filename)
    except SyntaxError as e:
        return [Finding("parse_error", filename, int(e.lineno or 0), int(e.offset or 0), f"SyntaxError: {e.msg}")]

    findings: list[Finding] = []

    def flag(kind: str, node: ast.AST, detail: str) -> None:
        findings.append(Finding(kind, filename, node.lineno, node.col_offset, detail))

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            if any(alias.name == "random" for alias in node.names):
                flag("global_rng", node, "Use nightbus.sim.determinism.SeededRandomStream instead of the random module.")
            continue
        if isinstance(node, ast.ImportFrom):
            if node.module == "random":
                flag("global_rng", node, "Use nightbus.sim.determinism.SeededRandomStream instead of the random module.")
            continue
        if not isinstance(node, ast.Call):
            continue

        chain = _dotted(node.func)
        if not chain:
            continue
        if chain in _CLOCK_CALLS:
            flag("wall_clock_time", node, f"Use nightbus.sim.timebase.now_ms() instead of {'.'.join(chain)}().")
        elif chain[-1] in _DATETIME_ATTRS and "datetime" in chain:
            flag("wall_clock_time", node, "Avoid datetime.now()/utcnow() in session logic; use sim time.")
        elif chain == ("hash",):
            flag("unstable_hash", node, "Avoid hash() for deterministic behavior; compare explicit ids.")

    return findings


def scan_file(path: Path) -> list[Finding]:
    src = path.read_text(encoding="utf-8", errors="replace")
    return scan_source(src, filename=_rel(path))


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Static determinism guard (session code)")
    ap.add_argument(
        "--paths",
        nargs="*",
        default=[],
        help="Optional paths to scan (files or dirs). Default scans nightbus/systems, nightbus/entities, nightbus/engine.py.",
    )
    ap.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    ns = ap.parse_args(argv)

    roots = [Path(p) for p in ns.paths] if ns.paths else list(DEFAULT_SCAN_PATHS)
    findings: list[Finding] = []
    for f in iter_py_files(roots, exclude_dirs=list(DEFAULT_EXCLUDE_DIRS)):
        findings.extend(scan_file(f))

    if ns.json:
        print(json.dumps({"findings": [asdict(v) for v in findings]}, indent=2))
    elif not findings:
        print("[determinism_guard] PASS: no violations found")
    else:
        print(f"[determinism_guard] FAIL: {len(findings)} violation(s)")
        for v in findings:
            print(f"- {v.file}:{v.line}:{v.col} [{v.kind}] {v.detail}")

    return 0 if not findings else 1


if __name__ == "__main__":
    sys.exit(main())
