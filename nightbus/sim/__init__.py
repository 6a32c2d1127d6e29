"""
Determinism-friendly simulation helpers.

This package intentionally contains *small* primitives (seeded RNG + sim time + snapshots)
that let the day logic stay reproducible without touching the presentation layer.
"""
