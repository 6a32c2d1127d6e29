"""
Configuration settings for the Night Bus game.
"""
import os
from dotenv import load_dotenv

load_dotenv()

PROTOTYPE_VERSION = "1.0.0"
GAME_TITLE = f"Night Bus (Prototype v{PROTOTYPE_VERSION})"

# Determinism (do NOT make these env-configurable: day seeds must stay reproducible)
BASE_SEED = 12345
FIRST_DAY = 1
MAX_DAY = 6

# Player guess sentinel: "there is no anomaly on this bus"
NO_ANOMALY_GUESS = "NONE"

# Transition guard
TRANSITION_LOCK_MS = int(os.getenv("NIGHTBUS_TRANSITION_LOCK_MS", "500"))  # milliseconds

# Session settings
DEFAULT_START_DAY = max(FIRST_DAY, int(os.getenv("NIGHTBUS_START_DAY", str(FIRST_DAY))))

# Debug logging (prints [session] lines)
DEBUG_SESSION = os.getenv("NIGHTBUS_DEBUG", "0").strip().lower() in ("1", "true", "yes", "on")
