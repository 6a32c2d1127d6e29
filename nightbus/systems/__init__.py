"""
Game systems package.
"""
from .run_state import RunState
from .transition_guard import TransitionGuard
from .dropoff import DropoffQueue
