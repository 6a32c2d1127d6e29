"""
Game entities package.
"""
from .passenger import Passenger, Stop, DEFAULT_ROSTER, DEFAULT_STOPS, roster_from_dicts
