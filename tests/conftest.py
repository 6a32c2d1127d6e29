import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from nightbus.entities import Passenger
from nightbus.sim.timebase import set_sim_now_ms


@pytest.fixture(autouse=True)
def sim_clock():
    set_sim_now_ms(0)
    yield
    set_sim_now_ms(None)


@pytest.fixture
def abc_roster():
    return [
        Passenger("A", "Alice", seat_index=0, stop_id="s1"),
        Passenger("B", "Bob", seat_index=1, stop_id="s1"),
        Passenger("C", "Cleo", seat_index=2, stop_id="s2"),
    ]
