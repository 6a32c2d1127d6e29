import pytest

from config import BASE_SEED, NO_ANOMALY_GUESS
from nightbus.entities import DEFAULT_ROSTER, Passenger
from nightbus.systems.run_state import RunState


def _make(day, roster):
    rs = RunState(day)
    rs.initialize(roster)
    return rs


def test_construct_derives_seed_from_day():
    rs = RunState(4)
    assert rs.day == 4
    assert rs.seed == BASE_SEED + 4
    assert rs.passengers == []
    assert rs.anomaly_id is None
    assert rs.player_guess is None
    assert not rs.initialized


def test_day_must_be_positive():
    with pytest.raises(ValueError):
        RunState(0)


def test_initialize_only_once(abc_roster):
    rs = _make(2, abc_roster)
    with pytest.raises(RuntimeError):
        rs.initialize(abc_roster)


def test_roster_is_snapshotted(abc_roster):
    rs = _make(2, abc_roster)
    abc_roster.append(Passenger("D", "Dana"))
    assert [p.id for p in rs.passengers] == ["A", "B", "C"]


def test_golden_day_two_abc(abc_roster):
    rs = _make(2, abc_roster)
    assert rs.anomaly_id == "B"
    assert rs.dropoff_order == ["C", "B", "A"]


@pytest.mark.parametrize(
    "day, anomaly, order",
    [
        (1, None, ["A", "C", "B"]),
        (2, "B", ["C", "B", "A"]),
        (3, "A", ["A", "C", "B"]),
        (4, "C", ["A", "C", "B"]),
        (5, "A", ["A", "B", "C"]),
        (6, "B", ["C", "B", "A"]),
    ],
)
def test_golden_days_abc(abc_roster, day, anomaly, order):
    rs = _make(day, abc_roster)
    assert rs.anomaly_id == anomaly
    assert rs.dropoff_order == order


def test_golden_default_roster_day_two():
    rs = _make(2, DEFAULT_ROSTER)
    assert rs.anomaly_id == "kid"
    assert rs.dropoff_order == ["man", "dog", "kid", "grandma"]


def test_determinism_across_instances(abc_roster):
    for day in range(1, 10):
        a = _make(day, abc_roster)
        b = _make(day, abc_roster)
        assert (a.anomaly_id, a.dropoff_order) == (b.anomaly_id, b.dropoff_order)


@pytest.mark.parametrize("size", [0, 1, 2, 5, 12])
def test_day_one_never_has_anomaly(size):
    roster = [Passenger(f"p{i}", f"P{i}") for i in range(size)]
    assert _make(1, roster).anomaly_id is None


@pytest.mark.parametrize("day", [2, 3, 4, 5, 6])
@pytest.mark.parametrize("size", [1, 2, 7])
def test_anomaly_is_on_roster(day, size):
    roster = [Passenger(f"p{i}", f"P{i}") for i in range(size)]
    rs = _make(day, roster)
    assert rs.anomaly_id in {p.id for p in roster}


@pytest.mark.parametrize("day", [1, 2, 5])
@pytest.mark.parametrize("size", [0, 1, 3, 9])
def test_dropoff_order_is_permutation(day, size):
    roster = [Passenger(f"p{i}", f"P{i}") for i in range(size)]
    rs = _make(day, roster)
    assert sorted(rs.dropoff_order) == sorted(p.id for p in roster)
    assert len(set(rs.dropoff_order)) == len(rs.dropoff_order)


def test_empty_roster_after_day_one_has_no_anomaly():
    rs = _make(3, [])
    assert rs.anomaly_id is None
    assert rs.dropoff_order == []
    assert rs.get_anomaly_passenger() is None


def test_anomaly_draw_happens_before_shuffle(abc_roster):
    rs = _make(2, abc_roster)
    # The next value after one anomaly draw + two shuffle draws.
    reference = RunState(2).rng
    for _ in range(3):
        reference()
    assert rs.rng() == reference()


def test_is_correct_no_anomaly_day():
    rs = _make(1, DEFAULT_ROSTER)
    assert rs.is_correct() is False
    rs.player_guess = NO_ANOMALY_GUESS
    assert rs.is_correct() is True
    rs.player_guess = "grandma"
    assert rs.is_correct() is False


def test_is_correct_anomaly_day(abc_roster):
    rs = _make(3, abc_roster)
    rs.anomaly_id = "B"
    assert rs.is_correct() is False
    rs.player_guess = "A"
    assert rs.is_correct() is False
    rs.player_guess = NO_ANOMALY_GUESS
    assert rs.is_correct() is False
    rs.player_guess = "B"
    assert rs.is_correct() is True


def test_lookups(abc_roster):
    rs = _make(2, abc_roster)
    assert rs.get_passenger("C").display_name == "Cleo"
    assert rs.get_passenger("nobody") is None
    assert rs.get_anomaly_passenger().id == "B"
    assert rs.is_anomaly("B")
    assert not rs.is_anomaly("A")

    day_one = _make(1, abc_roster)
    assert day_one.get_anomaly_passenger() is None
    assert not day_one.is_anomaly(None)
    assert not day_one.is_anomaly("A")


def test_roster_may_shrink(abc_roster):
    rs = _make(2, abc_roster)
    rs.passengers = [p for p in rs.passengers if p.id != "A"]
    assert rs.get_passenger("A") is None


def test_remove_from_dropoff_keeps_remaining_permutation(abc_roster):
    rs = _make(2, abc_roster)
    assert rs.remove_from_dropoff("B") == ["C", "A"]
    assert rs.remove_from_dropoff("missing") == ["C", "A"]


def test_accepts_plain_dict_roster():
    rs = _make(2, [{"id": "A"}, {"id": "B"}, {"id": "C"}])
    assert rs.anomaly_id == "B"
    assert rs.get_passenger("C") == {"id": "C"}


def test_bad_roster_entry_leaves_state_retryable(abc_roster):
    rs = RunState(2)
    with pytest.raises(KeyError):
        rs.initialize([{"id": "A"}, {"displayName": "no id"}])
    assert not rs.initialized
    assert rs.passengers == []
    rs.initialize(abc_roster)
    assert rs.anomaly_id == "B"
    assert rs.dropoff_order == ["C", "B", "A"]
