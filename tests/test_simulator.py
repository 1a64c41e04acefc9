import pathlib
import sys

import numpy as np
import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from deck import Deck, DeckSizeError, is_original_order
from profiles import SimulationProfile
from simulator import (
    DriverState,
    RoundDriver,
    RoundLimitError,
    count_rounds,
    cycle_lengths,
    cycle_order,
    permutation_order,
    round_permutation,
)


@pytest.mark.parametrize(
    "size,expected",
    [(1, 1), (2, 2), (3, 3), (4, 2), (5, 5)],
)
def test_known_round_counts(size, expected):
    assert count_rounds(size) == expected


def test_driver_starts_running_with_counter_one():
    driver = RoundDriver(3)
    assert driver.state is DriverState.RUNNING
    assert driver.rounds == 1
    assert driver.deck == Deck.initial(3)


def test_driver_counter_increases_until_done():
    driver = RoundDriver(5)
    seen = []
    while driver.state is DriverState.RUNNING:
        seen.append(driver.rounds)
        driver.step()
    assert seen == [1, 2, 3, 4, 5]
    assert driver.rounds == 5
    assert is_original_order(driver.deck)


def test_step_after_done_is_a_no_op():
    driver = RoundDriver(1)
    assert driver.step() is DriverState.DONE
    assert driver.step() is DriverState.DONE
    assert driver.rounds == 1


def test_run_reports_result_and_calls_round_callback():
    calls = []
    driver = RoundDriver(4, on_round=lambda number, deck: calls.append((number, deck.order())))
    result = driver.run()
    assert result.size == 4
    assert result.rounds == 2
    assert calls == [(1, [4, 2, 3, 1]), (2, [1, 2, 3, 4])]


def test_driver_rejects_invalid_sizes():
    with pytest.raises(DeckSizeError):
        RoundDriver(0)


def test_round_limit_stops_the_driver():
    profile = SimulationProfile(max_rounds=2)
    with pytest.raises(RoundLimitError):
        count_rounds(5, profile=profile)
    assert count_rounds(4, profile=profile) == 2


def test_round_permutation_matches_one_round():
    perm = round_permutation(5)
    assert perm.tolist() == [1, 3, 4, 2, 0]


def test_cycle_lengths_cover_every_position():
    for size in range(1, 60):
        lengths = cycle_lengths(size)
        assert sum(lengths) == size
        assert lengths == sorted(lengths, reverse=True)


def _power(perm, exponent):
    result = np.arange(len(perm))
    base = perm.copy()
    while exponent:
        if exponent & 1:
            result = result[base]
        base = base[base]
        exponent >>= 1
    return result


@pytest.mark.parametrize("size", range(1, 31))
def test_simulation_terminates_and_matches_cycle_order(size):
    assert count_rounds(size) == permutation_order(size)


@pytest.mark.parametrize("size", [64, 100, 211, 499, 512, 777, 1000])
def test_cycle_order_restores_larger_decks(size):
    perm = round_permutation(size)
    order = permutation_order(size)
    identity = np.arange(size)
    assert np.array_equal(_power(perm, order), identity)
    for length in set(cycle_lengths(size)):
        assert order % length == 0


def test_cycle_order_is_lcm_of_lengths():
    assert cycle_order([1]) == 1
    assert cycle_order([2, 1, 1]) == 2
    assert cycle_order([6, 4, 3]) == 12
