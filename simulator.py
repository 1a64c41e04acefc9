"""Driver loop and permutation analysis for the table/bottom shuffle."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

from deck import Deck, DeckError, is_original_order, play_round, validate_deck_size
from profiles import CLASSIC, SimulationProfile

LOGGER = logging.getLogger("simulator")

RoundCallback = Callable[[int, Deck], None]


class RoundLimitError(DeckError, RuntimeError):
    """Raised when the deck has not returned to order within the round limit."""


class DriverState(Enum):
    RUNNING = "running"
    DONE = "done"


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of a completed simulation."""

    size: int
    rounds: int


class RoundDriver:
    """Deal rounds until the deck is back in its original order."""

    def __init__(
        self,
        size: int,
        *,
        profile: SimulationProfile = CLASSIC,
        on_round: Optional[RoundCallback] = None,
    ) -> None:
        self.size = validate_deck_size(size)
        self.profile = profile
        self.round_limit = profile.round_limit
        self.on_round = on_round
        self.deck = Deck.initial(size)
        self.rounds = 1
        self.state = DriverState.RUNNING

    def step(self) -> DriverState:
        """Play one round and check the order, advancing the state machine."""

        if self.state is DriverState.DONE:
            return self.state
        if self.round_limit is not None and self.rounds > self.round_limit:
            raise RoundLimitError(
                f"{self.size} cards did not return to order within {self.round_limit} rounds"
            )

        self.deck = play_round(self.deck)
        if self.on_round is not None:
            self.on_round(self.rounds, self.deck)

        if is_original_order(self.deck):
            self.state = DriverState.DONE
        else:
            self.rounds += 1
        return self.state

    def run(self) -> SimulationResult:
        LOGGER.debug("Simulating %s cards", self.size)
        while self.step() is DriverState.RUNNING:
            pass
        LOGGER.debug("%s cards returned to order after %s rounds", self.size, self.rounds)
        return SimulationResult(size=self.size, rounds=self.rounds)


def count_rounds(size: int, *, profile: SimulationProfile = CLASSIC) -> int:
    """Return how many rounds *size* cards need to return to order."""

    return RoundDriver(size, profile=profile).run().rounds


# ----------------------------------------------------------------------
# Permutation analysis
# ----------------------------------------------------------------------
def round_permutation(size: int) -> np.ndarray:
    """Return the source index for every position after one round.

    For the returned array ``perm`` a round maps ``old`` to
    ``new[i] = old[perm[i]]``.
    """

    dealt = play_round(Deck.initial(size))
    return np.fromiter(dealt, dtype=np.int64, count=size) - 1


def cycle_lengths(size: int) -> List[int]:
    """Return the cycle lengths of the round permutation, longest first."""

    perm = round_permutation(size)
    visited = np.zeros(size, dtype=bool)
    lengths: List[int] = []
    for start in range(size):
        if visited[start]:
            continue
        length = 0
        index = start
        while not visited[index]:
            visited[index] = True
            index = int(perm[index])
            length += 1
        lengths.append(length)
    lengths.sort(reverse=True)
    return lengths


def cycle_order(lengths: List[int]) -> int:
    """Return how many rounds a permutation with cycle *lengths* needs."""

    return math.lcm(*lengths)


def permutation_order(size: int) -> int:
    """Return the round count via the least common multiple of cycle lengths."""

    return cycle_order(cycle_lengths(size))


__all__ = [
    "RoundLimitError",
    "DriverState",
    "SimulationResult",
    "RoundDriver",
    "count_rounds",
    "round_permutation",
    "cycle_lengths",
    "cycle_order",
    "permutation_order",
]
