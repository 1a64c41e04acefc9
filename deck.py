"""Deck model and round transform for the table/bottom shuffle."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List

MIN_CARDS = 1
MAX_CARDS = 2**31 - 1


class DeckError(Exception):
    """Base class for deck simulation errors."""


class DeckSizeError(DeckError, ValueError):
    """Raised when a deck size falls outside the supported range."""


class CardCountParseError(DeckError, ValueError):
    """Raised when a card count cannot be read as a base-10 integer."""


def validate_deck_size(size: int) -> int:
    """Return *size* unchanged if it is a supported number of cards."""

    if isinstance(size, bool) or not isinstance(size, int):
        raise TypeError(f"Deck size must be an integer, not {type(size).__name__}")
    if size < MIN_CARDS or size > MAX_CARDS:
        raise DeckSizeError(
            f"Deck size must be between {MIN_CARDS} and {MAX_CARDS}, got {size}"
        )
    return size


def parse_deck_size(token: str) -> int:
    """Parse a command-line *token* into a validated deck size.

    ``CardCountParseError`` flags text that is not an integer at all while
    ``DeckSizeError`` flags integers outside the supported range.
    """

    stripped = token.strip()
    # int() also takes digit separators and non-ASCII digits.
    if not stripped.isascii() or "_" in stripped:
        raise CardCountParseError(f"Not an integer: {token!r}")
    try:
        size = int(stripped, 10)
    except ValueError as exc:
        raise CardCountParseError(f"Not an integer: {token!r}") from exc
    return validate_deck_size(size)


@dataclass(frozen=True)
class Card:
    """A card identity at a position in a deck, counted from the front."""

    number: int
    position: int

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"#{self.number}@{self.position}"


class Deck:
    """Circular sequence of numbered cards stored in a fixed-size buffer."""

    def __init__(self, cards: Iterable[int], *, front: int = 0) -> None:
        self._cards: List[int] = list(cards)
        if not self._cards:
            raise DeckSizeError("A deck must hold at least one card")
        if front < 0 or front >= len(self._cards):
            raise IndexError(f"front index {front} out of range")
        self._front = front

    @classmethod
    def initial(cls, size: int) -> "Deck":
        """Build cards ``1..size`` in ascending order with card 1 at the front."""

        validate_deck_size(size)
        return cls(range(1, size + 1))

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[int]:
        size = len(self._cards)
        for offset in range(size):
            yield self._cards[(self._front + offset) % size]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Deck):
            return NotImplemented
        return self.order() == other.order()

    def __repr__(self) -> str:
        return f"Deck({self.order()!r})"

    @property
    def front(self) -> int:
        return self._cards[self._front]

    @property
    def back(self) -> int:
        return self._cards[(self._front - 1) % len(self._cards)]

    def card_at(self, position: int) -> Card:
        """Return the :class:`Card` at *position* counted from the front."""

        size = len(self._cards)
        if position < 0 or position >= size:
            raise IndexError(f"position {position} out of range")
        return Card(number=self._cards[(self._front + position) % size], position=position)

    def order(self) -> list[int]:
        """Return the card numbers from front to back."""

        return list(self)


def play_round(deck: Deck) -> Deck:
    """Deal *deck* once with the table/bottom rule and return the new deck.

    The hand is worked in place inside a ring buffer the size of the deck.
    Cards dealt to the table are written from the bottom slot upwards so the
    last card dealt ends up at the front of the returned deck.
    """

    hand = deck.order()
    size = len(hand)
    table = [0] * size
    front = 0
    remaining = size
    slot = size - 1

    while remaining:
        table[slot] = hand[front]
        slot -= 1
        front = (front + 1) % size
        remaining -= 1
        if remaining:
            # The slot behind the last card in hand is always free here.
            hand[(front + remaining) % size] = hand[front]
            front = (front + 1) % size

    return Deck(table)


def is_original_order(deck: Deck) -> bool:
    """Return ``True`` when card ``i + 1`` sits at position ``i`` for every ``i``."""

    for expected, number in enumerate(deck, start=1):
        if number != expected:
            return False
    return True


def format_order(deck: Deck) -> str:
    """Return the deck order as space separated card numbers."""

    return " ".join(str(number) for number in deck)


__all__ = [
    "MIN_CARDS",
    "MAX_CARDS",
    "DeckError",
    "DeckSizeError",
    "CardCountParseError",
    "Card",
    "Deck",
    "validate_deck_size",
    "parse_deck_size",
    "play_round",
    "is_original_order",
    "format_order",
]
