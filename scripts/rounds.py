#!/usr/bin/env python3
"""Count the table/bottom rounds needed to restore a deck of N cards."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Sequence

from deck import CardCountParseError, Deck, DeckSizeError, format_order, parse_deck_size
from profiles import CLASSIC, STRICT, SimulationProfile
from simulator import RoundDriver, RoundLimitError

USAGE_MESSAGE = "usage: <N cards>"
PARSE_ERROR_MESSAGE = "error - not an integer"

LOGGER = logging.getLogger("rounds")


def _print_trace(round_number: int, deck: Deck) -> None:
    print(f"Round {round_number}: {format_order(deck)}")


def build_profile(args: argparse.Namespace) -> SimulationProfile:
    """Return the profile selected by the parsed command-line *args*."""

    profile = STRICT if args.strict_exit else CLASSIC
    return replace(profile, trace=args.trace, max_rounds=args.max_rounds)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=__doc__,
        usage="%(prog)s [options] <N cards>",
        allow_abbrev=False,
    )
    parser.add_argument(
        "cards",
        nargs="*",
        help="Number of cards in the deck (1 to 2147483647).",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print the card order after every round.",
    )
    parser.add_argument(
        "--strict-exit",
        action="store_true",
        help="Exit with a non-zero status when the input is rejected.",
    )
    parser.add_argument(
        "--max-rounds",
        metavar="K",
        default=None,
        help="Give up after K rounds (default: unlimited).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args, unknown = parser.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        profile = build_profile(args)
        round_limit = profile.round_limit
    except (TypeError, ValueError) as exc:
        parser.error(str(exc))
    LOGGER.debug("Using profile %s", profile.to_json())

    tokens = args.cards + unknown
    if len(tokens) != 1:
        print(USAGE_MESSAGE)
        return profile.exit_code(usage=True)

    try:
        size = parse_deck_size(tokens[0])
    except CardCountParseError:
        print(PARSE_ERROR_MESSAGE)
        return profile.exit_code(parse_error=True)
    except DeckSizeError as exc:
        LOGGER.debug("%s", exc)
        print(USAGE_MESSAGE)
        return profile.exit_code(usage=True)

    driver = RoundDriver(
        size,
        profile=profile,
        on_round=_print_trace if profile.trace else None,
    )
    try:
        result = driver.run()
    except RoundLimitError as exc:
        LOGGER.error("%s", exc)
        print(f"error - no return to order within {round_limit} rounds")
        return 1

    print(f"Number of rounds: {result.rounds}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
