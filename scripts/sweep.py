#!/usr/bin/env python3
"""Tabulate table/bottom round counts across a range of deck sizes.

By default the round count for each size is taken from the cycle structure
of the round permutation, which is much faster than dealing every round.
``--simulate`` runs the full driver loop instead so the two can be compared.
"""
from __future__ import annotations

import argparse
import logging
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from deck import DeckError, validate_deck_size
from simulator import count_rounds, cycle_lengths, cycle_order

LOGGER = logging.getLogger("sweep")

COLUMNS = ["n", "rounds", "cycles", "longest_cycle"]


class SweepError(DeckError):
    """Raised when a sweep cannot be performed."""


def _validate_range(start: int, stop: int) -> None:
    try:
        validate_deck_size(start)
        validate_deck_size(stop)
    except DeckError as exc:
        raise SweepError(str(exc)) from exc
    if stop < start:
        raise SweepError(f"stop ({stop}) must not be smaller than start ({start})")


def sweep(start: int, stop: int, *, simulate: bool = False) -> pd.DataFrame:
    """Return one row per deck size in the inclusive range *start*..*stop*."""

    _validate_range(start, stop)
    rows = []
    for size in range(start, stop + 1):
        lengths = cycle_lengths(size)
        if simulate:
            rounds = count_rounds(size)
        else:
            rounds = cycle_order(lengths)
        rows.append(
            {
                "n": size,
                "rounds": rounds,
                "cycles": len(lengths),
                "longest_cycle": lengths[0],
            }
        )
        LOGGER.debug("n=%s rounds=%s", size, rounds)
    return pd.DataFrame(rows, columns=COLUMNS)


def format_summary(frame: pd.DataFrame) -> str:
    """Return a one-line description of the extremes in *frame*."""

    if frame.empty:
        return "Summary: no deck sizes"
    rounds = frame["rounds"].to_numpy(dtype=object)
    worst = int(np.argmax(rounds))
    best = int(np.argmin(rounds))
    return (
        "Summary: "
        f"sizes={len(frame)} "
        f"max_rounds={frame['rounds'].iloc[worst]} (n={frame['n'].iloc[worst]}) "
        f"min_rounds={frame['rounds'].iloc[best]} (n={frame['n'].iloc[best]})"
    )


def render(frame: pd.DataFrame, *, output: str = "table") -> str:
    if output == "json":
        return frame.to_json(orient="records")
    if output == "csv":
        return frame.to_csv(index=False).rstrip("\n")
    return frame.to_string(index=False)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("start", type=int, help="Smallest deck size to tabulate")
    parser.add_argument("stop", type=int, help="Largest deck size to tabulate (inclusive)")
    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Deal every round instead of using the permutation cycles",
    )
    format_group = parser.add_mutually_exclusive_group()
    format_group.add_argument(
        "--json",
        dest="output",
        action="store_const",
        const="json",
        help="Emit the rows as JSON records",
    )
    format_group.add_argument(
        "--csv",
        dest="output",
        action="store_const",
        const="csv",
        help="Emit the rows as CSV",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.set_defaults(output="table")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        frame = sweep(args.start, args.stop, simulate=args.simulate)
    except SweepError as exc:
        LOGGER.error("%s", exc)
        return 1

    print(render(frame, output=args.output))
    if args.output == "table":
        print(format_summary(frame))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
