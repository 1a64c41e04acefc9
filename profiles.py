"""Configuration profiles for the deck round simulator."""
from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from typing import Any, Mapping, MutableMapping


ROUND_LIMITS = {
    "unlimited": None,
    "none": None,
    "infinite": None,
}

USAGE_EXIT_CODE = 2
PARSE_ERROR_EXIT_CODE = 1


def _coerce_bool(value: Any, default: bool = False) -> bool:
    """Best-effort conversion of *value* into a boolean flag."""

    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off", ""}:
            return False
    return default


def _normalise_round_limit(value: Any) -> int | None:
    """Convert *value* into a normalised round limit.

    Limits may arrive as integers, numeric strings or the words listed in
    ``ROUND_LIMITS``.  The result is ``None`` (meaning the driver keeps going
    until the deck is back in order) or a positive integer.

    ``ValueError`` is raised when the content is recognised but invalid while
    ``TypeError`` flags unsupported data types.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError("Boolean values are not valid round limits")
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            raise ValueError(f"Round limit must be a whole number: {value!r}")
        value = int(value)
    if isinstance(value, int):
        if value < 1:
            raise ValueError("Round limit must be at least 1")
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        if not token:
            return None
        if token in ROUND_LIMITS:
            return ROUND_LIMITS[token]
        try:
            parsed = int(token, 10)
        except ValueError as exc:
            raise ValueError(f"Unknown round limit value: {value!r}") from exc
        if parsed < 1:
            raise ValueError("Round limit must be at least 1")
        return parsed
    raise TypeError(f"Unsupported round limit type: {type(value).__name__}")


@dataclass(frozen=True)
class SimulationProfile:
    """Options controlling how a simulation runs and reports."""

    trace: bool = False
    strict_exit: bool = False
    max_rounds: str | int | None = None

    def to_dict(self) -> MutableMapping[str, Any]:
        """Return the profile as a JSON-serialisable mapping."""
        return dict(asdict(self))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationProfile":
        """Create a profile from *data* produced by :meth:`to_dict`."""
        fields = {field.name for field in cls.__dataclass_fields__.values()}
        filtered = {k: data[k] for k in data if k in fields}
        for flag in ("trace", "strict_exit"):
            if flag in filtered:
                filtered[flag] = _coerce_bool(filtered[flag])
        return cls(**filtered)  # type: ignore[arg-type]

    def to_json(self) -> str:
        """Serialise the profile to a JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, payload: str) -> "SimulationProfile":
        """Deserialise a :class:`SimulationProfile` from *payload*."""
        return cls.from_dict(json.loads(payload))

    @property
    def round_limit(self) -> int | None:
        """Return the numeric round limit, ``None`` when unbounded."""

        return _normalise_round_limit(self.max_rounds)

    def exit_code(self, *, usage: bool = False, parse_error: bool = False) -> int:
        """Return the process exit status for a failed invocation.

        The classic behaviour reports every input problem with status 0.
        """

        if not self.strict_exit:
            return 0
        if usage:
            return USAGE_EXIT_CODE
        if parse_error:
            return PARSE_ERROR_EXIT_CODE
        return 1


CLASSIC = SimulationProfile()

STRICT = SimulationProfile(strict_exit=True)

TRACE = SimulationProfile(trace=True)

__all__ = [
    "SimulationProfile",
    "CLASSIC",
    "STRICT",
    "TRACE",
]
