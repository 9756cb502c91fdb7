"""
Permissive resolution of raw form input into a ParameterSet.

Every field is optional. A value that is missing, blank, or does not
parse as the field's type is replaced by the field's default instead of
failing the request, so resolution always produces a usable
ParameterSet.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from typing import Any

from zseeker_service.models.parameters import (
    DEFAULT_CONSECUTIVE_AT_SCORING,
    FORM_FIELD_NAMES,
    ParameterSet,
)

logger = logging.getLogger(__name__)


def parse_float(raw: str) -> float:
    """Parse a finite float, raising ValueError otherwise."""
    value = float(raw.strip())
    if not math.isfinite(value):
        msg = f"not a finite number: {raw!r}"
        raise ValueError(msg)
    return value


def parse_int(raw: str) -> int:
    """Parse a base-10 integer, raising ValueError otherwise."""
    return int(raw.strip(), 10)


def parse_text(raw: str) -> str:
    """Accept any non-blank string unchanged."""
    if not raw.strip():
        msg = "blank value"
        raise ValueError(msg)
    return raw


def parse_score_list(raw: str) -> tuple[float, ...]:
    """
    Parse a comma-separated list of scores.

    Tokens that are not finite floats are dropped with a warning; the
    order of the remaining values is preserved.

    Raises:
        ValueError: If no token parses.

    Example:
        >>> parse_score_list("1.0, bad, 2.0")
        (1.0, 2.0)
    """
    scores: list[float] = []
    for token in raw.split(","):
        try:
            scores.append(parse_float(token))
        except ValueError:
            logger.warning("Could not parse %r as a score, dropping it", token)
    if not scores:
        msg = f"no usable scores in {raw!r}"
        raise ValueError(msg)
    return tuple(scores)


_PARSERS: dict[str, Callable[[str], Any]] = {
    "gc_weight": parse_float,
    "at_weight": parse_float,
    "gt_weight": parse_float,
    "ac_weight": parse_float,
    "mismatch_penalty_starting_value": parse_int,
    "mismatch_penalty_linear_delta": parse_int,
    "mismatch_penalty_type": parse_text,
    "method": parse_text,
    "cadence_reward": parse_float,
    "n_jobs": parse_int,
    "threshold": parse_int,
    "consecutive_at_scoring": parse_score_list,
}


def resolve_parameters(form: Mapping[str, str | None]) -> ParameterSet:
    """
    Build a ParameterSet from raw form values.

    Keys are the ZSeeker flag names (``GC_weight``, ``n_jobs``,
    ``consecutive_AT_scoring``, ...). Unknown keys are ignored. Fields
    that are absent or fail to parse keep the ParameterSet default; for
    ``consecutive_AT_scoring`` that is the fixed 8-value curve.

    Args:
        form: Mapping of form field name to raw string value (or None).

    Returns:
        A fully populated ParameterSet. This function never raises for
        bad parameter values.
    """
    values: dict[str, Any] = {}

    for form_name, field_name in FORM_FIELD_NAMES.items():
        raw = form.get(form_name)
        if raw is None:
            continue
        try:
            values[field_name] = _PARSERS[field_name](raw)
        except ValueError as e:
            logger.debug("Using default for %s: %s", form_name, e)

    if "consecutive_at_scoring" not in values:
        values["consecutive_at_scoring"] = DEFAULT_CONSECUTIVE_AT_SCORING

    return ParameterSet(**values)
