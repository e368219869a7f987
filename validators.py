"""
Search form input checks.

Rank problems come back as user-facing messages so the UI can show them
next to the form instead of failing.
"""

import math

import config

INVALID_RANK = "Please enter a valid rank (greater than 0)"
RANK_TOO_HIGH = "Rank seems too high. Please check your rank."


def validate_rank(rank, max_rank: int = config.MAX_RANK) -> str | None:
    """Return an error message for a bad rank, None when the rank is usable."""
    if rank is None or isinstance(rank, bool):
        return INVALID_RANK
    try:
        value = float(rank)
    except (TypeError, ValueError):
        return INVALID_RANK

    if not value.is_integer() or value <= 0:
        return INVALID_RANK
    if value > max_rank:
        return RANK_TOO_HIGH
    return None


def parse_max_fee(value) -> float | None:
    """
    Fee ceiling from the form. Empty or zero means no fee filter.
    Raises ValueError for non-numeric or negative input.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None

    fee = float(value)
    if not math.isfinite(fee):
        raise ValueError(f"Invalid maximum fee: {value}")
    if fee < 0:
        raise ValueError("Maximum fee cannot be negative")
    return fee or None
