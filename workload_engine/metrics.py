"""Rounding and rate helpers shared by the scorers and reports."""

from __future__ import annotations

from math import floor


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""

    return int(floor(value + 0.5))


def round_tenths(value: float) -> float:
    return floor(value * 10 + 0.5) / 10


def completion_percentage(done: int, total: int) -> int:
    """Return ``done / total`` as a rounded integer percent, 0 when total is 0."""

    if total == 0:
        return 0
    return round_half_up(done / total * 100.0)
