#!/usr/bin/env python3
"""
Numeric display helpers.

Precision scales inversely with magnitude so tiny durations stay
distinguishable from zero and large ones are not cluttered with noise digits.
"""

# (lower bound, fractional digits), checked top to bottom
PRECISION_BUCKETS = (
    (10.0, 3),
    (1.0, 4),
    (0.001, 6),
)
SMALLEST_PRECISION = 9


def precision_for(value: float) -> int:
    """Number of fractional digits used to display value."""
    for lower_bound, digits in PRECISION_BUCKETS:
        if value >= lower_bound:
            return digits
    return SMALLEST_PRECISION


def format_value_for_display(value: float) -> str:
    """Format a duration in seconds, e.g. 2.5 -> '2.5000', 0 -> '0.000000000'."""
    return f"{value:.{precision_for(value)}f}"
