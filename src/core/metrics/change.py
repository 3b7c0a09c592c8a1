#!/usr/bin/env python3
"""
Relative change between two measurements.
"""


def calculate_percentage_change(baseline: float, comparison: float) -> float:
    """
    Signed percentage change of comparison relative to baseline.

    A baseline of zero carries no signal to compare against, so the change
    is reported as 0 rather than infinite.

    Args:
        baseline: Reference measurement
        comparison: Measurement being compared

    Returns:
        ((comparison - baseline) / baseline) * 100, or 0.0 when baseline <= 0
    """
    if baseline <= 0:
        return 0.0
    return ((comparison - baseline) / baseline) * 100
