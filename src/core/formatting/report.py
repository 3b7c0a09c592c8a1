#!/usr/bin/env python3
"""
Two-series comparison reports.

Renders a pair of samples as a small bar chart followed by a one-line
verdict stating how the right-hand sample performed relative to the left.
"""

from typing import List, Tuple

from ..metrics.change import calculate_percentage_change
from ..models.metrics import ComparisonPair
from .chart import BarRenderer
from .console import colorize, WHITE, RED, GREEN
from .values import format_value_for_display

SEPARATOR = "=" * 40
LABEL_COLUMN = 20
BAR_COLUMN = 42

SLOWER = "slower"
FASTER = "faster"


class ComparisonReporter:
    """Composes bars, formatted values and a verdict for one ComparisonPair."""

    def __init__(self, bar_renderer: BarRenderer, use_color: bool = False):
        """
        Initialize reporter.

        Args:
            bar_renderer: Renderer shared by both bars of a chart
            use_color: Emit ANSI colors for the title and verdict
        """
        self.bar_renderer = bar_renderer
        self.use_color = use_color

    def verdict(self, pair: ComparisonPair) -> Tuple[float, str]:
        """
        Return (magnitude, direction) of right relative to left.

        Magnitude is always non-negative; direction is 'slower' when right
        took longer than left and 'faster' otherwise.
        """
        change = calculate_percentage_change(pair.left.total_time, pair.right.total_time)
        if change > 0:
            return change, SLOWER
        return abs(change), FASTER

    def _bar_line(self, label: str, value: float, peak: float, glyph: str) -> str:
        bar = self.bar_renderer.render(value, peak, glyph)
        display_value = format_value_for_display(value)
        return f"{label:<{LABEL_COLUMN}} │ {bar:<{BAR_COLUMN}} {display_value}s"

    def render(self, pair: ComparisonPair) -> str:
        """Render the full report block for pair."""
        peak = pair.peak
        magnitude, direction = self.verdict(pair)
        change_color = RED if direction == SLOWER else GREEN
        change_text = colorize(f"{magnitude:.2f}% {direction}", change_color, self.use_color)

        lines: List[str] = [
            "",
            colorize(pair.title, WHITE, self.use_color),
            SEPARATOR,
            f"Max value: {peak:.6f}s",
            "",
            self._bar_line(pair.left.label, pair.left.total_time, peak, pair.left_glyph),
            self._bar_line(pair.right.label, pair.right.total_time, peak, pair.right_glyph),
            "",
            f"Performance Change: {change_text} ({pair.left.label} vs {pair.right.label})",
            "",
        ]
        return "\n".join(lines) + "\n"
