#!/usr/bin/env python3
"""
Proportional text bars for comparison charts.
"""

import math

from ..models.metrics import ChartBar


DEFAULT_CHART_WIDTH = 40


class BarRenderer:
    """
    Maps a value, relative to a peak, onto a run of glyphs.

    All bars drawn by one renderer share the same width, so bars are
    comparable within one chart but not across charts with different peaks.
    """

    def __init__(self, chart_width: int = DEFAULT_CHART_WIDTH):
        """
        Initialize renderer.

        Args:
            chart_width: Length of a bar whose value equals the peak
        """
        if chart_width < 1:
            raise ValueError(f"chart_width must be positive, got {chart_width}")
        self.chart_width = chart_width

    def bar_length(self, value: float, peak: float) -> int:
        """Return the clamped bar length for value against peak."""
        if peak <= 0:
            return 0

        length = math.floor(value / peak * self.chart_width)
        length = max(0, min(self.chart_width, length))

        # A nonzero measurement is always visible
        if value > 0 and length < 1:
            length = 1

        return length

    def build(self, value: float, peak: float, glyph: str) -> ChartBar:
        """Build a ChartBar for value against peak."""
        return ChartBar(width=self.bar_length(value, peak), glyph=glyph)

    def render(self, value: float, peak: float, glyph: str) -> str:
        """Render the bar as a string (empty when its length is 0)."""
        return self.build(value, peak, glyph).render()
