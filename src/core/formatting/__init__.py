#!/usr/bin/env python3
"""
Formatting utilities for metric display and comparison charts.

Handles all text formatting and display logic.
"""

from .values import format_value_for_display
from .chart import BarRenderer, DEFAULT_CHART_WIDTH
from .report import ComparisonReporter

__all__ = ['format_value_for_display', 'BarRenderer', 'DEFAULT_CHART_WIDTH', 'ComparisonReporter']
