#!/usr/bin/env python3
"""
Metrics collection and analysis.

Reads telemetry documents and turns them into comparison reports.
"""

from .change import calculate_percentage_change
from .extractor import MetricExtractor, TOTAL_TIME_STATISTIC
from .pipeline import MetricsPipeline, format_collection_line

__all__ = [
    'calculate_percentage_change', 'MetricExtractor', 'TOTAL_TIME_STATISTIC',
    'MetricsPipeline', 'format_collection_line'
]
