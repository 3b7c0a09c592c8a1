#!/usr/bin/env python3
"""
Core data models for the performance demo.

Contains all data structures used throughout the application.
"""

from .metrics import (
    TrackedMetric, ComparisonSpec, MetricSample, ComparisonPair, ChartBar, PipelineResult
)

__all__ = [
    'TrackedMetric', 'ComparisonSpec', 'MetricSample', 'ComparisonPair', 'ChartBar', 'PipelineResult'
]
