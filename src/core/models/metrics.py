#!/usr/bin/env python3
"""
Metrics and comparison data models.

Contains the data structures passed between collection and reporting.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class TrackedMetric:
    """A telemetry endpoint to read, with its display label."""
    label: str
    endpoint: str


@dataclass(frozen=True)
class ComparisonSpec:
    """Pairs two tracked metrics by position for one comparison chart."""
    title: str
    left_index: int
    right_index: int
    left_glyph: str = "█"
    right_glyph: str = "▓"


@dataclass(frozen=True)
class MetricSample:
    """
    A single TOTAL_TIME reading.

    total_time is 0.0 both for a genuine zero and for a failed read;
    present tells the two apart.
    """
    label: str
    source_endpoint: str
    total_time: float = 0.0
    present: bool = False


@dataclass(frozen=True)
class ComparisonPair:
    """Two samples to be charted against each other."""
    title: str
    left: MetricSample
    right: MetricSample
    left_glyph: str = "█"
    right_glyph: str = "▓"

    @property
    def peak(self) -> float:
        return max(self.left.total_time, self.right.total_time)


@dataclass(frozen=True)
class ChartBar:
    """A rendered bar: glyph repeated width times."""
    width: int
    glyph: str

    def render(self) -> str:
        return self.glyph * self.width


@dataclass
class PipelineResult:
    """Samples and reports produced by one pipeline run."""
    samples: List[MetricSample] = field(default_factory=list)
    reports: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.reports)

    @property
    def missing(self) -> List[MetricSample]:
        """Samples whose fetch or parse failed."""
        return [sample for sample in self.samples if not sample.present]
