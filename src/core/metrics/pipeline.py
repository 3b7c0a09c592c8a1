#!/usr/bin/env python3
"""
Metrics collection and analysis pipeline.

Collects one sample per tracked endpoint, strictly in declared order, then
renders one comparison report per configured pairing. Samples are returned
explicitly from collect() and passed into analyze(); nothing is shared
between runs.
"""

import logging
from typing import Callable, List, Optional, Sequence, TYPE_CHECKING

from ..exceptions import ConfigurationError
from ..models.metrics import (
    ComparisonPair, ComparisonSpec, MetricSample, PipelineResult, TrackedMetric
)

if TYPE_CHECKING:
    from ..formatting.report import ComparisonReporter
    from .extractor import MetricExtractor

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


def format_collection_line(sample: MetricSample) -> str:
    """Raw per-metric line printed while collecting."""
    line = f"[{sample.label}] TOTAL_TIME: {sample.total_time}s"
    if not sample.present:
        line += " (unavailable)"
    return line


class MetricsPipeline:
    """Fetches tracked metrics and renders configured comparisons."""

    def __init__(self, extractor: 'MetricExtractor', reporter: 'ComparisonReporter'):
        self.extractor = extractor
        self.reporter = reporter

    def collect(self, targets: Sequence[TrackedMetric],
                progress: Optional[ProgressCallback] = None) -> List[MetricSample]:
        """
        Extract one sample per target, sequentially.

        Repeated endpoints are fetched again. A failed extraction yields a
        zero sample and the run continues.
        """
        samples: List[MetricSample] = []
        for target in targets:
            sample = self.extractor.extract(target.label, target.endpoint)
            samples.append(sample)
            if progress:
                progress(format_collection_line(sample))

        missing = sum(1 for sample in samples if not sample.present)
        if missing:
            logger.warning(f"{missing} of {len(samples)} metrics unavailable; reported as 0")
        logger.info(f"Collected {len(samples)} metrics")
        return samples

    def build_pairs(self, samples: Sequence[MetricSample],
                    comparisons: Sequence[ComparisonSpec]) -> List[ComparisonPair]:
        """Resolve comparison indices against collected samples."""
        pairs = []
        for spec in comparisons:
            for index in (spec.left_index, spec.right_index):
                if not 0 <= index < len(samples):
                    raise ConfigurationError(
                        'comparisons',
                        f"'{spec.title}' references metric {index}, but only {len(samples)} were collected"
                    )
            pairs.append(ComparisonPair(
                title=spec.title,
                left=samples[spec.left_index],
                right=samples[spec.right_index],
                left_glyph=spec.left_glyph,
                right_glyph=spec.right_glyph,
            ))
        return pairs

    def analyze(self, samples: Sequence[MetricSample],
                comparisons: Sequence[ComparisonSpec]) -> List[str]:
        """Render one report per comparison, in configured order."""
        return [self.reporter.render(pair) for pair in self.build_pairs(samples, comparisons)]

    def run(self, targets: Sequence[TrackedMetric], comparisons: Sequence[ComparisonSpec],
            progress: Optional[ProgressCallback] = None) -> PipelineResult:
        """Collect all targets, then analyze every comparison."""
        samples = self.collect(targets, progress=progress)
        reports = self.analyze(samples, comparisons)
        return PipelineResult(samples=samples, reports=reports)
