#!/usr/bin/env python3
"""
Metrics commands: read telemetry and print comparison charts.
"""

from argparse import Namespace

from .base import BaseCommand


class MetricsCommand(BaseCommand):
    """Collect TOTAL_TIME metrics and render performance comparisons."""

    SUBCOMMANDS = ('collect', 'analyze')

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute metrics subcommand."""
        return self.dispatch(subcommand, args)

    def collect(self, args: Namespace) -> int:
        """Print the raw value of every tracked metric."""
        samples = self.print_metrics(analyze=False)
        return self._exit_code(samples, args)

    def analyze(self, args: Namespace) -> int:
        """Collect every tracked metric and print the comparison reports."""
        samples = self.print_metrics(analyze=True)
        return self._exit_code(samples, args)

    def _exit_code(self, samples, args: Namespace) -> int:
        # Missing metrics read as 0; only --strict turns that into a failure
        if getattr(args, 'strict', False) and not all(sample.present for sample in samples):
            self.logger.error("Some metrics were unavailable; affected values are shown as 0")
            return 1
        return 0
