#!/usr/bin/env python3
"""
Demo command: the end-to-end JPA vs GemFire comparison.

Runs the whole flow: dependency check, environment start, traffic,
metrics collection and analysis, environment stop.
"""

from argparse import Namespace

from .base import BaseCommand
from core.environment import verify_dependencies
from core.formatting.values import format_value_for_display


class DemoCommand(BaseCommand):
    """Run the performance comparison demo."""

    SUBCOMMANDS = ('run', 'traffic')

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute demo subcommand."""
        return self.dispatch(subcommand, args)

    def _print_timing(self, description: str, timing) -> None:
        status = "ok" if timing.success else f"failed: {timing.error_message}"
        print(f"real {format_value_for_display(timing.duration)}s ({status})")
        self.pause()

    def traffic(self, args: Namespace) -> int:
        """Drive every workload endpoint once."""
        workloads = self.config.environment.workloads
        driver = self.traffic_driver

        results = []
        for description, uri in workloads:
            self.header(description)
            results.extend(driver.run([(description, uri)], progress=self._print_timing))

        return 0 if all(timing.success for timing in results) else 1

    def run(self, args: Namespace) -> int:
        """Run the full demo."""
        self.logger.info("Starting performance demo")
        manage_env = not getattr(args, 'skip_env', False)
        keep_running = getattr(args, 'keep_running', False)

        if manage_env:
            verify_dependencies(self.config.environment.required_commands)
            self.header("Starting environment...")
            self.environment.start()
            self.pause()

        try:
            if not getattr(args, 'skip_traffic', False):
                self.traffic(args)

            self.print_metrics(analyze=True)
        finally:
            if manage_env and not keep_running:
                self.header("Stopping environment")
                self.environment.stop()

        self.logger.info("Demo completed successfully!")
        return 0
