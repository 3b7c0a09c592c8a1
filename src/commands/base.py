#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides common functionality and interface that all commands inherit.
Uses dependency injection for better testability and maintainability.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import List
from argparse import Namespace

from core.container import get_container
from core.config import configure_logging, validate_config
from core.exceptions import ConfigurationError, MissingDependencyError, OrchestrationError
from core.formatting.console import display_header
from core.models.metrics import MetricSample

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for all command endpoints.

    Provides common infrastructure like configuration, the metrics pipeline
    and error handling that all commands can use. Uses dependency injection
    container for managing service instances.
    """

    def __init__(self, container=None):
        """
        Initialize base command with dependency injection container.

        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def pipeline(self):
        """Get a metrics pipeline from container."""
        return self._container.get('metrics_pipeline')

    @property
    def environment(self):
        """Get the comparison environment from container."""
        return self._container.get('environment')

    @property
    def traffic_driver(self):
        """Get traffic driver from container."""
        return self._container.get('traffic_driver')

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Execute the command with given subcommand and arguments.

        Args:
            subcommand: The specific action to perform
            args: Parsed command line arguments

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        pass

    def apply_overrides(self, args: Namespace) -> None:
        """Apply common command line flags on top of the loaded configuration."""
        config = self.config

        if getattr(args, 'base_url', None):
            config.metrics.base_url = args.base_url
        if getattr(args, 'chart_width', None) is not None:
            config.metrics.chart_width = args.chart_width
        if getattr(args, 'no_color', False):
            config.metrics.use_color = False
        if getattr(args, 'verbose', False):
            config.app.log_level = 'DEBUG'
            configure_logging(config)

        validate_config(config)

    def header(self, title: str) -> None:
        """Print a demo step header."""
        print(display_header(title, self.config.metrics.use_color))

    def pause(self) -> None:
        """Pause between demo steps when configured."""
        seconds = self.config.environment.pause_seconds
        if seconds > 0:
            time.sleep(seconds)

    def print_metrics(self, analyze: bool = True) -> List[MetricSample]:
        """Collect tracked metrics, printing raw values and optionally the comparison charts."""
        metrics_config = self.config.metrics
        pipeline = self.pipeline

        self.header("Collecting performance metrics...")
        samples = pipeline.collect(metrics_config.tracked_metrics(), progress=print)
        print()

        if analyze:
            self.pause()
            self.header("Performance Analysis Results")
            for report in pipeline.analyze(samples, metrics_config.comparisons):
                print(report, end="")

        return samples

    def get_available_subcommands(self) -> List[str]:
        """
        Get list of available subcommands for this command.

        Returns:
            List of subcommand names
        """
        return list(getattr(self, 'SUBCOMMANDS', ()))

    def dispatch(self, subcommand: str, args: Namespace) -> int:
        """Route subcommand to the method of the same name."""
        if subcommand not in self.get_available_subcommands():
            available = ", ".join(self.get_available_subcommands())
            self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
            return 1

        try:
            self.apply_overrides(args)
            return getattr(self, subcommand)(args)
        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"{self.__class__.__name__} {subcommand}")
        finally:
            self._container.close_singletons()

    def handle_error(self, error: BaseException, context: str = "") -> int:
        """
        Standard error handling for commands.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Appropriate exit code
        """
        # Map common exceptions to exit codes
        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Command interrupted by user")
            return 130

        error_msg = f"{context}: {error}" if context else str(error)
        if isinstance(error, MissingDependencyError):
            self.logger.error(error_msg)
            return 2
        elif isinstance(error, ConfigurationError):
            self.logger.error(error_msg)
            return 22
        elif isinstance(error, OrchestrationError):
            self.logger.error(error_msg)
            return 1

        self.logger.error(error_msg, exc_info=True)
        return 1
