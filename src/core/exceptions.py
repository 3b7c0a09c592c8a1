#!/usr/bin/env python3
"""
Standardized exception hierarchy for the performance demo.

Metrics errors are raised inside the collection layer and recovered there;
orchestration and configuration errors propagate to the CLI, which maps
them to exit codes.
"""

from typing import Optional, Dict, Any


class PerfDemoError(Exception):
    """Base exception for all performance demo errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Metrics-related exceptions
class MetricsError(PerfDemoError):
    """Base exception for telemetry fetch and parse errors."""
    pass


class MetricsFetchError(MetricsError):
    """Failed to read a metrics document from the telemetry endpoint."""

    def __init__(self, endpoint: str, original_error: Exception):
        message = f"Failed to fetch metrics from {endpoint}"
        context = {
            'endpoint': endpoint,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class MetricsParseError(MetricsError):
    """Metrics document was fetched but held no usable statistic."""

    def __init__(self, endpoint: str, reason: str):
        message = f"Failed to parse metrics from {endpoint}: {reason}"
        context = {
            'endpoint': endpoint,
            'reason': reason
        }
        super().__init__(message, context=context)


# Orchestration-related exceptions
class OrchestrationError(PerfDemoError):
    """Base exception for environment and traffic errors."""
    pass


class CommandExecutionError(OrchestrationError):
    """An orchestration shell command exited unsuccessfully."""

    def __init__(self, command: str, returncode: Optional[int], detail: Optional[str] = None):
        message = f"Command failed ({returncode}): {command}"
        if detail:
            message += f" - {detail}"
        context = {
            'command': command,
            'returncode': returncode,
            'detail': detail
        }
        super().__init__(message, context=context)


class EnvironmentStartError(OrchestrationError):
    """The comparison environment could not be brought up."""

    def __init__(self, stage: str, original_error: Exception):
        message = f"Failed to start environment during {stage}"
        context = {
            'stage': stage,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class TrafficError(OrchestrationError):
    """A workload request against the target service failed."""

    def __init__(self, endpoint: str, original_error: Exception):
        message = f"Workload request to {endpoint} failed"
        context = {
            'endpoint': endpoint,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


# Configuration-related exceptions
class ConfigurationError(PerfDemoError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)


class MissingDependencyError(ConfigurationError):
    """Required executables are not on PATH."""

    def __init__(self, missing: list, install_hint: Optional[str] = None):
        issue = f"missing {', '.join(missing)}"
        if install_hint:
            issue += f" ({install_hint})"
        super().__init__('dependencies', issue)
        self.message = f"Missing dependencies: {', '.join(missing)}"
        self.missing = list(missing)
        self.context['missing'] = self.missing
