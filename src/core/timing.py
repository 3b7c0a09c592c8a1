#!/usr/bin/env python3
"""
Wall-clock timing for demo operations.

Records how long each workload request took as observed by the client,
alongside the server-side totals read from telemetry.
"""

import time
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class TimingMetrics:
    """Performance timing metrics for a single operation."""
    operation: str
    start_time: float
    end_time: float
    duration: float
    success: bool
    error_message: Optional[str] = None


class OperationTimer:
    """Collects TimingMetrics for operations run within one demo session."""

    def __init__(self, clock=time.perf_counter):
        self._clock = clock
        self.operations: List[TimingMetrics] = []

    @contextmanager
    def time_operation(self, operation_name: str):
        """Context manager for timing operations; failures are recorded and re-raised."""
        start_time = self._clock()
        success = True
        error_message = None

        try:
            yield
        except Exception as e:
            success = False
            error_message = str(e)
            raise
        finally:
            end_time = self._clock()
            duration = end_time - start_time

            timing = TimingMetrics(
                operation=operation_name,
                start_time=start_time,
                end_time=end_time,
                duration=duration,
                success=success,
                error_message=error_message
            )

            self.operations.append(timing)
            logger.debug(f"Operation '{operation_name}' took {duration:.2f}s (success: {success})")

    @property
    def last(self) -> Optional[TimingMetrics]:
        return self.operations[-1] if self.operations else None
