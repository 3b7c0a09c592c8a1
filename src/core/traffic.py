#!/usr/bin/env python3
"""
Workload driver for the comparison service.

Issues the load and query requests whose server-side timings are later read
back from telemetry. Each request is timed on the client as well.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

import requests

from .exceptions import TrafficError
from .timing import OperationTimer, TimingMetrics

logger = logging.getLogger(__name__)


class TrafficDriver:
    """Sends one GET per workload endpoint, sequentially."""

    def __init__(self,
                 base_url: str,
                 session: Optional[requests.Session] = None,
                 timer: Optional[OperationTimer] = None,
                 timeout: Optional[float] = None):
        """
        Initialize traffic driver.

        Args:
            base_url: Root URL of the target service
            session: HTTP session to use (a new one is created if None)
            timer: Timer collecting per-request timings
            timeout: Request timeout in seconds; None keeps the transport default
        """
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timer = timer or OperationTimer()
        self.timeout = timeout

    def close(self) -> None:
        self.session.close()

    def hit(self, uri: str) -> requests.Response:
        """
        Send one workload request.

        Raises:
            TrafficError: On transport failure or non-success status
        """
        url = self.base_url + uri
        try:
            with self.timer.time_operation(uri):
                response = self.session.get(url, timeout=self.timeout)
                response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise TrafficError(url, e) from e
        return response

    def run(self, workloads: Sequence[Tuple[str, str]],
            progress: Optional[Callable[[str, TimingMetrics], None]] = None) -> List[TimingMetrics]:
        """
        Run every workload in order.

        A failing workload is logged and recorded as unsuccessful; the
        remaining workloads still run.

        Args:
            workloads: (description, uri) pairs
            progress: Called with (description, timing) after each request

        Returns:
            One TimingMetrics per workload
        """
        results = []
        for description, uri in workloads:
            try:
                response = self.hit(uri)
                logger.info(f"{uri} -> HTTP {response.status_code}")
            except TrafficError as e:
                logger.error(e.message, extra={'error': e.to_dict()})

            timing = self.timer.last
            results.append(timing)
            if progress:
                progress(description, timing)

        failed = sum(1 for timing in results if not timing.success)
        if failed:
            logger.warning(f"{failed} of {len(results)} workload requests failed")
        return results
