#!/usr/bin/env python3
"""
Telemetry reader for Spring Boot actuator style metrics documents.

Reads one metrics document per call and extracts the cumulative TOTAL_TIME
statistic. Fetch and parse failures never escape: they degrade to a zero
sample flagged as not present.
"""

import json
import logging
from typing import Any, Optional

import requests

from ..exceptions import MetricsError, MetricsFetchError, MetricsParseError
from ..models.metrics import MetricSample

logger = logging.getLogger(__name__)

TOTAL_TIME_STATISTIC = "TOTAL_TIME"


class MetricExtractor:
    """Reads a single scalar statistic from a metrics endpoint."""

    def __init__(self,
                 session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None,
                 statistic: str = TOTAL_TIME_STATISTIC,
                 user_agent: str = "perfdemo/1.0"):
        """
        Initialize metric extractor.

        Args:
            session: HTTP session to use (a new one is created if None)
            timeout: Request timeout in seconds; None keeps the transport default
            statistic: Name of the measurement statistic to extract
            user_agent: User-Agent header for requests
        """
        self.timeout = timeout
        self.statistic = statistic
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "application/json",
        })

    def __enter__(self) -> 'MetricExtractor':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def extract(self, label: str, endpoint: str) -> MetricSample:
        """
        Read the configured statistic from endpoint.

        Args:
            label: Display label for the sample
            endpoint: Metrics document URL

        Returns:
            MetricSample; total_time is 0.0 and present is False on any failure
        """
        try:
            payload = self._fetch_payload(endpoint)
            value = self._select_statistic(endpoint, payload)
        except MetricsError as e:
            logger.warning(f"[{label}] {e.message}", extra={'error': e.to_dict()})
            return MetricSample(label=label, source_endpoint=endpoint, total_time=0.0, present=False)

        logger.debug(f"[{label}] {self.statistic} = {value} from {endpoint}")
        return MetricSample(label=label, source_endpoint=endpoint, total_time=value, present=True)

    def _fetch_payload(self, endpoint: str) -> Any:
        """Perform one GET and decode the JSON body."""
        try:
            response = self.session.get(endpoint, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise MetricsFetchError(endpoint, e) from e

        body = response.text
        if not body or not body.strip():
            raise MetricsFetchError(endpoint, ValueError("empty response body"))

        try:
            return json.loads(body)
        except ValueError as e:
            raise MetricsParseError(endpoint, f"malformed JSON ({e})") from e

    def _select_statistic(self, endpoint: str, payload: Any) -> float:
        """Pick the first measurement whose statistic matches."""
        if not isinstance(payload, dict) or 'measurements' not in payload:
            raise MetricsParseError(endpoint, "no measurements collection")

        measurements = payload['measurements']
        if not isinstance(measurements, list):
            raise MetricsParseError(endpoint, "measurements is not a list")

        for measurement in measurements:
            if not isinstance(measurement, dict):
                continue
            if measurement.get('statistic') != self.statistic:
                continue
            return self._coerce_value(endpoint, measurement.get('value'))

        raise MetricsParseError(endpoint, f"no {self.statistic} measurement")

    def _coerce_value(self, endpoint: str, value: Any) -> float:
        if value is None:
            raise MetricsParseError(endpoint, f"{self.statistic} value is null")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MetricsParseError(endpoint, f"{self.statistic} value is not numeric: {value!r}")
        if value < 0:
            raise MetricsParseError(endpoint, f"{self.statistic} value is negative: {value}")
        return float(value)
