import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pytest
import requests

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

# Also add the project root to handle absolute imports
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.config import Config, reset_config  # noqa: E402
from core.container import reset_container  # noqa: E402


BASE_URL = "http://localhost:8080"


def metrics_url(uri: str) -> str:
    return f"{BASE_URL}/actuator/metrics/http.server.requests?tag=uri:{uri}"


def total_time_payload(value: Any, extra: Optional[List[Dict[str, Any]]] = None) -> str:
    measurements = [
        {"statistic": "COUNT", "value": 1.0},
        {"statistic": "TOTAL_TIME", "value": value},
        {"statistic": "MAX", "value": 0.5},
    ]
    if extra:
        measurements.extend(extra)
    return json.dumps({"name": "http.server.requests", "measurements": measurements})


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; maps URLs to responses or exceptions."""

    def __init__(self, routes: Optional[Dict[str, Union[FakeResponse, Exception]]] = None) -> None:
        self.routes = routes or {}
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout})
        route = self.routes.get(url)
        if route is None:
            raise requests.exceptions.ConnectionError(f"Connection refused: {url}")
        if isinstance(route, Exception):
            raise route
        return route

    def close(self) -> None:
        self.closed = True


class FakeRunner:
    """Records orchestration commands; fails those listed in failing."""

    def __init__(self, failing: Optional[List[str]] = None) -> None:
        self.failing = failing or []
        self.commands: List[str] = []

    def run(self, command: str) -> None:
        from core.exceptions import CommandExecutionError

        self.commands.append(command)
        if command in self.failing:
            raise CommandExecutionError(command, 1)


@pytest.fixture(autouse=True)
def isolated_container():
    reset_container()
    reset_config()
    yield
    reset_container()
    reset_config()


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def fake_session_factory():
    def _factory(routes: Optional[Dict[str, Union[FakeResponse, Exception]]] = None) -> FakeSession:
        return FakeSession(routes)

    return _factory


@pytest.fixture
def demo_routes() -> Dict[str, FakeResponse]:
    """Telemetry for all four default endpoints."""
    return {
        metrics_url("/load-jpa"): FakeResponse(total_time_payload(1.0)),
        metrics_url("/load-gemfire"): FakeResponse(total_time_payload(1.5)),
        metrics_url("/get-jpa-count"): FakeResponse(total_time_payload(0.02)),
        metrics_url("/get-gemfire-count"): FakeResponse(total_time_payload(0.0004)),
    }


@pytest.fixture
def fake_runner_factory():
    def _factory(failing: Optional[List[str]] = None) -> FakeRunner:
        return FakeRunner(failing)

    return _factory
