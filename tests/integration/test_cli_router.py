import logging

import pytest

from cli_router import CLIRouter
from core.config import get_config_manager
from core.container import get_container
from core.environment import ComposeEnvironment
from core.metrics.extractor import MetricExtractor
from core.traffic import TrafficDriver

from conftest import BASE_URL, FakeResponse


@pytest.fixture
def wired(config, demo_routes, fake_session_factory, fake_runner_factory):
    """Global container with fakes in place of network and shell access."""
    config.metrics.use_color = False
    config.environment.required_commands = []
    for _, uri in config.environment.workloads:
        demo_routes[BASE_URL + uri] = FakeResponse("ok")
    demo_routes[config.health_url()] = FakeResponse('{"status": "UP"}')

    session = fake_session_factory(demo_routes)
    runner = fake_runner_factory()

    container = get_container()
    container.register_instance('config', config)
    container.register_instance('metric_extractor', MetricExtractor(session=session))
    container.register_instance('environment', ComposeEnvironment(config, runner=runner, session=session))
    container.register_instance('traffic_driver', TrafficDriver(config.metrics.base_url, session=session))
    return {'config': config, 'session': session, 'runner': runner}


def test_metrics_analyze_prints_collection_and_reports(wired, capsys):
    exit_code = CLIRouter().route_command(['metrics', 'analyze', '--no-color'])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "[JPA Data Loading] TOTAL_TIME: 1.0s" in out
    assert "Data Loading Performance: JPA vs GemFire" in out
    assert "50.00% slower (JPA Data Loading vs GemFire Data Loading)" in out
    assert "98.00% faster (JPA Query Count vs GemFire Query Count)" in out
    assert out.index("TOTAL_TIME") < out.index("Performance Analysis Results")


def test_metrics_collect_strict_fails_on_missing(wired, capsys):
    wired['session'].routes.pop(wired['config'].metrics.metrics_url('/load-gemfire'))

    assert CLIRouter().route_command(['metrics', 'collect']) == 0
    assert CLIRouter().route_command(['metrics', 'collect', '--strict']) == 1
    assert "(unavailable)" in capsys.readouterr().out


def test_chart_width_flag_changes_bars(wired, capsys):
    CLIRouter().route_command(['metrics', 'analyze', '--chart-width', '10'])

    out = capsys.readouterr().out
    assert "▒" * 10 + " " in out
    assert "▒" * 11 not in out


def test_invalid_chart_width_is_configuration_error(wired):
    assert CLIRouter().route_command(['metrics', 'analyze', '--chart-width', '0']) == 22


def test_demo_run_full_flow(wired, capsys):
    exit_code = CLIRouter().route_command(['demo', 'run'])

    out = capsys.readouterr().out
    env = wired['config'].environment
    assert exit_code == 0
    assert wired['runner'].commands == [
        env.compose_down_command,
        env.compose_up_command,
        env.app_start_command,
        env.app_stop_command,
        env.compose_down_command,
    ]
    assert "#### Loading data via Spring Data JPA to Postgres" in out
    assert "Query Performance: JPA vs GemFire" in out


def test_demo_run_stops_environment_after_failure(wired, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("collection blew up")

    monkeypatch.setattr('core.metrics.pipeline.MetricsPipeline.collect', explode)

    exit_code = CLIRouter().route_command(['demo', 'run', '--skip-traffic'])

    env = wired['config'].environment
    assert exit_code == 1
    assert wired['runner'].commands[-2:] == [env.app_stop_command, env.compose_down_command]


def test_demo_run_skip_env_leaves_environment_alone(wired):
    assert CLIRouter().route_command(['demo', 'run', '--skip-env']) == 0
    assert wired['runner'].commands == []


def test_demo_run_environment_failure(wired):
    wired['runner'].failing.append(wired['config'].environment.compose_up_command)

    assert CLIRouter().route_command(['demo', 'run']) == 1
    assert wired['config'].environment.app_start_command not in wired['runner'].commands


def test_env_deps_missing_dependency_exit_code(wired):
    wired['config'].environment.required_commands = ['perfdemo-no-such-executable']

    assert CLIRouter().route_command(['env', 'deps']) == 2


def test_env_status_reports_health(wired, capsys):
    assert CLIRouter().route_command(['env', 'status']) == 0
    assert "UP" in capsys.readouterr().out

    wired['session'].routes.pop(wired['config'].health_url())
    assert CLIRouter().route_command(['env', 'status']) == 1


def test_missing_subcommand_returns_error(wired):
    assert CLIRouter().route_command(['metrics']) != 0


def test_no_command_prints_help(capsys):
    assert CLIRouter().route_command([]) == 1
    assert "usage" in capsys.readouterr().out


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def root_handler():
    root = logging.getLogger()
    handler = RecordingHandler()
    previous_level = root.level
    root.addHandler(handler)
    yield handler
    root.removeHandler(handler)
    root.setLevel(previous_level)


def test_verbose_flag_lets_debug_records_through(wired, root_handler, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_config_manager().update_logging()
    assert root_handler.level == logging.INFO

    assert CLIRouter().route_command(['metrics', 'collect', '--verbose']) == 0

    debug_messages = [r.getMessage() for r in root_handler.records if r.levelno == logging.DEBUG]
    assert any("TOTAL_TIME" in message for message in debug_messages)


def test_sessions_closed_after_command(wired):
    assert CLIRouter().route_command(['metrics', 'collect']) == 0
    assert wired['session'].closed
