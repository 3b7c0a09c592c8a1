import pytest

from core.config import DEFAULT_COMPARISONS
from core.exceptions import ConfigurationError
from core.formatting.chart import BarRenderer
from core.formatting.report import ComparisonReporter
from core.metrics.extractor import MetricExtractor
from core.metrics.pipeline import MetricsPipeline
from core.models.metrics import ComparisonSpec, TrackedMetric

from conftest import FakeResponse, metrics_url, total_time_payload


def make_pipeline(session) -> MetricsPipeline:
    return MetricsPipeline(MetricExtractor(session=session), ComparisonReporter(BarRenderer(40)))


def default_targets():
    return [
        TrackedMetric("JPA Data Loading", metrics_url("/load-jpa")),
        TrackedMetric("GemFire Data Loading", metrics_url("/load-gemfire")),
        TrackedMetric("JPA Query Count", metrics_url("/get-jpa-count")),
        TrackedMetric("GemFire Query Count", metrics_url("/get-gemfire-count")),
    ]


def test_collect_is_sequential_in_declared_order(fake_session_factory, demo_routes):
    session = fake_session_factory(demo_routes)
    targets = default_targets()

    samples = make_pipeline(session).collect(targets)

    assert [call["url"] for call in session.calls] == [target.endpoint for target in targets]
    assert [sample.total_time for sample in samples] == [1.0, 1.5, 0.02, 0.0004]


def test_repeated_endpoints_are_fetched_again(fake_session_factory, demo_routes):
    session = fake_session_factory(demo_routes)
    target = TrackedMetric("JPA Data Loading", metrics_url("/load-jpa"))

    samples = make_pipeline(session).collect([target, target])

    assert len(session.calls) == 2
    assert len(samples) == 2


def test_collect_reports_progress_lines(fake_session_factory, demo_routes):
    del demo_routes[metrics_url("/get-gemfire-count")]
    lines = []

    make_pipeline(fake_session_factory(demo_routes)).collect(default_targets(), progress=lines.append)

    assert lines == [
        "[JPA Data Loading] TOTAL_TIME: 1.0s",
        "[GemFire Data Loading] TOTAL_TIME: 1.5s",
        "[JPA Query Count] TOTAL_TIME: 0.02s",
        "[GemFire Query Count] TOTAL_TIME: 0.0s (unavailable)",
    ]


def test_failed_extraction_does_not_abort_run(fake_session_factory, demo_routes):
    demo_routes[metrics_url("/load-jpa")] = FakeResponse("")

    result = make_pipeline(fake_session_factory(demo_routes)).run(default_targets(), DEFAULT_COMPARISONS)

    assert len(result.samples) == 4
    assert len(result.reports) == 2
    assert [sample.label for sample in result.missing] == ["JPA Data Loading"]
    # No baseline signal: reported as no change
    assert "0.00% faster (JPA Data Loading vs GemFire Data Loading)" in result.reports[0]


def test_run_renders_reports_in_configured_order(fake_session_factory, demo_routes):
    result = make_pipeline(fake_session_factory(demo_routes)).run(default_targets(), DEFAULT_COMPARISONS)

    assert result.reports[0].startswith("\nData Loading Performance: JPA vs GemFire\n")
    assert "50.00% slower (JPA Data Loading vs GemFire Data Loading)" in result.reports[0]
    assert result.reports[1].startswith("\nQuery Performance: JPA vs GemFire\n")
    assert "98.00% faster (JPA Query Count vs GemFire Query Count)" in result.reports[1]
    assert result.text == result.reports[0] + result.reports[1]


def test_query_chart_forces_minimum_bar(fake_session_factory, demo_routes):
    result = make_pipeline(fake_session_factory(demo_routes)).run(default_targets(), DEFAULT_COMPARISONS)

    query_lines = result.reports[1].split("\n")
    jpa_line = next(line for line in query_lines if line.startswith("JPA Query Count"))
    gemfire_line = next(line for line in query_lines if line.startswith("GemFire Query Count"))

    assert jpa_line.count("▒") == 40
    assert gemfire_line.count("░") == 1


def test_analyze_accepts_samples_explicitly(fake_session_factory, demo_routes):
    pipeline = make_pipeline(fake_session_factory(demo_routes))
    samples = pipeline.collect(default_targets())

    reports = pipeline.analyze(samples, [ComparisonSpec("Reversed", 1, 0, "█", "▓")])

    assert "33.33% faster (GemFire Data Loading vs JPA Data Loading)" in reports[0]


def test_out_of_range_index_is_a_configuration_error(fake_session_factory, demo_routes):
    pipeline = make_pipeline(fake_session_factory(demo_routes))
    samples = pipeline.collect(default_targets()[:2])

    with pytest.raises(ConfigurationError):
        pipeline.analyze(samples, DEFAULT_COMPARISONS)
