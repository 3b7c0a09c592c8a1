#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for all application configuration,
including environment variables, defaults, and validation.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

# Importing env_loader loads .env once
from .env_loader import get_bool_env, get_list_env
from .exceptions import ConfigurationError
from .models.metrics import TrackedMetric, ComparisonSpec

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_METRICS_PATH_TEMPLATE = "/actuator/metrics/http.server.requests?tag=uri:{uri}"

# (label, request uri) in collection order
DEFAULT_TRACKED_URIS = [
    ("JPA Data Loading", "/load-jpa"),
    ("GemFire Data Loading", "/load-gemfire"),
    ("JPA Query Count", "/get-jpa-count"),
    ("GemFire Query Count", "/get-gemfire-count"),
]

CHART_GLYPHS = ["█", "▓", "▒", "░"]

DEFAULT_COMPARISONS = [
    ComparisonSpec("Data Loading Performance: JPA vs GemFire", 0, 1, CHART_GLYPHS[0], CHART_GLYPHS[1]),
    ComparisonSpec("Query Performance: JPA vs GemFire", 2, 3, CHART_GLYPHS[2], CHART_GLYPHS[3]),
]

# (step header, request uri) in the order the demo drives traffic
DEFAULT_WORKLOADS = [
    ("Loading data via Spring Data JPA to Postgres", "/load-jpa"),
    ("Querying record count from Postgres via JPA", "/get-jpa-count"),
    ("Loading data via Spring for GemFire", "/load-gemfire"),
    ("Querying record count from GemFire", "/get-gemfire-count"),
]

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class MetricsConfig:
    """Telemetry collection and chart settings."""
    base_url: str = DEFAULT_BASE_URL
    metrics_path_template: str = DEFAULT_METRICS_PATH_TEMPLATE
    # None keeps the HTTP transport default (no timeout)
    request_timeout: Optional[float] = None
    chart_width: int = 40
    use_color: bool = True
    tracked_uris: List[tuple] = field(default_factory=lambda: list(DEFAULT_TRACKED_URIS))
    comparisons: List[ComparisonSpec] = field(default_factory=lambda: list(DEFAULT_COMPARISONS))

    def metrics_url(self, uri: str) -> str:
        """Telemetry URL for a request uri such as '/load-jpa'."""
        return self.base_url.rstrip('/') + self.metrics_path_template.format(uri=uri)

    def tracked_metrics(self) -> List[TrackedMetric]:
        """Tracked metrics with fully resolved endpoints."""
        return [TrackedMetric(label=label, endpoint=self.metrics_url(uri)) for label, uri in self.tracked_uris]


@dataclass
class EnvironmentConfig:
    """Orchestration commands for the comparison environment."""
    project_dir: str = "."
    required_commands: List[str] = field(default_factory=lambda: ["docker"])
    compose_up_command: str = "docker compose up -d --remove-orphans"
    compose_down_command: str = "docker compose down --quiet"
    app_start_command: str = "./mvnw -q clean package spring-boot:start -Dfork=true -DskipTests"
    app_stop_command: str = "./mvnw --quiet spring-boot:stop -Dspring-boot.stop.fork -Dfork=true"
    health_path: str = "/actuator/health"
    workloads: List[tuple] = field(default_factory=lambda: list(DEFAULT_WORKLOADS))
    pause_seconds: float = 0.0


@dataclass
class ApplicationConfig:
    """Core application configuration."""
    log_level: str = "INFO"
    verbose_logging: bool = False


@dataclass
class Config:
    """Master configuration container."""
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)
    app: ApplicationConfig = field(default_factory=ApplicationConfig)

    def health_url(self) -> str:
        return self.metrics.base_url.rstrip('/') + self.environment.health_path

    def summary(self) -> Dict[str, Any]:
        """Settings shown by `env status`."""
        return {
            'base_url': self.metrics.base_url,
            'chart_width': self.metrics.chart_width,
            'tracked_metrics': len(self.metrics.tracked_uris),
            'comparisons': len(self.metrics.comparisons),
            'request_timeout': self.metrics.request_timeout,
            'project_dir': self.environment.project_dir,
        }


class ConfigManager:
    """Manages application configuration with validation and environment loading."""

    def __init__(self):
        """Initialize configuration manager."""
        self._config: Optional[Config] = None

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.

        Args:
            force_reload: Force reloading configuration from environment

        Returns:
            Complete configuration object
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        timeout = os.getenv('METRICS_REQUEST_TIMEOUT')

        metrics_config = MetricsConfig(
            base_url=os.getenv('DEMO_BASE_URL', DEFAULT_BASE_URL),
            metrics_path_template=os.getenv('METRICS_PATH_TEMPLATE', DEFAULT_METRICS_PATH_TEMPLATE),
            request_timeout=self._parse_number('METRICS_REQUEST_TIMEOUT', timeout, float) if timeout else None,
            chart_width=self._parse_number('CHART_WIDTH', os.getenv('CHART_WIDTH', '40'), int),
            use_color=get_bool_env('DEMO_USE_COLOR', True),
        )

        defaults = EnvironmentConfig()
        environment_config = EnvironmentConfig(
            project_dir=os.getenv('DEMO_PROJECT_DIR', defaults.project_dir),
            required_commands=get_list_env('DEMO_REQUIRED_COMMANDS', defaults.required_commands),
            compose_up_command=os.getenv('COMPOSE_UP_COMMAND', defaults.compose_up_command),
            compose_down_command=os.getenv('COMPOSE_DOWN_COMMAND', defaults.compose_down_command),
            app_start_command=os.getenv('APP_START_COMMAND', defaults.app_start_command),
            app_stop_command=os.getenv('APP_STOP_COMMAND', defaults.app_stop_command),
            health_path=os.getenv('HEALTH_PATH', defaults.health_path),
            pause_seconds=self._parse_number('DEMO_PAUSE_SECONDS', os.getenv('DEMO_PAUSE_SECONDS', '0'), float),
        )

        app_config = ApplicationConfig(
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=get_bool_env('VERBOSE_LOGGING', False)
        )

        config = Config(
            metrics=metrics_config,
            environment=environment_config,
            app=app_config
        )

        validate_config(config)
        return config

    @staticmethod
    def _parse_number(key: str, raw: str, kind):
        try:
            return kind(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(key, f"expected {kind.__name__}, got {raw!r}")

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        configure_logging(self.get_config())


def configure_logging(config: Config) -> None:
    """Apply the configured level and format to the root logger and its handlers."""
    # Set log level
    numeric_level = getattr(logging, config.app.log_level)
    logging.getLogger().setLevel(numeric_level)

    # Configure format
    if config.app.verbose_logging:
        format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
    else:
        format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    # Update existing handlers
    for handler in logging.getLogger().handlers:
        handler.setLevel(numeric_level)
        formatter = logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S')
        handler.setFormatter(formatter)


def validate_config(config: Config) -> None:
    """
    Validate configuration values.

    Raises:
        ConfigurationError: Listing every problem found
    """
    errors = []

    if not config.metrics.base_url.startswith(('http://', 'https://')):
        errors.append("DEMO_BASE_URL must start with http:// or https://")

    if '{uri}' not in config.metrics.metrics_path_template:
        errors.append("METRICS_PATH_TEMPLATE must contain {uri}")

    if config.metrics.chart_width < 1:
        errors.append("CHART_WIDTH must be at least 1")

    if config.metrics.request_timeout is not None and config.metrics.request_timeout <= 0:
        errors.append("METRICS_REQUEST_TIMEOUT must be positive")

    if config.environment.pause_seconds < 0:
        errors.append("DEMO_PAUSE_SECONDS must not be negative")

    tracked_count = len(config.metrics.tracked_uris)
    for spec in config.metrics.comparisons:
        for index in (spec.left_index, spec.right_index):
            if not 0 <= index < tracked_count:
                errors.append(f"comparison '{spec.title}' references unknown metric index {index}")

    # Validate log level
    if config.app.log_level not in VALID_LOG_LEVELS:
        errors.append(f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}")

    if errors:
        raise ConfigurationError('config', '; '.join(errors))

    logger.debug("Configuration validation passed")


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None
