#!/usr/bin/env python3
"""
Dependency Injection Container

Provides a centralized way to manage dependencies and avoid scattered
instantiation throughout the codebase. Supports singleton and factory patterns.
"""

import logging
from typing import Any, Dict, Callable, TypeVar, Optional
from functools import wraps
import threading

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container:
    """Simple dependency injection container with lifecycle management."""

    def __init__(self):
        """Initialize empty container."""
        self._factories: Dict[str, Callable] = {}
        self._singletons: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def register_singleton(self, service_name: str, factory: Callable[[], T]) -> None:
        """
        Register a service as singleton (created once, reused).

        Args:
            service_name: Unique name for the service
            factory: Function that creates the service instance
        """
        with self._lock:
            factory._is_singleton = True
            self._factories[service_name] = factory
            # Remove any existing instance to force recreation
            if service_name in self._singletons:
                del self._singletons[service_name]

    def register_factory(self, service_name: str, factory: Callable[[], T]) -> None:
        """
        Register a service as factory (new instance each time).

        Args:
            service_name: Unique name for the service
            factory: Function that creates service instances
        """
        with self._lock:
            self._factories[service_name] = factory

    def register_instance(self, service_name: str, instance: T) -> None:
        """
        Register an existing instance as singleton.

        Args:
            service_name: Unique name for the service
            instance: Pre-created service instance
        """
        with self._lock:
            self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Args:
            service_name: Name of the service to retrieve

        Returns:
            Service instance

        Raises:
            KeyError: If service is not registered
        """
        # Check for existing singleton first
        if service_name in self._singletons:
            return self._singletons[service_name]

        # Check if factory is registered
        if service_name not in self._factories:
            raise KeyError(f"Service '{service_name}' not registered")

        factory = self._factories[service_name]

        if getattr(factory, '_is_singleton', False):
            with self._lock:
                if service_name in self._singletons:
                    return self._singletons[service_name]
            # Built outside the lock: singleton factories may resolve other services
            instance = factory()
            with self._lock:
                instance = self._singletons.setdefault(service_name, instance)
            logger.debug(f"Created singleton instance for '{service_name}'")
            return instance

        # Factory - create new instance each time
        instance = factory()
        logger.debug(f"Created new instance for '{service_name}'")
        return instance

    def clear(self) -> None:
        """Clear all registered services and instances."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()

    def close_singletons(self) -> None:
        """Release resources (HTTP sessions) held by created singletons."""
        with self._lock:
            instances = list(self._singletons.items())

        for service_name, instance in instances:
            close = getattr(instance, "close", None)
            if callable(close):
                close()
                logger.debug(f"Closed singleton '{service_name}'")


def singleton(factory_func: Callable[[], T]) -> Callable[[], T]:
    """
    Decorator to mark a factory function as singleton.

    Usage:
        @singleton
        def create_extractor():
            return MetricExtractor()
    """
    @wraps(factory_func)
    def wrapper():
        return factory_func()

    wrapper._is_singleton = True
    return wrapper


# Global container instance
_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
                setup_default_services(_container)
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container:
            _container.clear()
        _container = None


def setup_default_services(container: Container) -> None:
    """Set up default service registrations with configuration injection."""

    def config():
        return container.get('config')

    @singleton
    def create_config():
        from core.config import get_config
        return get_config()

    @singleton
    def create_metric_extractor():
        from core.metrics.extractor import MetricExtractor
        return MetricExtractor(timeout=config().metrics.request_timeout)

    def create_bar_renderer():
        from core.formatting.chart import BarRenderer
        return BarRenderer(chart_width=config().metrics.chart_width)

    def create_comparison_reporter():
        from core.formatting.report import ComparisonReporter
        return ComparisonReporter(container.get('bar_renderer'), use_color=config().metrics.use_color)

    def create_metrics_pipeline():
        from core.metrics.pipeline import MetricsPipeline
        return MetricsPipeline(container.get('metric_extractor'), container.get('comparison_reporter'))

    @singleton
    def create_environment():
        from core.environment import ComposeEnvironment
        return ComposeEnvironment(config())

    @singleton
    def create_traffic_driver():
        from core.traffic import TrafficDriver
        return TrafficDriver(config().metrics.base_url, timeout=config().metrics.request_timeout)

    # Register services
    container.register_singleton('config', create_config)
    container.register_singleton('metric_extractor', create_metric_extractor)
    container.register_singleton('environment', create_environment)
    container.register_singleton('traffic_driver', create_traffic_driver)

    # Non-singletons
    container.register_factory('bar_renderer', create_bar_renderer)
    container.register_factory('comparison_reporter', create_comparison_reporter)
    container.register_factory('metrics_pipeline', create_metrics_pipeline)

    logger.debug("Default services registered in container")
