#!/usr/bin/env python3
"""
Environment command for managing the comparison environment.

Checks dependencies, starts and stops the backing services and the
application, and reports whether the service is healthy.
"""

from argparse import Namespace

from .base import BaseCommand
from core.environment import verify_dependencies


class EnvCommand(BaseCommand):
    """Manage the containers and application under test."""

    SUBCOMMANDS = ('deps', 'start', 'stop', 'status')

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute env subcommand."""
        return self.dispatch(subcommand, args)

    def deps(self, args: Namespace) -> int:
        """Verify required executables are installed."""
        verify_dependencies(self.config.environment.required_commands)
        print("✅ All dependencies found")
        return 0

    def start(self, args: Namespace) -> int:
        """Start the backing services and the application."""
        verify_dependencies(self.config.environment.required_commands)
        self.header("Starting environment...")
        self.environment.start()
        print("✅ Environment started")
        return 0

    def stop(self, args: Namespace) -> int:
        """Stop the application and the backing services."""
        self.header("Stopping environment")
        self.environment.stop()
        print("✅ Environment stopped")
        return 0

    def status(self, args: Namespace) -> int:
        """Show configuration summary and service health."""
        print("🏥 Environment Status")
        print("=" * 50)

        for key, value in self.config.summary().items():
            print(f"  {key}: {value}")

        healthy = self.environment.is_healthy()
        if healthy:
            print(f"\n  ✅ Service at {self.config.health_url()}: UP")
        else:
            print(f"\n  ❌ Service at {self.config.health_url()}: DOWN")
        return 0 if healthy else 1
