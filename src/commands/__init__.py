#!/usr/bin/env python3
"""
Command endpoints for the performance demo.

This module provides a scalable command architecture where each major
functionality is handled by dedicated command classes.
"""

from typing import Dict, Type
from .base import BaseCommand
from .metrics import MetricsCommand
from .env import EnvCommand
from .demo import DemoCommand

# Command registry for easy extension
COMMANDS: Dict[str, Type[BaseCommand]] = {
    'metrics': MetricsCommand,
    'env': EnvCommand,
    'demo': DemoCommand,
}

def get_command(command_name: str) -> BaseCommand:
    """Get a command instance by name."""
    if command_name not in COMMANDS:
        available = ', '.join(COMMANDS.keys())
        raise ValueError(f"Unknown command '{command_name}'. Available: {available}")

    command_class = COMMANDS[command_name]
    return command_class()
