#!/usr/bin/env python3
"""
Terminal styling helpers (ANSI escapes).
"""

RED = '\033[1;31m'
GREEN = '\033[1;32m'
WHITE = '\033[1;37m'
RESET = '\033[0m'


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """Wrap text in an ANSI color when enabled."""
    if not enabled:
        return text
    return f"{color}{text}{RESET}"


def display_header(title: str, enabled: bool = True) -> str:
    """Section header used between demo steps."""
    return f"\n{colorize(f'#### {title}', WHITE, enabled)}\n"
