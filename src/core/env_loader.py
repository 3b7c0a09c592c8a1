#!/usr/bin/env python3
"""
Environment variable loader with .env file support.

Safely loads environment variables from .env file if present.
"""

import os
from pathlib import Path
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

TRUTHY = ('1', 'true', 'yes', 'on')


def load_env_file(env_file_path: str = ".env", project_root: Optional[Path] = None) -> int:
    """
    Load environment variables from .env file if it exists.

    Args:
        env_file_path: Path to .env file (default: ".env" in project root)
        project_root: Directory holding the .env file (defaults to repo root)

    Returns:
        Number of variables loaded
    """
    if project_root is None:
        # src/core/env_loader.py -> project root
        project_root = Path(__file__).parent.parent.parent
    env_path = Path(project_root) / env_file_path

    if not env_path.exists():
        logger.debug(f"No .env file found at {env_path}")
        return 0

    try:
        with open(env_path, 'r', encoding='utf-8') as f:
            lines = f.readlines()
    except OSError as e:
        logger.error(f"Error loading .env file {env_path}: {e}")
        return 0

    loaded_count = 0
    for line_num, line in enumerate(lines, 1):
        line = line.strip()

        # Skip empty lines and comments
        if not line or line.startswith('#'):
            continue

        # Parse KEY=VALUE format
        if '=' not in line:
            logger.warning(f"Invalid .env format at line {line_num}: {line}")
            continue

        key, value = line.split('=', 1)
        key = key.strip()
        value = value.strip()

        # Remove quotes if present
        if value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        elif value.startswith("'") and value.endswith("'"):
            value = value[1:-1]

        # Only set if not already in environment (env vars take precedence)
        if key not in os.environ:
            os.environ[key] = value
            loaded_count += 1
            logger.debug(f"Loaded {key} from .env")
        else:
            logger.debug(f"Skipped {key} (already in environment)")

    logger.info(f"Loaded {loaded_count} variables from {env_path}")
    return loaded_count


def get_bool_env(key: str, default: bool = False) -> bool:
    """Read a boolean flag such as DEMO_USE_COLOR=true."""
    value = os.environ.get(key)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in TRUTHY


def get_list_env(key: str, default: List[str]) -> List[str]:
    """Read a comma separated list, dropping blank items."""
    value = os.environ.get(key)
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(',') if item.strip()]


# Auto-load .env file when module is imported
load_env_file()
