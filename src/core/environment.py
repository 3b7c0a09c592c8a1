#!/usr/bin/env python3
"""
Comparison environment lifecycle.

The environment (containers plus the target application) is driven through
opaque shell commands; the only signal consumed is whether each command
succeeded.
"""

import logging
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import requests

from .config import Config
from .exceptions import CommandExecutionError, EnvironmentStartError, MissingDependencyError

logger = logging.getLogger(__name__)


def verify_dependencies(commands: Sequence[str], which=shutil.which) -> None:
    """
    Check that every command is available on PATH.

    Raises:
        MissingDependencyError: Listing all missing commands
    """
    logger.info("Checking dependencies...")
    missing: List[str] = [cmd for cmd in commands if which(cmd) is None]

    for cmd in missing:
        logger.error(f"{cmd} not found. Please install {cmd} first")

    if missing:
        raise MissingDependencyError(missing)

    logger.info("All dependencies found")


class ShellCommandRunner:
    """Runs orchestration commands from the project directory."""

    def __init__(self, cwd: str = ".", quiet: bool = False):
        self.cwd = cwd
        self.quiet = quiet

    def run(self, command: str) -> None:
        """
        Run command, raising if it exits non-zero or cannot be started.

        Raises:
            CommandExecutionError: On any failure
        """
        logger.debug(f"Running: {command}")
        output = subprocess.DEVNULL if self.quiet else None
        try:
            completed = subprocess.run(shlex.split(command), cwd=self.cwd, stdout=output, stderr=output)
        except OSError as e:
            raise CommandExecutionError(command, None, str(e)) from e

        if completed.returncode != 0:
            raise CommandExecutionError(command, completed.returncode)


class Environment(ABC):
    """Something that can host the service under test."""

    @abstractmethod
    def start(self) -> None:
        """Bring the environment up; raise EnvironmentStartError on failure."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Tear the environment down. Never raises."""
        pass

    @abstractmethod
    def is_healthy(self) -> bool:
        """Whether the service is up and answering."""
        pass


class ComposeEnvironment(Environment):
    """
    Docker Compose backing services plus a forked application process.

    start() clears leftovers with compose-down, then runs compose-up and
    app-start; stop() runs app-stop and compose-down.
    """

    def __init__(self, config: Config, runner: Optional[ShellCommandRunner] = None,
                 session: Optional[requests.Session] = None):
        self.config = config
        self.runner = runner or ShellCommandRunner(cwd=config.environment.project_dir)
        self.session = session or requests.Session()

    def start(self) -> None:
        env = self.config.environment

        logger.info("Cleaning up previous Docker services...")
        try:
            self.runner.run(env.compose_down_command)
        except CommandExecutionError as e:
            logger.warning(f"Pre-start cleanup failed: {e.message}")

        logger.info("Starting Docker services...")
        self._run_stage('docker services', env.compose_up_command)
        logger.info("All Docker services are ready")

        logger.info("Starting application...")
        self._run_stage('application start', env.app_start_command)
        logger.info("Application started")

    def _run_stage(self, stage: str, command: str) -> None:
        try:
            self.runner.run(command)
        except CommandExecutionError as e:
            raise EnvironmentStartError(stage, e) from e

    def stop(self) -> None:
        env = self.config.environment
        for stage, command in (('application stop', env.app_stop_command),
                               ('docker services stop', env.compose_down_command)):
            logger.info(f"Running {stage}...")
            try:
                self.runner.run(command)
            except CommandExecutionError as e:
                logger.warning(f"{stage} failed: {e.message}")

    def close(self) -> None:
        self.session.close()

    def is_healthy(self) -> bool:
        url = self.config.health_url()
        try:
            response = self.session.get(url, timeout=self.config.metrics.request_timeout)
            response.raise_for_status()
            status = response.json().get('status')
        except (requests.exceptions.RequestException, ValueError, AttributeError) as e:
            logger.debug(f"Health check against {url} failed: {e}")
            return False

        logger.debug(f"Health status at {url}: {status}")
        return status == 'UP'
