#!/usr/bin/env python3
"""
CLI Router for the JPA vs GemFire performance demo.

Modular command architecture: each top-level command maps to a command
class in the `commands` package.
"""

import argparse
import logging
import sys
from typing import Optional, List

# Load environment variables first
import core.env_loader  # Auto-loads .env file

from commands import get_command, COMMANDS
from core.config import get_config_manager
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CLIRouter:
    """
    CLI router for performance demo commands.

    Command structure:
    - python run.py demo run
    - python run.py metrics analyze --base-url http://localhost:8080
    - python run.py env status
    """

    def __init__(self):
        """Initialize CLI router."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description="JPA vs GemFire performance comparison demo",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        # Add subparsers for command structure
        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='{command}'
        )

        self._add_metrics_parser(subparsers)
        self._add_env_parser(subparsers)
        self._add_demo_parser(subparsers)

        return parser

    def _add_common_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Flags shared by every subcommand."""
        parser.add_argument('--base-url', help='Target service URL (default: DEMO_BASE_URL or http://localhost:8080)')
        parser.add_argument('--chart-width', type=int, help='Bar length for the peak value (default: 40)')
        parser.add_argument('--no-color', action='store_true', help='Disable ANSI colors in reports')
        parser.add_argument('--verbose', action='store_true', help='Verbose output')

    def _add_metrics_parser(self, subparsers):
        """Add metrics command parser."""
        metrics_parser = subparsers.add_parser(
            'metrics',
            help='Telemetry collection and performance analysis'
        )

        metrics_subparsers = metrics_parser.add_subparsers(
            dest='subcommand',
            help='Metrics operations',
            metavar='{collect,analyze}'
        )

        collect_parser = metrics_subparsers.add_parser('collect', help='Print TOTAL_TIME for every tracked endpoint')
        collect_parser.add_argument('--strict', action='store_true', help='Exit non-zero if any metric is unavailable')
        self._add_common_arguments(collect_parser)

        analyze_parser = metrics_subparsers.add_parser('analyze', help='Collect metrics and print comparison charts')
        analyze_parser.add_argument('--strict', action='store_true', help='Exit non-zero if any metric is unavailable')
        self._add_common_arguments(analyze_parser)

    def _add_env_parser(self, subparsers):
        """Add env command parser."""
        env_parser = subparsers.add_parser(
            'env',
            help='Comparison environment management'
        )

        env_subparsers = env_parser.add_subparsers(
            dest='subcommand',
            help='Environment operations',
            metavar='{deps,start,stop,status}'
        )

        for name, help_text in (('deps', 'Check required executables'),
                                ('start', 'Start containers and the application'),
                                ('stop', 'Stop the application and containers'),
                                ('status', 'Show configuration and service health')):
            self._add_common_arguments(env_subparsers.add_parser(name, help=help_text))

    def _add_demo_parser(self, subparsers):
        """Add demo command parser."""
        demo_parser = subparsers.add_parser(
            'demo',
            help='End-to-end performance demo'
        )

        demo_subparsers = demo_parser.add_subparsers(
            dest='subcommand',
            help='Demo operations',
            metavar='{run,traffic}'
        )

        run_parser = demo_subparsers.add_parser('run', help='Start environment, drive traffic, report, stop')
        run_parser.add_argument('--skip-env', action='store_true', help='Use an already running service')
        run_parser.add_argument('--keep-running', action='store_true', help='Leave the environment up afterwards')
        run_parser.add_argument('--skip-traffic', action='store_true', help='Report on existing metrics only')
        self._add_common_arguments(run_parser)

        traffic_parser = demo_subparsers.add_parser('traffic', help='Call every workload endpoint once')
        self._add_common_arguments(traffic_parser)

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        return """
Examples:
  # Full demo (docker compose + Spring Boot app)
  python run.py demo run

  # Against an application that is already running
  python run.py demo run --skip-env
  python run.py metrics analyze --base-url http://localhost:8080

  # Environment management
  python run.py env deps
  python run.py env status

"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]

            parsed_args = self.parser.parse_args(args)

            # Handle command structure
            if not parsed_args.command:
                self.parser.print_help()
                return 1

            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else 0
        except Exception as e:
            logger.error(f"CLI routing error: {e}", exc_info=True)
            return 1

    def _handle_command(self, args: argparse.Namespace) -> int:
        """Handle command structure."""
        logger.debug(f"Handling command: {args.command}")

        if args.command not in COMMANDS:
            available = ', '.join(COMMANDS.keys())
            logger.error(f"Unknown command '{args.command}'. Available: {available}")
            return 1

        # Get subcommand
        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            try:
                self.parser.parse_args([args.command, '--help'])  # Show help
            except SystemExit:
                pass
            return 1

        # Execute command
        try:
            command = get_command(args.command)
            return command.execute(subcommand, args)
        except ConfigurationError as e:
            logger.error(str(e))
            return 22
        except Exception as e:
            logger.error(f"Error executing {args.command} {subcommand}: {e}", exc_info=True)
            return 1


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    # Set up logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        get_config_manager().update_logging()
    except ConfigurationError as e:
        logger.error(str(e))
        return 22

    # Create and use router
    router = CLIRouter()
    return router.route_command(args)


if __name__ == '__main__':
    exit_code = main()
    sys.exit(exit_code)
