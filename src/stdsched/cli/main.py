"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Command routing and execution
- Output formatting and error reporting
"""
import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from stdsched import __version__
from stdsched.application.scheduler_factory import StdSchedulerFactory
from stdsched.cli.formatters import format_output
from stdsched.config.properties import SchedulerProperties
from stdsched.config.schemas.logging_schema import LoggingConfig
from stdsched.domain.base.ports.scheduler_port import SchedulerPort
from stdsched.domain.core.exceptions import SchedulerException
from stdsched.infrastructure.logging.logger import get_logger, setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments with resource-action structure."""

    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]) or "stdsched",
        description="Standard scheduler factory - resolve configuration and bootstrap schedulers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s config show                         # Show the resolved configuration
  %(prog)s --config my.properties config show  # Resolve from an explicit file
  %(prog)s --format table config show          # Display as table
  %(prog)s scheduler info                      # Bootstrap and describe the scheduler
        """
    )

    # Global options
    parser.add_argument('--config', help='Configuration file or resource name')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set logging level, overriding stdsched.logging.level')
    parser.add_argument('--format', choices=['json', 'yaml', 'table'],
                        default='json', help='Output format')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='resource', help='Available resources')

    # Config resource
    config_parser = subparsers.add_parser('config', help='Inspect configuration')
    config_subparsers = config_parser.add_subparsers(dest='action', help='Config actions')
    config_subparsers.add_parser('show', help='Show the resolved configuration and its source')

    # Scheduler resource
    scheduler_parser = subparsers.add_parser('scheduler', help='Bootstrap schedulers')
    scheduler_subparsers = scheduler_parser.add_subparsers(dest='action', help='Scheduler actions')
    scheduler_subparsers.add_parser('info', help='Obtain the configured scheduler and describe it')

    return parser.parse_args(argv)


def describe_scheduler(scheduler: SchedulerPort) -> Dict[str, Any]:
    return {
        "name": scheduler.name,
        "instance_id": scheduler.instance_id,
        "started": scheduler.is_started(),
        "standby": scheduler.is_in_standby_mode(),
        "shutdown": scheduler.is_shutdown(),
    }


def configure_logging(properties: SchedulerProperties, log_level: Optional[str] = None) -> None:
    """Apply stdsched.logging.* from the resolved configuration; an explicit level wins."""
    config = LoggingConfig.from_properties(properties)
    if log_level:
        config = config.model_copy(update={"level": log_level})
    setup_logging(config)


def execute_command(args: argparse.Namespace, factory: StdSchedulerFactory) -> Dict[str, Any]:
    """Route a parsed command to the factory."""
    if args.resource == 'config' and args.action == 'show':
        properties = factory.initialize()
        return {
            "source": factory.property_source,
            "properties": properties.to_dict(),
        }

    if args.resource == 'scheduler' and args.action == 'info':
        scheduler = factory.get_scheduler()
        return {
            "source": factory.property_source,
            "schedulers": [describe_scheduler(scheduler)],
        }

    raise ValueError(f"Unknown command: {args.resource} {args.action}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    setup_logging(LoggingConfig(level=args.log_level or "WARNING", destination="stdout"))
    logger = get_logger(__name__)

    if not args.resource:
        print("Error: No resource specified. Use --help for usage information.")
        return 1

    if not args.action:
        print(f"Error: No action specified for {args.resource}. Use --help for usage information.")
        return 1

    try:
        factory = StdSchedulerFactory(config_file=args.config) if args.config else StdSchedulerFactory()
        configure_logging(factory.initialize(), args.log_level)
        result = execute_command(args, factory)
    except SchedulerException as e:
        logger.error(f"Scheduler error: {e}")
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 130

    print(format_output(result, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
