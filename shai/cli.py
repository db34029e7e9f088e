"""Command-line interface for shai."""

import argparse
import sys
from typing import List, Optional

from colorama import init as colorama_init

from .config.manager import ConfigError
from .constants import EXIT_FAILURE, EXIT_OK
from .core.application import create_application
from .utils.logging import logger
from . import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="shai",
        usage='shai [options] "<task description>"',
        description="shai: an autonomous shell agent driven by a local Ollama model.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  shai "convert all files under this dir from flac to mp3"
  shai --debug "count the ERROR lines in logs/*.log"
  shai --config-summary

Every command is shown before it runs. At each prompt:
  Enter or y - allow
  n          - reject and end the run
  q          - quit immediately
        """
    )

    parser.add_argument(
        'task_prompt',
        nargs='*',
        help="Task description; all words are joined with spaces."
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'shai {__version__}'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help="Enable debug logging output"
    )

    parser.add_argument(
        '--config-dir',
        type=str,
        help="Custom configuration directory path"
    )

    parser.add_argument(
        '--config-summary',
        action='store_true',
        help="Show configuration summary and exit"
    )

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    # Initialize colorama for cross-platform colored output
    colorama_init(autoreset=True)

    # Parse command-line arguments
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # A task is required unless only the summary was asked for
    if not parsed_args.task_prompt and not parsed_args.config_summary:
        parser.print_usage()
        print('Example: shai "convert all files under this dir from flac to mp3"')
        sys.exit(EXIT_FAILURE)

    # Initialize the application
    try:
        app = create_application(
            config_dir=parsed_args.config_dir,
            debug=parsed_args.debug
        )
    except ConfigError as e:
        logger.error(f"Fatal Error loading configuration: {e}")
        sys.exit(EXIT_FAILURE)

    # Handle config summary request
    if parsed_args.config_summary:
        app.print_config_summary()
        sys.exit(EXIT_OK)

    # Run the agent on the joined task words
    user_task = " ".join(parsed_args.task_prompt)
    sys.exit(app.run_task(user_task))


if __name__ == "__main__":
    main()
