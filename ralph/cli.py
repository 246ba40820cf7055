#!/usr/bin/env python3
"""Ralph CLI entrypoint."""

import argparse
import logging
import os
import sys

from ralph.lib import console
from ralph.lib.config import load_loop_config, resolve_config_dir
from ralph.lib.constants import DEFAULT_AGENT_CMD, DEFAULT_MAX_ITERATIONS
from ralph.lib.errors import ConfigError
from ralph.runner.loop import LoopController

DESCRIPTION = """\
Autonomous coding loop. Reads product requirements from .ralph/prd.json,
selects the highest-priority incomplete story, and invokes an AI agent with
.ralph/prompt.md to work on it. After each successful iteration it lints and
type checks the codebase, commits changes, and updates progress tracking files.
"""

EPILOG = f"""\
environment variables:
  AGENT_CMD         Command used to invoke the AI agent (default: "{DEFAULT_AGENT_CMD}")
  MAX_ITERATIONS    Override the default maximum number of loop iterations
  RALPH_DRY_RUN     Set to "1" to enable dry-run mode (no commits or file modifications)
  LINT_CMD          Lint-and-autofix command run after each successful iteration
  TYPECHECK_CMD     Type-check command run after each successful iteration
  RALPH_DIR         Directory holding prd.json, progress.md and prompt.md

examples:
  ralph                       Run with default settings ({DEFAULT_MAX_ITERATIONS} iterations max)
  ralph 5                     Run with a maximum of 5 iterations
  AGENT_CMD=cursor-agent ralph
                              Use cursor-agent as the agent command
  RALPH_DRY_RUN=1 ralph       Preview without committing or editing files
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ralph',
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'max_iterations', nargs='?', metavar='MAX_ITERATIONS',
        help=f'Maximum number of loop iterations (default: {DEFAULT_MAX_ITERATIONS})',
    )
    parser.add_argument('--dir', '-d', help='Ralph directory (default: ./.ralph)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show debug logging')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config_dir = resolve_config_dir(args.dir, os.environ)
        config = load_loop_config(config_dir, args.max_iterations)
    except ConfigError as e:
        console.error(f"ERROR: {e}")
        return 1

    try:
        LoopController(config).run()
    except Exception as e:
        logging.getLogger(__name__).debug("Fatal error", exc_info=True)
        console.error(f"ERROR: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
