"""
Loop configuration.

Settings come from three places, highest precedence first: the command line,
the process environment, and the optional .ralph/ralph.env file. They are
captured once into a LoopConfig that is passed down to the controller.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ralph.lib import envparse
from ralph.lib.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_AGENT_CMD,
    DEFAULT_LINT_CMD,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TYPECHECK_CMD,
    ENV_FILE,
    ITERATION_DELAY_SECONDS,
    PRD_FILE,
    PROGRESS_FILE,
    PROMPT_FILE,
)

logger = logging.getLogger(__name__)


@dataclass
class LoopConfig:
    """Everything the loop needs to know, resolved at startup."""
    config_dir: Path                 # .ralph/ holding prd.json, progress.md, prompt.md
    project_root: Path               # Working directory for agent, tools and git
    agent_command: str = DEFAULT_AGENT_CMD
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    dry_run: bool = False
    lint_command: str = DEFAULT_LINT_CMD
    typecheck_command: str = DEFAULT_TYPECHECK_CMD
    iteration_delay: float = ITERATION_DELAY_SECONDS

    @property
    def prd_path(self) -> Path:
        return self.config_dir / PRD_FILE

    @property
    def progress_path(self) -> Path:
        return self.config_dir / PROGRESS_FILE

    @property
    def prompt_path(self) -> Path:
        return self.config_dir / PROMPT_FILE


def parse_iterations(*candidates: Optional[str]) -> int:
    """Return the first candidate that is a positive integer, else the default.

    Invalid values are skipped rather than rejected, so `ralph abc` still runs
    with the next available setting.
    """
    for raw in candidates:
        if raw is None or str(raw).strip() == "":
            continue
        try:
            value = int(str(raw).strip())
        except ValueError:
            logger.warning(f"Ignoring invalid iteration count '{raw}'")
            continue
        if value > 0:
            return value
        logger.warning(f"Ignoring non-positive iteration count '{raw}'")
    return DEFAULT_MAX_ITERATIONS


def resolve_config_dir(cli_dir: Optional[str], environ: Mapping[str, str]) -> Path:
    """Pick the .ralph directory: --dir, then RALPH_DIR, then ./.ralph."""
    raw = cli_dir or environ.get("RALPH_DIR")
    if raw:
        return Path(raw).expanduser().resolve()
    return (Path.cwd() / CONFIG_DIR_NAME).resolve()


def load_loop_config(
    config_dir: Path,
    argv_iterations: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> LoopConfig:
    """Build a LoopConfig.

    Args:
        config_dir: The .ralph directory; its parent is the project root
        argv_iterations: Positional MAX_ITERATIONS argument, if given
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigError: if ralph.env exists but is invalid
    """
    if environ is None:
        environ = os.environ

    file_env = envparse.load_env_file(config_dir / ENV_FILE)

    def setting(key: str, default: str) -> str:
        value = environ.get(key)
        if value:
            return value
        return file_env.get(key) or default

    return LoopConfig(
        config_dir=config_dir,
        project_root=config_dir.parent,
        agent_command=setting("AGENT_CMD", DEFAULT_AGENT_CMD),
        max_iterations=parse_iterations(
            argv_iterations,
            environ.get("MAX_ITERATIONS"),
            file_env.get("MAX_ITERATIONS"),
        ),
        dry_run=setting("RALPH_DRY_RUN", "0") == "1",
        lint_command=setting("LINT_CMD", DEFAULT_LINT_CMD),
        typecheck_command=setting("TYPECHECK_CMD", DEFAULT_TYPECHECK_CMD),
    )
