"""Thin wrapper around the git CLI, always pointed at the project root."""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_TIMEOUT = 30


@dataclass
class GitResult:
    """Outcome of one git call. returncode is -1 when git never finished."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def detail(self) -> str:
        """First useful line of output, for one-line failure reports."""
        for text in (self.stderr, self.stdout):
            text = text.strip()
            if text:
                return text.splitlines()[0]
        return f"git exited {self.returncode}"


def run_git(args: list[str], cwd: Path, timeout: int = GIT_TIMEOUT) -> GitResult:
    """Run `git -C <cwd> <args>` and capture its output.

    Nothing is raised: a missing git binary or a timeout comes back as a
    failed GitResult. Credential prompts are disabled so an unattended loop
    cannot block on one.
    """
    argv = ["git", "-C", str(cwd), *args]
    logger.debug(f"Running {' '.join(argv)}")
    try:
        proc = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"git {args[0]} timed out after {timeout}s")
        return GitResult(-1, "", f"git {args[0]} timed out after {timeout}s", timed_out=True)
    except OSError as e:
        return GitResult(-1, "", f"Could not run git: {e}")

    if proc.returncode != 0:
        logger.debug(f"git {args[0]} exited {proc.returncode}: {proc.stderr.strip()}")
    return GitResult(proc.returncode, proc.stdout, proc.stderr)
