"""
External tool runner for the lint and type-check steps.

Commands come from configuration as strings and are split with shlex; no
shell is involved.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TOOL_TIMEOUT = 300


@dataclass
class ToolResult:
    command: str
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False
    error: str = ""        # Spawn failure (missing binary, bad command string)

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out and not self.error

    def summary(self) -> str:
        """One-line description of why the tool failed."""
        if self.error:
            return self.error
        if self.timed_out:
            return "timed out"
        detail = (self.stderr.strip() or self.stdout.strip()).splitlines()
        first = detail[0] if detail else ""
        return f"exit {self.returncode}" + (f": {first}" if first else "")


def run_tool(command: str, cwd: Path, timeout: int = TOOL_TIMEOUT) -> ToolResult:
    """Run a configured tool command. Never raises."""
    try:
        argv = shlex.split(command)
    except ValueError as e:
        return ToolResult(command, -1, "", "", error=f"cannot parse command: {e}")
    if not argv:
        return ToolResult(command, -1, "", "", error="empty command")

    logger.debug(f"$ {command} (cwd={cwd})")
    try:
        result = subprocess.run(
            argv,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return ToolResult(command, -1, "", "", timed_out=True)
    except OSError as e:
        return ToolResult(command, -1, "", "", error=f"could not run {argv[0]}: {e}")

    return ToolResult(command, result.returncode, result.stdout, result.stderr)
