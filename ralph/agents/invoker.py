"""
Coding agent invocation.

The agent is an opaque CLI. It is started with the prompt as an argument,
its output is captured in full, and the result is classified by exit code and
by whether the completion sentinel appears anywhere in stdout or stderr.
"""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ralph.lib.constants import COMPLETION_SENTINEL
from ralph.lib.errors import AgentSpawnError

logger = logging.getLogger(__name__)


class CallingConvention(Enum):
    """How an agent binary expects to receive its prompt."""
    CLAUDE = "claude"
    CURSOR = "cursor-agent"

    @classmethod
    def for_agent(cls, agent_command: str) -> "CallingConvention":
        if agent_command == cls.CURSOR.value:
            return cls.CURSOR
        return cls.CLAUDE

    def build_argv(self, agent_command: str, prompt: str) -> list[str]:
        if self is CallingConvention.CURSOR:
            return [agent_command, "-p", prompt, "--output-format", "text"]
        return [
            agent_command,
            "--dangerously-skip-permissions",
            "--print",
            "-p", prompt,
        ]


@dataclass
class AgentResult:
    exit_code: int
    stdout: str
    stderr: str
    error: Optional[AgentSpawnError] = None   # Set when the process never started

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.exit_code == 0

    @property
    def completion_signaled(self) -> bool:
        # Checked independently of the exit code: completion is agent-declared
        return COMPLETION_SENTINEL in (self.stdout + self.stderr)


class AgentInvoker:
    def __init__(self, agent_command: str):
        self.agent_command = agent_command
        self.convention = CallingConvention.for_agent(agent_command)

    def build_argv(self, prompt: str) -> list[str]:
        return self.convention.build_argv(self.agent_command, prompt)

    def invoke(self, prompt: str, cwd: Path) -> AgentResult:
        """
        Run the agent once and wait for it to exit.

        There is no timeout; a hung agent blocks the caller. Spawn failures
        are returned as a failed AgentResult rather than raised.
        """
        cmd = self.build_argv(prompt)
        logger.debug(
            f"Running agent {self.agent_command} ({self.convention.name}, "
            f"prompt {len(prompt)} chars) in {cwd}"
        )

        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            logger.debug(f"Agent spawn failed: {e}")
            return AgentResult(
                exit_code=-1,
                stdout="",
                stderr="",
                error=AgentSpawnError(self.agent_command, str(e)),
            )

        logger.debug(
            f"Agent exited with {result.returncode} "
            f"(stdout {len(result.stdout)} chars, stderr {len(result.stderr)} chars)"
        )
        return AgentResult(
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )


def invoke_agent(prompt: str, cwd: Path, agent_command: str) -> AgentResult:
    """Convenience wrapper around AgentInvoker.invoke."""
    return AgentInvoker(agent_command).invoke(prompt, cwd)
