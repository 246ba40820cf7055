"""
Error taxonomy for the Ralph loop.

Only state-durability failures are fatal to a run. Agent spawn failures are
recorded on the AgentResult and the loop moves on.
"""


class RalphError(Exception):
    """Base class for all loop errors."""


class MalformedStateError(RalphError):
    """prd.json is missing, unparseable, or does not match the task list shape."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class PersistenceError(RalphError):
    """prd.json or progress.md could not be written."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {message}")


class InstructionError(RalphError):
    """prompt.md could not be read."""


class ConfigError(RalphError):
    """ralph.env is invalid."""


class AgentSpawnError(RalphError):
    """The agent binary could not be started."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Could not start agent '{command}': {reason}")
