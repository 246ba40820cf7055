"""Staging and committing the work of one story."""

import logging
from pathlib import Path

from ralph.git.runner import GitResult, run_git

logger = logging.getLogger(__name__)


def stage_all(project_root: Path) -> GitResult:
    """`git add -A`: new, modified and deleted files all go into the index."""
    return run_git(["add", "-A"], project_root)


def commit(project_root: Path, message: str) -> GitResult:
    # Hooks run as usual; a rejecting hook shows up as a failed result
    result = run_git(["commit", "-m", message], project_root)
    if result.success:
        logger.info(f"Committed '{message}'")
    return result
