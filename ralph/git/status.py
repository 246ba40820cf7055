"""Index status checks."""

from pathlib import Path

from ralph.git.runner import GitResult, run_git

# `git diff --cached --quiet` exit codes
INDEX_CLEAN = 0
INDEX_DIRTY = 1


def diff_staged(project_root: Path) -> GitResult:
    """Compare the index with HEAD.

    returncode is INDEX_CLEAN when nothing is staged, INDEX_DIRTY when
    something is; anything else means git itself failed and the caller must
    treat it as an error, not as an empty index.
    """
    return run_git(["diff", "--cached", "--quiet"], project_root)
