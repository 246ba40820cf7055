"""Git operations used by the post-processing pipeline.

Every operation returns a GitResult; callers check .success, or the
returncode where it carries meaning (see diff_staged).
"""

from ralph.git.runner import GitResult, run_git
from ralph.git.status import INDEX_CLEAN, INDEX_DIRTY, diff_staged
from ralph.git.commit import (
    stage_all,
    commit,
)

__all__ = [
    "GitResult",
    "run_git",
    # status
    "diff_staged",
    "INDEX_CLEAN",
    "INDEX_DIRTY",
    # commit
    "stage_all",
    "commit",
]
