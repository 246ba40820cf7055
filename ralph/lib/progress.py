"""
Progress ledger (progress.md).

The ledger has a "codebase patterns" header and a chronological log. The
last line consisting of `---` marks where new entries go: each entry is
inserted directly above it. Without a marker, entries are appended to the end
of the file after a blank line. Existing text is never rewritten.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from ralph.lib.constants import LEDGER_SEPARATOR
from ralph.lib.errors import PersistenceError
from ralph.lib.fileio import atomic_write_text
from ralph.prd.models import Story

logger = logging.getLogger(__name__)


def insert_entry(existing: str, entry: str) -> str:
    """Return ledger text with entry inserted before the last separator line."""
    entry = entry.strip()
    lines = existing.splitlines(keepends=True)

    for i in range(len(lines) - 1, -1, -1):
        if lines[i].rstrip("\r\n") == LEDGER_SEPARATOR:
            head = "".join(lines[:i])
            tail = "".join(lines[i:])
            return f"{head}{entry}\n{tail}"

    if not existing.strip():
        return f"{entry}\n"
    # Only the join point is normalised; earlier text is left as written
    body = existing.rstrip("\r\n")
    return f"{body}\n\n{entry}\n"


def format_entry(story: Story, when: Optional[date] = None) -> str:
    """Fallback entry recorded by the loop after a story is marked done.

    The agent normally appends richer notes during its own turn; this keeps a
    record even when it does not.
    """
    when = when or date.today()
    return (
        f"## {when.isoformat()} - {story.id}\n"
        f"- Implemented {story.title}\n"
        f"- Files changed: See git commit\n"
        f"- **Learnings:**\n"
        f"  - Describe patterns and gotchas discovered here"
    )


def append_progress(path: Path, entry: str) -> None:
    """Insert an entry into the ledger file, creating it if missing.

    Raises:
        PersistenceError: if the ledger cannot be read or written
    """
    try:
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
    except OSError as e:
        raise PersistenceError(path, f"cannot read ledger: {e}") from None

    atomic_write_text(path, insert_entry(existing, entry))
    logger.debug(f"Appended progress entry to {path}")
