"""
Priority selection.

Pure functions over a story sequence. Ordering is a stable sort on priority
rank, so stories of equal priority are worked in file order.
"""

from typing import Iterable, Optional

from ralph.lib.constants import DEFAULT_PRIORITY, PRIORITY_ORDER
from ralph.prd.models import Story


def priority_rank(priority: Optional[str]) -> int:
    """Rank a priority value; unknown or missing values rank as low."""
    return PRIORITY_ORDER.get(priority, PRIORITY_ORDER[DEFAULT_PRIORITY])


def pending_stories(stories: Iterable[Story]) -> list[Story]:
    """Unfinished stories, highest priority first."""
    remaining = [s for s in stories if not s.passes]
    return sorted(remaining, key=lambda s: priority_rank(s.priority))


def select_next_story(stories: Iterable[Story]) -> Optional[Story]:
    """Return the next story to work on, or None when everything passes."""
    remaining = pending_stories(stories)
    return remaining[0] if remaining else None
