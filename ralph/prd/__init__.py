"""
Task list (prd.json) handling: models, persistence and story selection.
"""

from ralph.prd.models import Story, TaskList
from ralph.prd.store import load_prd, save_prd, dump_prd
from ralph.prd.select import priority_rank, pending_stories, select_next_story

__all__ = [
    "Story",
    "TaskList",
    "load_prd",
    "save_prd",
    "dump_prd",
    "priority_rank",
    "pending_stories",
    "select_next_story",
]
