"""
Data models for the task list.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from ralph.lib.constants import DEFAULT_PRIORITY

FreeText = Union[str, list[str]]


@dataclass
class Story:
    """One unit of requested work.

    `raw` keeps the story exactly as it was read so that keys the loop does not
    understand, and the order they appeared in, survive a write-back.
    """
    id: str
    title: str = ""
    description: Optional[FreeText] = None
    acceptance: Optional[FreeText] = None
    priority: str = DEFAULT_PRIORITY
    passes: bool = False
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "Story":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description"),
            acceptance=data.get("acceptance"),
            priority=data.get("priority") or DEFAULT_PRIORITY,
            passes=data.get("passes", False),
            raw=dict(data),
        )

    def to_dict(self) -> dict:
        if self.raw:
            # Only `passes` is ever mutated by the loop
            data = dict(self.raw)
            if self.passes or "passes" in data:
                data["passes"] = self.passes
            return data

        data = {"id": self.id, "title": self.title}
        if self.description is not None:
            data["description"] = self.description
        if self.acceptance is not None:
            data["acceptance"] = self.acceptance
        data["priority"] = self.priority
        data["passes"] = self.passes
        return data

    @property
    def commit_message(self) -> str:
        return f"feat({self.id}): {self.title}"


@dataclass
class TaskList:
    """The full ordered set of stories plus project metadata."""
    name: Optional[str] = None
    stories: list[Story] = field(default_factory=list)
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "TaskList":
        return cls(
            name=data.get("name"),
            stories=[Story.from_dict(s) for s in data.get("stories", [])],
            raw=dict(data),
        )

    def to_dict(self) -> dict:
        data = dict(self.raw)
        if self.name is not None:
            data["name"] = self.name
        if self.stories or "stories" in data:
            data["stories"] = [s.to_dict() for s in self.stories]
        return data

    def get_story(self, story_id: str) -> Optional[Story]:
        """Return the first story with this id (ids are assumed unique)."""
        for story in self.stories:
            if story.id == story_id:
                return story
        return None
