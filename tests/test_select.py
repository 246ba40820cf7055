"""Tests for ralph.prd.select module."""

from ralph.prd.models import Story
from ralph.prd.select import pending_stories, priority_rank, select_next_story


def make(story_id, priority=None, passes=False):
    data = {"id": story_id, "title": f"Story {story_id}"}
    if priority is not None:
        data["priority"] = priority
    data["passes"] = passes
    return Story.from_dict(data)


class TestPriorityRank:
    """Test priority_rank function."""

    def test_known_priorities(self):
        assert priority_rank("high") == 0
        assert priority_rank("medium") == 1
        assert priority_rank("low") == 2

    def test_unknown_priority_ranks_as_low(self):
        assert priority_rank("urgent") == priority_rank("low")

    def test_missing_priority_ranks_as_low(self):
        assert priority_rank(None) == priority_rank("low")


class TestSelectNextStory:
    """Test select_next_story function."""

    def test_high_priority_first_regardless_of_order(self):
        stories = [make("a", "low"), make("b", "high"), make("c", "medium")]
        assert select_next_story(stories).id == "b"

    def test_ties_keep_input_order(self):
        stories = [make("a", "medium"), make("b", "medium"), make("c", "low")]
        assert select_next_story(stories).id == "a"

    def test_missing_priority_is_low(self):
        stories = [make("a"), make("b", "low"), make("c", "medium")]
        assert select_next_story(stories).id == "c"

    def test_unknown_priority_ties_with_low_in_file_order(self):
        stories = [make("a", "whenever"), make("b", "low")]
        assert select_next_story(stories).id == "a"

    def test_skips_passed_stories(self):
        stories = [make("a", "high", passes=True), make("b", "low")]
        assert select_next_story(stories).id == "b"

    def test_returns_none_when_all_pass(self):
        stories = [make("a", passes=True), make("b", "high", passes=True)]
        assert select_next_story(stories) is None

    def test_returns_none_for_empty_list(self):
        assert select_next_story([]) is None

    def test_repeated_selection_is_stable(self):
        stories = [make("a", "low"), make("b", "high"), make("c", "high")]
        picks = {select_next_story(stories).id for _ in range(5)}
        assert picks == {"b"}

    def test_marking_selected_story_moves_on(self):
        stories = [make("a", "low"), make("b", "high"), make("c", "high")]
        first = select_next_story(stories)
        first.passes = True
        second = select_next_story(stories)
        assert second.id == "c"
        second.passes = True
        assert select_next_story(stories).id == "a"

    def test_does_not_reorder_input(self):
        stories = [make("a", "low"), make("b", "high")]
        select_next_story(stories)
        assert [s.id for s in stories] == ["a", "b"]


class TestPendingStories:
    """Test pending_stories function."""

    def test_sorted_and_filtered(self):
        stories = [
            make("a", "low"),
            make("b", "high", passes=True),
            make("c", "medium"),
            make("d", "high"),
        ]
        assert [s.id for s in pending_stories(stories)] == ["d", "c", "a"]
