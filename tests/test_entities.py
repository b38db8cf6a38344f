"""
Tests for the Flow, Step and Task models.
"""

import re
import pytest
from pydantic import ValidationError

from flowforge.models.entities import Flow, Step, Task
from flowforge.utils import generate_id


def make_flow(*names: str) -> Flow:
    flow = Flow(id="flow-1", name="Launch blog", user_id="dummy-user-uid-123")
    for name in names:
        flow.add_step(name, timestamp="2024-05-01T12:00:00+00:00")
    return flow


class TestStep:
    """Test cases for the Step model."""

    def test_defaults(self) -> None:
        """Test that a new step starts as todo with a generated id."""
        step = Step(name="Write outline")
        assert step.status == "todo"
        assert re.fullmatch(r"step-\d+-[0-9a-z]{7}", step.id)

    def test_name_is_stripped_and_required(self) -> None:
        """Test step name validation."""
        assert Step(name="  Draft  ").name == "Draft"
        with pytest.raises(ValidationError):
            Step(name="   ")

    def test_invalid_status_rejected(self) -> None:
        """Test that only todo, inprogress and done are accepted."""
        with pytest.raises(ValidationError):
            Step(name="Draft", status="blocked")


class TestFlowRecords:
    """Test cases for the stored record shape."""

    def test_to_record_uses_camel_case(self) -> None:
        """Test that records use the stored field names and omit empty values."""
        record = make_flow("Outline").to_record()
        
        assert set(record) == {"id", "name", "userId", "steps", "stepsOrder", "createdAt", "updatedAt"}
        assert set(record["steps"][0]) == {"id", "name", "status", "createdAt", "updatedAt"}

    def test_parse_stored_record(self) -> None:
        """Test loading a record written with camelCase keys."""
        flow = Flow.model_validate({
            "id": "flow-9",
            "name": "Trip",
            "userId": "u",
            "steps": [{"id": "s1", "name": "Book", "status": "done",
                       "createdAt": "2024-01-01T00:00:00Z", "updatedAt": "2024-01-01T00:00:00Z"}],
            "stepsOrder": ["s1"],
            "createdAt": "2024-01-01T00:00:00Z",
            "updatedAt": "2024-01-01T00:00:00Z",
            "suggestedResources": {"youtubeVideos": [{"title": "Packing", "url": "https://youtu.be/x"}]},
        })
        assert flow.user_id == "u"
        assert flow.steps[0].status == "done"
        assert flow.suggested_resources.youtube_videos[0].title == "Packing"

    def test_steps_order_must_match_steps(self) -> None:
        """Test the order/steps set-equality invariant on load."""
        step = Step(id="s1", name="Book")
        with pytest.raises(ValidationError):
            Flow(name="Trip", user_id="u", steps=[step], steps_order=[])
        with pytest.raises(ValidationError):
            Flow(name="Trip", user_id="u", steps=[step], steps_order=["s1", "s2"])
        with pytest.raises(ValidationError):
            Flow(name="Trip", user_id="u", steps=[step], steps_order=["s1", "s1"])


class TestFlowStepOperations:
    """Test cases for the Flow mutation helpers."""

    def test_add_step_appends_to_order(self) -> None:
        """Test that new steps go to the end of the display order."""
        flow = make_flow("Outline", "Draft")
        step = flow.add_step("Publish", timestamp="2024-05-02T00:00:00+00:00", priority="High")
        
        assert flow.steps_order[-1] == step.id
        assert [s.name for s in flow.ordered_steps()] == ["Outline", "Draft", "Publish"]
        assert step.priority == "High"
        assert flow.updated_at == "2024-05-02T00:00:00+00:00"

    def test_remove_step_updates_both_collections(self) -> None:
        """Test removing a step from steps and stepsOrder together."""
        flow = make_flow("Outline", "Draft")
        draft_id = flow.steps_order[1]
        
        removed = flow.remove_step(draft_id)
        
        assert removed.name == "Draft"
        assert flow.steps_order == [flow.steps[0].id]
        assert flow.get_step(draft_id) is None
        assert flow.remove_step("missing") is None

    def test_update_step(self) -> None:
        """Test editing step fields and refreshing its timestamp."""
        flow = make_flow("Outline")
        step_id = flow.steps_order[0]
        
        updated = flow.update_step(step_id, timestamp="2024-06-01T00:00:00+00:00",
                                   description="One page", difficulty="Easy")
        
        assert updated.description == "One page"
        assert updated.difficulty == "Easy"
        assert updated.updated_at == "2024-06-01T00:00:00+00:00"
        assert updated.created_at == "2024-05-01T12:00:00+00:00"
        assert flow.update_step("missing", name="x") is None

    def test_update_step_protects_identity(self) -> None:
        """Test that ids and creation times cannot be edited."""
        flow = make_flow("Outline")
        with pytest.raises(ValueError):
            flow.update_step(flow.steps_order[0], id="other")

    def test_set_step_status(self) -> None:
        """Test changing a step's status."""
        flow = make_flow("Outline")
        step = flow.set_step_status(flow.steps_order[0], "inprogress")
        assert step.status == "inprogress"

    def test_reorder_requires_permutation(self) -> None:
        """Test that reordering cannot add or drop ids."""
        flow = make_flow("A", "B", "C")
        a, b, c = flow.steps_order
        
        flow.reorder_steps([c, a, b])
        assert [s.name for s in flow.ordered_steps()] == ["C", "A", "B"]
        
        with pytest.raises(ValueError):
            flow.reorder_steps([a, b])
        with pytest.raises(ValueError):
            flow.reorder_steps([a, b, c, "extra"])

    def test_move_step_clamps_index(self) -> None:
        """Test drag-and-drop style moves."""
        flow = make_flow("A", "B", "C")
        a, b, c = flow.steps_order
        
        assert flow.move_step(a, 99) is True
        assert flow.steps_order == [b, c, a]
        assert flow.move_step(a, -5) is True
        assert flow.steps_order == [a, b, c]
        assert flow.move_step(c, 1) is True
        assert flow.steps_order == [a, c, b]
        assert flow.move_step("missing", 0) is False


class TestTask:
    """Test cases for the Task model."""

    def test_defaults_and_record(self) -> None:
        """Test a minimal task and its stored shape."""
        task = Task(name="Buy stamps")
        record = task.to_record()
        
        assert task.is_completed is False
        assert task.id.startswith("task-")
        assert record["isCompleted"] is False
        assert "flowId" not in record


def test_generate_id_format() -> None:
    """Test prefix-epochms-random ids."""
    identifier = generate_id("flow")
    prefix, millis, suffix = identifier.split("-")
    assert prefix == "flow"
    assert millis.isdigit() and len(millis) >= 13
    assert re.fullmatch(r"[0-9a-z]{7}", suffix)
