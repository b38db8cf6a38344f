"""
Tests for TaskManager persistence.
"""

import json

from flowforge.models.entities import Flow
from flowforge.models.storage import InMemoryBackend, LocalCollectionStore
from flowforge.models.task_store import TaskManager
from flowforge.utils import parse_timestamp


class TestTaskManager:
    """Test cases for TaskManager."""

    def test_add_from_partial_dict(self, task_manager: TaskManager) -> None:
        """Test that a dict without id becomes a new, prepended task."""
        task_manager.upsert({"name": "First"})
        tasks = task_manager.upsert({"name": "Second", "dueDate": "2024-06-01"})
        
        assert [t.name for t in tasks] == ["Second", "First"]
        assert tasks[0].id.startswith("task-")
        assert tasks[0].due_date == "2024-06-01"
        assert tasks[0].is_completed is False

    def test_upsert_existing_merges_fields(self, task_manager: TaskManager) -> None:
        """Test partial updates by id keep other fields."""
        created = task_manager.upsert({"name": "Write", "notes": "draft only"})[0]
        tasks = task_manager.upsert({"id": created.id, "name": "Write post"})
        
        assert len(tasks) == 1
        assert tasks[0].name == "Write post"
        assert tasks[0].notes == "draft only"
        assert tasks[0].created_at == created.created_at
        assert parse_timestamp(tasks[0].updated_at) > parse_timestamp(created.updated_at)

    def test_upsert_unknown_id_is_inserted(self, task_manager: TaskManager) -> None:
        """Test that a given but unknown id is kept for the new task."""
        tasks = task_manager.upsert({"id": "task-custom", "name": "Imported"})
        assert tasks[0].id == "task-custom"

    def test_toggle_completion(self, task_manager: TaskManager) -> None:
        """Test toggling twice returns to incomplete with increasing updatedAt."""
        task = task_manager.upsert({"name": "Call mom"})[0]
        
        once = task_manager.toggle_completion(task.id)[0]
        twice = task_manager.toggle_completion(task.id)[0]
        
        assert once.is_completed is True
        assert twice.is_completed is False
        assert parse_timestamp(task.updated_at) < parse_timestamp(once.updated_at) < parse_timestamp(twice.updated_at)

    def test_toggle_unknown_id_changes_nothing(self, task_manager: TaskManager) -> None:
        """Test toggling a missing task leaves the collection as is."""
        task_manager.upsert({"name": "Keep"})
        tasks = task_manager.toggle_completion("missing")
        assert [t.is_completed for t in tasks] == [False]

    def test_delete(self, task_manager: TaskManager) -> None:
        """Test deleting tasks."""
        a = task_manager.upsert({"name": "A"})[0]
        task_manager.upsert({"name": "B"})
        
        assert [t.name for t in task_manager.delete_by_id(a.id)] == ["B"]
        assert [t.name for t in task_manager.delete_by_id("missing")] == ["B"]

    def test_legacy_records_are_backfilled(self, clock) -> None:
        """Test that records without timestamps load with the current time."""
        legacy = [{"id": "task-old", "name": "Old", "isCompleted": True}]
        backend = InMemoryBackend({"userTasks_v1": json.dumps(legacy)})
        manager = TaskManager(LocalCollectionStore(backend), timestamp_provider=clock)
        
        task = manager.get_by_id("task-old")
        
        assert task.is_completed is True
        assert task.created_at == task.updated_at == "2024-05-01T12:00:00+00:00"
        # Not written back by a read
        assert json.loads(backend.get_item("userTasks_v1")) == legacy

    def test_invalid_records_survive_other_writes(self, clock) -> None:
        """Test that unreadable task records are written back unchanged."""
        nameless = {"id": "task-legacy", "isCompleted": False}
        stored = [nameless, "not an object"]
        backend = InMemoryBackend({"userTasks_v1": json.dumps(stored)})
        manager = TaskManager(LocalCollectionStore(backend), timestamp_provider=clock)

        tasks = manager.upsert({"name": "Buy milk"})
        manager.toggle_completion(tasks[0].id)

        records = json.loads(backend.get_item("userTasks_v1"))
        assert [r["name"] for r in records[:1]] == ["Buy milk"]
        assert records[1:] == stored
        assert [t.name for t in manager.get_all()] == ["Buy milk"]

    def test_create_from_step(self, task_manager: TaskManager) -> None:
        """Test copying a flow step into the task list."""
        flow = Flow(id="flow-1", name="Launch blog", user_id="u")
        step = flow.add_step("Pick a theme", description="Something minimal", deadline="2024-07-01")
        
        task = task_manager.create_from_step(flow, step.id)
        
        assert task.name == "Pick a theme"
        assert task.flow_id == "flow-1"
        assert task.flow_name == "Launch blog"
        assert task.step_id == step.id
        assert task.step_name == "Pick a theme"
        assert task.due_date == "2024-07-01"
        assert task.notes == "Something minimal"
        assert task_manager.get_all()[0].id == task.id
        assert task_manager.create_from_step(flow, "missing") is None
