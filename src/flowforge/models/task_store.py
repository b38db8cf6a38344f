"""
FlowForge Task Store

This module manages the persisted Task collection with the same CRUD shape as
the flow store, plus completion toggling and creating tasks from flow steps.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from .entities import Flow, Task
from .storage import LocalCollectionStore, record_id
from .settings import DefaultSettings
from ..utils import generate_id, get_timestamp, next_timestamp

# Set up module logger
logger = logging.getLogger(__name__)


class TaskManager:
    """
    Manages Task records stored under a single collection key.
    """
    
    def __init__(
        self,
        store: LocalCollectionStore,
        key: str = DefaultSettings.TASKS_KEY,
        timestamp_provider: Optional[Callable[[], str]] = None
    ) -> None:
        """
        Initialize the task manager.
        
        Args:
            store: Collection store to persist through
            key: Collection key for tasks
            timestamp_provider: Optional function to provide timestamps.
                Defaults to utils.get_timestamp().
        """
        self.store = store
        self.key = key
        self._timestamp_provider = timestamp_provider or get_timestamp
    
    def get_all(self) -> List[Task]:
        """
        Load all tasks as stored.
        
        Legacy records without ``createdAt``/``updatedAt`` are back-filled
        with the current time. The back-fill is not written back until the
        next explicit save.
        
        Records that fail validation are left out of the result but stay in
        storage untouched.

        Returns:
            List of Task objects in stored order
        """
        tasks, _ = self._load()
        return tasks
    
    def get_by_id(self, task_id: str) -> Optional[Task]:
        """Get a task by its ID, or None if not found."""
        for task in self.get_all():
            if task.id == task_id:
                return task
        return None
    
    def upsert(self, task: Union[Task, Dict[str, Any]]) -> List[Task]:
        """
        Save a task and persist the collection.
        
        Accepts a Task or a partial dict of fields:
        - with the id of an existing task, the given fields are merged into
          it and ``updated_at`` is refreshed;
        - with an unknown id, it is prepended as a new task;
        - without an id, an id is generated and it is prepended.
        
        Args:
            task: Task or dict of task fields
            
        Returns:
            The full, persisted collection
        """
        if isinstance(task, Task):
            fields = task.model_dump(exclude={"created_at", "updated_at"})
        else:
            fields = {_snake(k): v for k, v in task.items()}
            fields.pop("created_at", None)
            fields.pop("updated_at", None)
        
        tasks, unreadable = self._load()
        now = self._timestamp_provider()
        task_id = fields.get("id")
        
        for index, existing in enumerate(tasks):
            if task_id and existing.id == task_id:
                merged = {**existing.model_dump(), **fields}
                merged["updated_at"] = next_timestamp(existing.updated_at, now)
                tasks[index] = Task.model_validate(merged)
                logger.info(f"Updated task {task_id}")
                break
        else:
            fields.setdefault("id", None)
            if not fields["id"]:
                fields["id"] = generate_id("task")
            new_task = Task.model_validate({**fields, "created_at": now, "updated_at": now})
            tasks.insert(0, new_task)
            logger.info(f"Created task {new_task.id}")
            task_id = new_task.id

        self._save(tasks, [r for r in unreadable if record_id(r) != task_id])
        return tasks
    
    def delete_by_id(self, task_id: str) -> List[Task]:
        """
        Delete a task by id and persist the remainder. Unknown ids are a no-op.
        
        Returns:
            The remaining collection
        """
        tasks, unreadable = self._load()
        tasks = [task for task in tasks if task.id != task_id]
        self._save(tasks, [r for r in unreadable if record_id(r) != task_id])
        return tasks
    
    def toggle_completion(self, task_id: str) -> List[Task]:
        """
        Flip ``is_completed`` on a task and refresh its ``updated_at``.
        
        Unknown ids leave the collection unchanged.
        
        Returns:
            The full, persisted collection
        """
        tasks, unreadable = self._load()
        now = self._timestamp_provider()
        for task in tasks:
            if task.id == task_id:
                task.is_completed = not task.is_completed
                task.updated_at = next_timestamp(task.updated_at, now)
                logger.info(f"Task {task_id} marked {'complete' if task.is_completed else 'incomplete'}")
                break
        else:
            logger.warning(f"Task not found: {task_id}")
        self._save(tasks, unreadable)
        return tasks
    
    def create_from_step(self, flow: Flow, step_id: str) -> Optional[Task]:
        """
        Create a task from a flow step ("add step as task").
        
        Args:
            flow: Flow containing the step
            step_id: Step to copy
            
        Returns:
            The created Task, or None if the step is not in the flow
        """
        step = flow.get_step(step_id)
        if step is None:
            logger.warning(f"Step {step_id} not found in flow {flow.id}")
            return None
        
        tasks = self.upsert({
            "name": step.name,
            "flow_id": flow.id,
            "flow_name": flow.name,
            "step_id": step.id,
            "step_name": step.name,
            "due_date": step.deadline,
            "notes": step.description,
        })
        return tasks[0]
    
    def _load(self) -> Tuple[List[Task], List[Any]]:
        """
        Read the collection as parsed tasks plus the raw records that could
        not be parsed. Raw records are saved back verbatim, without back-fill.
        """
        now = self._timestamp_provider()
        tasks: List[Task] = []
        unreadable: List[Any] = []
        for record in self.store.read_all(self.key):
            if not isinstance(record, dict):
                logger.warning(f"Keeping non-object task record as stored: {record!r}")
                unreadable.append(record)
                continue
            data = dict(record)
            data["createdAt"] = data.get("createdAt") or data.get("created_at") or now
            data["updatedAt"] = data.get("updatedAt") or data.get("updated_at") or now
            try:
                tasks.append(Task.model_validate(data))
            except ValidationError as e:
                logger.warning(f"Keeping unreadable task record {record_id(record)} as stored: {e}")
                unreadable.append(record)
        return tasks, unreadable

    def _save(self, tasks: List[Task], unreadable: List[Any]) -> bool:
        return self.store.write_all(self.key, [task.to_record() for task in tasks] + unreadable)


def _snake(name: str) -> str:
    """Map a camelCase stored field name to its attribute name."""
    for field_name in Task.model_fields:
        if name in (field_name, to_camel(field_name)):
            return field_name
    return name
