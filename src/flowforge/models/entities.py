"""
FlowForge Entity Models

This module defines the data structures for flows, steps, tasks and templates.

Records are persisted with camelCase field names (``stepsOrder``,
``isCompleted``, ``createdAt`` ...), while the Python attributes are snake_case.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..utils import generate_id, get_timestamp


StepStatus = Literal["todo", "inprogress", "done"]
Priority = Literal["Low", "Medium", "High"]
Difficulty = Literal["Easy", "Medium", "Hard"]

STEP_STATUSES = ("todo", "inprogress", "done")


class StoredModel(BaseModel):
    """Base for models stored as camelCase JSON records."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
    
    def to_record(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict using the stored field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class SuggestedResourceItem(StoredModel):
    """A video or article suggestion."""
    title: str
    url: str


class SuggestedWebsiteItem(StoredModel):
    """A website or tool suggestion."""
    name: str
    url: str


class FlowSuggestedResources(StoredModel):
    """
    Resources suggested for a flow, a project idea or a problem.
    """
    youtube_videos: Optional[List[SuggestedResourceItem]] = None
    articles: Optional[List[SuggestedResourceItem]] = None
    websites: Optional[List[SuggestedWebsiteItem]] = None


class Step(StoredModel):
    """
    One unit of work inside a Flow.
    """
    id: str = Field(default_factory=lambda: generate_id("step"), description="Unique step identifier")
    name: str = Field(description="Name of the step")
    description: Optional[str] = Field(default=None)
    status: StepStatus = Field(default="todo")
    deadline: Optional[str] = Field(default=None, description="ISO-8601 deadline")
    estimated_time: Optional[str] = Field(default=None, description="Free text estimate, e.g. '2 hours'")
    priority: Optional[Priority] = Field(default=None)
    difficulty: Optional[Difficulty] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    created_at: str = Field(default_factory=get_timestamp)
    updated_at: str = Field(default_factory=get_timestamp)
    
    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that step name is not empty."""
        if not v.strip():
            raise ValueError("Step name cannot be empty")
        return v.strip()


def check_steps_order(steps: List[Step], steps_order: List[str]) -> None:
    """
    Check that ``steps_order`` references every step exactly once.
    
    Raises:
        ValueError: If the order and the step collection disagree
    """
    step_ids = [step.id for step in steps]
    if len(set(step_ids)) != len(step_ids):
        raise ValueError("Duplicate step ids in steps")
    if len(set(steps_order)) != len(steps_order):
        raise ValueError("Duplicate step ids in stepsOrder")
    if set(step_ids) != set(steps_order):
        missing = set(step_ids) - set(steps_order)
        dangling = set(steps_order) - set(step_ids)
        raise ValueError(
            f"stepsOrder does not match steps (unordered: {sorted(missing)}, dangling: {sorted(dangling)})"
        )


class Flow(StoredModel):
    """
    A named, ordered collection of Steps.
    
    ``steps_order`` defines the display order and must always be set-equal to
    the ids in ``steps``. Every mutation helper keeps that invariant and
    refreshes ``updated_at``.
    """
    id: str = Field(default_factory=lambda: generate_id("flow"), description="Unique flow identifier")
    name: str = Field(description="Human-readable flow name")
    description: Optional[str] = Field(default=None)
    user_id: str = Field(description="Owner reference")
    steps: List[Step] = Field(default_factory=list)
    steps_order: List[str] = Field(default_factory=list)
    is_template: Optional[bool] = Field(default=None)
    template_category: Optional[str] = Field(default=None)
    suggested_resources: Optional[FlowSuggestedResources] = Field(default=None)
    created_at: str = Field(default_factory=get_timestamp)
    updated_at: str = Field(default_factory=get_timestamp)
    
    @model_validator(mode="after")
    def validate_steps_order(self) -> "Flow":
        """Validate the stepsOrder/steps set-equality invariant."""
        check_steps_order(self.steps, self.steps_order)
        return self
    
    def get_step(self, step_id: str) -> Optional[Step]:
        """Get a step by its ID."""
        for step in self.steps:
            if step.id == step_id:
                return step
        return None
    
    def ordered_steps(self) -> List[Step]:
        """Get steps in display order."""
        by_id = {step.id: step for step in self.steps}
        return [by_id[step_id] for step_id in self.steps_order]
    
    def add_step(self, name: str, timestamp: Optional[str] = None, **fields: Any) -> Step:
        """
        Append a new step to the flow.
        
        Args:
            name: Step name
            timestamp: Creation time, defaults to now
            **fields: Any other Step field (description, priority, ...)
            
        Returns:
            The created Step
        """
        now = timestamp or get_timestamp()
        step = Step(name=name, created_at=now, updated_at=now, **fields)
        if self.get_step(step.id) is not None:
            raise ValueError(f"Step id already present in flow: {step.id}")
        self.steps = [*self.steps, step]
        self.steps_order = [*self.steps_order, step.id]
        self.updated_at = now
        return step
    
    def remove_step(self, step_id: str, timestamp: Optional[str] = None) -> Optional[Step]:
        """
        Remove a step from both the step collection and the order.
        
        Returns:
            The removed Step, or None if no step has that id
        """
        step = self.get_step(step_id)
        if step is None:
            return None
        self.steps = [s for s in self.steps if s.id != step_id]
        self.steps_order = [sid for sid in self.steps_order if sid != step_id]
        self.updated_at = timestamp or get_timestamp()
        return step
    
    def update_step(self, step_id: str, timestamp: Optional[str] = None, **fields: Any) -> Optional[Step]:
        """
        Update fields of a step in place.
        
        ``id`` and ``created_at`` cannot be changed this way.
        
        Returns:
            The updated Step, or None if no step has that id
        """
        step = self.get_step(step_id)
        if step is None:
            return None
        protected = {"id", "created_at", "updated_at"} & fields.keys()
        if protected:
            raise ValueError(f"Cannot update protected step fields: {sorted(protected)}")
        now = timestamp or get_timestamp()
        updated = Step.model_validate({**step.model_dump(), **fields, "updated_at": now})
        self.steps = [updated if s.id == step_id else s for s in self.steps]
        self.updated_at = now
        return updated
    
    def set_step_status(self, step_id: str, status: StepStatus, timestamp: Optional[str] = None) -> Optional[Step]:
        """Change the status of a step."""
        return self.update_step(step_id, timestamp=timestamp, status=status)
    
    def reorder_steps(self, new_order: List[str], timestamp: Optional[str] = None) -> None:
        """
        Replace the display order with a permutation of it.
        
        Raises:
            ValueError: If ``new_order`` is not a permutation of the current order
        """
        if sorted(new_order) != sorted(self.steps_order):
            raise ValueError("New order must be a permutation of the existing stepsOrder")
        self.steps_order = list(new_order)
        self.updated_at = timestamp or get_timestamp()
    
    def move_step(self, step_id: str, new_index: int, timestamp: Optional[str] = None) -> bool:
        """
        Move one step to a new position (drag-and-drop).
        
        The index is clamped to the valid range.
        
        Returns:
            True if the step was found, False otherwise
        """
        if step_id not in self.steps_order:
            return False
        order = [sid for sid in self.steps_order if sid != step_id]
        new_index = max(0, min(new_index, len(order)))
        order.insert(new_index, step_id)
        self.reorder_steps(order, timestamp=timestamp)
        return True


class Task(StoredModel):
    """
    A to-do item, optionally linked to a Flow/Step for display.
    """
    id: str = Field(default_factory=lambda: generate_id("task"), description="Unique task identifier")
    name: str = Field(description="Task name")
    is_completed: bool = Field(default=False)
    flow_id: Optional[str] = Field(default=None)
    flow_name: Optional[str] = Field(default=None)
    step_id: Optional[str] = Field(default=None)
    step_name: Optional[str] = Field(default=None)
    due_date: Optional[str] = Field(default=None, description="ISO-8601 due date")
    notes: Optional[str] = Field(default=None)
    created_at: str = Field(default_factory=get_timestamp)
    updated_at: str = Field(default_factory=get_timestamp)


class Template(StoredModel):
    """
    An immutable built-in seed pattern for new Flows.
    """
    model_config = ConfigDict(frozen=True)
    
    id: str
    name: str
    description: Optional[str] = None
    category: str
    steps: List[Step]
    steps_order: List[str]
    is_template: bool = True
    
    @model_validator(mode="after")
    def validate_steps_order(self) -> "Template":
        """Validate the stepsOrder/steps set-equality invariant."""
        check_steps_order(self.steps, self.steps_order)
        return self
