"""
FlowForge Flow Store

This module manages the persisted Flow collection: upsert-by-id semantics on
top of the collection store, plus step-level operations that load, mutate and
write a flow back in a single persisted write.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from pydantic import ValidationError

from .entities import Flow, FlowSuggestedResources, Step, StepStatus
from .settings import DefaultSettings
from .storage import LocalCollectionStore, record_id
from ..utils import get_timestamp, next_timestamp

# Set up module logger
logger = logging.getLogger(__name__)


class FlowManager:
    """
    Manages Flow records stored under a single collection key.
    
    Newly created flows are prepended so the collection reads
    most-recently-created first. Existing flows keep their position.
    """
    
    def __init__(
        self,
        store: LocalCollectionStore,
        key: str = DefaultSettings.FLOWS_KEY,
        timestamp_provider: Optional[Callable[[], str]] = None
    ) -> None:
        """
        Initialize the flow manager.
        
        Args:
            store: Collection store to persist through
            key: Collection key for flows
            timestamp_provider: Optional function to provide timestamps.
                Defaults to utils.get_timestamp().
        """
        self.store = store
        self.key = key
        self._timestamp_provider = timestamp_provider or get_timestamp
    
    def get_all(self) -> List[Flow]:
        """
        Load all flows as stored.

        Records that fail validation are left out of the result but stay in
        storage untouched; see ``_load``.

        Returns:
            List of Flow objects in stored order
        """
        flows, _ = self._load()
        return flows
    
    def get_by_id(self, flow_id: str) -> Optional[Flow]:
        """Get a flow by its ID, or None if not found."""
        for flow in self.get_all():
            if flow.id == flow_id:
                return flow
        return None
    
    def upsert(self, flow: Flow) -> List[Flow]:
        """
        Insert or replace a flow and persist the collection.
        
        An existing flow with the same id is replaced in place with a fresh
        ``updated_at``; otherwise the flow is prepended with
        ``created_at = updated_at = now``.
        
        Args:
            flow: Flow to save
            
        Returns:
            The full, persisted collection
        """
        flows, unreadable = self._load()
        now = self._timestamp_provider()

        for index, existing in enumerate(flows):
            if existing.id == flow.id:
                stamp = next_timestamp(existing.updated_at, now)
                flows[index] = flow.model_copy(update={"updated_at": stamp}, deep=True)
                logger.info(f"Updated flow {flow.id}")
                break
        else:
            flows.insert(0, flow.model_copy(update={"created_at": now, "updated_at": now}, deep=True))
            logger.info(f"Created flow {flow.id}")

        # A valid save supersedes an unreadable record with the same id
        self._save(flows, [r for r in unreadable if record_id(r) != flow.id])
        return flows
    
    def delete_by_id(self, flow_id: str) -> List[Flow]:
        """
        Delete a flow by id and persist the remainder.
        
        Deleting an unknown id is a no-op. Tasks referencing the flow are
        left untouched.
        
        Returns:
            The remaining collection
        """
        flows, unreadable = self._load()
        flows = [flow for flow in flows if flow.id != flow_id]
        self._save(flows, [r for r in unreadable if record_id(r) != flow_id])
        return flows

    def save_all(self, flows: List[Flow]) -> bool:
        """Overwrite the valid part of the collection. Unreadable records are kept."""
        _, unreadable = self._load()
        return self._save(flows, unreadable)
    
    # ------------------------------------------------------------------
    # Step operations
    # ------------------------------------------------------------------
    
    def add_step(self, flow_id: str, name: str, **fields: Any) -> Optional[Flow]:
        """
        Append a new step to a flow and persist it.
        
        Returns:
            The saved Flow, or None if the flow does not exist
        """
        return self._mutate(flow_id, lambda flow, now: flow.add_step(name, timestamp=now, **fields))
    
    def update_step(self, flow_id: str, step_id: str, **fields: Any) -> Optional[Flow]:
        """Update fields of a step. Returns None if flow or step is missing."""
        return self._mutate(flow_id, lambda flow, now: flow.update_step(step_id, timestamp=now, **fields))
    
    def set_step_status(self, flow_id: str, step_id: str, status: StepStatus) -> Optional[Flow]:
        """Change a step's status. Returns None if flow or step is missing."""
        return self._mutate(flow_id, lambda flow, now: flow.set_step_status(step_id, status, timestamp=now))
    
    def delete_step(self, flow_id: str, step_id: str) -> Optional[Flow]:
        """
        Remove a step from ``steps`` and ``stepsOrder`` in one write.
        
        Returns:
            The saved Flow, or None if flow or step is missing
        """
        return self._mutate(flow_id, lambda flow, now: flow.remove_step(step_id, timestamp=now))
    
    def move_step(self, flow_id: str, step_id: str, new_index: int) -> Optional[Flow]:
        """Move a step to a new display position."""
        return self._mutate(flow_id, lambda flow, now: flow.move_step(step_id, new_index, timestamp=now))
    
    def reorder_steps(self, flow_id: str, new_order: List[str]) -> Optional[Flow]:
        """Replace a flow's display order with a permutation of it."""
        def apply(flow: Flow, now: str) -> bool:
            flow.reorder_steps(new_order, timestamp=now)
            return True
        return self._mutate(flow_id, apply)
    
    def set_suggested_resources(self, flow_id: str, resources: FlowSuggestedResources) -> Optional[Flow]:
        """Attach AI-suggested resources to a flow."""
        def apply(flow: Flow, now: str) -> bool:
            flow.suggested_resources = resources
            flow.updated_at = now
            return True
        return self._mutate(flow_id, apply)
    
    def set_description(self, flow_id: str, description: str) -> Optional[Flow]:
        """Replace a flow's description."""
        def apply(flow: Flow, now: str) -> bool:
            flow.description = description
            flow.updated_at = now
            return True
        return self._mutate(flow_id, apply)
    
    def _mutate(self, flow_id: str, change: Callable[[Flow, str], Any]) -> Optional[Flow]:
        """
        Load a flow, apply ``change`` and upsert it.
        
        ``change`` returns a falsy value when its target was not found, in
        which case nothing is written.
        """
        flow = self.get_by_id(flow_id)
        if flow is None:
            logger.warning(f"Flow not found: {flow_id}")
            return None
        
        now = self._timestamp_provider()
        if not change(flow, now):
            logger.warning(f"Step operation on flow {flow_id} found no matching step")
            return None
        
        for saved in self.upsert(flow):
            if saved.id == flow_id:
                return saved
        return None
    
    def _load(self) -> Tuple[List[Flow], List[Any]]:
        """
        Read the collection, splitting it into parsed flows and the raw
        records that failed validation.

        Raw records are written back verbatim by ``_save``, after the valid
        flows, so an unrelated save never erases them.
        """
        flows: List[Flow] = []
        unreadable: List[Any] = []
        for record in self.store.read_all(self.key):
            try:
                flows.append(Flow.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Keeping unreadable flow record {record_id(record)} as stored: {e}")
                unreadable.append(record)
        return flows, unreadable

    def _save(self, flows: List[Flow], unreadable: List[Any]) -> bool:
        return self.store.write_all(self.key, [flow.to_record() for flow in flows] + unreadable)
