"""
FlowForge Workspace

Wires a storage backend, the entity managers and the AI gateway together for
one session.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

from .app_state import AppStateStore
from .auth import UserProfile, get_current_user
from .config import FlowForgeConfig
from .flow_store import FlowManager
from .storage import JsonFileBackend, LocalCollectionStore, StorageBackend
from .task_store import TaskManager

if TYPE_CHECKING:
    from ..agents.gateway import AISuggestionGateway


class Workspace:
    """
    Everything a command needs: managers over one backend, the current user
    and a lazily created AI gateway.
    """
    
    def __init__(
        self,
        config: FlowForgeConfig,
        backend: Optional[StorageBackend] = None,
        gateway: Optional["AISuggestionGateway"] = None
    ) -> None:
        self.config = config
        self.backend = backend or JsonFileBackend(Path(config.data_dir))
        self.store = LocalCollectionStore(self.backend)
        self.flows = FlowManager(self.store)
        self.tasks = TaskManager(self.store)
        self.app_state = AppStateStore(self.backend)
        self._gateway = gateway
    
    @property
    def user(self) -> UserProfile:
        """The identity for this session."""
        return get_current_user(self.config)
    
    @property
    def gateway(self) -> "AISuggestionGateway":
        """Lazy load the AI gateway."""
        if self._gateway is None:
            from ..agents.gateway import AISuggestionGateway
            self._gateway = AISuggestionGateway.from_config(self.config)
        return self._gateway
