"""
Pytest configuration and shared fixtures for FlowForge tests.
"""

import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List, Optional

from langchain_core.language_models import FakeListChatModel

from flowforge.agents.gateway import AISuggestionGateway
from flowforge.models.config import FlowForgeConfig
from flowforge.models.flow_store import FlowManager
from flowforge.models.storage import InMemoryBackend, LocalCollectionStore
from flowforge.models.task_store import TaskManager
from flowforge.models.workspace import Workspace


class StepClock:
    """Timestamp provider that moves forward one second per call."""
    
    def __init__(self, start: datetime = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)) -> None:
        self.current = start
        self.calls = 0
    
    def __call__(self) -> str:
        stamp = self.current.isoformat()
        self.current += timedelta(seconds=1)
        self.calls += 1
        return stamp


class FrozenClock:
    """Timestamp provider that always returns the same instant."""
    
    def __init__(self, value: str = "2024-05-01T12:00:00+00:00") -> None:
        self.value = value
    
    def __call__(self) -> str:
        return self.value


@pytest.fixture
def backend() -> InMemoryBackend:
    """Empty in-memory key/value backend."""
    return InMemoryBackend()


@pytest.fixture
def store(backend: InMemoryBackend) -> LocalCollectionStore:
    return LocalCollectionStore(backend)


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def flow_manager(store: LocalCollectionStore, clock: StepClock) -> FlowManager:
    """Flow manager with a deterministic clock."""
    return FlowManager(store, timestamp_provider=clock)


@pytest.fixture
def task_manager(store: LocalCollectionStore, clock: StepClock) -> TaskManager:
    """Task manager with a deterministic clock."""
    return TaskManager(store, timestamp_provider=clock)


@pytest.fixture
def make_gateway() -> Callable[[List[str]], AISuggestionGateway]:
    """Build a gateway whose chat model answers with the given texts in order."""
    def factory(responses: List[str]) -> AISuggestionGateway:
        return AISuggestionGateway(FakeListChatModel(responses=responses))
    return factory


@pytest.fixture
def config(tmp_path: Path) -> FlowForgeConfig:
    """Configuration pointing at a temporary data directory."""
    return FlowForgeConfig(data_dir=tmp_path / "data")


@pytest.fixture
def make_workspace(config: FlowForgeConfig, backend: InMemoryBackend, make_gateway) -> Callable[..., Workspace]:
    """Build a workspace over the in-memory backend with onboarding already done."""
    def factory(responses: Optional[List[str]] = None) -> Workspace:
        ws = Workspace(config, backend=backend, gateway=make_gateway(responses or ["{}"]))
        ws.app_state.mark_onboarding_completed()
        return ws
    return factory


@pytest.fixture
def workspace(make_workspace) -> Workspace:
    return make_workspace()


@pytest.fixture
def sample_discovery_plan() -> dict:
    """A valid detailed discovery plan response."""
    return {
        "suggestedGoals": ["Build a creative practice", "Grow as a teacher"],
        "projectBreakdowns": [
            {
                "name": "Weekly sketch journal",
                "detailedRationale": "You feel energized when drawing. A weekly habit builds skill.",
                "keySteps": ["Buy a sketchbook", "Pick a theme", "Draw every Sunday"],
                "expectedOutcome": "A filled sketchbook and a steady habit.",
            }
        ],
    }
