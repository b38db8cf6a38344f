"""
FlowForge Data Models

This package contains Pydantic data models for flows, steps, tasks and
templates, plus the storage, configuration and identity layers.
"""

from .app_state import AppStateStore
from .auth import AuthenticationRequiredError, UserProfile, get_current_user
from .config import (
    FlowForgeConfig, apply_environment_overrides, create_default_config,
    get_config_dir, get_config_path, get_default_data_dir, resolve_api_key,
)
from .config_manager import ConfigManager
from .entities import (
    Flow, FlowSuggestedResources, Step, SuggestedResourceItem, SuggestedWebsiteItem,
    Task, Template, STEP_STATUSES,
)
from .flow_factory import create_flow, flow_from_step_names, instantiate_template
from .flow_store import FlowManager
from .settings import DefaultSettings, ValidationSettings, ONBOARDING_TOUR
from .storage import InMemoryBackend, JsonFileBackend, LocalCollectionStore, StorageBackend
from .task_store import TaskManager
from .templates import PREBUILT_TEMPLATES, get_template, list_templates
from .workspace import Workspace

__all__ = [
    # Configuration
    "FlowForgeConfig",
    "ConfigManager",
    "get_config_path",
    "get_config_dir",
    "get_default_data_dir",
    "create_default_config",
    "apply_environment_overrides",
    "resolve_api_key",
    
    # Settings
    "DefaultSettings",
    "ValidationSettings",
    "ONBOARDING_TOUR",
    
    # Entities
    "Step",
    "Flow",
    "Task",
    "Template",
    "SuggestedResourceItem",
    "SuggestedWebsiteItem",
    "FlowSuggestedResources",
    "STEP_STATUSES",
    
    # Storage and managers
    "StorageBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "LocalCollectionStore",
    "FlowManager",
    "TaskManager",
    "AppStateStore",
    "Workspace",
    
    # Flow construction
    "create_flow",
    "flow_from_step_names",
    "instantiate_template",
    "PREBUILT_TEMPLATES",
    "list_templates",
    "get_template",
    
    # Identity
    "UserProfile",
    "AuthenticationRequiredError",
    "get_current_user",
]
