"""
FlowForge Configuration Models

This module contains Pydantic models for FlowForge configuration management,
including API settings, storage location, identity mode and Pomodoro defaults.
"""

import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict
from platformdirs import user_config_dir, user_data_dir
from .settings import DefaultSettings


class FlowForgeConfig(BaseModel):
    """
    Main configuration model for FlowForge.
    """
    
    # OpenAI Configuration
    openai_key_path: Optional[Path] = Field(
        default=None,
        description=f"Path to file containing OpenAI API key ({DefaultSettings.API_KEY_ENV} takes precedence)"
    )
    default_model: str = Field(
        default=DefaultSettings.DEFAULT_MODEL,
        description="OpenAI model for suggestions"
    )
    temperature: float = Field(default=DefaultSettings.DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    
    # Storage
    data_dir: Path = Field(description="Directory holding the flow and task collections")
    
    # Identity
    demo_auth_enabled: bool = Field(default=True, description="Run as the fixed demo user")
    demo_user_id: str = Field(default=DefaultSettings.DEMO_USER_ID)
    
    # Pomodoro defaults
    work_minutes: int = Field(default=DefaultSettings.WORK_MINUTES, gt=0)
    short_break_minutes: int = Field(default=DefaultSettings.SHORT_BREAK_MINUTES, gt=0)
    long_break_minutes: int = Field(default=DefaultSettings.LONG_BREAK_MINUTES, gt=0)
    cycles_per_long_break: int = Field(default=DefaultSettings.CYCLES_PER_LONG_BREAK, gt=0)
    
    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True
    )
    
    @field_validator('default_model')
    @classmethod
    def validate_model_name(cls, v: str) -> str:
        """Validate that model name is not empty."""
        if not v.strip():
            raise ValueError("Model name cannot be empty")
        return v.strip()


def get_config_dir() -> Path:
    """
    Get the FlowForge configuration directory following XDG standards.
    
    Returns:
        Path to the configuration directory
    """
    return Path(user_config_dir("flowforge", ensure_exists=True))


def get_config_path() -> Path:
    """
    Get the path to the FlowForge configuration file.
    
    Returns:
        Path to the configuration file
    """
    return get_config_dir() / DefaultSettings.CONFIG_FILE


def get_default_data_dir() -> Path:
    """
    Get the default data directory following XDG standards.
    
    Returns:
        Path to the data directory
    """
    return Path(user_data_dir("flowforge"))


def create_default_config() -> FlowForgeConfig:
    """
    Create a default configuration with sensible defaults.
    
    Returns:
        FlowForgeConfig with default settings
    """
    return FlowForgeConfig(
        openai_key_path=get_config_dir() / DefaultSettings.API_KEY_FILE,
        default_model=DefaultSettings.DEFAULT_MODEL,
        data_dir=get_default_data_dir(),
    )


def apply_environment_overrides(config: FlowForgeConfig) -> FlowForgeConfig:
    """
    Apply environment variable overrides to a loaded configuration.
    
    ``FLOWFORGE_DEMO_AUTH`` switches the demo identity on ("1", "true", "yes")
    or off ("0", "false", "no").
    
    Returns:
        The same config object, updated
    """
    demo_flag = os.environ.get(DefaultSettings.DEMO_AUTH_ENV)
    if demo_flag is not None:
        flag = demo_flag.strip().lower()
        if flag in ("1", "true", "yes", "on"):
            config.demo_auth_enabled = True
        elif flag in ("0", "false", "no", "off"):
            config.demo_auth_enabled = False
    return config


def resolve_api_key(config: FlowForgeConfig) -> str:
    """
    Resolve the OpenAI API key.
    
    The ``OPENAI_API_KEY`` environment variable wins over the configured key
    file.
    
    Raises:
        FileNotFoundError: If neither source provides a key
    """
    env_key = os.environ.get(DefaultSettings.API_KEY_ENV, "").strip()
    if env_key:
        return env_key
    
    if config.openai_key_path is not None:
        key_path = Path(config.openai_key_path).expanduser()
        if key_path.exists():
            key = key_path.read_text().strip()
            if key:
                return key
    
    raise FileNotFoundError(
        f"No OpenAI API key found. Set {DefaultSettings.API_KEY_ENV} or run 'flowforge wizard' to configure a key file."
    )
