"""
FlowForge Configuration Manager

Reads and writes the YAML configuration file. A missing or broken file is
never fatal: callers fall back to ``create_default_config()``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config import FlowForgeConfig, get_config_path
from .settings import DefaultSettings

# Set up module logger
logger = logging.getLogger(__name__)


class ConfigManager:
    """
    YAML persistence for FlowForgeConfig.
    
    The file location defaults to the per-user config directory; tests and
    alternative setups pass their own path.
    """
    
    def __init__(self, config_path: Optional[Path] = None):
        self.yaml = YAML()
        self.yaml.preserve_quotes = DefaultSettings.YAML_PRESERVE_QUOTES
        self.yaml.width = DefaultSettings.YAML_LINE_WIDTH
        self._config_path = config_path
    
    @property
    def config_path(self) -> Path:
        """Configured path, or the per-user default."""
        return self._config_path or get_config_path()
    
    def config_exists(self) -> bool:
        return self.config_path.exists()
    
    def load_config(self) -> Optional[FlowForgeConfig]:
        """
        Load and validate the configuration file.
        
        Unknown keys (for example from an older version) are ignored with a
        warning.
        
        Returns:
            FlowForgeConfig, or None if the file is missing, unreadable or invalid
        """
        raw = self._read()
        if raw is None:
            return None
        
        known = {key: value for key, value in raw.items() if key in FlowForgeConfig.model_fields}
        ignored = sorted(set(raw) - set(known))
        if ignored:
            logger.warning(f"Ignoring unknown config keys in {self.config_path}: {ignored}")
        
        try:
            return FlowForgeConfig.model_validate(known)
        except ValidationError as e:
            logger.error(f"Invalid configuration in {self.config_path}: {e}")
            return None
    
    def save_config(self, config: FlowForgeConfig) -> bool:
        """
        Write the configuration file, creating its directory if needed.
        
        Args:
            config: Configuration to save
            
        Returns:
            True if saved successfully, False otherwise
        """
        config_path = self.config_path
        # Paths become plain strings; unset optional values are left out
        data = config.model_dump(mode="json", exclude_none=True)
        
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, 'w') as f:
                self.yaml.dump(data, f)
        except (OSError, YAMLError) as e:
            logger.error(f"Error saving config to {config_path}: {e}", exc_info=True)
            return False
        
        logger.info(f"Configuration saved to: {config_path}")
        return True
    
    def _read(self) -> Optional[Dict[str, Any]]:
        config_path = self.config_path
        if not config_path.exists():
            return None
        
        try:
            with open(config_path, 'r') as f:
                data = self.yaml.load(f)
        except (OSError, YAMLError) as e:
            logger.error(f"Error loading config from {config_path}: {e}", exc_info=True)
            return None
        
        if not isinstance(data, dict):
            logger.error(f"Config file {config_path} does not contain a mapping")
            return None
        return dict(data)
