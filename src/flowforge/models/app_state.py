"""
FlowForge App State

Small single-value keys kept next to the collections: the one-time onboarding
flag and the transient hand-off of discovery answers from the reflection form
to the results step.
"""

import json
import logging
from typing import Any, Dict, Optional

from .settings import DefaultSettings
from .storage import StorageBackend

# Set up module logger
logger = logging.getLogger(__name__)


class AppStateStore:
    """Reads and writes the onboarding flag and discovery hand-off keys."""
    
    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend
    
    def is_onboarding_completed(self) -> bool:
        """Presence of the flag means the tour should not replay."""
        try:
            return self.backend.get_item(DefaultSettings.ONBOARDING_KEY) is not None
        except OSError as e:
            logger.error(f"Error reading onboarding flag: {e}")
            return False
    
    def mark_onboarding_completed(self) -> None:
        """Set the onboarding flag."""
        try:
            self.backend.set_item(DefaultSettings.ONBOARDING_KEY, "true")
        except OSError as e:
            logger.error(f"Error saving onboarding flag: {e}")
    
    def stash_discovery_input(self, data: Dict[str, Any]) -> bool:
        """
        Store discovery answers for the results step to pick up.
        
        Returns:
            True if stored, False if the write failed
        """
        try:
            self.backend.set_item(DefaultSettings.DISCOVERY_KEY, json.dumps(data))
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving discovery data: {e}")
            return False
    
    def consume_discovery_input(self) -> Optional[Dict[str, Any]]:
        """
        Read and remove the stashed discovery answers.
        
        The key is removed even when its value cannot be parsed.
        
        Returns:
            The stored answers, or None if absent or unreadable
        """
        try:
            raw = self.backend.get_item(DefaultSettings.DISCOVERY_KEY)
        except OSError as e:
            logger.error(f"Error reading discovery data: {e}")
            return None
        if raw is None:
            return None
        
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error(f"Error parsing stored discovery data: {e}")
            data = None
        finally:
            try:
                self.backend.remove_item(DefaultSettings.DISCOVERY_KEY)
            except OSError as e:
                logger.error(f"Error removing discovery data: {e}")
        
        if not isinstance(data, dict):
            return None
        return data
