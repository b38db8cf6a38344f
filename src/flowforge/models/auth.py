"""
FlowForge Identity

Authentication is stubbed: with demo auth enabled every session runs as a
fixed demo user. Real external authentication is not implemented.
"""

from pydantic import BaseModel, Field

from .config import FlowForgeConfig
from .settings import DefaultSettings


class AuthenticationRequiredError(RuntimeError):
    """Raised when no identity is available for the session."""


class UserProfile(BaseModel):
    """The signed-in user."""
    uid: str = Field(description="Owner id stamped on flows")
    email: str
    display_name: str
    
    @property
    def first_name(self) -> str:
        """First word of the display name, for greetings."""
        return self.display_name.split(" ")[0] if self.display_name else "User"


def get_current_user(config: FlowForgeConfig) -> UserProfile:
    """
    Resolve the identity for this session.
    
    Args:
        config: Loaded configuration
        
    Returns:
        The demo user when demo auth is enabled
        
    Raises:
        AuthenticationRequiredError: If demo auth is disabled
    """
    if not config.demo_auth_enabled:
        raise AuthenticationRequiredError(
            "External authentication is not available. "
            f"Enable demo mode with {DefaultSettings.DEMO_AUTH_ENV}=1 or in the config file."
        )
    return UserProfile(
        uid=config.demo_user_id,
        email=DefaultSettings.DEMO_USER_EMAIL,
        display_name=DefaultSettings.DEMO_USER_NAME,
    )
