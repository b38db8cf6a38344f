"""
FlowForge Gateway Errors

Failures of AI gateway operations. None of these are retried; callers report
them and leave persisted state untouched.
"""


class GatewayError(Exception):
    """Base class for AI gateway failures."""
    
    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class GatewayValidationError(GatewayError):
    """Request or response did not match the operation's schema."""


class GatewayProviderError(GatewayError):
    """The model provider call failed (network, auth, rejected request)."""


class EmptyResponseError(GatewayError):
    """The provider answered without output and the operation has no fallback."""
