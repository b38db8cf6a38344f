"""
FlowForge AI Agents

This package contains the AI gateway and its operations: flow assistance
(next step, flow generation, summaries, resources) and coaching (goals,
discovery plans, getting unstuck).
"""

from .base_agent import GatewayOperation
from .errors import EmptyResponseError, GatewayError, GatewayProviderError, GatewayValidationError
from .gateway import AISuggestionGateway
from .schemas import (
    DiscoveryPlanResponse, GenerateFlowRequest, GenerateFlowResponse,
    GenerateGoalsResponse, GetUnstuckRequest, GetUnstuckResponse,
    ProjectBreakdown, ProjectSuggestion, ReflectionRequest,
    SuggestFlowResourcesRequest, SuggestFlowResourcesResponse,
    SuggestNextStepRequest, SuggestNextStepResponse,
    SummarizeFlowRequest, SummarizeFlowResponse,
)

__all__ = [
    "AISuggestionGateway",
    "GatewayOperation",
    
    # Errors
    "GatewayError",
    "GatewayValidationError",
    "GatewayProviderError",
    "EmptyResponseError",
    
    # Schemas
    "SuggestNextStepRequest",
    "SuggestNextStepResponse",
    "GenerateFlowRequest",
    "GenerateFlowResponse",
    "SummarizeFlowRequest",
    "SummarizeFlowResponse",
    "SuggestFlowResourcesRequest",
    "SuggestFlowResourcesResponse",
    "ReflectionRequest",
    "GenerateGoalsResponse",
    "ProjectSuggestion",
    "ProjectBreakdown",
    "DiscoveryPlanResponse",
    "GetUnstuckRequest",
    "GetUnstuckResponse",
]
