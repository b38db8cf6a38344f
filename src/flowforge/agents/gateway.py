"""
FlowForge AI Suggestion Gateway

One entry point for every AI operation the app uses. Each method accepts a
request model or a plain dict (camelCase or snake_case keys) and returns the
validated response model.
"""

import logging
from typing import Any, Dict, Optional, Union

from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI

from ..models.config import FlowForgeConfig, resolve_api_key
from ..models.settings import DefaultSettings
from .coaching_agents import (
    GenerateDetailedDiscoveryPlanOperation, GenerateGoalsOperation, GetUnstuckOperation
)
from .flow_agents import (
    GenerateFlowOperation, SuggestFlowResourcesOperation,
    SuggestNextStepOperation, SummarizeFlowOperation,
)
from .schemas import (
    DiscoveryPlanResponse, GenerateFlowRequest, GenerateFlowResponse,
    GenerateGoalsResponse, GetUnstuckRequest, GetUnstuckResponse,
    ReflectionRequest, SuggestFlowResourcesRequest, SuggestFlowResourcesResponse,
    SuggestNextStepRequest, SuggestNextStepResponse,
    SummarizeFlowRequest, SummarizeFlowResponse,
)

# Set up module logger
logger = logging.getLogger(__name__)


def _merge(request: Optional[Union[Any, Dict[str, Any]]], fields: Dict[str, Any]) -> Any:
    """Allow ``gateway.op(request)`` as well as ``gateway.op(field=value, ...)``."""
    if request is None:
        return fields
    if fields:
        if isinstance(request, dict):
            return {**request, **fields}
        return request.model_copy(update=fields)
    return request


class AISuggestionGateway:
    """
    Facade over the seven gateway operations, sharing one chat model.
    """
    
    def __init__(self, chat_model: Runnable) -> None:
        self.chat_model = chat_model
        self.suggest_next_step_op = SuggestNextStepOperation(chat_model)
        self.generate_flow_op = GenerateFlowOperation(chat_model)
        self.summarize_flow_op = SummarizeFlowOperation(chat_model)
        self.suggest_flow_resources_op = SuggestFlowResourcesOperation(chat_model)
        self.generate_goals_op = GenerateGoalsOperation(chat_model)
        self.discovery_plan_op = GenerateDetailedDiscoveryPlanOperation(chat_model)
        self.get_unstuck_op = GetUnstuckOperation(chat_model)
    
    @classmethod
    def from_config(cls, config: FlowForgeConfig) -> "AISuggestionGateway":
        """
        Build a gateway backed by OpenAI.
        
        Args:
            config: Loaded configuration (model, temperature, key location)
            
        Raises:
            FileNotFoundError: If no API key can be found
        """
        api_key = resolve_api_key(config)
        chat_model = ChatOpenAI(
            model=config.default_model,
            temperature=config.temperature,
            max_tokens=DefaultSettings.DEFAULT_MAX_TOKENS,
            api_key=api_key,
        ).bind(response_format={"type": "json_object"})
        logger.info(f"AI gateway ready with model {config.default_model}")
        return cls(chat_model)
    
    def suggest_next_step(
        self, request: Optional[Union[SuggestNextStepRequest, Dict[str, Any]]] = None, **fields: Any
    ) -> SuggestNextStepResponse:
        """Suggest the next step for a workflow in progress."""
        return self.suggest_next_step_op.run(_merge(request, fields))
    
    def generate_flow_from_description(
        self, request: Optional[Union[GenerateFlowRequest, Dict[str, Any]]] = None, **fields: Any
    ) -> GenerateFlowResponse:
        """Generate ordered step names from a free-text description."""
        return self.generate_flow_op.run(_merge(request, fields))
    
    def summarize_flow_details(
        self, request: Optional[Union[SummarizeFlowRequest, Dict[str, Any]]] = None, **fields: Any
    ) -> SummarizeFlowResponse:
        """Summarize a flow; flows without steps get a fixed summary."""
        return self.summarize_flow_op.run(_merge(request, fields))
    
    def suggest_flow_resources(
        self, request: Optional[Union[SuggestFlowResourcesRequest, Dict[str, Any]]] = None, **fields: Any
    ) -> SuggestFlowResourcesResponse:
        """Suggest videos, articles and websites for a flow."""
        return self.suggest_flow_resources_op.run(_merge(request, fields))
    
    def generate_goals(
        self, request: Optional[Union[ReflectionRequest, Dict[str, Any]]] = None, **fields: Any
    ) -> GenerateGoalsResponse:
        """Suggest goals and starter projects from reflective answers."""
        return self.generate_goals_op.run(_merge(request, fields))
    
    def generate_detailed_discovery_plan(
        self, request: Optional[Union[ReflectionRequest, Dict[str, Any]]] = None, **fields: Any
    ) -> DiscoveryPlanResponse:
        """Build a detailed discovery plan from reflective answers."""
        return self.discovery_plan_op.run(_merge(request, fields))
    
    def get_unstuck_advice(
        self, request: Optional[Union[GetUnstuckRequest, Dict[str, Any]]] = None, **fields: Any
    ) -> GetUnstuckResponse:
        """Clarify a problem and suggest a roadmap out of it."""
        return self.get_unstuck_op.run(_merge(request, fields))
