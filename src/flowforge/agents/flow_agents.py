"""
FlowForge Flow Assistance Operations

Gateway operations that help build and run a single flow: suggesting the
next step, generating steps from a description, summarizing an existing
flow, and recommending learning resources.
"""

from typing import Any, Dict, List, Optional

from .base_agent import GatewayOperation
from .fallbacks import EMPTY_FLOW_SUMMARY
from .schemas import (
    GenerateFlowRequest, GenerateFlowResponse,
    SuggestFlowResourcesRequest, SuggestFlowResourcesResponse,
    SuggestNextStepRequest, SuggestNextStepResponse,
    SummarizeFlowRequest, SummarizeFlowResponse,
)


class SuggestNextStepOperation(GatewayOperation[SuggestNextStepRequest, SuggestNextStepResponse]):
    """Recommend the next step for a workflow in progress."""
    
    name = "suggest_next_step"
    request_model = SuggestNextStepRequest
    response_model = SuggestNextStepResponse
    system_prompt = (
        "You are an AI assistant designed to suggest the next best step in a "
        "user's workflow. You answer with JSON only."
    )
    template = """Analyze the current workflow state and the user's goals, then suggest the next step.

Current Workflow State: {current_workflow_state}
User Goals: {user_goals}

Consider the user's goals and the current state of their workflow.
Provide a clear explanation of why the suggested step is recommended.
Include the estimated time to complete the step, its priority (High, Medium or Low)
and its difficulty (Easy, Medium or Hard)."""


class GenerateFlowOperation(GatewayOperation[GenerateFlowRequest, GenerateFlowResponse]):
    """Turn a free-text description into an ordered list of step names."""
    
    name = "generate_flow_from_description"
    request_model = GenerateFlowRequest
    response_model = GenerateFlowResponse
    system_prompt = (
        "You are a workflow generation expert. You break goals down into "
        "short, actionable steps and answer with JSON only."
    )
    template = """Generate a workflow based on the following description.

Description: {description}
Available Time: {available_time}
Priority Level: {priority_level}
Resources: {resources}

Return the workflow as a list of steps in the "flow" field, in the order they should be done."""


class SummarizeFlowOperation(GatewayOperation[SummarizeFlowRequest, SummarizeFlowResponse]):
    """Describe an existing flow, estimate its duration and list a few insights."""
    
    name = "summarize_flow_details"
    request_model = SummarizeFlowRequest
    response_model = SummarizeFlowResponse
    system_prompt = (
        "You are a productivity assistant that reviews workflows. "
        "You answer with JSON only."
    )
    template = """Analyze the following workflow.

Workflow Name: {flow_name}
Steps:
{step_names}

1. Write a concise summary (1-2 sentences) of the workflow's purpose.
2. Estimate the total time to complete all steps as a human-readable range, such as "Around 3-5 hours".
3. Provide up to 3 key insights or observations about the workflow."""
    
    def prompt_variables(self, request: SummarizeFlowRequest) -> Dict[str, Any]:
        variables = super().prompt_variables(request)
        variables["step_names"] = _bullet_lines(request.step_names)
        return variables
    
    def short_circuit(self, request: SummarizeFlowRequest) -> Optional[SummarizeFlowResponse]:
        # Nothing to summarize
        if not request.step_names:
            return SummarizeFlowResponse.model_validate(EMPTY_FLOW_SUMMARY)
        return None


class SuggestFlowResourcesOperation(
    GatewayOperation[SuggestFlowResourcesRequest, SuggestFlowResourcesResponse]
):
    """Recommend videos, articles and websites relevant to a flow."""
    
    name = "suggest_flow_resources"
    request_model = SuggestFlowResourcesRequest
    response_model = SuggestFlowResourcesResponse
    system_prompt = (
        "You are a research assistant who recommends high quality, real and "
        "publicly accessible learning resources. You answer with JSON only."
    )
    template = """Suggest resources that would help someone complete this workflow.

Workflow Name: {flow_name}
Workflow Description: {flow_description}

Suggest:
- 1-2 relevant YouTube videos (title and URL)
- 1-2 relevant articles or blog posts (title and URL)
- 1-2 relevant websites, tools or communities (name and URL)

Only suggest resources you are confident exist."""
    
    def postprocess(self, result: SuggestFlowResourcesResponse) -> SuggestFlowResourcesResponse:
        return result.model_copy(update={
            "youtube_videos": result.youtube_videos or [],
            "articles": result.articles or [],
            "websites": result.websites or [],
        })


def _bullet_lines(items: List[str]) -> str:
    return "\n".join(f"- {item}" for item in items)
