"""
FlowForge Gateway Schemas

Pydantic request/response types for every AI gateway operation. Requests
reject unknown fields; responses enforce the list bounds the prompts ask for.
Both accept camelCase or snake_case field names and serialize as camelCase.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ..models.entities import (
    Difficulty, FlowSuggestedResources, Priority, SuggestedResourceItem, SuggestedWebsiteItem
)
from ..models.settings import ValidationSettings


class GatewayRequest(BaseModel):
    """Base for operation inputs."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class GatewayResponse(BaseModel):
    """Base for operation outputs."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
    
    def to_output(self) -> Dict[str, Any]:
        """JSON-serializable output with camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# --------------------------------------------------------------------
# Flow assistance
# --------------------------------------------------------------------

class SuggestNextStepRequest(GatewayRequest):
    current_workflow_state: str = Field(
        description="The current state of the workflow: current step, progress and obstacles."
    )
    user_goals: str = Field(description="Desired outcomes and priorities for the workflow.")


class SuggestNextStepResponse(GatewayResponse):
    suggested_next_step: str = Field(
        description="The suggested next step, with a clear explanation of why it is recommended."
    )
    estimated_time: str = Field(description="Estimated time to complete the suggested step.")
    priority: Priority = Field(description="Priority relative to the overall goals: High, Medium or Low.")
    difficulty: Difficulty = Field(description="Difficulty of the step: Easy, Medium or Hard.")


class GenerateFlowRequest(GatewayRequest):
    description: str = Field(description="Description of the desired workflow.")
    available_time: Optional[str] = Field(default=None, description="Time available for the workflow.")
    priority_level: Optional[str] = Field(default=None, description="Priority level of the workflow.")
    resources: Optional[str] = Field(default=None, description="Resources available for the workflow.")


class GenerateFlowResponse(GatewayResponse):
    flow: List[str] = Field(description="The generated workflow steps, in order.")


class SummarizeFlowRequest(GatewayRequest):
    flow_name: str = Field(description="Name of the workflow.")
    step_names: List[str] = Field(description="Names of the workflow steps, in order.")


class SummarizeFlowResponse(GatewayResponse):
    generated_description: str = Field(description="A concise 1-2 sentence summary of the workflow.")
    estimated_total_time: str = Field(
        description="Human-readable estimate of the total time, e.g. 'Around 3-5 hours'."
    )
    insights: Optional[List[str]] = Field(
        default=None,
        max_length=ValidationSettings.MAX_SUMMARY_INSIGHTS,
        description="Up to 3 key observations about the workflow."
    )


class SuggestFlowResourcesRequest(GatewayRequest):
    flow_name: str = Field(description="Name of the workflow.")
    flow_description: Optional[str] = Field(default=None, description="Description of the workflow.")


class SuggestFlowResourcesResponse(GatewayResponse):
    """Videos, articles and websites; missing categories come back as empty lists."""
    youtube_videos: Optional[List[SuggestedResourceItem]] = Field(default=None, description="1-2 relevant YouTube videos.")
    articles: Optional[List[SuggestedResourceItem]] = Field(default=None, description="1-2 relevant articles or blog posts.")
    websites: Optional[List[SuggestedWebsiteItem]] = Field(default=None, description="1-2 relevant websites, tools or communities.")
    
    def to_resources(self) -> FlowSuggestedResources:
        """Convert to the shape stored on a Flow."""
        return FlowSuggestedResources.model_validate(self.model_dump())


# --------------------------------------------------------------------
# Coaching
# --------------------------------------------------------------------

class ReflectionRequest(GatewayRequest):
    """Answers to the four reflective discovery questions."""
    energizing_activities: str = Field(
        description="What activities make you feel most energized and engaged?"
    )
    solve_problem: str = Field(
        description="If you had unlimited time and resources, what problem would you try to solve?"
    )
    skills_to_learn: str = Field(description="What skills do you want to learn or improve in the next year?")
    current_challenge: str = Field(
        description="What are you currently dissatisfied with, or what challenge would you like to overcome?"
    )


class ProjectSuggestion(GatewayResponse):
    name: str = Field(description="Name of the suggested project.")
    first_steps: List[str] = Field(description="2-3 actionable first steps.")


class GenerateGoalsResponse(GatewayResponse):
    suggested_goals: List[str] = Field(description="2-3 overarching goals phrased as aspirations.")
    project_suggestions: List[ProjectSuggestion] = Field(description="1-2 concrete project ideas.")


class ProjectBreakdown(GatewayResponse):
    name: str = Field(description="Name of the project idea.")
    detailed_rationale: str = Field(description="2-3 sentences on why this project fits the user.")
    key_steps: List[str] = Field(min_length=3, max_length=5, description="3-5 concrete key steps.")
    potential_challenges: Optional[List[str]] = Field(
        default=None, description="1-2 likely challenges with brief tips."
    )
    expected_outcome: str = Field(description="One sentence on the expected positive outcome.")
    suggested_resources: Optional[FlowSuggestedResources] = Field(default=None)


class DiscoveryPlanResponse(GatewayResponse):
    suggested_goals: List[str] = Field(
        description="2-3 aspirational goals.",
        json_schema_extra={"minItems": 2, "maxItems": 3}
    )
    project_breakdowns: List[ProjectBreakdown] = Field(
        min_length=1, max_length=2, description="1-2 detailed project breakdowns."
    )
    
    @field_validator("suggested_goals")
    @classmethod
    def validate_goal_count(cls, v: List[str], info: ValidationInfo) -> List[str]:
        """Require 2-3 goals, except for the built-in fallback plan which has one."""
        if info.context and info.context.get("fallback"):
            return v
        if not 2 <= len(v) <= 3:
            raise ValueError(f"Expected 2-3 suggested goals, got {len(v)}")
        return v


class GetUnstuckRequest(GatewayRequest):
    problem_description: str = Field(
        min_length=ValidationSettings.MIN_PROBLEM_DESCRIPTION_LENGTH,
        description="The problem the user is stuck on."
    )


class GetUnstuckResponse(GatewayResponse):
    clarified_problem: Optional[str] = Field(default=None, description="Brief rephrasing of the core problem.")
    suggested_roadmap: List[str] = Field(min_length=3, max_length=5, description="3-5 actionable steps.")
    key_solution_insights: List[str] = Field(min_length=2, max_length=3, description="2-3 key insights.")
    suggested_resources: Optional[FlowSuggestedResources] = Field(default=None)
