"""
FlowForge Coaching Operations

Gateway operations for self-discovery and problem solving: goals from the
reflective questions, a detailed discovery plan, and advice for getting
unstuck.
"""

from .base_agent import GatewayOperation
from .schemas import (
    DiscoveryPlanResponse, GenerateGoalsResponse, GetUnstuckRequest,
    GetUnstuckResponse, ReflectionRequest,
)


_REFLECTION_BLOCK = """User's Reflections:
1. Activities that energize them: {energizing_activities}
2. Problem they'd solve with unlimited resources: {solve_problem}
3. Skills they want to learn or improve: {skills_to_learn}
4. Current dissatisfaction or challenge: {current_challenge}"""


class GenerateGoalsOperation(GatewayOperation[ReflectionRequest, GenerateGoalsResponse]):
    """Suggest goals and starter projects from the user's reflections."""
    
    name = "generate_goals"
    request_model = ReflectionRequest
    response_model = GenerateGoalsResponse
    system_prompt = (
        "You are a supportive life coach helping people discover meaningful "
        "goals. You answer with JSON only."
    )
    template = _REFLECTION_BLOCK + """

Based on these reflections:
1. Suggest 2-3 overarching goals, phrased as aspirations.
2. Suggest 1-2 concrete project ideas that move toward those goals.
   For each project give a name and 2-3 actionable first steps."""


class GenerateDetailedDiscoveryPlanOperation(
    GatewayOperation[ReflectionRequest, DiscoveryPlanResponse]
):
    """Build a detailed plan of goals and project breakdowns from the reflections."""
    
    name = "generate_detailed_discovery_plan"
    request_model = ReflectionRequest
    response_model = DiscoveryPlanResponse
    system_prompt = (
        "You are an insightful career and personal development coach. "
        "You answer with JSON only."
    )
    template = _REFLECTION_BLOCK + """

Based on these reflections:
1. Suggest 2-3 aspirational goals.
2. Suggest 1-2 projects. For each project provide:
   - a name
   - a detailed rationale (2-3 sentences) connecting it to the reflections
   - 3-5 concrete key steps
   - 1-2 potential challenges with brief tips (optional)
   - the expected outcome in one sentence
   - optionally, suggested resources: YouTube videos, articles and websites with real URLs"""


class GetUnstuckOperation(GatewayOperation[GetUnstuckRequest, GetUnstuckResponse]):
    """Clarify a problem and suggest a roadmap out of it."""
    
    name = "get_unstuck_advice"
    request_model = GetUnstuckRequest
    response_model = GetUnstuckResponse
    system_prompt = (
        "You are an expert problem solver and coach who helps people get "
        "unstuck. You answer with JSON only."
    )
    template = """The user is stuck on the following problem:

{problem_description}

1. Briefly rephrase the core problem (optional).
2. Suggest a roadmap of 3-5 actionable steps.
3. Give 2-3 key insights that could unlock a solution.
4. Optionally suggest resources: YouTube videos, articles and websites with real URLs."""
