"""
Tests for the AI suggestion gateway and its operations.
"""

import json
import pytest
from unittest.mock import patch

import openai
from langchain_core.language_models import FakeListChatModel

from flowforge.agents.errors import EmptyResponseError, GatewayProviderError, GatewayValidationError
from flowforge.agents.fallbacks import FALLBACK_OUTPUTS
from flowforge.agents.schemas import ReflectionRequest, SuggestNextStepRequest
from flowforge.models.entities import FlowSuggestedResources

REFLECTIONS = {
    "energizingActivities": "Drawing and teaching kids",
    "solveProblem": "Access to art education",
    "skillsToLearn": "Illustration and public speaking",
    "currentChallenge": "My job feels repetitive",
}

UNSTUCK_ADVICE = {
    "clarifiedProblem": "Choosing a thesis structure",
    "suggestedRoadmap": ["List chapters", "Draft an outline", "Ask your advisor"],
    "keySolutionInsights": ["Structure follows argument", "Start rough"],
}


class TestSuggestNextStep:
    """Test cases for suggest_next_step."""

    def test_success(self, make_gateway) -> None:
        """Test a well-formed answer."""
        gateway = make_gateway([json.dumps({
            "suggestedNextStep": "Write the outline, because everything else depends on it.",
            "estimatedTime": "30 minutes",
            "priority": "High",
            "difficulty": "Easy",
        })])
        
        result = gateway.suggest_next_step(current_workflow_state="Blog: idea chosen", user_goals="Publish this week")
        
        assert result.priority == "High"
        assert result.difficulty == "Easy"
        assert result.to_output()["suggestedNextStep"].startswith("Write the outline")

    def test_accepts_camel_case_dict(self, make_gateway) -> None:
        """Test that requests can use the stored field names."""
        gateway = make_gateway([json.dumps({
            "suggestedNextStep": "Rest", "estimatedTime": "1 hour", "priority": "Low", "difficulty": "Easy",
        })])
        result = gateway.suggest_next_step({"currentWorkflowState": "Done", "userGoals": "Relax"})
        assert result.estimated_time == "1 hour"

    def test_markdown_fenced_json(self, make_gateway) -> None:
        """Test that JSON wrapped in a code fence is still parsed."""
        payload = json.dumps({
            "suggestedNextStep": "Test", "estimatedTime": "5 min", "priority": "Medium", "difficulty": "Medium",
        })
        gateway = make_gateway([f"```json\n{payload}\n```"])
        assert gateway.suggest_next_step(current_workflow_state="x", user_goals="y").priority == "Medium"

    def test_empty_output_has_no_fallback(self, make_gateway) -> None:
        """Test that an empty answer is an error for this operation."""
        gateway = make_gateway([""])
        with pytest.raises(EmptyResponseError):
            gateway.suggest_next_step(current_workflow_state="x", user_goals="y")

    def test_out_of_range_enum(self, make_gateway) -> None:
        """Test that unknown priorities are rejected."""
        gateway = make_gateway([json.dumps({
            "suggestedNextStep": "x", "estimatedTime": "y", "priority": "Urgent", "difficulty": "Easy",
        })])
        with pytest.raises(GatewayValidationError):
            gateway.suggest_next_step(current_workflow_state="x", user_goals="y")

    def test_invalid_json(self, make_gateway) -> None:
        """Test that prose instead of JSON is a validation error."""
        gateway = make_gateway(["I think you should take a break."])
        with pytest.raises(GatewayValidationError):
            gateway.suggest_next_step(current_workflow_state="x", user_goals="y")


class TestRequestValidation:
    """Test cases for request checks that happen before any provider call."""

    def test_missing_field(self, make_gateway) -> None:
        """Test that a missing required field never reaches the provider."""
        gateway = make_gateway(["{}"])
        with patch.object(FakeListChatModel, "_call") as mock_call:
            with pytest.raises(GatewayValidationError):
                gateway.suggest_next_step({"currentWorkflowState": "x"})
            mock_call.assert_not_called()

    def test_unknown_field(self, make_gateway) -> None:
        """Test that unexpected fields are rejected."""
        gateway = make_gateway(["{}"])
        with pytest.raises(GatewayValidationError):
            gateway.generate_flow_from_description(description="Plan a trip", mood="happy")

    def test_short_problem_description(self, make_gateway) -> None:
        """Test the ten character minimum for get_unstuck_advice."""
        gateway = make_gateway([json.dumps(UNSTUCK_ADVICE)])
        with patch.object(FakeListChatModel, "_call") as mock_call:
            with pytest.raises(GatewayValidationError):
                gateway.get_unstuck_advice(problem_description="help")
            mock_call.assert_not_called()

    def test_request_model_instance(self) -> None:
        """Test that request models serialize with camelCase keys."""
        request = SuggestNextStepRequest(current_workflow_state="a", user_goals="b")
        assert request.model_dump(by_alias=True) == {"currentWorkflowState": "a", "userGoals": "b"}


class TestProviderErrors:
    """Test cases for provider failures."""

    def test_openai_error_is_wrapped(self, make_gateway) -> None:
        """Test that provider exceptions become GatewayProviderError."""
        gateway = make_gateway(["{}"])
        with patch.object(FakeListChatModel, "_call", side_effect=openai.OpenAIError("rate limited")):
            with pytest.raises(GatewayProviderError) as exc_info:
                gateway.generate_goals(REFLECTIONS)
        
        assert exc_info.value.operation == "generate_goals"
        assert isinstance(exc_info.value.__cause__, openai.OpenAIError)

    def test_other_errors_propagate(self, make_gateway) -> None:
        """Test that unexpected exceptions are not disguised."""
        gateway = make_gateway(["{}"])
        with patch.object(FakeListChatModel, "_call", side_effect=RuntimeError("bug")):
            with pytest.raises(RuntimeError):
                gateway.generate_goals(REFLECTIONS)


class TestGenerateFlow:
    """Test cases for generate_flow_from_description."""

    def test_success(self, make_gateway) -> None:
        """Test generated step names come back in order."""
        gateway = make_gateway([json.dumps({"flow": ["Pick a trail", "Pack gear", "Go"]})])
        result = gateway.generate_flow_from_description(description="Plan a weekend hike")
        assert result.flow == ["Pick a trail", "Pack gear", "Go"]

    def test_optional_fields_shown_as_not_specified(self, make_gateway) -> None:
        """Test that omitted optional inputs are rendered into the prompt."""
        gateway = make_gateway(["{}"])
        with patch.object(FakeListChatModel, "_call", return_value='{"flow": ["a"]}') as mock_call:
            gateway.generate_flow_from_description(description="Plan a weekend hike", resources="A tent")
        
        messages = mock_call.call_args.args[0]
        human = messages[-1].content
        assert "Description: Plan a weekend hike" in human
        assert "Available Time: Not specified" in human
        assert "Resources: A tent" in human

    def test_empty_output_has_no_fallback(self, make_gateway) -> None:
        """Test that JSON null is treated as no output."""
        gateway = make_gateway(["null"])
        with pytest.raises(EmptyResponseError):
            gateway.generate_flow_from_description(description="Plan a weekend hike")


class TestSummarizeFlow:
    """Test cases for summarize_flow_details."""

    def test_empty_flow_skips_provider(self, make_gateway) -> None:
        """Test the canned summary for a flow without steps."""
        gateway = make_gateway(["{}"])
        with patch.object(FakeListChatModel, "_call") as mock_call:
            result = gateway.summarize_flow_details(flow_name="New flow", step_names=[])
            mock_call.assert_not_called()
        
        assert result.generated_description == "A new workflow. Add steps to see more details."
        assert result.estimated_total_time == "Not enough information to estimate."
        assert result.insights == ["Add some steps to this flow for more detailed insights."]

    def test_steps_listed_in_prompt(self, make_gateway) -> None:
        """Test that step names are sent one per line."""
        answer = json.dumps({
            "generatedDescription": "Launch a blog.", "estimatedTotalTime": "Around 3-5 hours",
            "insights": ["Outline first"],
        })
        gateway = make_gateway(["{}"])
        with patch.object(FakeListChatModel, "_call", return_value=answer) as mock_call:
            result = gateway.summarize_flow_details(flow_name="Blog", step_names=["Outline", "Draft"])
        
        assert "- Outline\n- Draft" in mock_call.call_args.args[0][-1].content
        assert result.estimated_total_time == "Around 3-5 hours"

    def test_too_many_insights(self, make_gateway) -> None:
        """Test the three insight maximum."""
        gateway = make_gateway([json.dumps({
            "generatedDescription": "x", "estimatedTotalTime": "y", "insights": ["a", "b", "c", "d"],
        })])
        with pytest.raises(GatewayValidationError):
            gateway.summarize_flow_details(flow_name="Blog", step_names=["Outline"])

    def test_empty_output_for_non_empty_flow(self, make_gateway) -> None:
        """Test that the canned summary is only used for empty flows."""
        gateway = make_gateway([""])
        with pytest.raises(EmptyResponseError):
            gateway.summarize_flow_details(flow_name="Blog", step_names=["Outline"])


class TestSuggestFlowResources:
    """Test cases for suggest_flow_resources."""

    def test_missing_categories_become_empty(self, make_gateway) -> None:
        """Test that omitted categories come back as empty lists."""
        gateway = make_gateway([json.dumps({
            "articles": [{"title": "Blogging 101", "url": "https://example.com/101"}],
        })])
        result = gateway.suggest_flow_resources(flow_name="Blog")
        
        assert result.youtube_videos == []
        assert result.websites == []
        assert result.articles[0].title == "Blogging 101"
        assert isinstance(result.to_resources(), FlowSuggestedResources)

    def test_empty_output_uses_fallback(self, make_gateway) -> None:
        """Test the all-empty fallback."""
        gateway = make_gateway([""])
        result = gateway.suggest_flow_resources(flow_name="Blog", flow_description="A blog")
        assert result.to_output() == {"youtubeVideos": [], "articles": [], "websites": []}


class TestCoachingOperations:
    """Test cases for goals, discovery plans and unstuck advice."""

    def test_generate_goals(self, make_gateway) -> None:
        """Test a well-formed goals answer."""
        gateway = make_gateway([json.dumps({
            "suggestedGoals": ["Teach art", "Draw daily"],
            "projectSuggestions": [{"name": "Kids workshop", "firstSteps": ["Find a venue", "Plan a lesson"]}],
        })])
        result = gateway.generate_goals(ReflectionRequest.model_validate(REFLECTIONS))
        assert result.project_suggestions[0].first_steps == ["Find a venue", "Plan a lesson"]

    def test_generate_goals_fallback(self, make_gateway) -> None:
        """Test the goals fallback."""
        gateway = make_gateway([""])
        result = gateway.generate_goals(REFLECTIONS)
        assert result.suggested_goals == ["Consider exploring your interests further."]
        assert result.project_suggestions == []

    def test_discovery_plan(self, make_gateway, sample_discovery_plan: dict) -> None:
        """Test a valid detailed plan."""
        gateway = make_gateway([json.dumps(sample_discovery_plan)])
        plan = gateway.generate_detailed_discovery_plan(REFLECTIONS)
        assert plan.project_breakdowns[0].key_steps[0] == "Buy a sketchbook"

    def test_discovery_plan_goal_count_enforced(self, make_gateway, sample_discovery_plan: dict) -> None:
        """Test that a provider answer with one goal is rejected."""
        sample_discovery_plan["suggestedGoals"] = ["Only one"]
        gateway = make_gateway([json.dumps(sample_discovery_plan)])
        with pytest.raises(GatewayValidationError):
            gateway.generate_detailed_discovery_plan(REFLECTIONS)

    def test_discovery_plan_fallback(self, make_gateway) -> None:
        """Test the Reflect and Research fallback plan."""
        gateway = make_gateway([""])
        plan = gateway.generate_detailed_discovery_plan(REFLECTIONS)
        assert plan.project_breakdowns[0].name == "Reflect and Research"
        assert len(plan.project_breakdowns[0].key_steps) == 3

    def test_unstuck_success(self, make_gateway) -> None:
        """Test a well-formed unstuck answer."""
        gateway = make_gateway([json.dumps(UNSTUCK_ADVICE)])
        advice = gateway.get_unstuck_advice(problem_description="I can't structure my thesis")
        assert advice.clarified_problem == "Choosing a thesis structure"
        assert advice.suggested_resources is None

    def test_unstuck_roadmap_bounds(self, make_gateway) -> None:
        """Test that a two step roadmap is rejected."""
        answer = dict(UNSTUCK_ADVICE, suggestedRoadmap=["One", "Two"])
        gateway = make_gateway([json.dumps(answer)])
        with pytest.raises(GatewayValidationError):
            gateway.get_unstuck_advice(problem_description="I can't structure my thesis")

    def test_unstuck_fallback(self, make_gateway) -> None:
        """Test the unstuck fallback."""
        gateway = make_gateway(["null"])
        advice = gateway.get_unstuck_advice(problem_description="I can't structure my thesis")
        assert len(advice.suggested_roadmap) == 3
        assert len(advice.key_solution_insights) == 2
        assert advice.suggested_resources.articles[0].url.startswith("https://www.indeed.com/")


@pytest.mark.parametrize("operation, request_data", [
    ("generate_goals", REFLECTIONS),
    ("generate_detailed_discovery_plan", REFLECTIONS),
    ("suggest_flow_resources", {"flowName": "Blog"}),
    ("get_unstuck_advice", {"problemDescription": "I can't structure my thesis"}),
])
def test_fallbacks_match_documented_values(make_gateway, operation: str, request_data: dict) -> None:
    """Test that empty answers produce exactly the documented fallback."""
    gateway = make_gateway([""])
    result = getattr(gateway, operation)(request_data)
    assert result.to_output() == FALLBACK_OUTPUTS[operation]
