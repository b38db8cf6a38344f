"""
FlowForge Gateway Fallbacks

Deterministic outputs substituted when the provider answers successfully but
without usable output. Operations missing from FALLBACK_OUTPUTS have no
fallback and fail with EmptyResponseError instead.
"""

from typing import Any, Dict


FALLBACK_OUTPUTS: Dict[str, Dict[str, Any]] = {
    "generate_goals": {
        "suggestedGoals": ["Consider exploring your interests further."],
        "projectSuggestions": [],
    },
    "suggest_flow_resources": {
        "youtubeVideos": [],
        "articles": [],
        "websites": [],
    },
    "get_unstuck_advice": {
        "suggestedRoadmap": [
            "Try to break down your problem into smaller pieces.",
            "Write down what you've tried so far.",
            "Consider discussing the problem with a friend or colleague.",
        ],
        "keySolutionInsights": [
            "Sometimes a short break can help you see the problem from a new perspective.",
            "Focus on making just one small step of progress.",
        ],
        "suggestedResources": {
            "articles": [
                {
                    "title": "Problem-Solving Skills: Definitions and Examples",
                    "url": "https://www.indeed.com/career-advice/resumes-cover-letters/problem-solving-skills",
                }
            ]
        },
    },
    "generate_detailed_discovery_plan": {
        "suggestedGoals": ["Consider exploring your interests further to define clear goals."],
        "projectBreakdowns": [
            {
                "name": "Reflect and Research",
                "detailedRationale": (
                    "Sometimes the first step is to dive deeper into what truly excites you. "
                    "This project helps you do that."
                ),
                "keySteps": [
                    "Spend 30 minutes brainstorming topics you're curious about.",
                    "Read one article or watch one video on each of your top 3 topics.",
                    "Journal your thoughts on which topic felt most engaging and why.",
                ],
                "expectedOutcome": "A clearer idea of a specific area you'd like to explore further.",
            }
        ],
    },
}

# Returned by summarize_flow_details for a flow without steps; the provider is not called
EMPTY_FLOW_SUMMARY: Dict[str, Any] = {
    "generatedDescription": "A new workflow. Add steps to see more details.",
    "estimatedTotalTime": "Not enough information to estimate.",
    "insights": ["Add some steps to this flow for more detailed insights."],
}
