"""
FlowForge Coaching Commands

This module implements 'flowforge unstuck' and 'flowforge discover', the AI
coaching commands for working through a problem and finding new goals.
"""

import logging
from typing import Dict, Optional, Union

import click
import questionary

from ..agents.schemas import DiscoveryPlanResponse, GenerateGoalsResponse, ReflectionRequest
from ..models.settings import ValidationSettings
from .common import ai_errors, echo_bullets, echo_resources, get_workspace

# Set up module logger
logger = logging.getLogger(__name__)

# Prompt text for each reflection answer
REFLECTION_QUESTIONS: Dict[str, str] = {
    "energizing_activities": "What activities make you feel most energized and engaged?",
    "solve_problem": "If you had unlimited time and resources, what problem would you try to solve?",
    "skills_to_learn": "What skills do you want to learn or improve in the next year?",
    "current_challenge": "What are you currently dissatisfied with, or what challenge would you like to overcome?",
}

# Shown when an answer is shorter than MIN_REFLECTION_ANSWER_LENGTH
REFLECTION_HINTS: Dict[str, str] = {
    "energizing_activities": "Please provide a bit more detail.",
    "solve_problem": "Please elaborate slightly.",
    "skills_to_learn": "Describe the skills in a bit more detail.",
    "current_challenge": "Explain the challenge further.",
}


def check_reflection(key: str, answer: str) -> Union[bool, str]:
    """
    Check one reflection answer.

    Returns True when it is long enough, otherwise the hint for that
    question (the shape questionary expects from a validator).
    """
    if len(answer.strip()) >= ValidationSettings.MIN_REFLECTION_ANSWER_LENGTH:
        return True
    return REFLECTION_HINTS[key]


@click.command()
@click.argument('problem', required=False)
def unstuck(problem: Optional[str]) -> None:
    """
    Get a roadmap and insights for a problem you are stuck on.
    
    Example: flowforge unstuck "I can't decide how to structure my thesis"
    """
    workspace = get_workspace()
    if problem is None:
        problem = questionary.text("Describe what you're stuck on:").ask()
        if not problem:
            click.echo("Cancelled.")
            return
    
    if len(problem.strip()) < ValidationSettings.MIN_PROBLEM_DESCRIPTION_LENGTH:
        click.secho(
            f"❌ Please describe your problem in at least "
            f"{ValidationSettings.MIN_PROBLEM_DESCRIPTION_LENGTH} characters.",
            fg="red"
        )
        raise SystemExit(1)
    
    click.echo("🤔 Thinking...")
    with ai_errors():
        advice = workspace.gateway.get_unstuck_advice(problem_description=problem.strip())
    
    if advice.clarified_problem:
        click.echo(f"\n🎯 {click.style(advice.clarified_problem, bold=True)}")
    click.echo()
    click.echo("🗺️  Suggested roadmap:")
    for i, item in enumerate(advice.suggested_roadmap, 1):
        click.echo(f"  {i}. {item}")
    echo_bullets("💡 Key insights", advice.key_solution_insights)
    if advice.suggested_resources:
        click.echo()
        echo_resources(advice.suggested_resources)


@click.command()
@click.option('--energizing', 'energizing_activities', help=REFLECTION_QUESTIONS["energizing_activities"])
@click.option('--problem', 'solve_problem', help=REFLECTION_QUESTIONS["solve_problem"])
@click.option('--skills', 'skills_to_learn', help=REFLECTION_QUESTIONS["skills_to_learn"])
@click.option('--challenge', 'current_challenge', help=REFLECTION_QUESTIONS["current_challenge"])
@click.option('--quick', is_flag=True, help='Only suggest goals and starter projects')
def discover(quick: bool, **answers: Optional[str]) -> None:
    """
    Discover goals and projects from a few reflective questions.
    
    Questions not answered with options are asked interactively.
    """
    workspace = get_workspace()

    for key, question in REFLECTION_QUESTIONS.items():
        if answers.get(key):
            verdict = check_reflection(key, answers[key])
            if verdict is not True:
                click.secho(f"❌ {question} {verdict}", fg="red")
                raise SystemExit(1)
            continue
        answers[key] = questionary.text(
            question, validate=lambda text, key=key: check_reflection(key, text)
        ).ask()
        if answers[key] is None:
            click.echo("Cancelled.")
            return
    answers = {key: answer.strip() for key, answer in answers.items()}

    # Answers are handed to the results step through storage
    if not workspace.app_state.stash_discovery_input(answers):
        click.secho("❌ Could not save your answers. Please try again.", fg="red")
        raise SystemExit(1)
    
    reflections = workspace.app_state.consume_discovery_input()
    if reflections is None:
        click.secho("Please share your reflections first with 'flowforge discover'.", fg="yellow")
        raise SystemExit(1)
    request = ReflectionRequest.model_validate(reflections)
    
    click.echo("🔮 Building your plan...")
    with ai_errors():
        if quick:
            goals = workspace.gateway.generate_goals(request)
        else:
            plan = workspace.gateway.generate_detailed_discovery_plan(request)
    
    if quick:
        echo_goals(goals)
    else:
        echo_plan(plan)


def echo_goals(goals: GenerateGoalsResponse) -> None:
    """Print suggested goals and starter projects."""
    click.echo()
    echo_bullets("🎯 Suggested goals", goals.suggested_goals)
    for project in goals.project_suggestions:
        click.echo(f"\n🚀 {click.style(project.name, fg='cyan', bold=True)}")
        for step in project.first_steps:
            click.echo(f"  • {step}")


def echo_plan(plan: DiscoveryPlanResponse) -> None:
    """Print a detailed discovery plan."""
    click.echo()
    click.secho("Your Inspired Plan is Ready!", fg="green", bold=True)
    echo_bullets("🎯 Suggested goals", plan.suggested_goals)
    for project in plan.project_breakdowns:
        click.echo(f"\n🚀 {click.style(project.name, fg='cyan', bold=True)}")
        click.echo(f"   {project.detailed_rationale}")
        click.echo("   Key steps:")
        for i, step in enumerate(project.key_steps, 1):
            click.echo(f"     {i}. {step}")
        echo_bullets("   ⚠️  Potential challenges", project.potential_challenges)
        click.echo(f"   ✨ Expected outcome: {project.expected_outcome}")
        if project.suggested_resources:
            echo_resources(project.suggested_resources)
