"""
FlowForge CLI Helpers

Shared pieces for the command modules: workspace lookup, AI error reporting
and console formatting of flows and tasks.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

import click

from ..agents.errors import GatewayError
from ..models.auth import AuthenticationRequiredError, UserProfile
from ..models.entities import Flow, FlowSuggestedResources, Task
from ..models.workspace import Workspace
from ..utils import parse_timestamp

# Set up module logger
logger = logging.getLogger(__name__)

STATUS_ICONS = {
    "todo": "⬜",
    "inprogress": "🔄",
    "done": "✅",
}


def validate_timestamp(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    """Click callback rejecting date options that are not ISO-8601."""
    if value is None:
        return None
    if parse_timestamp(value.strip()) is None:
        raise click.BadParameter(f"'{value}' is not an ISO-8601 date, e.g. 2024-07-01 or 2024-07-01T09:00:00Z")
    return value.strip()


def get_workspace() -> Workspace:
    """Workspace created by the root command."""
    return click.get_current_context().find_object(Workspace)


def require_user(workspace: Workspace) -> UserProfile:
    """The current user, or exit when no identity is available."""
    try:
        return workspace.user
    except AuthenticationRequiredError as e:
        click.secho(f"❌ {e}", fg="red")
        raise SystemExit(1)


def require_flow(workspace: Workspace, flow_id: str) -> Flow:
    """Load a flow or exit with an error."""
    flow = workspace.flows.get_by_id(flow_id)
    if flow is None:
        click.secho(f"❌ Flow '{flow_id}' not found.", fg="red")
        raise SystemExit(1)
    return flow


@contextmanager
def ai_errors() -> Iterator[None]:
    """
    Report AI failures as "AI Error" and exit with status 1.
    
    Nothing is persisted when the wrapped call fails.
    """
    try:
        yield
    except GatewayError as e:
        logger.error(f"AI operation failed: {e}")
        click.secho(f"❌ AI Error: {e}", fg="red")
        raise SystemExit(1)
    except FileNotFoundError as e:
        click.secho(f"❌ Configuration error: {e}", fg="red")
        click.echo("💡 Tip: Run 'flowforge wizard' or set OPENAI_API_KEY")
        raise SystemExit(1)


def echo_flow_summary(flow: Flow) -> None:
    """One line per flow for listings."""
    done = sum(1 for step in flow.steps if step.status == "done")
    click.echo(
        f"  {click.style(flow.name, fg='cyan', bold=True)} [{flow.id}] "
        f"{done}/{len(flow.steps)} steps done"
    )


def echo_flow(flow: Flow) -> None:
    """Full flow detail: description, ordered steps and resources."""
    click.echo(f"\n📋 {click.style(flow.name, fg='cyan', bold=True)}")
    click.echo(f"🏷️  ID: {flow.id}")
    if flow.template_category:
        click.echo(f"📂 Template category: {flow.template_category}")
    if flow.description:
        click.echo(f"📝 {flow.description}")
    click.echo(f"🕒 Updated: {flow.updated_at}")
    click.echo()
    
    steps = flow.ordered_steps()
    if not steps:
        click.echo("No steps yet. Add one with 'flowforge flow add-step'.")
    for i, step in enumerate(steps):
        click.echo(f"  {i}. {STATUS_ICONS[step.status]} {step.name} [{step.id}]")
        details = [
            value for value in (
                step.priority and f"priority: {step.priority}",
                step.difficulty and f"difficulty: {step.difficulty}",
                step.estimated_time and f"time: {step.estimated_time}",
                step.deadline and f"deadline: {step.deadline}",
            ) if value
        ]
        if details:
            click.echo(f"     {', '.join(details)}")
        if step.description:
            click.echo(f"     {step.description}")
    
    if flow.suggested_resources:
        click.echo()
        echo_resources(flow.suggested_resources)


def echo_resources(resources: Optional[FlowSuggestedResources]) -> None:
    """Print suggested videos, articles and websites."""
    if resources is None:
        return
    sections = [
        ("🎥 Videos", [(item.title, item.url) for item in resources.youtube_videos or []]),
        ("📖 Articles", [(item.title, item.url) for item in resources.articles or []]),
        ("🌐 Websites", [(item.name, item.url) for item in resources.websites or []]),
    ]
    if not any(items for _, items in sections):
        click.echo("No resources suggested.")
        return
    for label, items in sections:
        if not items:
            continue
        click.echo(f"{label}:")
        for title, url in items:
            click.echo(f"  - {title}: {url}")


def echo_bullets(title: str, items: Optional[List[str]]) -> None:
    """Print a titled bullet list, skipping empty ones."""
    if not items:
        return
    click.echo(f"{title}:")
    for item in items:
        click.echo(f"  • {item}")


def echo_task(task: Task) -> None:
    mark = "✅" if task.is_completed else "⬜"
    line = f"  {mark} {task.name} [{task.id}]"
    if task.flow_name:
        line += f" ({task.flow_name}"
        line += f" / {task.step_name})" if task.step_name else ")"
    click.echo(line)
    if task.due_date:
        click.echo(f"     due: {task.due_date}")
    if task.notes:
        click.echo(f"     {task.notes}")
