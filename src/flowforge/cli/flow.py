"""
FlowForge Flow Commands

This module implements the 'flowforge flow' command group: creating, editing
and inspecting flows and their steps, plus the AI helpers that generate,
summarize and enrich them.
"""

from typing import Optional

import click

from ..models.entities import STEP_STATUSES, Flow
from ..models.flow_factory import create_flow, flow_from_step_names
from ..models.settings import ValidationSettings
from .common import (
    ai_errors, echo_bullets, echo_flow, echo_flow_summary, echo_resources,
    get_workspace, require_flow, require_user, validate_timestamp,
)

PRIORITIES = click.Choice(["Low", "Medium", "High"])
DIFFICULTIES = click.Choice(["Easy", "Medium", "Hard"])


@click.group()
def flow() -> None:
    """
    Create and manage flows.
    
    A flow is a named, ordered list of steps, each with its own status.
    """
    pass


@flow.command("list")
def list_flows() -> None:
    """List all flows, most recently created first."""
    flows = get_workspace().flows.get_all()
    if not flows:
        click.echo("No flows yet. Create one with 'flowforge flow create' or 'flowforge template use'.")
        return
    click.echo(f"📚 {len(flows)} flow(s):")
    for item in flows:
        echo_flow_summary(item)


@flow.command("show")
@click.argument('flow_id')
def show_flow(flow_id: str) -> None:
    """Show a flow with its steps in order."""
    echo_flow(require_flow(get_workspace(), flow_id))


@flow.command("create")
@click.argument('name')
@click.option('--description', '-d', help='What the flow is for')
def create(name: str, description: Optional[str]) -> None:
    """
    Create an empty flow.
    
    Example: flowforge flow create "Launch blog" -d "Set up and publish the first post"
    """
    workspace = get_workspace()
    user = require_user(workspace)
    try:
        new_flow = create_flow(name, user.uid, description)
    except ValueError as e:
        click.secho(f"❌ {e}", fg="red")
        raise SystemExit(1)
    
    workspace.flows.upsert(new_flow)
    click.echo(f"✅ Created flow {click.style(new_flow.name, fg='cyan', bold=True)} [{new_flow.id}]")


@flow.command("delete")
@click.argument('flow_id')
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
def delete(flow_id: str, yes: bool) -> None:
    """Delete a flow. Tasks created from its steps are kept."""
    workspace = get_workspace()
    existing = require_flow(workspace, flow_id)
    if not yes and not click.confirm(f"Delete flow '{existing.name}'?"):
        click.echo("Cancelled.")
        return
    workspace.flows.delete_by_id(flow_id)
    click.echo(f"🗑️  Deleted flow '{existing.name}'")


@flow.command("add-step")
@click.argument('flow_id')
@click.argument('name')
@click.option('--description', help='Step details')
@click.option('--priority', type=PRIORITIES)
@click.option('--difficulty', type=DIFFICULTIES)
@click.option('--estimated-time', help="Free text estimate, e.g. '2 hours'")
@click.option('--deadline', callback=validate_timestamp, help='ISO-8601 deadline')
def add_step(flow_id: str, name: str, **fields: Optional[str]) -> None:
    """Append a step to a flow."""
    workspace = get_workspace()
    require_flow(workspace, flow_id)
    if not name.strip():
        click.secho("❌ Step name cannot be empty", fg="red")
        raise SystemExit(1)
    
    updated = workspace.flows.add_step(flow_id, name, **_given(fields))
    step_id = updated.steps_order[-1]
    click.echo(f"➕ Added step '{updated.get_step(step_id).name}' [{step_id}]")


@flow.command("edit-step")
@click.argument('flow_id')
@click.argument('step_id')
@click.option('--name', help='New step name')
@click.option('--description', help='Step details')
@click.option('--priority', type=PRIORITIES)
@click.option('--difficulty', type=DIFFICULTIES)
@click.option('--estimated-time', help="Free text estimate, e.g. '2 hours'")
@click.option('--deadline', callback=validate_timestamp, help='ISO-8601 deadline')
@click.option('--notes', help='Free-form notes')
def edit_step(flow_id: str, step_id: str, **fields: Optional[str]) -> None:
    """Edit fields of a step; only the given options change."""
    workspace = get_workspace()
    require_flow(workspace, flow_id)
    changes = _given(fields)
    if not changes:
        click.echo("Nothing to change.")
        return
    try:
        updated = workspace.flows.update_step(flow_id, step_id, **changes)
    except ValueError as e:
        click.secho(f"❌ {e}", fg="red")
        raise SystemExit(1)
    if updated is None:
        _step_not_found(step_id)
    click.echo(f"✏️  Updated step {step_id}")


@flow.command("remove-step")
@click.argument('flow_id')
@click.argument('step_id')
def remove_step(flow_id: str, step_id: str) -> None:
    """Remove a step from a flow."""
    workspace = get_workspace()
    require_flow(workspace, flow_id)
    if workspace.flows.delete_step(flow_id, step_id) is None:
        _step_not_found(step_id)
    click.echo(f"🗑️  Removed step {step_id}")


@flow.command("status")
@click.argument('flow_id')
@click.argument('step_id')
@click.argument('status', type=click.Choice(STEP_STATUSES))
def set_status(flow_id: str, step_id: str, status: str) -> None:
    """Set a step's status: todo, inprogress or done."""
    workspace = get_workspace()
    require_flow(workspace, flow_id)
    if workspace.flows.set_step_status(flow_id, step_id, status) is None:
        _step_not_found(step_id)
    click.echo(f"🔄 Step {step_id} is now {status}")


@flow.command("move-step")
@click.argument('flow_id')
@click.argument('step_id')
@click.argument('index', type=int)
def move_step(flow_id: str, step_id: str, index: int) -> None:
    """Move a step to a new position (0-based, clamped to the list)."""
    workspace = get_workspace()
    require_flow(workspace, flow_id)
    updated = workspace.flows.move_step(flow_id, step_id, index)
    if updated is None:
        _step_not_found(step_id)
    click.echo(f"↕️  Step {step_id} moved to position {updated.steps_order.index(step_id)}")


@flow.command("generate")
@click.argument('description')
@click.option('--available-time', help='Time you can spend, e.g. "2 weeks"')
@click.option('--priority-level', help='How important this is')
@click.option('--resources', help='Resources you already have')
def generate(description: str, **fields: Optional[str]) -> None:
    """
    Generate a flow from a description with AI.
    
    Example: flowforge flow generate "Plan a weekend hiking trip" --available-time "1 week"
    """
    workspace = get_workspace()
    user = require_user(workspace)
    if len(description.strip()) < ValidationSettings.MIN_AI_DESCRIPTION_LENGTH:
        click.secho(
            f"❌ Please describe the flow in at least "
            f"{ValidationSettings.MIN_AI_DESCRIPTION_LENGTH} characters.",
            fg="red"
        )
        raise SystemExit(1)
    
    click.echo("🤖 Generating flow...")
    with ai_errors():
        result = workspace.gateway.generate_flow_from_description(
            description=description.strip(), **_given(fields)
        )
    
    try:
        new_flow = flow_from_step_names(description, result.flow, user.uid)
    except ValueError as e:
        click.secho(f"❌ AI Error: {e}", fg="red")
        raise SystemExit(1)
    
    workspace.flows.upsert(new_flow)
    click.echo(f"✅ Created flow with {len(new_flow.steps)} steps")
    echo_flow(new_flow)


@flow.command("summarize")
@click.argument('flow_id')
@click.option('--apply', 'apply_description', is_flag=True,
              help='Replace the flow description with the generated summary')
def summarize(flow_id: str, apply_description: bool) -> None:
    """Summarize a flow and estimate its total time with AI."""
    workspace = get_workspace()
    existing = require_flow(workspace, flow_id)
    
    with ai_errors():
        result = workspace.gateway.summarize_flow_details(
            flow_name=existing.name,
            step_names=[step.name for step in existing.ordered_steps()],
        )
    
    click.echo(f"\n📝 {result.generated_description}")
    click.echo(f"⏱️  {result.estimated_total_time}")
    echo_bullets("💡 Insights", result.insights)
    
    if apply_description:
        workspace.flows.set_description(flow_id, result.generated_description)
        click.echo("✅ Description updated")


@flow.command("resources")
@click.argument('flow_id')
def resources(flow_id: str) -> None:
    """Suggest videos, articles and websites for a flow and save them on it."""
    workspace = get_workspace()
    existing = require_flow(workspace, flow_id)
    
    click.echo("🔎 Looking for resources...")
    with ai_errors():
        result = workspace.gateway.suggest_flow_resources(
            flow_name=existing.name,
            flow_description=existing.description,
        )
    
    suggested = result.to_resources()
    workspace.flows.set_suggested_resources(flow_id, suggested)
    echo_resources(suggested)


@flow.command("next-step")
@click.argument('flow_id')
@click.option('--goals', required=True, help='What you want to achieve with this flow')
def next_step(flow_id: str, goals: str) -> None:
    """Ask the AI what to do next in a flow."""
    workspace = get_workspace()
    existing = require_flow(workspace, flow_id)
    
    with ai_errors():
        result = workspace.gateway.suggest_next_step(
            current_workflow_state=describe_progress(existing),
            user_goals=goals,
        )
    
    click.echo(f"\n👉 {result.suggested_next_step}")
    click.echo(f"⏱️  Estimated time: {result.estimated_time}")
    click.echo(f"Priority: {result.priority}  Difficulty: {result.difficulty}")


def describe_progress(current: Flow) -> str:
    """Plain-text snapshot of a flow's progress for the next-step prompt."""
    lines = [f"Flow: {current.name}"]
    if current.description:
        lines.append(f"Description: {current.description}")
    steps = current.ordered_steps()
    if not steps:
        lines.append("No steps yet.")
    for step in steps:
        lines.append(f"- [{step.status}] {step.name}")
    return "\n".join(lines)


def _given(fields: dict) -> dict:
    return {key: value for key, value in fields.items() if value is not None}


def _step_not_found(step_id: str) -> None:
    click.secho(f"❌ Step '{step_id}' not found.", fg="red")
    raise SystemExit(1)
