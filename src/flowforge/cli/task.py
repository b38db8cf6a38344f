"""
FlowForge Task Commands

This module implements the 'flowforge task' command group for the personal
to-do list, including turning flow steps into tasks.
"""

from typing import Optional

import click

from .common import echo_task, get_workspace, require_flow, validate_timestamp


@click.group()
def task() -> None:
    """Manage your to-do list."""
    pass


@task.command("list")
@click.option('--pending', is_flag=True, help='Only show incomplete tasks')
def list_tasks(pending: bool) -> None:
    """List tasks, newest first."""
    tasks = get_workspace().tasks.get_all()
    if pending:
        tasks = [t for t in tasks if not t.is_completed]
    if not tasks:
        click.echo("No tasks. Add one with 'flowforge task add'.")
        return
    done = sum(1 for t in tasks if t.is_completed)
    click.echo(f"📝 {len(tasks)} task(s), {done} completed:")
    for item in tasks:
        echo_task(item)


@task.command("add")
@click.argument('name')
@click.option('--due', 'due_date', callback=validate_timestamp, help='ISO-8601 due date')
@click.option('--notes', help='Free-form notes')
def add(name: str, due_date: Optional[str], notes: Optional[str]) -> None:
    """Add a task."""
    if not name.strip():
        click.secho("❌ Task name cannot be empty", fg="red")
        raise SystemExit(1)
    tasks = get_workspace().tasks.upsert({
        "name": name.strip(),
        "due_date": due_date,
        "notes": notes,
    })
    click.echo(f"➕ Added task '{tasks[0].name}' [{tasks[0].id}]")


@task.command("toggle")
@click.argument('task_id')
def toggle(task_id: str) -> None:
    """Mark a task complete, or incomplete again."""
    workspace = get_workspace()
    if workspace.tasks.get_by_id(task_id) is None:
        click.secho(f"❌ Task '{task_id}' not found.", fg="red")
        raise SystemExit(1)
    for item in workspace.tasks.toggle_completion(task_id):
        if item.id == task_id:
            state = "completed" if item.is_completed else "not completed"
            click.echo(f"🔄 '{item.name}' is now {state}")


@task.command("delete")
@click.argument('task_id')
def delete(task_id: str) -> None:
    """Delete a task."""
    workspace = get_workspace()
    existing = workspace.tasks.get_by_id(task_id)
    if existing is None:
        click.secho(f"❌ Task '{task_id}' not found.", fg="red")
        raise SystemExit(1)
    workspace.tasks.delete_by_id(task_id)
    click.echo(f"🗑️  Deleted task '{existing.name}'")


@task.command("from-step")
@click.argument('flow_id')
@click.argument('step_id')
def from_step(flow_id: str, step_id: str) -> None:
    """Add a flow step to your task list."""
    workspace = get_workspace()
    source = require_flow(workspace, flow_id)
    created = workspace.tasks.create_from_step(source, step_id)
    if created is None:
        click.secho(f"❌ Step '{step_id}' not found in flow '{source.name}'.", fg="red")
        raise SystemExit(1)
    click.echo(f"➕ Added task '{created.name}' [{created.id}] from flow '{source.name}'")
