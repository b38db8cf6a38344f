"""
FlowForge Template Commands

This module implements the 'flowforge template' command group for browsing
the built-in templates and starting new flows from them.
"""

from typing import Optional

import click

from ..models.flow_factory import instantiate_template
from ..models.templates import get_template, list_templates
from .common import echo_flow, get_workspace, require_user


@click.group()
def template() -> None:
    """Browse built-in flow templates."""
    pass


@template.command("list")
@click.option('--category', help='Only show templates in this category')
def list_all(category: Optional[str]) -> None:
    """List the built-in templates."""
    templates = list_templates(category)
    if not templates:
        click.echo(f"No templates in category '{category}'.")
        return
    for item in templates:
        click.echo(
            f"  {click.style(item.name, fg='cyan', bold=True)} [{item.id}] "
            f"({item.category}, {len(item.steps)} steps)"
        )
        if item.description:
            click.echo(f"     {item.description}")


@template.command("use")
@click.argument('template_id')
def use(template_id: str) -> None:
    """Create a new flow from a template."""
    workspace = get_workspace()
    user = require_user(workspace)
    source = get_template(template_id)
    if source is None:
        click.secho(f"❌ Template '{template_id}' not found.", fg="red")
        raise SystemExit(1)
    
    new_flow = instantiate_template(source, user.uid)
    workspace.flows.upsert(new_flow)
    click.echo(f"✅ Created flow from template '{source.name}'")
    echo_flow(new_flow)
