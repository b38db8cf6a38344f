"""
FlowForge Main CLI

This module defines the main CLI group and entry point for FlowForge commands.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from ..models.config import apply_environment_overrides, create_default_config
from ..models.config_manager import ConfigManager
from ..models.settings import DefaultSettings, ONBOARDING_TOUR
from ..models.workspace import Workspace
from .coach import discover, unstuck
from .flow import flow
from .pomodoro import pomodoro
from .task import task
from .template import template
from .wizard import wizard

# Set up module logger
logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version="0.1.0", prog_name="flowforge")
@click.option(
    '--data-dir',
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DefaultSettings.DATA_DIR_ENV,
    help='Directory holding flows and tasks (overrides the config file)'
)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx: click.Context, data_dir: Optional[Path], verbose: bool) -> None:
    """
    FlowForge: AI-assisted productivity workspace.
    
    Build multi-step flows, track tasks, focus with a Pomodoro timer and ask
    the AI assistant for next steps, resources and help when you are stuck.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, DefaultSettings.DEFAULT_LOG_LEVEL),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )
    
    # Tests and embedding callers may pass a ready workspace
    if isinstance(ctx.obj, Workspace):
        workspace = ctx.obj
    else:
        config = ConfigManager().load_config() or create_default_config()
        config = apply_environment_overrides(config)
        if data_dir is not None:
            config.data_dir = data_dir
        logger.debug(f"Using data directory {config.data_dir}")
        workspace = Workspace(config)
        ctx.obj = workspace
    
    if not workspace.app_state.is_onboarding_completed():
        show_onboarding_tour()
        workspace.app_state.mark_onboarding_completed()


def show_onboarding_tour() -> None:
    """Print the product tour shown on first launch."""
    click.echo()
    for i, page in enumerate(ONBOARDING_TOUR, 1):
        click.echo(f"{i}/{len(ONBOARDING_TOUR)} {click.style(page['title'], fg='cyan', bold=True)}")
        click.echo(f"    {page['description']}")
    click.echo()


# Register subcommands
cli.add_command(flow)
cli.add_command(task)
cli.add_command(template)
cli.add_command(pomodoro)
cli.add_command(unstuck)
cli.add_command(discover)
cli.add_command(wizard)


def main() -> None:
    """Main entry point for the FlowForge CLI."""
    cli()
