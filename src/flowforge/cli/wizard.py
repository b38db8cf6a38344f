"""
FlowForge Setup Wizard

Interactive first-time setup: where the OpenAI key lives, which model to
use, where flows and tasks are stored, and the Pomodoro durations.
"""

import os
import re
from pathlib import Path
from typing import Union

import click
import questionary

from ..models.config import FlowForgeConfig, get_config_dir, get_default_data_dir
from ..models.config_manager import ConfigManager
from ..models.settings import DefaultSettings

# Shape of an OpenAI secret key: "sk-" followed by URL-safe characters
API_KEY_PATTERN = re.compile(r"sk-[A-Za-z0-9_\-]{17,}")

MODEL_CHOICES = [
    questionary.Choice("gpt-4o-mini: fast and inexpensive (recommended)", value="gpt-4o-mini"),
    questionary.Choice("gpt-4o: most capable", value="gpt-4o"),
    questionary.Choice("gpt-4.1-mini: balanced", value="gpt-4.1-mini"),
]

WORK_CHOICES = [
    questionary.Choice("25 minutes (classic)", value=25),
    questionary.Choice("50 minutes (deep work)", value=50),
    questionary.Choice("15 minutes (short bursts)", value=15),
]


class SetupCancelled(Exception):
    """Raised when the user aborts a wizard prompt."""


@click.command()
@click.option(
    '--force',
    is_flag=True,
    help='Overwrite existing configuration without prompting'
)
def wizard(force: bool) -> None:
    """
    Interactive setup wizard for FlowForge.
    
    Writes the configuration file used by every other command.
    """
    config_manager = ConfigManager()
    if config_manager.config_exists() and not force:
        if not click.confirm(f"Configuration already exists at {config_manager.config_path}. Overwrite it?"):
            click.echo("Keeping the existing configuration.")
            return
    
    try:
        config = collect_config()
    except SetupCancelled:
        click.echo("❌ Setup cancelled.")
        return
    
    if not config_manager.save_config(config):
        click.secho("❌ Failed to save configuration.", fg="red")
        raise SystemExit(1)
    
    click.echo("\n✅ Configuration saved.")
    click.echo(f"📂 Data directory: {config.data_dir}")
    click.echo(f"🤖 Model: {config.default_model}")
    click.echo(f"🔑 API key file: {config.openai_key_path}")
    click.echo("\n🚀 Next: 'flowforge template list' or 'flowforge flow generate \"<your goal>\"'")


def collect_config() -> FlowForgeConfig:
    """
    Ask every setup question and build the configuration.
    
    Raises:
        SetupCancelled: If any prompt is aborted
    """
    click.echo("\n🧙 FlowForge setup")
    click.echo(f"💡 {DefaultSettings.API_KEY_ENV} in the environment always wins over the key file.\n")
    
    key_path = ask_api_key_path()
    model = _answer(questionary.select(
        "Which OpenAI model should FlowForge use?",
        choices=MODEL_CHOICES,
        default=DefaultSettings.DEFAULT_MODEL,
    ))
    data_dir = ask_data_dir()
    work_minutes = _answer(questionary.select(
        "Pomodoro work segment length?",
        choices=WORK_CHOICES,
        default=DefaultSettings.WORK_MINUTES,
    ))
    
    return FlowForgeConfig(
        openai_key_path=key_path,
        default_model=model,
        data_dir=data_dir,
        work_minutes=work_minutes,
    )


def ask_api_key_path() -> Path:
    """Use the default key file if present, otherwise create or locate one."""
    default_path = get_config_dir() / DefaultSettings.API_KEY_FILE
    if default_path.exists():
        click.echo(f"🔑 Using API key file {default_path}")
        return default_path
    
    if _answer(questionary.confirm("No API key file found. Create one now?", default=True)):
        key = _answer(questionary.password(
            "OpenAI API key:",
            validate=lambda text: is_api_key(text.strip()) or "Expected a key starting with 'sk-'"
        ))
        write_api_key_file(default_path, key.strip())
        return default_path
    
    chosen = _answer(questionary.path(
        "Path to an existing API key file:",
        validate=validate_api_key_file
    ))
    return Path(chosen).expanduser()


def ask_data_dir() -> Path:
    """Choose where flows and tasks are stored, creating the directory."""
    default_dir = get_default_data_dir()
    if _answer(questionary.confirm(f"Store flows and tasks in {default_dir}?", default=True)):
        data_dir = default_dir
    else:
        data_dir = Path(_answer(questionary.path(
            "Data directory:",
            only_directories=True,
            validate=lambda text: Path(text).expanduser().parent.exists() or "Parent directory must exist"
        ))).expanduser()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def write_api_key_file(path: Path, key: str) -> None:
    """Write the key readable by the owner only."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(key)
    path.chmod(0o600)
    click.echo(f"✅ API key saved to {path} (mode 600)")


def is_api_key(text: str) -> bool:
    return API_KEY_PATTERN.fullmatch(text) is not None


def validate_api_key_file(path: str) -> Union[bool, str]:
    """questionary validator: True, or the reason the file cannot be used."""
    p = Path(path).expanduser()
    if not p.is_file():
        return f"Not a file: {path}"
    if not os.access(p, os.R_OK):
        return f"File is not readable: {path}"
    return True


def _answer(question: questionary.Question):
    """Ask a question; ``None`` (Ctrl+C or Esc) cancels the wizard."""
    answer = question.ask()
    if answer is None:
        raise SetupCancelled()
    return answer
