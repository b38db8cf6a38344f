"""
FlowForge: AI-assisted productivity workspace.

FlowForge lets you build multi-step workflows ("flows"), track tasks, run a
Pomodoro timer and ask an AI assistant for next steps, flow outlines,
resources and help when you are stuck.
"""

from .cli.main import main
from .utils import (
    get_timestamp,
    get_datetime_now,
    parse_timestamp,
    next_timestamp,
    generate_id,
    truncate_string,
)

__version__ = "0.1.0"
__all__ = [
    "main",
    # Utils functions
    "get_timestamp",
    "get_datetime_now",
    "parse_timestamp",
    "next_timestamp",
    "generate_id",
    "truncate_string",
]
