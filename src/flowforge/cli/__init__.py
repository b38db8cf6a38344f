"""
FlowForge CLI Commands

This package contains all command-line interface functionality for FlowForge:
flows, tasks, templates, the Pomodoro timer and the AI coaching commands.
"""

__all__ = []
