"""
FlowForge Centralized Settings

This module contains all centralized configuration constants and default values
used throughout the FlowForge application.
"""

from typing import Dict, List


class DefaultSettings:
    """
    Centralized default settings for FlowForge.
    
    Single source of truth for storage keys, model parameters and
    Pomodoro defaults.
    """
    
    # AI Model Configuration
    DEFAULT_MODEL = "gpt-4o-mini"
    DEFAULT_TEMPERATURE = 0.7
    DEFAULT_MAX_TOKENS = 2000
    
    # YAML Configuration
    YAML_LINE_WIDTH = 120
    YAML_PRESERVE_QUOTES = True
    
    # File Names
    CONFIG_FILE = "config.yaml"
    API_KEY_FILE = "openai_key.txt"
    
    # Storage keys (one JSON blob per key)
    FLOWS_KEY = "userFlows_v1"
    TASKS_KEY = "userTasks_v1"
    ONBOARDING_KEY = "flowforge_onboarding_completed_v1"
    DISCOVERY_KEY = "flowforge_discovery_data_v1"
    
    # Identity
    DEMO_USER_ID = "dummy-user-uid-123"
    DEMO_USER_EMAIL = "dummy@example.com"
    DEMO_USER_NAME = "Dummy User"
    
    # Pomodoro defaults
    WORK_MINUTES = 25
    SHORT_BREAK_MINUTES = 5
    LONG_BREAK_MINUTES = 15
    CYCLES_PER_LONG_BREAK = 4
    
    # Flow defaults
    DEFAULT_FLOW_DESCRIPTION = "No description provided."
    AI_FLOW_NAME_PREFIX = "AI: "
    AI_FLOW_NAME_LENGTH = 30
    TEMPLATE_COPY_PREFIX = "Copy of: "
    
    # Logging Configuration
    DEFAULT_LOG_LEVEL = "WARNING"
    
    # Environment variables
    API_KEY_ENV = "OPENAI_API_KEY"
    DEMO_AUTH_ENV = "FLOWFORGE_DEMO_AUTH"
    DATA_DIR_ENV = "FLOWFORGE_DATA_DIR"


class ValidationSettings:
    """
    Settings related to validation of user and AI input.
    """
    
    MIN_FLOW_NAME_LENGTH = 3
    MIN_AI_DESCRIPTION_LENGTH = 10
    MIN_PROBLEM_DESCRIPTION_LENGTH = 10
    MIN_REFLECTION_ANSWER_LENGTH = 10
    MAX_SUMMARY_INSIGHTS = 3


# Shown once on first launch
ONBOARDING_TOUR: List[Dict[str, str]] = [
    {
        "title": "Welcome to FlowForge!",
        "description": "Your personal productivity companion. Let's take a quick tour of the key features.",
    },
    {
        "title": "Dashboard: Your Command Center",
        "description": "List your flows and tasks, create new flows, or jump back into existing ones.",
    },
    {
        "title": "Create & Manage Flows",
        "description": "Design custom workflows: add steps, set deadlines and track progress. "
                       "Create flows by hand or let the AI Flow Generator give you a quick start.",
    },
    {
        "title": "Discover Your Next Big Thing",
        "description": "Answer a few reflective questions and get personalized goals, project ideas and resources.",
    },
    {
        "title": "Feeling Stuck? Get AI Help",
        "description": "Describe your challenge and get a practical roadmap, solution insights and helpful resources.",
    },
    {
        "title": "Flow Templates",
        "description": "Kickstart projects with pre-built templates for UI design, marketing, content creation and more.",
    },
]
