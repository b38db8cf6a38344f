"""
FlowForge Flow Factory

Builders for brand-new flows: manual creation, AI-generated step lists and
template instantiation. None of these persist anything; pass the result to
FlowManager.upsert.
"""

from typing import List, Optional

from .entities import Flow, Step, Template
from .settings import DefaultSettings, ValidationSettings
from ..utils import generate_id, get_timestamp, truncate_string


def create_flow(name: str, user_id: str, description: Optional[str] = None) -> Flow:
    """
    Create an empty flow from the manual creation form.
    
    Args:
        name: Flow name, at least 3 characters
        user_id: Owner reference
        description: Optional description
        
    Returns:
        New Flow with no steps
        
    Raises:
        ValueError: If the name is too short
    """
    name = name.strip()
    if len(name) < ValidationSettings.MIN_FLOW_NAME_LENGTH:
        raise ValueError(
            f"Flow name must be at least {ValidationSettings.MIN_FLOW_NAME_LENGTH} characters."
        )
    now = get_timestamp()
    return Flow(
        id=generate_id("flow"),
        name=name,
        description=(description or "").strip() or DefaultSettings.DEFAULT_FLOW_DESCRIPTION,
        user_id=user_id,
        created_at=now,
        updated_at=now,
    )


def flow_from_step_names(description: str, step_names: List[str], user_id: str) -> Flow:
    """
    Materialize an AI-generated list of step names into a new flow.
    
    The flow is named "AI: " followed by the first 30 characters of the
    description.
    
    Raises:
        ValueError: If no usable step names were generated
    """
    names = [n.strip() for n in step_names if n and n.strip()]
    if not names:
        raise ValueError("The AI couldn't generate a flow. Please try a different description.")
    
    now = get_timestamp()
    steps = [
        Step(id=generate_id(f"step-ai-{index}"), name=step_name, status="todo", created_at=now, updated_at=now)
        for index, step_name in enumerate(names)
    ]
    name = DefaultSettings.AI_FLOW_NAME_PREFIX + truncate_string(
        description, DefaultSettings.AI_FLOW_NAME_LENGTH
    )
    return Flow(
        id=generate_id("flow-ai"),
        name=name,
        description=description,
        user_id=user_id,
        steps=steps,
        steps_order=[step.id for step in steps],
        created_at=now,
        updated_at=now,
    )


def instantiate_template(template: Template, user_id: str) -> Flow:
    """
    Clone a template into a brand-new flow.
    
    Steps get fresh ids and timestamps and their status is reset to "todo";
    the template's order is preserved.
    """
    now = get_timestamp()
    flow_id = generate_id("flow-tpl")
    
    clones = {}
    for template_step in template.steps:
        clones[template_step.id] = template_step.model_copy(update={
            "id": generate_id(f"step-{flow_id}"),
            "status": "todo",
            "created_at": now,
            "updated_at": now,
        })
    steps = [clones[step.id] for step in template.steps]
    
    return Flow(
        id=flow_id,
        name=DefaultSettings.TEMPLATE_COPY_PREFIX + template.name,
        description=template.description,
        user_id=user_id,
        steps=steps,
        steps_order=[clones[step_id].id for step_id in template.steps_order],
        is_template=False,
        template_category=template.category,
        created_at=now,
        updated_at=now,
    )
