"""
FlowForge Built-in Templates

Static seed patterns for new flows. Templates are never persisted or mutated;
using one clones its steps into a brand-new Flow (see flow_factory).
"""

from typing import List, Optional

from .entities import Step, Template

# Fixed timestamp for template seed steps; clones always get fresh ones
_SEED_TIMESTAMP = "2024-01-01T00:00:00+00:00"


def _template(template_id: str, name: str, description: str, category: str, step_names: List[str]) -> Template:
    steps = [
        Step(
            id=f"{template_id}-step-{index + 1}",
            name=step_name,
            status="todo",
            created_at=_SEED_TIMESTAMP,
            updated_at=_SEED_TIMESTAMP,
        )
        for index, step_name in enumerate(step_names)
    ]
    return Template(
        id=template_id,
        name=name,
        description=description,
        category=category,
        steps=steps,
        steps_order=[step.id for step in steps],
    )


PREBUILT_TEMPLATES: List[Template] = [
    _template(
        "template-app-ui-design",
        "App UI Design",
        "A standard workflow for designing application user interfaces.",
        "Design",
        ["Ideate & Research", "Sketching", "Wireframing", "Prototyping", "User Testing",
         "UI Polishing", "Handoff to Devs"],
    ),
    _template(
        "template-marketing-campaign",
        "Marketing Campaign",
        "Plan and execute a successful marketing campaign.",
        "Marketing",
        ["Define Goals & KPIs", "Target Audience Research", "Budget Allocation", "Content Creation",
         "Channel Selection", "Campaign Launch", "Performance Monitoring", "Reporting & Analysis"],
    ),
    _template(
        "template-content-creation",
        "Content Creation",
        "A workflow for creating engaging content from idea to publication.",
        "Content",
        ["Brainstorm Ideas", "Keyword Research", "Outline Creation", "Drafting Content",
         "Editing & Proofreading", "Design & Formatting", "Publishing", "Promotion"],
    ),
    _template(
        "template-event-planning",
        "Event Planning",
        "Comprehensive checklist for planning any event.",
        "Events",
        ["Define Event Goals", "Set Budget", "Choose Date & Venue", "Vendor Management",
         "Marketing & Promotion", "Attendee Registration", "On-site Coordination", "Post-event Follow-up"],
    ),
    _template(
        "template-software-sprint",
        "Software Development Sprint",
        "Typical agile sprint workflow for software teams.",
        "Development",
        ["Sprint Planning", "Daily Standups", "Development Work", "Code Review", "Testing (QA)",
         "Sprint Review", "Sprint Retrospective"],
    ),
    _template(
        "template-personal-goal",
        "Personal Goal Setting",
        "A framework to achieve your personal goals.",
        "Personal",
        ["Define Specific Goal", "Break Down into Milestones", "Identify Resources", "Set Timeline",
         "Track Progress Weekly", "Review & Adjust", "Celebrate Achievement"],
    ),
]


def list_templates(category: Optional[str] = None) -> List[Template]:
    """
    List built-in templates, optionally filtered by category (case-insensitive).
    """
    if category is None:
        return list(PREBUILT_TEMPLATES)
    return [t for t in PREBUILT_TEMPLATES if t.category.lower() == category.lower()]


def get_template(template_id: str) -> Optional[Template]:
    """Get a built-in template by its ID."""
    for template in PREBUILT_TEMPLATES:
        if template.id == template_id:
            return template
    return None
