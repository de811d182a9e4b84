# src/taskdeck/engine/seed.py

"""
Built-in seed collection.

The executive dashboard starts from this fixed set of tasks when no seed
file is configured. It is raw mapping data, run through the same parser
as YAML seed files.
"""

from typing import Any, Final

from .model import Task
from .parse import parse_tasks


SEED_TASKS: Final[list[dict[str, Any]]] = [
    {
        "id": 1,
        "title": "Review Q1 financial projections",
        "description": (
            "Analyze revenue forecasts, adjust budget allocations, and prepare "
            "variance explanations for leadership review."
        ),
        "priority": "high",
        "status": "in_progress",
        "assignee": "You",
        "due_date": "2026-01-06",
        "created_date": "2026-01-02",
        "category": "Finance",
        "progress": 50,
        "comments": 3,
        "attachments": 2,
        "starred": True,
        "subtasks": [
            {"id": 1, "title": "Gather Q4 actuals from accounting", "completed": True},
            {"id": 2, "title": "Build projection model", "completed": True},
            {"id": 3, "title": "Review with CFO", "completed": False},
            {"id": 4, "title": "Finalize and distribute", "completed": False},
        ],
        "tags": ["Q1", "Budget", "Priority"],
        "estimated_hours": 8,
        "actual_hours": 5.5,
    },
    {
        "id": 2,
        "title": "Approve agent promotion recommendations",
        "description": "Review 5 agents for Senior Agent promotion based on Q4 performance metrics.",
        "priority": "high",
        "status": "pending",
        "assignee": "You",
        "due_date": "2026-01-07",
        "created_date": "2026-01-03",
        "category": "Leadership",
        "progress": 0,
        "comments": 8,
        "attachments": 5,
        "starred": False,
        "subtasks": [
            {"id": 1, "title": "Review Sarah Mitchell file", "completed": False},
            {"id": 2, "title": "Review Marcus Chen file", "completed": False},
            {"id": 3, "title": "Review performance metrics", "completed": False},
        ],
        "tags": ["Promotions", "HR"],
        "estimated_hours": 4,
    },
    {
        "id": 3,
        "title": "Sign carrier renewal contract - Mutual of Omaha",
        "description": "Review and execute renewal with improved commission structure.",
        "priority": "urgent",
        "status": "pending",
        "assignee": "You",
        "due_date": "2026-01-05",
        "created_date": "2025-12-28",
        "category": "Contracts",
        "progress": 0,
        "comments": 12,
        "attachments": 3,
        "starred": True,
        "tags": ["Contract", "Urgent"],
        "estimated_hours": 1,
    },
    {
        "id": 4,
        "title": "Review marketing spend efficiency report",
        "description": "Analyze ROI on Q4 marketing campaigns.",
        "priority": "medium",
        "status": "completed",
        "assignee": "Sarah Mitchell",
        "assignee_avatar": "SM",
        "due_date": "2026-01-04",
        "created_date": "2026-01-01",
        "category": "Marketing",
        "progress": 100,
        "comments": 5,
        "attachments": 1,
        "starred": False,
        "tags": ["Marketing", "ROI"],
        "estimated_hours": 3,
        "actual_hours": 2.5,
    },
    {
        "id": 5,
        "title": "Prepare board presentation",
        "description": "Create executive summary for Q1 board meeting.",
        "priority": "high",
        "status": "in_progress",
        "assignee": "You",
        "due_date": "2026-01-10",
        "created_date": "2026-01-02",
        "category": "Leadership",
        "progress": 33,
        "comments": 2,
        "attachments": 4,
        "starred": True,
        "subtasks": [
            {"id": 1, "title": "Financial summary section", "completed": True},
            {"id": 2, "title": "Growth metrics dashboard", "completed": False},
            {"id": 3, "title": "Risk assessment", "completed": False},
        ],
        "tags": ["Board", "Presentation"],
        "estimated_hours": 12,
        "actual_hours": 4,
    },
    {
        "id": 6,
        "title": "Finalize 2026 hiring plan",
        "description": "Set agent recruitment targets and budget for new year.",
        "priority": "medium",
        "status": "pending",
        "assignee": "Michael Chen",
        "assignee_avatar": "MC",
        "due_date": "2026-01-08",
        "created_date": "2026-01-03",
        "category": "HR",
        "progress": 0,
        "comments": 6,
        "attachments": 2,
        "starred": False,
        "tags": ["Hiring", "2026"],
        "estimated_hours": 6,
    },
    {
        "id": 7,
        "title": "Review compliance audit findings",
        "description": "Address 3 minor findings from Q4 compliance review.",
        "priority": "medium",
        "status": "in_progress",
        "assignee": "You",
        "due_date": "2026-01-09",
        "created_date": "2026-01-04",
        "category": "Compliance",
        "progress": 67,
        "comments": 4,
        "attachments": 3,
        "starred": False,
        "subtasks": [
            {"id": 1, "title": "Document review finding #1", "completed": True},
            {"id": 2, "title": "Process update finding #2", "completed": True},
            {"id": 3, "title": "Training gap finding #3", "completed": False},
        ],
        "tags": ["Compliance", "Audit"],
        "estimated_hours": 5,
        "actual_hours": 2.5,
    },
    {
        "id": 8,
        "title": "Update override compensation structure",
        "description": "Implement new tiered override system for team leaders.",
        "priority": "low",
        "status": "pending",
        "assignee": "David Park",
        "assignee_avatar": "DP",
        "due_date": "2026-01-15",
        "created_date": "2026-01-05",
        "category": "Finance",
        "progress": 0,
        "comments": 1,
        "attachments": 1,
        "starred": False,
        "tags": ["Compensation", "Override"],
        "estimated_hours": 8,
    },
]


def seed_tasks() -> list[Task]:
    """Fresh Task models for the built-in seed collection."""
    return parse_tasks(SEED_TASKS, source="<builtin seed>")
