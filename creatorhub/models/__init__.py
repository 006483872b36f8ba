"""Data schemas and validation."""
from .schemas import (
    Application,
    Campaign,
    Card,
    Company,
    Creator,
    CreatorStats,
    Deliverable,
    Message,
    MetricsUpdate,
    WorkflowStage,
    CREATOR_STATUS_LABELS,
    CREATOR_WORKFLOW_STAGES,
)

__all__ = [
    "Application",
    "Campaign",
    "Card",
    "Company",
    "Creator",
    "CreatorStats",
    "Deliverable",
    "Message",
    "MetricsUpdate",
    "WorkflowStage",
    "CREATOR_STATUS_LABELS",
    "CREATOR_WORKFLOW_STAGES",
]
