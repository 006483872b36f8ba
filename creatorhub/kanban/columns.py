"""Column assignment.

A card sits in the stage named by its ``workflow_status``. When the status is
missing, or names a stage that no longer exists (renamed or deleted after the
card was moved), the card falls back to the first stage instead of vanishing.
Matching is exact and case-sensitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Sequence, Union

from creatorhub.models.schemas import Card, WorkflowStage
from creatorhub.kanban.projection import StageRegistry


@dataclass(frozen=True)
class Matched:
    stage: WorkflowStage


@dataclass(frozen=True)
class Fallback:
    stage: WorkflowStage
    reason: Literal["missing", "unknown"]


@dataclass(frozen=True)
class Unplaced:
    """No stages are registered, so there is no column to place the card in."""

    stage: None = None


ColumnResolution = Union[Matched, Fallback, Unplaced]


def resolve_column(status: Optional[str], registry: StageRegistry) -> ColumnResolution:
    first = registry.first
    if first is None:
        return Unplaced()
    if not status:
        return Fallback(first, "missing")
    stage = registry.get(status)
    if stage is None:
        return Fallback(first, "unknown")
    return Matched(stage)


def current_stage_name(card: Card, registry: StageRegistry) -> Optional[str]:
    stage = resolve_column(card.application.workflow_status, registry).stage
    return stage.name if stage is not None else None


def bucket_cards(cards: Sequence[Card], registry: StageRegistry) -> Dict[str, List[Card]]:
    """Distribute cards over every stage of the registry, in column order."""
    buckets: Dict[str, List[Card]] = {name: [] for name in registry.names}
    for card in cards:
        name = current_stage_name(card, registry)
        if name is not None:
            buckets[name].append(card)
    return buckets
