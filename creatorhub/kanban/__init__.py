"""Workflow board: stage registry, card projection, drag and commit."""
from .cache import Keys, QueryCache, QueryKey
from .columns import Fallback, Matched, Unplaced, bucket_cards, resolve_column
from .committer import MoveCommitter
from .drag import DragController, DragPhase, DropOutcome, GestureTracker
from .projection import StageRegistry, filter_by_campaign, project_cards

__all__ = [
    "Keys",
    "QueryCache",
    "QueryKey",
    "Fallback",
    "Matched",
    "Unplaced",
    "bucket_cards",
    "resolve_column",
    "MoveCommitter",
    "DragController",
    "DragPhase",
    "DropOutcome",
    "GestureTracker",
    "StageRegistry",
    "filter_by_campaign",
    "project_cards",
]
