"""Card detail panel.

Opened by clicking a card (not dragging it). Deliverables, messages and
creator stats are fetched only while the panel is open. Clicking a stage pill
goes through the same MoveCommitter path as a drag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

import requests

from creatorhub.kanban.cache import Keys, QueryCache
from creatorhub.kanban.columns import current_stage_name
from creatorhub.kanban.committer import Dispatch, MoveCommitter, run_inline
from creatorhub.kanban.projection import StageRegistry
from creatorhub.models.schemas import Card, CreatorStats, Deliverable, Message, MetricsUpdate, WorkflowStage
from creatorhub.notifications import Notifier
from creatorhub.utils.logger import get_logger

logger = get_logger(__name__)

RECENT_LIMIT = 5
OWN_SENDER_LABEL = "Você"


@dataclass(frozen=True)
class StagePill:
    stage: WorkflowStage
    is_active: bool
    is_past: bool
    is_updating: bool


@dataclass(frozen=True)
class MessageLine:
    message: Message
    sender_label: str
    is_from_creator: bool


def _parse_count(raw: Optional[str]) -> Optional[int]:
    if raw is None or not str(raw).strip():
        return None
    try:
        value = int(float(str(raw).strip()))
    except (ValueError, OverflowError):
        return None
    return value if value >= 0 else None


def _parse_quality(raw: Optional[str]) -> Optional[float]:
    if raw is None or not str(raw).strip():
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return value if 0 <= value <= 5 else None


def parse_metrics_form(
    views: Optional[str] = None,
    engagement: Optional[str] = None,
    sales: Optional[str] = None,
    quality_score: Optional[str] = None,
) -> Optional[MetricsUpdate]:
    """Build a MetricsUpdate from raw form text, dropping invalid fields.

    Counts must be integers >= 0 and quality a number in [0, 5].
    Returns None when no field is valid.
    """
    metrics = MetricsUpdate(
        views=_parse_count(views),
        engagement=_parse_count(engagement),
        sales=_parse_count(sales),
        quality_score=_parse_quality(quality_score),
    )
    return None if metrics.is_empty() else metrics


class DetailPanel:
    def __init__(
        self,
        client,
        cache: QueryCache,
        committer: MoveCommitter,
        notifier: Notifier,
        card_lookup: Callable[[int], Optional[Card]],
        dispatch: Dispatch = run_inline,
    ):
        self.client = client
        self.cache = cache
        self.committer = committer
        self.notifier = notifier
        self.card_lookup = card_lookup
        self.dispatch = dispatch
        self.selected_id: Optional[int] = None
        self.metrics_pending = False

    @property
    def is_open(self) -> bool:
        return self.selected_id is not None

    @property
    def card(self) -> Optional[Card]:
        """The selected card as of the latest projection."""
        if self.selected_id is None:
            return None
        return self.card_lookup(self.selected_id)

    def open(self, card: Card) -> None:
        self.selected_id = card.id

    def close(self) -> None:
        self.selected_id = None

    # ------------------------------------------------------------------
    # Panel data (gated on the panel being open)
    # ------------------------------------------------------------------

    def deliverables(self) -> List[Deliverable]:
        if self.selected_id is None:
            return []
        app_id = self.selected_id
        return self.cache.fetch(Keys.deliverables(app_id), lambda: self.client.list_deliverables(app_id), [])

    def messages(self) -> List[Message]:
        if self.selected_id is None:
            return []
        app_id = self.selected_id
        return self.cache.fetch(Keys.messages(app_id), lambda: self.client.list_messages(app_id), [])

    def creator_stats(self) -> Optional[CreatorStats]:
        card = self.card
        if card is None:
            return None
        campaign_id, creator_id = card.campaign.id, card.creator.id
        return self.cache.fetch(
            Keys.creator_stats(campaign_id, creator_id),
            lambda: self.client.get_creator_stats(campaign_id, creator_id),
            None,
        )

    def recent_deliverables(self, limit: int = RECENT_LIMIT) -> List[Deliverable]:
        return self.deliverables()[:limit]

    def hidden_deliverables_count(self, limit: int = RECENT_LIMIT) -> int:
        return max(0, len(self.deliverables()) - limit)

    def recent_messages(self, limit: int = RECENT_LIMIT) -> List[MessageLine]:
        """Last ``limit`` messages, newest first."""
        card = self.card
        if card is None:
            return []
        lines = []
        for message in reversed(self.messages()[-limit:]):
            from_creator = message.sender_id == card.creator.id
            lines.append(MessageLine(
                message=message,
                sender_label=card.creator.name if from_creator else OWN_SENDER_LABEL,
                is_from_creator=from_creator,
            ))
        return lines

    # ------------------------------------------------------------------
    # Stage timeline
    # ------------------------------------------------------------------

    def stage_pills(self, registry: StageRegistry) -> List[StagePill]:
        card = self.card
        if card is None:
            return []
        current = current_stage_name(card, registry)
        current_index = registry.index_of(current)
        updating = self.committer.is_moving(card.id)
        return [
            StagePill(
                stage=stage,
                is_active=stage.name == current,
                is_past=current_index > idx,
                is_updating=updating,
            )
            for idx, stage in enumerate(registry)
        ]

    def advance_to(self, stage_name: str) -> bool:
        if self.selected_id is None or self.committer.is_moving(self.selected_id):
            return False
        return self.committer.submit(self.selected_id, stage_name)

    # ------------------------------------------------------------------
    # Metrics form
    # ------------------------------------------------------------------

    def submit_metrics(
        self,
        views: Optional[str] = None,
        engagement: Optional[str] = None,
        sales: Optional[str] = None,
        quality_score: Optional[str] = None,
    ) -> bool:
        card = self.card
        if card is None or self.metrics_pending:
            return False
        metrics = parse_metrics_form(views, engagement, sales, quality_score)
        if metrics is None:
            self.notifier.notify("Atenção", "Insira pelo menos uma métrica válida.", "destructive")
            return False

        self.metrics_pending = True
        self.dispatch(lambda: self._save_metrics(card, metrics))
        return True

    def _save_metrics(self, card: Card, metrics: MetricsUpdate) -> None:
        try:
            self.client.update_metrics(card.id, metrics)
        except requests.RequestException as exc:
            logger.error("metrics update for application %s failed: %s", card.id, exc)
            self.notifier.notify("Erro", "Não foi possível atualizar as métricas.", "destructive")
            return
        finally:
            self.metrics_pending = False

        self.notifier.notify("Métricas atualizadas!", "Os pontos do ranking foram recalculados.")
        self.cache.invalidate(Keys.leaderboard(card.campaign.id))
        self.cache.invalidate(Keys.creator_stats(card.campaign.id, card.creator.id))
