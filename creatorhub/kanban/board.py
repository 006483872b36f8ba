"""Company workflow board.

Wires the stage registry, card projection, column resolver, drag controller,
move committer and detail panel around one MarketplaceClient and one
QueryCache. The board re-projects from scratch whenever any of its server
collections is invalidated.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import requests

from creatorhub.config import Settings, get_settings
from creatorhub.kanban.cache import Keys, QueryCache, QueryKey
from creatorhub.kanban.columns import bucket_cards, current_stage_name
from creatorhub.kanban.committer import Dispatch, MoveCommitter, run_inline
from creatorhub.kanban.detail import DetailPanel
from creatorhub.kanban.drag import DragController
from creatorhub.kanban.projection import StageRegistry, filter_by_campaign, project_cards
from creatorhub.models.schemas import Campaign, Card, WorkflowStage
from creatorhub.notifications import Notifier
from creatorhub.utils.logger import get_logger

logger = get_logger(__name__)

BOARD_RESOURCES = frozenset({"workflow-stages", "applications", "campaigns", "creators"})


@dataclass(frozen=True)
class Column:
    stage: WorkflowStage
    cards: List[Card]
    is_drop_target: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.cards


class KanbanBoard:
    """Board state for the active company."""

    def __init__(
        self,
        client,
        cache: Optional[QueryCache] = None,
        notifier: Optional[Notifier] = None,
        settings: Optional[Settings] = None,
        dispatch: Dispatch = run_inline,
    ):
        self.client = client
        self.cache = cache or QueryCache()
        self.notifier = notifier or Notifier()
        self.settings = settings or get_settings()
        self.dispatch = dispatch

        self.company_id: Optional[int] = self.settings.company_id
        self.registry = StageRegistry()
        self.campaigns: List[Campaign] = []
        self.cards: List[Card] = []
        self._cards_by_id: Dict[int, Card] = {}
        self.selected_campaign_id: Optional[int] = None
        self.deleting_campaign_id: Optional[int] = None

        self.committer = MoveCommitter(client, self.cache, self.notifier, dispatch)
        self.drag = DragController(self.committer, self.column_of, lambda: self.registry.names)
        self.detail = DetailPanel(client, self.cache, self.committer, self.notifier, self.card, dispatch)

        self._listeners: List[Callable[[], None]] = []
        self._load_lock = threading.Lock()
        self._unsubscribe = self.cache.subscribe(self._on_invalidate)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _resolve_company_id(self) -> Optional[int]:
        if self.company_id is not None:
            return self.company_id
        company = self.cache.fetch(Keys.active_company(), self.client.get_active_company, None)
        if company is None:
            return None
        self.company_id = company.id
        return self.company_id

    def _load_stages(self) -> List[WorkflowStage]:
        company_id = self._resolve_company_id()
        if company_id is None:
            return []
        return self.cache.fetch(
            Keys.stages(company_id),
            lambda: self.client.list_workflow_stages(company_id),
            [],
        )

    def load(self) -> None:
        """Fetch stages and the three collections in parallel, then re-project."""
        with self._load_lock:
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
                stages = pool.submit(self._load_stages)
                applications = pool.submit(self.cache.fetch, Keys.applications(), self.client.list_applications, [])
                campaigns = pool.submit(self.cache.fetch, Keys.campaigns(), self.client.list_campaigns, [])
                creators = pool.submit(self.cache.fetch, Keys.creators(), self.client.list_creators, [])

            self.registry = StageRegistry(stages.result())
            self.campaigns = list(campaigns.result())
            self.cards = project_cards(applications.result(), self.campaigns, creators.result())
            self._cards_by_id = {card.id: card for card in self.cards}

        logger.info("board loaded: %d stages, %d cards", len(self.registry), len(self.cards))
        self._emit()

    def refresh(self) -> None:
        self.load()

    def _on_invalidate(self, key: QueryKey) -> None:
        if key.resource in BOARD_RESOURCES:
            self.refresh()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback run after every re-projection."""
        self._listeners.append(callback)
        return lambda: self._listeners.remove(callback) if callback in self._listeners else None

    def _emit(self) -> None:
        for callback in list(self._listeners):
            callback()

    def close(self) -> None:
        self._unsubscribe()
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def card(self, card_id: int) -> Optional[Card]:
        return self._cards_by_id.get(card_id)

    def column_of(self, card_id: int) -> Optional[str]:
        card = self.card(card_id)
        if card is None:
            return None
        return current_stage_name(card, self.registry)

    def visible_cards(self) -> List[Card]:
        return filter_by_campaign(self.cards, self.selected_campaign_id)

    def columns(self) -> List[Column]:
        buckets = bucket_cards(self.visible_cards(), self.registry)
        return [
            Column(
                stage=stage,
                cards=buckets[stage.name],
                is_drop_target=self.drag.is_drop_target(stage.name),
            )
            for stage in self.registry
        ]

    def campaign_options(self) -> List[Campaign]:
        """Campaigns offered in the filter (open campaigns only)."""
        return [c for c in self.campaigns if c.status == "open"]

    def select_campaign(self, campaign_id: Optional[int]) -> None:
        self.selected_campaign_id = campaign_id
        self._emit()

    # ------------------------------------------------------------------
    # Campaign deletion (confirmation dialog)
    # ------------------------------------------------------------------

    def request_campaign_delete(self, campaign_id: int) -> None:
        self.deleting_campaign_id = campaign_id

    def cancel_campaign_delete(self) -> None:
        self.deleting_campaign_id = None

    def confirm_campaign_delete(self) -> bool:
        campaign_id = self.deleting_campaign_id
        if campaign_id is None:
            return False
        try:
            self.client.delete_campaign(campaign_id)
        except requests.RequestException as exc:
            logger.error("delete of campaign %s failed: %s", campaign_id, exc)
            self.notifier.notify("Erro", "Não foi possível excluir a campanha.", "destructive")
            return False

        self.deleting_campaign_id = None
        if self.selected_campaign_id == campaign_id:
            self.selected_campaign_id = None
        self.notifier.notify("Campanha excluída", "A campanha foi excluída com sucesso.")
        self.cache.invalidate(Keys.campaigns())
        return True
