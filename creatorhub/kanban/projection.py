"""Stage registry and card projection.

``project_cards`` is a pure function of the three server collections: it is
re-run on every refresh instead of being patched incrementally.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from creatorhub.models.schemas import Application, Campaign, Card, Creator, WorkflowStage

CAMPAIGN_PLACEHOLDER_TITLE = "Campanha"
CREATOR_PLACEHOLDER_NAME = "Criador"


class StageRegistry:
    """Ordered workflow stages of one company.

    Stages are ordered by ``position``; ties keep the server's order.
    An empty registry (no stages or a failed fetch) yields zero columns.
    """

    def __init__(self, stages: Optional[Iterable[WorkflowStage]] = None):
        self._stages: List[WorkflowStage] = sorted(stages or [], key=lambda s: s.position)
        self._by_name: Dict[str, WorkflowStage] = {}
        for stage in self._stages:
            self._by_name.setdefault(stage.name, stage)

    def __iter__(self) -> Iterator[WorkflowStage]:
        return iter(self._stages)

    def __len__(self) -> int:
        return len(self._stages)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def is_empty(self) -> bool:
        return not self._stages

    @property
    def names(self) -> List[str]:
        return [s.name for s in self._stages]

    @property
    def first(self) -> Optional[WorkflowStage]:
        return self._stages[0] if self._stages else None

    @property
    def last(self) -> Optional[WorkflowStage]:
        return self._stages[-1] if self._stages else None

    def get(self, name: Optional[str]) -> Optional[WorkflowStage]:
        if name is None:
            return None
        return self._by_name.get(name)

    def index_of(self, name: Optional[str]) -> int:
        """Position of ``name`` in column order, or -1."""
        for idx, stage in enumerate(self._stages):
            if stage.name == name:
                return idx
        return -1


def placeholder_campaign(campaign_id: int) -> Campaign:
    return Campaign(id=campaign_id, title=CAMPAIGN_PLACEHOLDER_TITLE, status="active")


def placeholder_creator(creator_id: int) -> Creator:
    return Creator(id=creator_id, name=CREATOR_PLACEHOLDER_NAME, email="", avatar=None, instagram=None)


def project_cards(
    applications: Sequence[Application],
    campaigns: Sequence[Campaign],
    creators: Sequence[Creator],
) -> List[Card]:
    """Join accepted applications with their campaign and creator.

    Dangling foreign keys (deleted or not-yet-loaded records) resolve to
    placeholder records so rendering never fails on a missing join.
    """
    campaigns_by_id = {c.id: c for c in campaigns}
    creators_by_id = {c.id: c for c in creators}

    cards: List[Card] = []
    for app in applications:
        if not app.is_accepted:
            continue
        campaign = campaigns_by_id.get(app.campaign_id) or placeholder_campaign(app.campaign_id)
        creator = creators_by_id.get(app.creator_id) or placeholder_creator(app.creator_id)
        cards.append(Card(application=app, campaign=campaign, creator=creator))
    return cards


def filter_by_campaign(cards: Sequence[Card], campaign_id: Optional[int]) -> List[Card]:
    """Keep cards of one campaign; ``None`` keeps all."""
    if campaign_id is None:
        return list(cards)
    return [card for card in cards if card.campaign.id == campaign_id]
