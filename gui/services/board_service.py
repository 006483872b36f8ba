"""Board wiring for the GUI.

One QueryCache and one Notifier are shared by the company board and the
creator board so both see the same invalidations and toasts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from creatorhub.config import Settings, get_settings
from creatorhub.kanban.board import KanbanBoard
from creatorhub.kanban.cache import QueryCache
from creatorhub.kanban.committer import Dispatch, run_inline
from creatorhub.kanban.creator_board import CreatorBoard
from creatorhub.notifications import Notifier
from gui.services.clients import get_marketplace_client


@dataclass
class BoardServices:
    cache: QueryCache
    notifier: Notifier
    board: KanbanBoard
    creator_board: CreatorBoard


def create_board_services(
    client=None,
    settings: Optional[Settings] = None,
    dispatch: Dispatch = run_inline,
) -> BoardServices:
    settings = settings or get_settings()
    client = client or get_marketplace_client(settings)
    cache = QueryCache()
    notifier = Notifier()
    return BoardServices(
        cache=cache,
        notifier=notifier,
        board=KanbanBoard(client, cache, notifier, settings, dispatch),
        creator_board=CreatorBoard(client, cache, notifier, dispatch),
    )
