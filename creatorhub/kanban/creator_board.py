"""Creator-side production board.

Unlike the company board, this board moves cards optimistically: the cached
application list is rewritten before the request is sent and restored from a
snapshot if the server refuses the move. The columns are the fixed creator
workflow stages.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

import requests

from creatorhub.api_client import error_message
from creatorhub.kanban.cache import Keys, QueryCache
from creatorhub.kanban.committer import Dispatch, run_inline
from creatorhub.models.schemas import Application, CREATOR_WORKFLOW_STAGES
from creatorhub.notifications import Notifier
from creatorhub.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_STAGE = "aceito"


def creator_column_of(application: Application) -> str:
    return application.creator_workflow_status or application.workflow_status or DEFAULT_STAGE


class CreatorBoard:
    def __init__(self, client, cache: Optional[QueryCache] = None, notifier: Optional[Notifier] = None, dispatch: Dispatch = run_inline):
        self.client = client
        self.cache = cache or QueryCache()
        self.notifier = notifier or Notifier()
        self.dispatch = dispatch
        self.moving_id: Optional[int] = None
        self._lock = threading.Lock()

    def applications(self) -> List[Application]:
        return self.cache.fetch(Keys.active_applications(), self.client.list_active_applications, [])

    def columns(self) -> Dict[str, List[Application]]:
        buckets: Dict[str, List[Application]] = {stage: [] for stage in CREATOR_WORKFLOW_STAGES}
        for app in self.applications():
            column = creator_column_of(app)
            if column in buckets:
                buckets[column].append(app)
        return buckets

    def move(self, application_id: int, stage: str) -> bool:
        """Optimistically move an application to a creator stage."""
        if stage not in CREATOR_WORKFLOW_STAGES:
            raise ValueError(f"Unknown creator workflow stage: {stage}")

        key = Keys.active_applications()
        with self._lock:
            if self.moving_id is not None:
                return False
            current = next((a for a in self.cache.peek(key, []) if a.id == application_id), None)
            if current is None or creator_column_of(current) == stage:
                return False
            self.moving_id = application_id
            previous = self.cache.peek(key, [])
            self.cache.set_data(key, [
                app.model_copy(update={"creator_workflow_status": stage}) if app.id == application_id else app
                for app in previous
            ])

        self.dispatch(lambda: self._commit(application_id, stage, previous))
        return True

    def _commit(self, application_id: int, stage: str, previous: List[Application]) -> None:
        key = Keys.active_applications()
        try:
            self.client.update_creator_workflow_status(application_id, stage)
            self.notifier.notify("Status atualizado", "O status da produção foi atualizado com sucesso.")
        except requests.RequestException as exc:
            logger.error("creator move of application %s failed: %s", application_id, exc)
            self.cache.set_data(key, previous)
            self.notifier.notify(
                "Não é possível mover",
                error_message(exc, "Não foi possível atualizar o status."),
                "destructive",
            )
        finally:
            with self._lock:
                self.moving_id = None
            self.cache.invalidate(key)
