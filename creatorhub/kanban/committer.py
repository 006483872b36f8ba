"""Move committer: persists a card's new workflow stage.

No optimistic write is applied to the cached applications: the board keeps
showing the last server-confirmed arrangement until the refetch triggered by
a successful commit arrives. A failed commit therefore needs no rollback.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, FrozenSet, Set

import requests

from creatorhub.kanban.cache import Keys, QueryCache
from creatorhub.notifications import Notifier
from creatorhub.utils.logger import get_logger

logger = get_logger(__name__)

Job = Callable[[], None]
Dispatch = Callable[[Job], Any]

SUCCESS_TITLE = "Status atualizado"
SUCCESS_DESCRIPTION = "O status do workflow foi atualizado com sucesso."
ERROR_TITLE = "Erro"
ERROR_DESCRIPTION = "Não foi possível atualizar o status."


def run_inline(job: Job) -> None:
    job()


class MoveCommitter:
    """Issues workflow-status updates, one in flight per card."""

    def __init__(self, client, cache: QueryCache, notifier: Notifier, dispatch: Dispatch = run_inline):
        self.client = client
        self.cache = cache
        self.notifier = notifier
        self.dispatch = dispatch
        self._moving: Set[int] = set()
        self._lock = threading.Lock()

    def is_moving(self, application_id: int) -> bool:
        with self._lock:
            return application_id in self._moving

    @property
    def moving_ids(self) -> FrozenSet[int]:
        with self._lock:
            return frozenset(self._moving)

    def submit(self, application_id: int, stage_name: str) -> bool:
        """Start moving a card to ``stage_name``.

        Returns False without doing anything when the card already has a move
        in flight. The moving flag is set before the job is dispatched so a
        second drag on the same card is refused immediately.
        """
        with self._lock:
            if application_id in self._moving:
                logger.debug("move of %s already in flight", application_id)
                return False
            self._moving.add(application_id)

        logger.info("moving application %s to %r", application_id, stage_name)
        try:
            self.dispatch(lambda: self._commit(application_id, stage_name))
        except Exception:
            self._clear(application_id)
            raise
        return True

    def _commit(self, application_id: int, stage_name: str) -> None:
        ok = False
        try:
            self.client.update_workflow_status(application_id, stage_name)
            ok = True
        except requests.RequestException as exc:
            logger.error("move of application %s failed: %s", application_id, exc)
            self.notifier.notify(ERROR_TITLE, ERROR_DESCRIPTION, "destructive")
        finally:
            self._clear(application_id)

        if ok:
            self.cache.invalidate(Keys.applications())
            self.notifier.notify(SUCCESS_TITLE, SUCCESS_DESCRIPTION)

    def _clear(self, application_id: int) -> None:
        with self._lock:
            self._moving.discard(application_id)
