"""Toast notifications raised by board mutations.

The GUI subscribes to a Notifier and renders the latest toast in its status
bar; headless callers can read ``history``.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Literal

from .utils.logger import get_logger

logger = get_logger(__name__)

Variant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Toast:
    title: str
    description: str = ""
    variant: Variant = "default"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


class Notifier:
    """Collects toasts and fans them out to subscribers."""

    def __init__(self, max_history: int = 50):
        self._history: Deque[Toast] = deque(maxlen=max_history)
        self._subscribers: List[Callable[[Toast], None]] = []
        self._lock = threading.Lock()

    def notify(self, title: str, description: str = "", variant: Variant = "default") -> Toast:
        toast = Toast(title=title, description=description, variant=variant)
        level = logging.WARNING if toast.is_error else logging.INFO
        logger.log(level, "toast: %s - %s", title, description)
        with self._lock:
            self._history.append(toast)
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(toast)
        return toast

    def subscribe(self, callback: Callable[[Toast], None]) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    @property
    def history(self) -> List[Toast]:
        with self._lock:
            return list(self._history)

    @property
    def latest(self) -> Toast | None:
        with self._lock:
            return self._history[-1] if self._history else None
