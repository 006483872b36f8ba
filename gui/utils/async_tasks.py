"""Async helpers.

Board mutations are handed a ``dispatch`` callable. In the GUI it runs the
job on a daemon thread; in tests `run_async` simply executes it immediately.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from gui.utils.logging import log


def run_async(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    return fn(*args, **kwargs)


def run_in_background(
    fn: Callable[[], Any],
    callback: Optional[Callable[[Any], None]] = None,
    schedule: Optional[Callable[[Callable[[], None]], None]] = None,
) -> threading.Thread:
    """Run ``fn`` on a daemon thread.

    ``callback`` receives the result; it is routed through ``schedule`` (for
    Tk: ``lambda f: root.after(0, f)``) so it runs on the UI thread.
    """

    def wrapper() -> None:
        try:
            result = fn()
        except Exception as exc:
            log(f"background task failed: {exc}", level=logging.ERROR, exc_info=True)
            return
        if callback is not None:
            if schedule is None:
                callback(result)
            else:
                schedule(lambda res=result: callback(res))

    thread = threading.Thread(target=wrapper, daemon=True)
    thread.start()
    return thread


def thread_dispatch(job: Callable[[], None]) -> threading.Thread:
    """Dispatch function for MoveCommitter and friends."""
    return run_in_background(job)
