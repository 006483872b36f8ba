"""GUI log helper.

Writes to the ``creatorhub.gui`` logger. Handlers are installed by
``creatorhub.utils.logger.setup_logging`` when the app starts, so importing
a view never configures logging.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("creatorhub.gui")


def log(message: str, level: int = logging.INFO, exc_info: bool = False) -> None:
    logger.log(level, message, exc_info=exc_info)
