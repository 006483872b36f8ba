"""Application state container.

Only client-local, non-persisted UI state lives here. Everything else is a
cached copy of server state owned by the QueryCache.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class AppState:
    """Holds ephemeral UI state."""

    current_view: str = "board"
    selected_card_id: Optional[int] = None
    selected_campaign_id: Optional[int] = None
    status_message: str = "Pronto"
    is_busy: bool = False
    flags: Dict[str, Any] = field(default_factory=dict)
