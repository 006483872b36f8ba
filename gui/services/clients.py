"""Client factories for the GUI layer."""

from __future__ import annotations

from typing import Optional

from creatorhub.api_client import MarketplaceClient
from creatorhub.config import Settings, get_settings


def get_marketplace_client(settings: Optional[Settings] = None) -> MarketplaceClient:
    """Return a marketplace API client built from the current settings."""

    return MarketplaceClient(settings or get_settings())
