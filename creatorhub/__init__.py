"""
CreatorHub - Creator workflow board

Track accepted creators through your company's campaign pipeline stages.
"""

__version__ = "1.0.0"

# Only import the REST client by default
# Board modules pull in the query cache and threading helpers.
from .api_client import MarketplaceClient

__all__ = [
    "MarketplaceClient",
]
