from . import board_service, clients, settings_service  # noqa: F401

from .board_service import BoardServices, create_board_services
from .clients import get_marketplace_client
