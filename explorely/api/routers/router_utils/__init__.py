"""
Router utility functions.

Contains helpers shared by the router packages to keep endpoints thin.
"""

from explorely.api.routers.router_utils.error_handling import handle_errors
from explorely.api.routers.router_utils.itinerary_utils import (
    itinerary_fields,
    section_item,
    stored_item,
)
from explorely.api.routers.router_utils.request_utils import (
    clear_auth_cookie,
    client_info,
    set_auth_cookie,
)

__all__ = [
    "clear_auth_cookie",
    "client_info",
    "handle_errors",
    "itinerary_fields",
    "section_item",
    "set_auth_cookie",
    "stored_item",
]
