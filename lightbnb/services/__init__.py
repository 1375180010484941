"""LightBnB data-access operations.

Every operation is a coroutine that borrows one session from the shared
factory in lightbnb.database, runs a single parameterized statement and
returns pydantic records. Failures surface as lightbnb.exceptions.StoreError.
"""

from lightbnb.services.property_service import add_property, build_property_search, search_properties
from lightbnb.services.reservation_service import list_reservations_for_guest
from lightbnb.services.user_service import add_user, get_user_by_email, get_user_by_id

__all__ = [
    "add_property",
    "add_user",
    "build_property_search",
    "get_user_by_email",
    "get_user_by_id",
    "list_reservations_for_guest",
    "search_properties",
]
