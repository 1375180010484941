"""LightBnB data-access layer."""

from lightbnb.exceptions import DuplicateEmailError, StoreError
from lightbnb.services import (
    add_property,
    add_user,
    get_user_by_email,
    get_user_by_id,
    list_reservations_for_guest,
    search_properties,
)

__all__ = [
    "DuplicateEmailError",
    "StoreError",
    "add_property",
    "add_user",
    "get_user_by_email",
    "get_user_by_id",
    "list_reservations_for_guest",
    "search_properties",
]
