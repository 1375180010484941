"""Pydantic v2 records passed into and returned from the data-access layer."""

from lightbnb.schemas.property import PropertyCreate, PropertyListing, PropertyRecord, PropertySearchFilters
from lightbnb.schemas.reservation import GuestReservation
from lightbnb.schemas.user import UserCreate, UserRecord

__all__ = [
    "GuestReservation",
    "PropertyCreate",
    "PropertyListing",
    "PropertyRecord",
    "PropertySearchFilters",
    "UserCreate",
    "UserRecord",
]
