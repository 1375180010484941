"""Pydantic v2 records for reservations."""

from datetime import date

from pydantic import BaseModel, ConfigDict

from lightbnb.schemas.property import PropertyRecord


class GuestReservation(BaseModel):
    """One of a guest's reservations with the reserved property and its average rating."""

    id: int
    guest_id: int
    property_id: int
    start_date: date
    end_date: date
    property: PropertyRecord
    average_rating: float | None = None

    model_config = ConfigDict(from_attributes=True)
