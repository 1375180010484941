"""Reservation service — a guest's reservations with property ratings."""

import logging

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError

from lightbnb.config import settings
from lightbnb.database import get_session_factory
from lightbnb.exceptions import StoreError
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview
from lightbnb.schemas.property import PropertyRecord
from lightbnb.schemas.reservation import GuestReservation

logger = logging.getLogger(__name__)


def _build_guest_reservations(guest_id: int, limit: int) -> Select:
    # One reservation per property: the guest's earliest-created one.
    first_per_property = (
        select(func.min(Reservation.id).label("id"))
        .where(Reservation.guest_id == guest_id)
        .group_by(Reservation.property_id)
        .subquery()
    )
    return (
        select(
            Reservation,
            Property,
            func.avg(PropertyReview.rating).label("average_rating"),
        )
        .select_from(Reservation)
        .join(first_per_property, Reservation.id == first_per_property.c.id)
        .join(Property, Reservation.property_id == Property.id)
        .outerjoin(PropertyReview, PropertyReview.property_id == Property.id)
        .where(Reservation.guest_id == guest_id)
        .group_by(Property.id, Reservation.id)
        .order_by(Property.title, Reservation.id)
        .limit(limit)
    )


async def list_reservations_for_guest(guest_id: int, limit: int | None = None) -> list[GuestReservation]:
    """Return a guest's reservations, one per property, ordered by property title.

    ``limit`` bounds the query; the result is then capped at
    ``settings.max_reservation_results`` whatever ``limit`` is.
    """
    if limit is None:
        limit = settings.default_result_limit

    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            result = await session.execute(_build_guest_reservations(guest_id, limit))
            rows = result.all()
    except SQLAlchemyError as e:
        logger.exception("list_reservations_for_guest failed")
        raise StoreError(f"Could not list reservations for guest {guest_id}: {e}") from e

    logger.debug("Guest %s has reservations at %d properties", guest_id, len(rows))
    return [
        GuestReservation(
            id=reservation.id,
            guest_id=reservation.guest_id,
            property_id=reservation.property_id,
            start_date=reservation.start_date,
            end_date=reservation.end_date,
            property=PropertyRecord.model_validate(prop),
            average_rating=average_rating,
        )
        for reservation, prop, average_rating in rows[: settings.max_reservation_results]
    ]
