"""Property service — filtered search and listing inserts."""

import logging
from decimal import Decimal

from sqlalchemy import Numeric, Select, func, literal, select
from sqlalchemy.exc import SQLAlchemyError

from lightbnb.config import settings
from lightbnb.database import get_session_factory
from lightbnb.exceptions import StoreError
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.schemas.property import PropertyCreate, PropertyListing, PropertyRecord, PropertySearchFilters

logger = logging.getLogger(__name__)


def _cents_to_price(cents: int):
    """Price filters arrive in cents; cost_per_night is compared in whole units."""
    return literal(Decimal(cents) / 100, Numeric())


def _substring_pattern(text: str) -> str:
    """LIKE pattern matching ``text`` literally anywhere; pairs with ESCAPE '/'."""
    escaped = text.replace("/", "//").replace("%", "/%").replace("_", "/_")
    return f"%{escaped}%"


def build_property_search(filters: PropertySearchFilters | None = None, limit: int | None = None) -> Select:
    """Build the property search statement.

    Filters are applied in a fixed order (city, owner, minimum price,
    maximum price, minimum rating) so the bound parameters always follow
    that order, with the limit last. Zero prices and a zero rating floor
    count as no filter.
    """
    if filters is None:
        filters = PropertySearchFilters()
    if limit is None:
        limit = settings.default_result_limit

    average_rating = func.avg(PropertyReview.rating)
    query = (
        select(Property, average_rating.label("average_rating"))
        .select_from(Property)
        .outerjoin(PropertyReview, PropertyReview.property_id == Property.id)
    )

    if filters.city:
        query = query.where(Property.city.ilike(_substring_pattern(filters.city), escape="/"))
    if filters.owner_id is not None:
        query = query.where(Property.owner_id == filters.owner_id)
    if filters.minimum_price_per_night:
        query = query.where(Property.cost_per_night >= _cents_to_price(filters.minimum_price_per_night))
    if filters.maximum_price_per_night:
        query = query.where(Property.cost_per_night <= _cents_to_price(filters.maximum_price_per_night))

    query = query.group_by(Property.id)
    # A zero floor is no floor; unreviewed listings have a NULL average
    if filters.minimum_rating:
        query = query.having(average_rating >= literal(filters.minimum_rating, Numeric()))

    return query.order_by(Property.cost_per_night, Property.id).limit(limit)


async def search_properties(
    filters: PropertySearchFilters | None = None,
    limit: int | None = None,
) -> list[PropertyListing]:
    """Return properties matching the filters, cheapest first, with average ratings."""
    query = build_property_search(filters, limit)

    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            result = await session.execute(query)
            rows = result.all()
    except SQLAlchemyError as e:
        logger.exception("search_properties failed")
        raise StoreError(f"Could not search properties: {e}") from e

    logger.debug("Property search matched %d rows", len(rows))
    return [
        PropertyListing(**PropertyRecord.model_validate(prop).model_dump(), average_rating=average_rating)
        for prop, average_rating in rows
    ]


async def add_property(body: PropertyCreate) -> PropertyRecord:
    """Insert a listing with every field the caller supplied and return the stored row."""
    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            prop = Property(**body.model_dump())
            session.add(prop)
            await session.flush()
            await session.refresh(prop)
            await session.commit()
            record = PropertyRecord.model_validate(prop)
    except SQLAlchemyError as e:
        logger.exception("add_property failed")
        raise StoreError(f"Could not add property: {e}") from e

    logger.info("Property created: %s (id %s, owner %s)", record.title, record.id, record.owner_id)
    return record
