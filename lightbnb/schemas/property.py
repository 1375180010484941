"""Pydantic v2 records for properties and property search."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


class PropertyCreate(BaseModel):
    """Every column of a new listing, supplied by the caller."""

    owner_id: int
    title: str
    description: str | None
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    parking_spaces: int
    number_of_bathrooms: int
    number_of_bedrooms: int
    country: str
    street: str
    city: str
    province: str
    post_code: str


class PropertySearchFilters(BaseModel):
    """Optional search criteria. Prices are in cents; a blank value means no filter."""

    city: str | None = None
    owner_id: int | None = None
    minimum_price_per_night: int | None = None
    maximum_price_per_night: int | None = None
    minimum_rating: Decimal | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        """Search forms submit untouched fields as empty strings."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------


class PropertyRecord(BaseModel):
    """A stored property row."""

    id: int
    owner_id: int
    title: str
    description: str | None = None
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    parking_spaces: int
    number_of_bathrooms: int
    number_of_bedrooms: int
    country: str
    street: str
    city: str
    province: str
    post_code: str

    model_config = ConfigDict(from_attributes=True)


class PropertyListing(PropertyRecord):
    """A property row plus the mean of its review ratings (None when unreviewed)."""

    average_rating: float | None = None
