"""Shared test configuration and fixtures.

Each test gets freshly created tables on the engine named by
``settings.test_database_url`` (in-memory SQLite unless overridden, e.g.
``TEST_DATABASE_URL=postgresql+asyncpg://.../lightbnb_test``), and the
data-access layer's session factory is pointed at that engine.
"""

import uuid
from collections.abc import AsyncGenerator
from datetime import date

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from lightbnb.config import settings
from lightbnb.database import Base, create_schema, get_session_factory, set_session_factory
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview
from lightbnb.models.user import User


def _make_engine():
    url = settings.test_database_url
    if url.startswith("sqlite"):
        # One shared connection, otherwise every session sees its own empty in-memory DB
        return create_async_engine(
            url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, echo=False, pool_pre_ping=True)


# ---------------------------------------------------------------------------
# Engine, schema and session factory
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    engine = _make_engine()
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def setup_test_db(test_engine):
    """Create all tables before the test and drop them afterwards."""
    await create_schema(test_engine)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def session_factory(test_engine, setup_test_db):
    """Route every data-access call to the test engine for the duration of a test."""
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    previous = get_session_factory()
    set_session_factory(factory)
    yield factory
    set_session_factory(previous)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for seeding rows. Helpers commit so the services' own sessions see them."""
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Row factories
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def create_user(db_session: AsyncSession):
    async def _create(name: str = "Test User", email: str | None = None) -> User:
        user = User(
            name=name,
            email=email or f"user-{uuid.uuid4().hex[:8]}@lightbnb.com",
            password="$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u.",
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _create


@pytest_asyncio.fixture
async def create_property(db_session: AsyncSession):
    async def _create(owner: User, **overrides) -> Property:
        fields = {
            "title": "Speed lamp",
            "description": "description",
            "thumbnail_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg?h=350",
            "cover_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg",
            "cost_per_night": 93,
            "parking_spaces": 6,
            "number_of_bathrooms": 4,
            "number_of_bedrooms": 8,
            "country": "Canada",
            "street": "536 Namsub Highway",
            "city": "Sotboske",
            "province": "Quebec",
            "post_code": "28142",
        }
        fields.update(overrides)
        prop = Property(owner_id=owner.id, **fields)
        db_session.add(prop)
        await db_session.commit()
        return prop

    return _create


@pytest_asyncio.fixture
async def create_reservation(db_session: AsyncSession):
    async def _create(
        guest: User,
        prop: Property,
        start_date: date = date(2018, 9, 11),
        end_date: date = date(2018, 9, 26),
    ) -> Reservation:
        reservation = Reservation(
            guest_id=guest.id,
            property_id=prop.id,
            start_date=start_date,
            end_date=end_date,
        )
        db_session.add(reservation)
        await db_session.commit()
        return reservation

    return _create


@pytest_asyncio.fixture
async def create_review(db_session: AsyncSession):
    async def _create(guest: User, prop: Property, rating: int, reservation: Reservation | None = None) -> PropertyReview:
        review = PropertyReview(
            guest_id=guest.id,
            property_id=prop.id,
            reservation_id=reservation.id if reservation is not None else None,
            rating=rating,
            message="messages",
        )
        db_session.add(review)
        await db_session.commit()
        return review

    return _create


@pytest_asyncio.fixture
async def owner(create_user) -> User:
    return await create_user(name="Property Owner")


@pytest_asyncio.fixture
async def guest(create_user) -> User:
    return await create_user(name="Guest User")
