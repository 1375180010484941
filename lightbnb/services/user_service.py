"""User service — lookups and registration inserts."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from lightbnb.database import get_session_factory
from lightbnb.exceptions import DuplicateEmailError, StoreError
from lightbnb.models.user import User
from lightbnb.schemas.user import UserCreate, UserRecord

logger = logging.getLogger(__name__)


async def get_user_by_email(email: str) -> UserRecord | None:
    """Return the user with exactly this email, or None."""
    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            result = await session.execute(
                select(User).where(User.email == email).order_by(User.id).limit(1)
            )
            user = result.scalars().first()
    except SQLAlchemyError as e:
        logger.exception("get_user_by_email failed")
        raise StoreError(f"Could not look up user by email: {e}") from e

    if user is None:
        logger.debug("No user with email %s", email)
        return None
    return UserRecord.model_validate(user)


async def get_user_by_id(user_id: int) -> UserRecord | None:
    """Return the user with this primary key, or None."""
    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            user = await session.get(User, user_id)
    except SQLAlchemyError as e:
        logger.exception("get_user_by_id failed")
        raise StoreError(f"Could not look up user {user_id}: {e}") from e

    return UserRecord.model_validate(user) if user is not None else None


async def add_user(body: UserCreate) -> UserRecord:
    """Insert a user and return the stored row, including its generated id.

    Raises:
        DuplicateEmailError: the email is already registered.
        StoreError: any other failure in the store.
    """
    try:
        session_factory = get_session_factory()
        async with session_factory() as session:
            user = User(**body.model_dump())
            session.add(user)
            await session.flush()
            await session.refresh(user)
            await session.commit()
            record = UserRecord.model_validate(user)
    except IntegrityError as e:
        logger.warning("add_user rejected duplicate email %s", body.email)
        raise DuplicateEmailError(f"A user with email {body.email} already exists") from e
    except SQLAlchemyError as e:
        logger.exception("add_user failed")
        raise StoreError(f"Could not add user: {e}") from e

    logger.info("User created: %s (id %s)", record.email, record.id)
    return record
