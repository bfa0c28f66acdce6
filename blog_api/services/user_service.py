"""
User service: CRUD operations for the User aggregate.

Email and username uniqueness is checked here first (email before
username) so callers get a precise message, but the unique constraints
in the schema are what actually guarantee it: two concurrent creations
can both pass the checks, and the loser's flush then fails with an
IntegrityError, which is reported as the same Conflict kind.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import ConflictError, NotFoundError
from blog_api.mappers import user_from_create, user_to_response
from blog_api.repositories import UserRepository
from blog_api.schemas import UserBase, UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

_DUPLICATE_USER = "A user with this username or email already exists"


async def _ensure_unique(users: UserRepository, data: UserBase, user_id: int | None = None) -> None:
    """Email first, then username; *user_id* is the user being updated, if any."""
    if await users.exists_by_email(data.email, exclude_id=user_id):
        logger.info("Rejected user %r: email already exists", data.username)
        raise ConflictError("Email already exists")
    if await users.exists_by_username(data.username, exclude_id=user_id):
        logger.info("Rejected user %r: username already exists", data.username)
        raise ConflictError("Username already exists")


async def list_users(db: AsyncSession) -> list[UserResponse]:
    """Return all users in storage order (ascending id)."""
    users = await UserRepository(db).list_all()
    return [user_to_response(u) for u in users]


async def get_user(db: AsyncSession, user_id: int) -> UserResponse:
    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user_to_response(user)


async def create_user(db: AsyncSession, data: UserCreate) -> UserResponse:
    """
    Create a new user and return its response shape.

    Raises ConflictError when the email is taken, then when the username
    is taken.
    """
    users = UserRepository(db)
    await _ensure_unique(users, data)

    try:
        user = await users.add(user_from_create(data))
    except IntegrityError as exc:
        raise ConflictError(_DUPLICATE_USER) from exc

    logger.info("Created user id=%s username=%r", user.id, user.username)
    return user_to_response(user)


async def update_user(db: AsyncSession, user_id: int, data: UserUpdate) -> UserResponse:
    """Overwrite username and email; the stored password is left as is."""
    users = UserRepository(db)
    user = await users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    await _ensure_unique(users, data, user_id)

    user.username = data.username
    user.email = data.email
    try:
        await db.flush()
    except IntegrityError as exc:
        raise ConflictError(_DUPLICATE_USER) from exc

    logger.info("Updated user id=%s", user_id)
    return user_to_response(user)


async def delete_user(db: AsyncSession, user_id: int) -> None:
    users = UserRepository(db)
    if not await users.exists_by_id(user_id):
        raise NotFoundError("User not found")
    await users.delete_by_id(user_id)
    logger.info("Deleted user id=%s", user_id)
