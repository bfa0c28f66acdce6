"""
Direct service-layer tests: exercises business rules without HTTP.

Services are called with a live AsyncSession; the error kinds they raise
are asserted directly rather than through their HTTP status mapping.
"""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import ConflictError, NotFoundError, ReferenceNotFoundError
from blog_api.models import Comment, Post, User
from blog_api.repositories import UserRepository
from blog_api.schemas import CommentCreate, PostCreate, PostUpdate, UserCreate, UserUpdate
from blog_api.security import verify_password
from blog_api.services import comment_service, post_service, user_service


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_user(db: AsyncSession, username: str = "svcuser", email: str = "svc@example.com"):
    return await user_service.create_user(
        db, UserCreate(username=username, email=email, password="secret1")
    )


async def _count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


# ---------------------------------------------------------------------------
# user_service
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_user_via_service(db_session: AsyncSession):
    result = await _create_user(db_session)
    assert result.id is not None
    assert result.username == "svcuser"
    assert result.email == "svc@example.com"


@pytest.mark.asyncio
async def test_create_user_stores_password_digest(db_session: AsyncSession):
    result = await _create_user(db_session)
    user = await db_session.get(User, result.id)
    assert user.password_hash != "secret1"
    assert verify_password("secret1", user.password_hash)


@pytest.mark.asyncio
async def test_create_user_duplicate_email_conflicts(db_session: AsyncSession):
    await _create_user(db_session, "one", "same@example.com")
    with pytest.raises(ConflictError, match="Email already exists"):
        await _create_user(db_session, "two", "same@example.com")
    assert await _count(db_session, User) == 1


@pytest.mark.asyncio
async def test_create_user_duplicate_username_conflicts(db_session: AsyncSession):
    await _create_user(db_session, "same", "one@example.com")
    with pytest.raises(ConflictError, match="Username already exists"):
        await _create_user(db_session, "same", "two@example.com")


@pytest.mark.asyncio
async def test_create_user_storage_constraint_is_authoritative(db_session: AsyncSession, monkeypatch):
    """If the advisory checks are raced past, the unique constraint still yields Conflict."""
    await _create_user(db_session, "racer", "racer@example.com")

    async def _never(self, value, exclude_id=None):
        return False

    monkeypatch.setattr(UserRepository, "exists_by_email", _never)
    monkeypatch.setattr(UserRepository, "exists_by_username", _never)

    with pytest.raises(ConflictError):
        await _create_user(db_session, "racer", "racer@example.com")


@pytest.mark.asyncio
async def test_get_user_not_found_service(db_session: AsyncSession):
    with pytest.raises(NotFoundError, match="User not found"):
        await user_service.get_user(db_session, 99999)


@pytest.mark.asyncio
async def test_list_users_via_service(db_session: AsyncSession):
    await _create_user(db_session, "u1", "u1@example.com")
    await _create_user(db_session, "u2", "u2@example.com")
    users = await user_service.list_users(db_session)
    assert [u.username for u in users] == ["u1", "u2"]


@pytest.mark.asyncio
async def test_update_user_leaves_password_alone(db_session: AsyncSession):
    created = await _create_user(db_session)
    user = await db_session.get(User, created.id)
    digest = user.password_hash

    updated = await user_service.update_user(
        db_session, created.id, UserUpdate(username="renamed", email="renamed@example.com")
    )
    assert updated.id == created.id
    assert updated.username == "renamed"
    assert updated.email == "renamed@example.com"
    assert user.password_hash == digest


@pytest.mark.asyncio
async def test_update_user_not_found_service(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await user_service.update_user(
            db_session, 99999, UserUpdate(username="ghost", email="ghost@example.com")
        )


@pytest.mark.asyncio
async def test_delete_user_via_service(db_session: AsyncSession):
    created = await _create_user(db_session)
    await user_service.delete_user(db_session, created.id)
    with pytest.raises(NotFoundError):
        await user_service.get_user(db_session, created.id)


@pytest.mark.asyncio
async def test_delete_user_not_found_service(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await user_service.delete_user(db_session, 99999)


# ---------------------------------------------------------------------------
# post_service
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_post_via_service(db_session: AsyncSession):
    author = await _create_user(db_session)
    result = await post_service.create_post(
        db_session, PostCreate(title="Service Post", content="Direct", author_id=author.id)
    )
    assert result.id is not None
    assert result.title == "Service Post"
    assert result.content == "Direct"
    assert result.author_id == author.id
    assert result.author_username == "svcuser"
    assert result.created_at is not None


@pytest.mark.asyncio
async def test_create_post_unknown_author_writes_nothing(db_session: AsyncSession):
    with pytest.raises(ReferenceNotFoundError, match="Author not found"):
        await post_service.create_post(
            db_session, PostCreate(title="Orphan", content="C", author_id=99999)
        )
    assert await _count(db_session, Post) == 0


@pytest.mark.asyncio
async def test_reference_not_found_is_a_not_found(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await post_service.create_post(
            db_session, PostCreate(title="Orphan", content="C", author_id=99999)
        )


@pytest.mark.asyncio
async def test_list_posts_newest_first_via_service(db_session: AsyncSession):
    author = await _create_user(db_session)
    for title in ("Oldest", "Middle", "Newest"):
        await post_service.create_post(
            db_session, PostCreate(title=title, content="C", author_id=author.id)
        )
    posts = await post_service.list_posts(db_session)
    assert [p.title for p in posts] == ["Newest", "Middle", "Oldest"]
    stamps = [p.created_at for p in posts]
    assert stamps == sorted(stamps, reverse=True)


@pytest.mark.asyncio
async def test_search_posts_by_title_via_service(db_session: AsyncSession):
    author = await _create_user(db_session)
    for title in ("Async SQLAlchemy", "sqlalchemy sessions", "Pydantic"):
        await post_service.create_post(
            db_session, PostCreate(title=title, content="C", author_id=author.id)
        )
    found = await post_service.search_posts_by_title(db_session, "SQLAlchemy")
    assert {p.title for p in found} == {"Async SQLAlchemy", "sqlalchemy sessions"}


@pytest.mark.asyncio
async def test_update_post_changes_only_title_and_content(db_session: AsyncSession):
    author = await _create_user(db_session)
    created = await post_service.create_post(
        db_session, PostCreate(title="Before", content="Old", author_id=author.id)
    )
    updated = await post_service.update_post(
        db_session, created.id, PostUpdate(title="After", content="New")
    )
    assert updated.id == created.id
    assert updated.title == "After"
    assert updated.content == "New"
    assert updated.created_at == created.created_at
    assert updated.author_id == created.author_id


@pytest.mark.asyncio
async def test_update_post_not_found_service(db_session: AsyncSession):
    with pytest.raises(NotFoundError, match="Post not found"):
        await post_service.update_post(db_session, 99999, PostUpdate(title="G", content="G"))


@pytest.mark.asyncio
async def test_delete_post_via_service(db_session: AsyncSession):
    author = await _create_user(db_session)
    created = await post_service.create_post(
        db_session, PostCreate(title="To Delete", content="C", author_id=author.id)
    )
    await post_service.delete_post(db_session, created.id)
    with pytest.raises(NotFoundError):
        await post_service.get_post(db_session, created.id)


@pytest.mark.asyncio
async def test_delete_post_not_found_service(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await post_service.delete_post(db_session, 99999)


# ---------------------------------------------------------------------------
# comment_service
# ---------------------------------------------------------------------------

async def _user_and_post(db: AsyncSession):
    author = await _create_user(db)
    post = await post_service.create_post(
        db, PostCreate(title="Commentable", content="C", author_id=author.id)
    )
    return author, post


@pytest.mark.asyncio
async def test_create_comment_via_service(db_session: AsyncSession):
    author, post = await _user_and_post(db_session)
    comment = await comment_service.create_comment(
        db_session, CommentCreate(content="Great!", author_id=author.id, post_id=post.id)
    )
    assert comment.id is not None
    assert comment.content == "Great!"
    assert comment.author_id == author.id
    assert comment.author_username == "svcuser"
    assert comment.post_id == post.id


@pytest.mark.asyncio
async def test_create_comment_checks_author_before_post(db_session: AsyncSession):
    with pytest.raises(ReferenceNotFoundError, match="Author not found"):
        await comment_service.create_comment(
            db_session, CommentCreate(content="X", author_id=99998, post_id=99999)
        )


@pytest.mark.asyncio
async def test_create_comment_unknown_post_writes_nothing(db_session: AsyncSession):
    author = await _create_user(db_session)
    with pytest.raises(ReferenceNotFoundError, match="Post not found"):
        await comment_service.create_comment(
            db_session, CommentCreate(content="X", author_id=author.id, post_id=99999)
        )
    assert await _count(db_session, Comment) == 0


@pytest.mark.asyncio
async def test_comments_by_post_oldest_first_via_service(db_session: AsyncSession):
    author, post = await _user_and_post(db_session)
    for text in ("first", "second", "third"):
        await comment_service.create_comment(
            db_session, CommentCreate(content=text, author_id=author.id, post_id=post.id)
        )
    comments = await comment_service.get_comments_by_post(db_session, post.id)
    assert [c.content for c in comments] == ["first", "second", "third"]
    stamps = [c.created_at for c in comments]
    assert stamps == sorted(stamps)


@pytest.mark.asyncio
async def test_comments_by_author_via_service(db_session: AsyncSession):
    author, post = await _user_and_post(db_session)
    other = await _create_user(db_session, "other", "other@example.com")
    await comment_service.create_comment(
        db_session, CommentCreate(content="mine", author_id=author.id, post_id=post.id)
    )
    await comment_service.create_comment(
        db_session, CommentCreate(content="theirs", author_id=other.id, post_id=post.id)
    )
    comments = await comment_service.get_comments_by_author(db_session, other.id)
    assert [c.content for c in comments] == ["theirs"]


@pytest.mark.asyncio
async def test_update_comment_changes_content_only(db_session: AsyncSession):
    author, post = await _user_and_post(db_session)
    created = await comment_service.create_comment(
        db_session, CommentCreate(content="old", author_id=author.id, post_id=post.id)
    )
    updated = await comment_service.update_comment(db_session, created.id, "new")
    assert updated.content == "new"
    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.author_id == created.author_id
    assert updated.post_id == created.post_id


@pytest.mark.asyncio
async def test_update_comment_not_found_service(db_session: AsyncSession):
    with pytest.raises(NotFoundError, match="Comment not found"):
        await comment_service.update_comment(db_session, 99999, "nope")


@pytest.mark.asyncio
async def test_delete_comment_via_service(db_session: AsyncSession):
    author, post = await _user_and_post(db_session)
    created = await comment_service.create_comment(
        db_session, CommentCreate(content="bye", author_id=author.id, post_id=post.id)
    )
    await comment_service.delete_comment(db_session, created.id)
    with pytest.raises(NotFoundError):
        await comment_service.get_comment(db_session, created.id)


@pytest.mark.asyncio
async def test_delete_comment_not_found_service(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await comment_service.delete_comment(db_session, 99999)
