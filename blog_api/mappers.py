"""
Conversions between ORM entities and transfer shapes.

Entity -> response functions expect the relationships they flatten to be
loaded already (``Post.author``, ``Comment.author``); they never trigger
a query.  Create-model -> entity functions copy scalar fields only:
identity and ``created_at`` are assigned during creation, and
relationships are attached by the service once resolved.
"""
from datetime import datetime, timezone

from blog_api.models import Comment, Post, User
from blog_api.schemas import (
    CommentCreate,
    CommentResponse,
    PostCreate,
    PostResponse,
    UserCreate,
    UserResponse,
)
from blog_api.security import hash_password


# ---------------------------------------------------------------------------
# Entity -> response
# ---------------------------------------------------------------------------

def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on read; stored values are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def user_to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


def post_to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        created_at=_as_utc(post.created_at),
        author_id=post.author.id,
        author_username=post.author.username,
    )


def comment_to_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        content=comment.content,
        created_at=_as_utc(comment.created_at),
        author_id=comment.author.id,
        author_username=comment.author.username,
        post_id=comment.post_id,
    )


# ---------------------------------------------------------------------------
# Create model -> entity
# ---------------------------------------------------------------------------

def user_from_create(data: UserCreate) -> User:
    return User(
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password),
    )


def post_from_create(data: PostCreate) -> Post:
    return Post(title=data.title, content=data.content)


def comment_from_create(data: CommentCreate) -> Comment:
    return Comment(content=data.content)
