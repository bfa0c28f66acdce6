"""
Post service: business logic for the Post aggregate.

Design notes
------------
- Every outbound post carries ``author_id`` and ``author_username``.
  The author is joined into each read by ``PostRepository`` and, on
  create, resolved by id before anything is written, so no response
  ever depends on lazy loading.
- ``created_at`` is stamped here at creation and never touched again;
  updates only overwrite ``title`` and ``content``.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency in the router layer.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import NotFoundError, ReferenceNotFoundError
from blog_api.mappers import post_from_create, post_to_response
from blog_api.repositories import PostRepository, UserRepository
from blog_api.schemas import PostCreate, PostResponse, PostUpdate

logger = logging.getLogger(__name__)


async def list_posts(db: AsyncSession) -> list[PostResponse]:
    """Return all posts, newest first."""
    posts = await PostRepository(db).list_newest_first()
    return [post_to_response(p) for p in posts]


async def get_post(db: AsyncSession, post_id: int) -> PostResponse:
    post = await PostRepository(db).get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post_to_response(post)


async def get_posts_by_author(db: AsyncSession, author_id: int) -> list[PostResponse]:
    """Posts written by *author_id*; empty when the author has none or does not exist."""
    posts = await PostRepository(db).list_by_author(author_id)
    return [post_to_response(p) for p in posts]


async def search_posts_by_title(db: AsyncSession, title: str) -> list[PostResponse]:
    """Posts whose title contains *title*, ignoring case."""
    posts = await PostRepository(db).search_by_title(title)
    return [post_to_response(p) for p in posts]


async def create_post(db: AsyncSession, data: PostCreate) -> PostResponse:
    """
    Create a post for an existing author.

    Raises ReferenceNotFoundError before any write when ``author_id``
    does not resolve.
    """
    author = await UserRepository(db).get_by_id(data.author_id)
    if author is None:
        logger.info("Rejected post: author id=%s not found", data.author_id)
        raise ReferenceNotFoundError("Author not found")

    post = post_from_create(data)
    post.author = author
    post.created_at = datetime.now(timezone.utc)
    await PostRepository(db).add(post)

    logger.info("Created post id=%s author_id=%s", post.id, author.id)
    return post_to_response(post)


async def update_post(db: AsyncSession, post_id: int, data: PostUpdate) -> PostResponse:
    post = await PostRepository(db).get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")

    post.title = data.title
    post.content = data.content
    await db.flush()

    logger.info("Updated post id=%s", post_id)
    return post_to_response(post)


async def delete_post(db: AsyncSession, post_id: int) -> None:
    """Delete a post; its comments go with it."""
    posts = PostRepository(db)
    if not await posts.exists_by_id(post_id):
        raise NotFoundError("Post not found")
    await posts.delete_by_id(post_id)
    logger.info("Deleted post id=%s", post_id)
