"""
Comment service: comments written by a User on a Post.

Creation resolves the author first and the post second, so a request
naming both a missing author and a missing post reports the author.
Comments on a post are returned in conversation order (oldest first);
that is the only ordering callers may rely on besides the post feed.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import NotFoundError, ReferenceNotFoundError
from blog_api.mappers import comment_from_create, comment_to_response
from blog_api.repositories import CommentRepository, PostRepository, UserRepository
from blog_api.schemas import CommentCreate, CommentResponse

logger = logging.getLogger(__name__)


async def list_comments(db: AsyncSession) -> list[CommentResponse]:
    comments = await CommentRepository(db).list_oldest_first()
    return [comment_to_response(c) for c in comments]


async def get_comment(db: AsyncSession, comment_id: int) -> CommentResponse:
    comment = await CommentRepository(db).get_by_id(comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment_to_response(comment)


async def get_comments_by_post(db: AsyncSession, post_id: int) -> list[CommentResponse]:
    """Comments on *post_id*, ascending by creation time."""
    comments = await CommentRepository(db).list_by_post(post_id)
    return [comment_to_response(c) for c in comments]


async def get_comments_by_author(db: AsyncSession, author_id: int) -> list[CommentResponse]:
    comments = await CommentRepository(db).list_by_author(author_id)
    return [comment_to_response(c) for c in comments]


async def create_comment(db: AsyncSession, data: CommentCreate) -> CommentResponse:
    """
    Attach a new comment to an existing post on behalf of an existing user.

    Raises ReferenceNotFoundError ("Author not found" / "Post not found")
    before any write.
    """
    author = await UserRepository(db).get_by_id(data.author_id)
    if author is None:
        logger.info("Rejected comment: author id=%s not found", data.author_id)
        raise ReferenceNotFoundError("Author not found")

    post = await PostRepository(db).get_by_id(data.post_id)
    if post is None:
        logger.info("Rejected comment: post id=%s not found", data.post_id)
        raise ReferenceNotFoundError("Post not found")

    comment = comment_from_create(data)
    comment.author = author
    comment.post = post
    comment.created_at = datetime.now(timezone.utc)
    await CommentRepository(db).add(comment)

    logger.info("Created comment id=%s post_id=%s author_id=%s", comment.id, post.id, author.id)
    return comment_to_response(comment)


async def update_comment(db: AsyncSession, comment_id: int, content: str) -> CommentResponse:
    """Replace the text of a comment; author, post and timestamp stay."""
    comment = await CommentRepository(db).get_by_id(comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")

    comment.content = content
    await db.flush()

    logger.info("Updated comment id=%s", comment_id)
    return comment_to_response(comment)


async def delete_comment(db: AsyncSession, comment_id: int) -> None:
    comments = CommentRepository(db)
    if not await comments.exists_by_id(comment_id):
        raise NotFoundError("Comment not found")
    await comments.delete_by_id(comment_id)
    logger.info("Deleted comment id=%s", comment_id)
