from sqlalchemy import Select, select
from sqlalchemy.orm import joinedload

from blog_api.models import Comment
from blog_api.repositories.base import SQLAlchemyRepository


class CommentRepository(SQLAlchemyRepository[Comment]):
    """Every read joins the author, which the response shape flattens."""

    model = Comment

    def _select(self) -> Select:
        return select(Comment).options(joinedload(Comment.author))

    async def list_oldest_first(self) -> list[Comment]:
        return await self._all(self._select().order_by(Comment.created_at, Comment.id))

    async def list_by_post(self, post_id: int) -> list[Comment]:
        """Comments on *post_id* in conversation order (oldest first)."""
        return await self._all(
            self._select()
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at, Comment.id)
        )

    async def list_by_author(self, author_id: int) -> list[Comment]:
        return await self._all(
            self._select().where(Comment.author_id == author_id).order_by(Comment.id)
        )
