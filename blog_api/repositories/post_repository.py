from sqlalchemy import Select, select
from sqlalchemy.orm import joinedload

from blog_api.models import Post
from blog_api.repositories.base import SQLAlchemyRepository


class PostRepository(SQLAlchemyRepository[Post]):
    """Every read joins the author, which the response shape flattens."""

    model = Post

    def _select(self) -> Select:
        return select(Post).options(joinedload(Post.author))

    async def list_newest_first(self) -> list[Post]:
        return await self._all(self._select().order_by(Post.created_at.desc(), Post.id.desc()))

    async def list_by_author(self, author_id: int) -> list[Post]:
        return await self._all(
            self._select().where(Post.author_id == author_id).order_by(Post.id)
        )

    async def search_by_title(self, fragment: str) -> list[Post]:
        """Case-insensitive substring match; ``%`` and ``_`` match literally."""
        return await self._all(
            self._select()
            .where(Post.title.icontains(fragment, autoescape=True))
            .order_by(Post.id)
        )
