from sqlalchemy import exists, select

from blog_api.models import User
from blog_api.repositories.base import SQLAlchemyRepository


class UserRepository(SQLAlchemyRepository[User]):
    model = User

    async def exists_by_email(self, email: str, exclude_id: int | None = None) -> bool:
        return await self._exists_other(User.email == email, exclude_id)

    async def exists_by_username(self, username: str, exclude_id: int | None = None) -> bool:
        return await self._exists_other(User.username == username, exclude_id)

    async def _exists_other(self, condition, exclude_id: int | None) -> bool:
        # exclude_id lets an update keep its own email/username.
        if exclude_id is not None:
            condition = condition & (User.id != exclude_id)
        return bool(await self.db.scalar(select(exists().where(condition))))
