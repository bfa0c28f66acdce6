# Repositories package.
#
# Thin data-access objects over an AsyncSession, one per entity:
#
#   base               : generic add / get / list / exists / delete by id
#   user_repository    : email and username existence checks
#   post_repository    : newest-first listing, author and title lookups
#   comment_repository : conversation-order listing, post and author lookups
#
# Repositories flush but never commit; the session (and its transaction)
# is owned by the ``get_db`` dependency.
from blog_api.repositories.comment_repository import CommentRepository
from blog_api.repositories.post_repository import PostRepository
from blog_api.repositories.user_repository import UserRepository

__all__ = ["CommentRepository", "PostRepository", "UserRepository"]
