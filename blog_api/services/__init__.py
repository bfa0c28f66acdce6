# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# the business rules for a single domain aggregate:
#
#   user_service    : CRUD for User, email/username uniqueness
#   post_service    : CRUD + author and title lookups for Post
#   comment_service : CRUD + per-post and per-author listings for Comment
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.  Failures are raised as the error kinds in
# ``blog_api.exceptions``; services never return None for "missing".
