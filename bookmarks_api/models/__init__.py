"""ORM models; importing this package registers every table with Base.metadata."""

from bookmarks_api.models.bookmark import Bookmark
from bookmarks_api.models.user import User

__all__ = ["Bookmark", "User"]
