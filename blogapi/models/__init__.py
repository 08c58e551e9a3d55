"""ORM models; importing this package registers every table with Base.metadata."""

from blogapi.models.category import Category
from blogapi.models.post import Post
from blogapi.models.user import User

__all__ = ["Category", "Post", "User"]
