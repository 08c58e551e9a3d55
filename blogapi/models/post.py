"""
Blog API Backend: Post SQLAlchemy Model
========================================

What:  ORM model representing the `posts` table.
Who:   Used by PostRepository for CRUD operations.

Lifecycle:
    1. Created by POST /posts; user_id is forced to the caller's identity
       after the category has been checked.
    2. Updated in place by PUT /posts; every content field is overwritten,
       user_id never changes.
    3. Deleted by DELETE /posts once ownership has been re-checked.

Query Patterns:
    - All posts / by id:     SELECT ... ORDER BY id
    - By owner:              SELECT ... WHERE user_id = :uid   (idx_posts_user_id)
    - By category:           SELECT ... WHERE category_id = :cid (idx_posts_category_id)
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blogapi.database import Base


class Post(Base):
    """A blog post (or page, when `is_post` is false) owned by one user."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # ── Ownership ─────────────────────────────────────────────────────────
    # Set once at creation from the authenticated identity; never taken
    # from the request body.
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
    )

    # ── Content ───────────────────────────────────────────────────────────
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Distinguishes posts from standalone pages
    is_post: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        Index("idx_posts_user_id", "user_id"),
        Index("idx_posts_category_id", "category_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, user_id={self.user_id}, "
            f"category_id={self.category_id}, title='{self.title}')>"
        )
