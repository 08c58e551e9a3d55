"""
Blog API Backend: User SQLAlchemy Model
========================================

What:  ORM model for the `users` table.
Who:   Referenced by Post.user_id. Rows are created and removed by the
       external identity service; this backend only reads them.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from blogapi.database import Base


class User(Base):
    """A registered author. Only `id` is exercised by the post endpoints."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
