"""
Blog API Backend: Category SQLAlchemy Model
============================================

What:  ORM model for the `categories` table.
Who:   Referenced by Post.category_id; read-only for the post endpoints,
       which only check that a referenced category exists.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from blogapi.database import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
