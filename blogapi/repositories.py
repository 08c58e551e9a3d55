"""
Blog API Backend: Persistence Gateway
======================================

What:  Thin data-access wrappers over one AsyncSession per request.
How:   Point lookups by primary key, filtered scans by foreign key, and
       add/update/remove calls that only stage changes. `commit()` persists
       everything staged in the request as a single unit.
Who:   Used by PostService; never by routes directly.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.models import Category, Post, User

logger = logging.getLogger(__name__)

__all__ = ["CategoryRepository", "PostRepository", "UserRepository"]


class UserRepository:
    """Read access to users."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)


class CategoryRepository:
    """Read access to categories."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, category_id: int) -> Optional[Category]:
        result = await self.session.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def exists(self, category_id: int) -> bool:
        return await self.get(category_id) is not None


class PostRepository:
    """Queries and staged writes for posts."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, post_id: int, for_update: bool = False) -> Optional[Post]:
        """
        Return a post by id, or None.

        With `for_update=True` the row is locked until the request's
        transaction ends, so the ownership check and the write that follows
        cannot interleave with another writer. SQLite ignores the clause.
        """
        stmt = select(Post).where(Post.id == post_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Post]:
        result = await self.session.execute(select(Post).order_by(Post.id))
        return list(result.scalars().all())

    async def list_by_id(self, post_id: int) -> List[Post]:
        result = await self.session.execute(select(Post).where(Post.id == post_id))
        return list(result.scalars().all())

    async def list_by_user(self, user_id: int) -> List[Post]:
        result = await self.session.execute(
            select(Post).where(Post.user_id == user_id).order_by(Post.id)
        )
        return list(result.scalars().all())

    async def list_by_category(self, category_id: int) -> List[Post]:
        result = await self.session.execute(
            select(Post).where(Post.category_id == category_id).order_by(Post.id)
        )
        return list(result.scalars().all())

    def add(self, post: Post) -> None:
        self.session.add(post)

    def update(self, post: Post) -> None:
        # No-op for instances loaded through this session; re-attaches a
        # detached one.
        self.session.add(post)

    async def remove(self, post: Post) -> None:
        await self.session.delete(post)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
