"""
Blog API Backend: Persistence Gateway Tests
============================================

What:  Repository queries and staged writes against in-memory SQLite.
"""

import pytest

from blogapi.models import Post
from blogapi.repositories import CategoryRepository, PostRepository, UserRepository


async def _add_posts(session_factory):
    async with session_factory() as session:
        session.add_all([
            Post(user_id=7, category_id=1, title="first", is_post=True, is_published=True),
            Post(user_id=7, category_id=2, title="second", is_post=True, is_published=False),
            Post(user_id=9, category_id=1, title="third", is_post=False, is_published=False),
        ])
        await session.commit()


class TestUserAndCategoryRepositories:

    @pytest.mark.asyncio
    async def test_user_lookup(self, seeded_db):
        async with seeded_db() as session:
            users = UserRepository(session)
            assert (await users.get(7)).username == "owner"
            assert await users.get(12345) is None

    @pytest.mark.asyncio
    async def test_category_exists(self, seeded_db):
        async with seeded_db() as session:
            categories = CategoryRepository(session)
            assert await categories.exists(1) is True
            assert await categories.exists(404) is False
            assert (await categories.get(2)).name == "Releases"


class TestPostRepositoryQueries:

    @pytest.mark.asyncio
    async def test_list_all_ordered_by_id(self, seeded_db):
        await _add_posts(seeded_db)
        async with seeded_db() as session:
            rows = await PostRepository(session).list_all()
        assert [p.title for p in rows] == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_list_by_user(self, seeded_db):
        await _add_posts(seeded_db)
        async with seeded_db() as session:
            rows = await PostRepository(session).list_by_user(7)
        assert {p.title for p in rows} == {"first", "second"}

    @pytest.mark.asyncio
    async def test_list_by_category(self, seeded_db):
        await _add_posts(seeded_db)
        async with seeded_db() as session:
            rows = await PostRepository(session).list_by_category(1)
        assert {p.title for p in rows} == {"first", "third"}

    @pytest.mark.asyncio
    async def test_list_by_id_missing_is_empty(self, seeded_db):
        async with seeded_db() as session:
            assert await PostRepository(session).list_by_id(1) == []

    @pytest.mark.asyncio
    async def test_get_for_update(self, seeded_db):
        await _add_posts(seeded_db)
        async with seeded_db() as session:
            post = await PostRepository(session).get(1, for_update=True)
        assert post.title == "first"


class TestPostRepositoryWrites:

    @pytest.mark.asyncio
    async def test_add_is_staged_until_commit(self, seeded_db):
        async with seeded_db() as session:
            repo = PostRepository(session)
            repo.add(Post(user_id=7, category_id=1, title="draft", is_post=True, is_published=False))
            await repo.rollback()

        async with seeded_db() as session:
            assert await PostRepository(session).list_all() == []

    @pytest.mark.asyncio
    async def test_remove_and_commit(self, seeded_db):
        await _add_posts(seeded_db)
        async with seeded_db() as session:
            repo = PostRepository(session)
            post = await repo.get(2)
            await repo.remove(post)
            await repo.commit()

        async with seeded_db() as session:
            remaining = await PostRepository(session).list_all()
        assert [p.id for p in remaining] == [1, 3]

    @pytest.mark.asyncio
    async def test_update_and_commit(self, seeded_db):
        await _add_posts(seeded_db)
        async with seeded_db() as session:
            repo = PostRepository(session)
            post = await repo.get(1)
            post.title = "renamed"
            repo.update(post)
            await repo.commit()

        async with seeded_db() as session:
            assert (await PostRepository(session).get(1)).title == "renamed"
