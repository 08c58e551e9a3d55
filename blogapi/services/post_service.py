"""
Blog API Backend: Post Service (Post Request Handler)
======================================================

What:  List, create, update and delete posts; enforce category existence
       and post ownership; wrap every result in an Envelope.
How:   Builds repositories over the request's AsyncSession, runs a linear
       validation chain, stages the write and commits once.
Who:   Called by the /posts route handlers.

Validation chains:
    create:  category exists (404) → acting user known (401) → insert
    update:  category exists (404) → post exists (404) → owner (400) → overwrite
    delete:  post exists (404) → owner (400) → remove

    Update checks the category before the post: a request wrong on both
    reports the missing category.

Concurrency:
    Update and delete load the post with SELECT ... FOR UPDATE, so the
    ownership check and the write happen under one row lock inside the
    request's single transaction.

Error Handling Strategy:
    NotFoundError / NotOwnerError propagate untouched. Any other exception
    during create/update/delete is logged with its traceback, the session
    is rolled back and a DatabaseError with a generic message is raised.
    Listing catches nothing.
"""

import logging
from typing import List, NoReturn, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.exceptions import (
    AuthenticationError,
    BlogApiError,
    DatabaseError,
    NotFoundError,
    NotOwnerError,
)
from blogapi.models import Post
from blogapi.repositories import CategoryRepository, PostRepository, UserRepository
from blogapi.schemas import Envelope, PostCreate, PostRead, PostUpdate

logger = logging.getLogger(__name__)

MSG_FETCHED = "Your posts were successfully fetched"
MSG_ADDED = "Your post is added"
MSG_UPDATED = "Your post is updated"
MSG_DELETED = "Your post is deleted"
MSG_NO_CATEGORY = "No category found with the given id"
MSG_NO_POST = "No post found with the given id"


class PostService:
    """
    Business logic for post operations.

    Stateless: every call receives the request's session, so each call
    works inside that request's transaction.
    """

    async def list_posts(
        self,
        db: AsyncSession,
        post_id: Optional[int] = None,
        user_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> Envelope[List[PostRead]]:
        """
        List posts, optionally filtered.

        Filters are mutually exclusive; the first one given wins in the
        order user_id, post_id, category_id. No filter returns every post.
        No authentication is required.
        """
        posts = PostRepository(db)

        if user_id is not None:
            rows = await posts.list_by_user(user_id)
        elif post_id is not None:
            rows = await posts.list_by_id(post_id)
        elif category_id is not None:
            rows = await posts.list_by_category(category_id)
        else:
            rows = await posts.list_all()

        logger.debug(
            "Listed %d posts (id=%s, user_id=%s, category_id=%s)",
            len(rows), post_id, user_id, category_id,
        )
        return Envelope[List[PostRead]](
            status_code=200,
            message=MSG_FETCHED,
            data=[PostRead.model_validate(row) for row in rows],
        )

    async def create_post(
        self,
        db: AsyncSession,
        payload: PostCreate,
        acting_user_id: int,
    ) -> Envelope[PostRead]:
        """
        Create a post owned by the acting user.

        Raises:
            NotFoundError: the referenced category does not exist (nothing is written)
            AuthenticationError: the token names a user that does not exist
            DatabaseError: the insert or commit failed
        """
        posts = PostRepository(db)
        categories = CategoryRepository(db)
        users = UserRepository(db)

        try:
            if not await categories.exists(payload.category_id):
                raise NotFoundError(
                    resource="category",
                    resource_id=payload.category_id,
                    message=MSG_NO_CATEGORY,
                )

            if await users.get(acting_user_id) is None:
                raise AuthenticationError(
                    "unknown user", context={"user_id": acting_user_id}
                )

            # Owner comes from the token, never from the body
            post = Post(
                user_id=acting_user_id,
                category_id=payload.category_id,
                title=payload.title,
                description=payload.description,
                content=payload.content,
                is_post=payload.is_post,
                is_published=payload.is_published,
                published_date=payload.published_date,
            )
            posts.add(post)
            await posts.commit()
            logger.info("Post %s created by user %s", post.id, acting_user_id)

            return Envelope[PostRead](
                status_code=200,
                message=MSG_ADDED,
                data=PostRead.model_validate(post),
            )

        except BlogApiError:
            raise
        except Exception as e:
            await self._fail(posts, "create", e, user_id=acting_user_id)

    async def update_post(
        self,
        db: AsyncSession,
        payload: PostUpdate,
        acting_user_id: int,
    ) -> Envelope[PostRead]:
        """
        Overwrite every content field of an existing post.

        The owner is never changed. Fields overwritten: content, description,
        is_published, published_date, title, category_id, is_post.

        Raises:
            NotFoundError: the category or the post does not exist
            NotOwnerError: the acting user does not own the post
            DatabaseError: the update or commit failed
        """
        posts = PostRepository(db)
        categories = CategoryRepository(db)

        try:
            existing = await posts.get(payload.id, for_update=True)

            if not await categories.exists(payload.category_id):
                raise NotFoundError(
                    resource="category",
                    resource_id=payload.category_id,
                    message=MSG_NO_CATEGORY,
                )

            if existing is None:
                raise NotFoundError(resource="post", resource_id=payload.id, message=MSG_NO_POST)

            if existing.user_id != acting_user_id:
                logger.warning(
                    "User %s tried to update post %s owned by user %s",
                    acting_user_id, existing.id, existing.user_id,
                )
                raise NotOwnerError(post_id=existing.id, user_id=acting_user_id)

            existing.is_post = payload.is_post
            existing.content = payload.content
            existing.description = payload.description
            existing.is_published = payload.is_published
            existing.published_date = payload.published_date
            existing.title = payload.title
            existing.category_id = payload.category_id

            posts.update(existing)
            await posts.commit()
            logger.info("Post %s updated by user %s", existing.id, acting_user_id)

            return Envelope[PostRead](
                status_code=200,
                message=MSG_UPDATED,
                data=PostRead.model_validate(existing),
            )

        except BlogApiError:
            raise
        except Exception as e:
            await self._fail(posts, "update", e, post_id=payload.id, user_id=acting_user_id)

    async def delete_post(
        self,
        db: AsyncSession,
        post_id: int,
        acting_user_id: int,
    ) -> Envelope:
        """
        Delete a post owned by the acting user.

        Deleting an id that does not exist is a 404 and changes nothing, so
        retries are safe.

        Raises:
            NotFoundError: the post does not exist
            NotOwnerError: the acting user does not own the post
            DatabaseError: the delete or commit failed
        """
        posts = PostRepository(db)

        try:
            existing = await posts.get(post_id, for_update=True)
            if existing is None:
                raise NotFoundError(resource="post", resource_id=post_id, message=MSG_NO_POST)

            if existing.user_id != acting_user_id:
                logger.warning(
                    "User %s tried to delete post %s owned by user %s",
                    acting_user_id, existing.id, existing.user_id,
                )
                raise NotOwnerError(post_id=existing.id, user_id=acting_user_id)

            await posts.remove(existing)
            await posts.commit()
            logger.info("Post %s deleted by user %s", post_id, acting_user_id)

            return Envelope(status_code=200, message=MSG_DELETED)

        except BlogApiError:
            raise
        except Exception as e:
            await self._fail(posts, "delete", e, post_id=post_id, user_id=acting_user_id)

    async def _fail(
        self,
        posts: PostRepository,
        operation: str,
        error: Exception,
        **context,
    ) -> NoReturn:
        """Roll back, log the real error, raise an opaque DatabaseError."""
        logger.error(
            "Unexpected error during post %s (%s): %s",
            operation, context, str(error),
            exc_info=error,
        )
        try:
            await posts.rollback()
        except Exception:
            logger.error("Rollback after failed post %s also failed", operation, exc_info=True)
        raise DatabaseError(
            context={"operation": operation, "original_error": type(error).__name__, **context},
        ) from error


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
