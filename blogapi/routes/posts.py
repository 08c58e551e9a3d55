"""
Blog API Backend: Post Route Handlers
======================================

What:  HTTP surface for listing, creating, updating and deleting posts.
How:   Extracts query parameters and bodies, resolves the acting user via
       `get_current_user_id` for mutating calls, delegates to post_service.
Who:   Called by blog clients.

Endpoints:
    GET    /posts?id=&userId=&categoryId=   public
    POST   /posts                           bearer token required
    PUT    /posts                           bearer token required
    DELETE /posts?id=                       bearer token required

    The same handlers are also mounted under the action-style paths older
    clients use: /api/Post/GetPosts, /api/Post/AddPost, /api/Post/UpdatePost
    and /api/Post/DeletePost.

Every response body is an Envelope {statusCode, message, data}. Errors are
raised as BlogApiError subclasses and rendered by the handlers in main.py.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth import get_current_user_id
from blogapi.database import get_db_session
from blogapi.schemas import Envelope, PostCreate, PostRead, PostUpdate
from blogapi.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])
legacy_router = APIRouter(prefix="/api/Post", tags=["Posts (legacy paths)"])

_ERRORS = {
    400: {"description": "Acting user is not the owner of the post", "model": Envelope},
    401: {"description": "Missing or invalid bearer token", "model": Envelope},
    404: {"description": "Category or post not found", "model": Envelope},
    500: {"description": "Server error", "model": Envelope},
}


async def list_posts(
    id: Optional[int] = Query(default=None, description="Return only the post with this id"),
    user_id: Optional[int] = Query(
        default=None, alias="userId", description="Return posts owned by this user"
    ),
    category_id: Optional[int] = Query(
        default=None, alias="categoryId", description="Return posts in this category"
    ),
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[List[PostRead]]:
    """
    List posts. Filters are mutually exclusive with precedence
    userId > id > categoryId; without filters every post is returned.
    """
    return await post_service.list_posts(
        db=db, post_id=id, user_id=user_id, category_id=category_id
    )


async def create_post(
    payload: PostCreate,
    acting_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[PostRead]:
    """Create a post owned by the caller. Any userId in the body is ignored."""
    return await post_service.create_post(db=db, payload=payload, acting_user_id=acting_user_id)


async def update_post(
    payload: PostUpdate,
    acting_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[PostRead]:
    """Overwrite the content fields of a post the caller owns."""
    return await post_service.update_post(db=db, payload=payload, acting_user_id=acting_user_id)


async def delete_post(
    id: int = Query(description="Id of the post to delete"),
    acting_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Envelope:
    """Delete a post the caller owns."""
    return await post_service.delete_post(db=db, post_id=id, acting_user_id=acting_user_id)


# ── Route Registration ────────────────────────────────────────────────────
# (handler, method, path on `router`, path on `legacy_router`, response model, summary)
_ROUTES = [
    (list_posts, "GET", "", "/GetPosts", Envelope[List[PostRead]], "List posts"),
    (create_post, "POST", "", "/AddPost", Envelope[PostRead], "Create a post"),
    (update_post, "PUT", "", "/UpdatePost", Envelope[PostRead], "Update a post"),
    (delete_post, "DELETE", "", "/DeletePost", Envelope, "Delete a post"),
]

for endpoint, method, path, legacy_path, response_model, summary in _ROUTES:
    router.add_api_route(
        path,
        endpoint,
        methods=[method],
        response_model=response_model,
        responses=_ERRORS,
        summary=summary,
    )
    legacy_router.add_api_route(
        legacy_path,
        endpoint,
        methods=[method],
        response_model=response_model,
        responses=_ERRORS,
        summary=f"{summary} (legacy path)",
        include_in_schema=False,
    )
