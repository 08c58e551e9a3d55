"""
Blog API Backend: Post Request/Response Schemas
================================================

What:  Pydantic models for post payloads and post representations.
How:   FastAPI validates request bodies against PostCreate / PostUpdate and
       serializes ORM rows through PostRead (from_attributes).

Wire format (camelCase):
    {
        "id": 12,
        "userId": 7,
        "categoryId": 1,
        "title": "A",
        "description": "...",
        "content": "...",
        "isPost": true,
        "isPublished": false,
        "publishedDate": null
    }

Ownership:
    `userId` is accepted in request bodies for compatibility with clients
    that send the whole post back, but it is never read. The owner always
    comes from the bearer token.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from blogapi.schemas.common import CamelModel


class PostFields(CamelModel):
    """Content fields shared by create and update payloads."""
    category_id: int = Field(description="Existing category id")
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None)
    content: Optional[str] = Field(default=None)
    is_post: bool = Field(default=True, description="False for standalone pages")
    is_published: bool = Field(default=False)
    published_date: Optional[datetime] = Field(default=None)

    # Ignored; see module docstring
    user_id: Optional[int] = Field(default=None, exclude=True)


class PostCreate(PostFields):
    """
    What:  Body of POST /posts.
    `id` may be present when a client posts a full object; it is ignored and
    the database assigns a new one.
    """
    id: Optional[int] = Field(default=None, exclude=True)


class PostUpdate(PostFields):
    """Body of PUT /posts: the full post, including the id to update."""
    id: int = Field(description="Id of the post to update")


class PostRead(CamelModel):
    """Representation of a stored post."""
    id: int
    user_id: int
    category_id: int
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    is_post: bool
    is_published: bool
    published_date: Optional[datetime] = None
