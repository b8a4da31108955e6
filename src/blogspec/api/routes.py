"""Blog endpoints. Every route logs one line and dispatches through the mediator."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status

from ..application import (
    AddPostCommand,
    BlogByIdQuery,
    BlogWithItemsQuery,
    CreateBlogCommand,
    DeleteBlogCommand,
    UpdateBlogUrlCommand,
)
from ..domain import Blog, Post
from .dependencies import MediatorDep
from .schemas import PostRequest, UrlRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Blog", tags=["Blog"])


@router.post("", response_model=list[Blog])
async def find_blogs(body: UrlRequest, mediator: MediatorDep) -> list[Blog]:
    """Blogs with exactly this URL, posts included."""
    logger.info("Getting Blogs")
    response = await mediator.send(BlogWithItemsQuery(body.url))
    return response.result


@router.put("", response_model=list[Blog])
async def find_blogs_materialized(body: UrlRequest, mediator: MediatorDep) -> list[Blog]:
    logger.info("Getting Blogs")
    response = await mediator.send(BlogWithItemsQuery(body.url))
    return list(response.result)


@router.get("/{blog_id}", response_model=list[Blog])
async def get_blog(blog_id: int, mediator: MediatorDep) -> list[Blog]:
    logger.info("Getting Blog %s", blog_id)
    response = await mediator.send(BlogByIdQuery(blog_id))
    return response.result


@router.post("/new", response_model=Blog, status_code=status.HTTP_201_CREATED)
async def create_blog(body: UrlRequest, mediator: MediatorDep) -> Blog:
    logger.info("Creating Blog")
    response = await mediator.send(CreateBlogCommand(url=body.url))
    return response.result


@router.patch("/{blog_id}", response_model=Blog)
async def update_blog_url(blog_id: int, body: UrlRequest, mediator: MediatorDep) -> Blog:
    logger.info("Updating Blog %s", blog_id)
    response = await mediator.send(UpdateBlogUrlCommand(blog_id=blog_id, url=body.url))
    return response.result


@router.post(
    "/{blog_id}/posts", response_model=Post, status_code=status.HTTP_201_CREATED
)
async def add_post(blog_id: int, body: PostRequest, mediator: MediatorDep) -> Post:
    logger.info("Adding Post to Blog %s", blog_id)
    response = await mediator.send(
        AddPostCommand(blog_id=blog_id, title=body.title, content=body.content)
    )
    return response.result


@router.delete("/{blog_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blog(blog_id: int, mediator: MediatorDep) -> Response:
    logger.info("Deleting Blog %s", blog_id)
    await mediator.send(DeleteBlogCommand(blog_id=blog_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
