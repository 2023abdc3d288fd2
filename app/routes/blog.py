# app/routes/blog.py

"""
Blog Routes.

Provides list, create, update and delete endpoints for blogs.

Summary
-------
Endpoints include:
  - List blogs (owner populated)
  - Create blog (bearer token)
  - Delete blog (bearer token, creator only)
  - Update blog (bearer token, creator only)

Dependencies
------------
  - `BlogServiceDep`: Blog service bound to the request session.
  - `CurrentUserDep`: User resolved from the bearer token.
"""

from typing import Annotated

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from app.auth.guard import CurrentUserDep
from app.dependencies import BlogServiceDep
from app.schemas import BlogCreate, BlogResponse, BlogUpdate

router = APIRouter(prefix="/api/blogs", tags=["📝 Blogs"])

UNAUTHORIZED_RESPONSE = {
    "description": "Missing, invalid or expired token, or caller is not the creator",
    "content": {"application/json": {"example": {"error": "token missing"}}},
}
INVALID_ID_RESPONSE = {
    "description": "Malformed id or invalid body",
    "content": {"application/json": {"example": {"error": "malformatted id"}}},
}
NOT_FOUND_RESPONSE = {
    "description": "Blog not found",
    "content": {"application/json": {"example": {"error": "blog not found"}}},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="List blogs",
    description="List every blog with its creator populated.",
    operation_id="blogs_list",
)
async def list_blogs(service: BlogServiceDep) -> list[BlogResponse]:
    """
    List all blogs.

    Parameters
    ----------
    service : BlogService
        Blog service dependency.

    Returns
    -------
    list[BlogResponse]
        All blogs with owners.
    """
    return await service.list_blogs()


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog",
    description="Create a blog owned by the authenticated user.",
    responses={
        400: {
            "description": "Missing title or url",
            "content": {"application/json": {"example": {"error": "`title` is required"}}},
        },
        401: UNAUTHORIZED_RESPONSE,
    },
    operation_id="blogs_create",
)
async def create_blog(
    blog: Annotated[
        BlogCreate,
        Body(
            examples=[
                {
                    "title": "React patterns",
                    "author": "Michael Chan",
                    "url": "https://reactpatterns.com/",
                    "likes": 7,
                },
            ],
        ),
    ],
    user: CurrentUserDep,
    service: BlogServiceDep,
) -> BlogResponse:
    """
    Create a new blog.

    Parameters
    ----------
    blog : BlogCreate
        Blog input payload.
    user : UserDB
        Authenticated creator.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogResponse
        Created blog data.
    """
    return await service.create(blog, user)


@router.delete(
    "/{blog_id}",
    status_code=HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete blog",
    description="Delete a blog. Only its creator may do so.",
    responses={400: INVALID_ID_RESPONSE, 401: UNAUTHORIZED_RESPONSE, 404: NOT_FOUND_RESPONSE},
    operation_id="blogs_delete",
)
async def delete_blog(blog_id: str, user: CurrentUserDep, service: BlogServiceDep) -> Response:
    """
    Delete a blog post.

    Parameters
    ----------
    blog_id : str
        Blog identifier.
    user : UserDB
        Authenticated caller.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    Response
        Empty ``204`` response.
    """
    await service.remove(blog_id, user)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update blog",
    description="Replace the supplied fields of a blog. Only its creator may do so.",
    responses={400: INVALID_ID_RESPONSE, 401: UNAUTHORIZED_RESPONSE, 404: NOT_FOUND_RESPONSE},
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: str,
    blog_update: Annotated[BlogUpdate, Body(examples=[{"likes": 8}])],
    user: CurrentUserDep,
    service: BlogServiceDep,
) -> BlogResponse:
    """
    Update a blog post.

    Parameters
    ----------
    blog_id : str
        Blog identifier.
    blog_update : BlogUpdate
        Fields to replace.
    user : UserDB
        Authenticated caller.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogResponse
        Updated blog data.
    """
    return await service.update(blog_id, blog_update, user)
