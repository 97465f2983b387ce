"""
Slug Routes — User Route Handlers

User is not Sluggable, so `{user}` resolves by primary key.
"""

from fastapi import Depends

from slug_routes.models.user import User
from slug_routes.router import SlugRouter
from slug_routes.schemas.article import ErrorResponse, UserResponse

router = SlugRouter(prefix="/api", tags=["Users"])

router.model("user", User)


@router.get(
    "/users/{user}",
    response_model=UserResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get a user by id",
)
async def get_user(user: User = Depends(router.binding("user"))) -> UserResponse:
    return UserResponse.model_validate(user)
