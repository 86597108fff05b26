"""HTTP route handlers for the authenticated user's posts."""

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.common.enums import PublicMessage
from app.db.models import User
from app.schemas.common import Message
from app.schemas.post import PostCreate, PostResponse, PostUpdate
from app.services.post import PostService

router = APIRouter(prefix="/post", tags=["post"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    current_user: User = Depends(deps.get_current_user),
    post_service: PostService = Depends(deps.get_post_service),
):
    return await post_service.create(current_user, payload)


# registered before /{post_id} so "my" is not parsed as an id
@router.get("/my", response_model=list[PostResponse])
async def my_posts(
    current_user: User = Depends(deps.get_current_user),
    post_service: PostService = Depends(deps.get_post_service),
):
    return await post_service.find_mine(current_user)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    current_user: User = Depends(deps.get_current_user),
    post_service: PostService = Depends(deps.get_post_service),
):
    return await post_service.find_one(post_id, current_user)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    payload: PostUpdate,
    current_user: User = Depends(deps.get_current_user),
    post_service: PostService = Depends(deps.get_post_service),
):
    """Partially update caption and/or status of one of the caller's posts."""
    return await post_service.update(post_id, current_user, payload)


@router.delete("/{post_id}", response_model=Message)
async def delete_post(
    post_id: int,
    current_user: User = Depends(deps.get_current_user),
    post_service: PostService = Depends(deps.get_post_service),
) -> Message:
    await post_service.remove(post_id, current_user)
    return Message(message=PublicMessage.Deleted.value)
