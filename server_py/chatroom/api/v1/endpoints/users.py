from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from chatroom.core.dependencies import get_storage
from chatroom.core.errors import AvatarTooLargeError
from chatroom.schemas.user import ActivityResponse, CountResponse, ProfileUpdate, UserResponse
from chatroom.services.storage import ChatStorage

router = APIRouter()

@router.get("", response_model=List[UserResponse])
async def list_users(storage: ChatStorage = Depends(get_storage)):
    """All registered users, without passwords."""
    return [UserResponse.model_validate(user) for user in await storage.get_all_users()]

@router.get("/count", response_model=CountResponse)
async def users_count(storage: ChatStorage = Depends(get_storage)):
    """Number of users active within the activity window."""
    return CountResponse(count=await storage.get_users_count())

@router.get("/total", response_model=CountResponse)
async def users_total(storage: ChatStorage = Depends(get_storage)):
    return CountResponse(count=await storage.get_total_users_count())

@router.get("/online", response_model=List[UserResponse])
async def online_users(storage: ChatStorage = Depends(get_storage)):
    """Every user with `isOnline` computed from the last heartbeat."""
    return [UserResponse.model_validate(user) for user in await storage.get_online_users()]

@router.post("/{user_id}/activity", response_model=ActivityResponse)
async def user_activity(
    user_id: int,
    storage: ChatStorage = Depends(get_storage)
):
    """Heartbeat sent periodically by the client."""
    if await storage.update_user_activity(user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return ActivityResponse(success=True)

@router.get("/{user_id}/profile", response_model=UserResponse)
async def get_profile(
    user_id: int,
    storage: ChatStorage = Depends(get_storage)
):
    user = await storage.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return UserResponse.model_validate(user)

@router.put("/{user_id}/profile", response_model=UserResponse)
async def update_profile(
    user_id: int,
    profile_data: ProfileUpdate,
    storage: ChatStorage = Depends(get_storage)
):
    """Partial update: only the fields present in the body are touched."""
    try:
        user = await storage.update_user_profile(user_id, profile_data)
    except AvatarTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(exc)
        )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return UserResponse.model_validate(user)

@router.get("/{user_id}/messages/count", response_model=CountResponse)
async def user_message_count(
    user_id: int,
    storage: ChatStorage = Depends(get_storage)
):
    return CountResponse(count=await storage.get_user_message_count(user_id))
