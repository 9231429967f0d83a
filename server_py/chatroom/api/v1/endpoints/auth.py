from fastapi import APIRouter, Depends, HTTPException, status
from chatroom.core.dependencies import get_storage
from chatroom.core.errors import DuplicateEmailError, DuplicateUsernameError
from chatroom.schemas.auth import SignInRequest, SignUpRequest
from chatroom.schemas.user import UserResponse
from chatroom.services.storage import ChatStorage

router = APIRouter()

@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignUpRequest,
    storage: ChatStorage = Depends(get_storage)
):
    """
    Registers a new user. The password is never returned.
    """
    try:
        user = await storage.create_user(payload)
    except (DuplicateEmailError, DuplicateUsernameError) as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc)
        )
    return UserResponse.model_validate(user)

@router.post("/signin", response_model=UserResponse)
async def signin(
    payload: SignInRequest,
    storage: ChatStorage = Depends(get_storage)
):
    """
    Checks the credentials and records the sign-in as activity.
    Unknown email and wrong password get the same answer.
    """
    user = await storage.authenticate_user(payload)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    user = await storage.update_user_activity(user.id) or user
    return UserResponse.model_validate(user)
