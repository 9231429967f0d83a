from fastapi import APIRouter, Depends, HTTPException, status

from chatroom.core.dependencies import get_storage
from chatroom.core.errors import ThemeNotFoundError
from chatroom.schemas.theme import ThemeChange, ThemeState
from chatroom.services.storage import ChatStorage

router = APIRouter()


async def _theme_state(storage: ChatStorage) -> ThemeState:
    return ThemeState(
        current_theme=await storage.get_active_theme(),
        available_themes=await storage.get_available_themes(),
    )


@router.get("/theme", response_model=ThemeState)
async def get_theme(storage: ChatStorage = Depends(get_storage)):
    """Current global theme and the catalogue to choose from."""
    return await _theme_state(storage)


@router.post("/theme", response_model=ThemeState)
async def change_theme(
    payload: ThemeChange,
    storage: ChatStorage = Depends(get_storage),
):
    """Switch the theme for every participant."""
    try:
        await storage.set_active_theme(payload.theme_id)
    except ThemeNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        )
    return await _theme_state(storage)
