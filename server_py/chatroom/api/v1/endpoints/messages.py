import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from chatroom.core.config import settings
from chatroom.core.dependencies import get_storage
from chatroom.schemas.chat import MessageCreate, MessageRecord, MessageUpdate
from chatroom.services.chat import paginate_messages
from chatroom.services.storage import ChatStorage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[MessageRecord])
async def list_messages(
    response: Response,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.MESSAGES_PAGE_SIZE, ge=1),
    storage: ChatStorage = Depends(get_storage),
):
    """Oldest-first page of the chat; large inline images are cut short."""
    messages = await storage.get_messages()
    page_items, total = paginate_messages(
        messages,
        page=page,
        limit=limit,
        preview_chars=settings.ATTACHMENT_PREVIEW_CHARS,
    )
    logger.debug("Returning %d/%d messages (page %d)", len(page_items), total, page)

    response.headers["X-Total-Count"] = str(total)
    response.headers["Cache-Control"] = "no-cache"
    return page_items


@router.post("", response_model=MessageRecord, status_code=status.HTTP_201_CREATED)
async def create_message(
    payload: MessageCreate,
    storage: ChatStorage = Depends(get_storage),
):
    if await storage.get_user(payload.user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    message = await storage.create_message(payload)
    logger.info("Message %s posted by user %s", message.id, message.user_id)
    return message


@router.put("/{message_id}", response_model=MessageRecord)
@router.patch("/{message_id}", response_model=MessageRecord)
async def update_message(
    message_id: int,
    payload: MessageUpdate,
    storage: ChatStorage = Depends(get_storage),
):
    if not payload.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID is required",
        )

    message = await storage.get_message_by_id(message_id)
    if message is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Message not found",
        )
    if message.user_id != payload.user_id:
        logger.warning(
            "User %s tried to edit message %s owned by user %s",
            payload.user_id, message_id, message.user_id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only edit your own messages",
        )

    updated = await storage.update_message(message_id, payload.user_id, payload)
    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only edit your own messages",
        )
    return updated


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: int,
    user_id: Optional[int] = Query(None, alias="userId"),
    storage: ChatStorage = Depends(get_storage),
):
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID is required",
        )

    message = await storage.get_message_by_id(message_id)
    if message is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Message not found",
        )
    if message.user_id != user_id:
        logger.warning(
            "User %s tried to delete message %s owned by user %s",
            user_id, message_id, message.user_id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own messages",
        )

    if not await storage.delete_message(message_id, user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own messages",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
