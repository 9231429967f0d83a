from __future__ import annotations

import logging
import random
import time
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from chatroom.core.config import settings
from chatroom.core.errors import AvatarTooLargeError
from chatroom.core.timeutil import utcnow
from chatroom.schemas.auth import SignInRequest, SignUpRequest
from chatroom.schemas.chat import MessageCreate, MessageRecord, MessageUpdate
from chatroom.schemas.theme import ThemeRecord
from chatroom.schemas.user import ProfileUpdate, UserRecord

logger = logging.getLogger(__name__)

# Profile fields replaced only by a non-empty value
_NAME_FIELDS = ("first_name", "last_name")
# Profile fields replaced whenever the key is sent, so they can be cleared
_CLEARABLE_FIELDS = ("bio", "location", "website", "avatar", "date_of_birth")


def candidate_user_id() -> int:
    """Millisecond clock followed by a random 0-999 suffix, last eight digits.

    Callers probe upward from this value until they find a free id.
    """
    stamp = f"{int(time.time() * 1000)}{random.randint(0, 999)}"
    return int(stamp[-8:]) or 1


def profile_changes(updates: ProfileUpdate, avatar_max_bytes: int) -> Dict[str, Any]:
    """Turn a partial profile update into the attribute changes to apply."""
    provided = updates.model_dump(exclude_unset=True)

    avatar = provided.get("avatar")
    if avatar:
        size = len(avatar.encode("utf-8"))
        if size > avatar_max_bytes:
            raise AvatarTooLargeError(size, avatar_max_bytes)

    changes: Dict[str, Any] = {}
    for field in _NAME_FIELDS:
        if provided.get(field):
            changes[field] = provided[field]
    for field in _CLEARABLE_FIELDS:
        if field in provided:
            value = provided[field]
            changes[field] = None if value == "" else value
    changes["last_activity"] = utcnow()
    return changes


class ChatStorage(ABC):
    """Users, messages and the global theme behind one interface.

    Missing or foreign records are reported with ``None``/``False``;
    duplicate signups, oversized avatars and unknown themes raise
    :class:`chatroom.core.errors.ChatError` subclasses.
    """

    backend = "abstract"

    def __init__(
        self,
        *,
        avatar_max_bytes: int = settings.AVATAR_MAX_BYTES,
        activity_window_minutes: int = settings.ACTIVITY_WINDOW_MINUTES,
    ) -> None:
        self.avatar_max_bytes = avatar_max_bytes
        self.activity_window = timedelta(minutes=activity_window_minutes)

    async def initialize(self) -> None:
        """Load or create the backing state. Called once at startup."""

    async def close(self) -> None:
        """Release resources. Called once at shutdown."""

    # Users

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[UserRecord]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserRecord]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[UserRecord]: ...

    @abstractmethod
    async def get_all_users(self) -> List[UserRecord]: ...

    @abstractmethod
    async def create_user(self, signup: SignUpRequest) -> UserRecord: ...

    @abstractmethod
    async def update_user_profile(self, user_id: int, updates: ProfileUpdate) -> Optional[UserRecord]: ...

    @abstractmethod
    async def update_user_activity(self, user_id: int) -> Optional[UserRecord]: ...

    @abstractmethod
    async def get_user_message_count(self, user_id: int) -> int: ...

    async def authenticate_user(self, credentials: SignInRequest) -> Optional[UserRecord]:
        user = await self.get_user_by_email(credentials.email)
        if user is None:
            logger.info("Sign-in failed: no user with email %s", credentials.email)
            return None
        if user.password != credentials.password:
            logger.info("Sign-in failed: wrong password for %s", credentials.email)
            return None
        logger.info("User %s signed in", user.id)
        return user

    def is_active(self, user: UserRecord, now: Optional[datetime] = None) -> bool:
        # Users that never sent a heartbeat count as active
        if user.last_activity is None:
            return True
        return user.last_activity > (now or utcnow()) - self.activity_window

    async def get_users_count(self) -> int:
        now = utcnow()
        return sum(1 for user in await self.get_all_users() if self.is_active(user, now))

    async def get_online_users(self) -> List[UserRecord]:
        now = utcnow()
        return [
            user.model_copy(update={"is_online": self.is_active(user, now)})
            for user in await self.get_all_users()
        ]

    async def get_total_users_count(self) -> int:
        return len(await self.get_all_users())

    # Messages

    @abstractmethod
    async def get_messages(self) -> List[MessageRecord]:
        """All messages, oldest first."""

    @abstractmethod
    async def get_message_by_id(self, message_id: int) -> Optional[MessageRecord]: ...

    @abstractmethod
    async def create_message(self, data: MessageCreate) -> MessageRecord: ...

    @abstractmethod
    async def update_message(
        self, message_id: int, user_id: int, updates: MessageUpdate
    ) -> Optional[MessageRecord]: ...

    @abstractmethod
    async def delete_message(self, message_id: int, user_id: int) -> bool: ...

    async def _confirm_owner(self, message: MessageRecord, user_id: int, action: str) -> bool:
        """Ownership check shared by edit and delete.

        Besides the id match, the acting user and the owner must both exist
        and carry the same email and username.

        Both records are looked up by the same id, so with the stores in this
        package the email/username comparison cannot fail once both exist.
        It stays as an explicit invariant on every mutation path, so a
        store whose ``get_user`` can resolve one id to different records
        still refuses the change.
        """
        if message.user_id != user_id:
            logger.warning(
                "User %s tried to %s message %s owned by user %s",
                user_id, action, message.id, message.user_id,
            )
            return False

        acting = await self.get_user(user_id)
        owner = await self.get_user(message.user_id)
        if acting is None or owner is None:
            logger.warning(
                "Refusing to %s message %s: user_exists=%s owner_exists=%s",
                action, message.id, acting is not None, owner is not None,
            )
            return False
        if (acting.email, acting.username) != (owner.email, owner.username):
            logger.warning(
                "Refusing to %s message %s: identity mismatch (%s/%s vs %s/%s)",
                action, message.id, acting.email, acting.username, owner.email, owner.username,
            )
            return False
        return True

    # Themes

    @abstractmethod
    async def get_active_theme(self) -> ThemeRecord: ...

    @abstractmethod
    async def get_available_themes(self) -> List[ThemeRecord]: ...

    @abstractmethod
    async def set_active_theme(self, theme_id: int) -> ThemeRecord: ...
