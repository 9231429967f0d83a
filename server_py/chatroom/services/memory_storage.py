from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from chatroom.core.errors import DuplicateEmailError, DuplicateUsernameError, ThemeNotFoundError
from chatroom.core.timeutil import utcnow
from chatroom.schemas.auth import SignUpRequest
from chatroom.schemas.chat import MessageCreate, MessageRecord, MessageUpdate
from chatroom.schemas.theme import ThemeRecord
from chatroom.schemas.user import ProfileUpdate, UserRecord
from chatroom.services.persistence import NullPersister, Persister, Snapshot
from chatroom.services.storage import ChatStorage, candidate_user_id, profile_changes
from chatroom.services.themes import DEFAULT_THEME_ID, DEFAULT_THEMES, with_active_flag

logger = logging.getLogger(__name__)


class MemoryStorage(ChatStorage):
    """Dict-backed store, mirrored through a :class:`Persister` after every write.

    Handlers run on a single event loop and no method suspends between its
    checks and its mutation, so the maps need no locking.
    """

    backend = "memory"

    def __init__(self, persister: Optional[Persister] = None, **limits: Any) -> None:
        super().__init__(**limits)
        self.persister = persister or NullPersister()
        self._users: Dict[int, UserRecord] = {}
        self._messages: Dict[int, MessageRecord] = {}
        self._themes: Dict[int, ThemeRecord] = {theme.id: theme for theme in DEFAULT_THEMES}
        self._active_theme_id = DEFAULT_THEME_ID
        self._next_user_id = 1
        self._next_message_id = 1

    async def initialize(self) -> None:
        data = await self.persister.load()
        if data is not None:
            self.restore(data)

    def restore(self, data: Snapshot) -> None:
        """Replace the current state with a snapshot produced by :meth:`snapshot`."""
        try:
            raw_users = data.get("users") or {}
            raw_messages = data.get("messages") or {}
            if not isinstance(raw_users, dict) or not isinstance(raw_messages, dict):
                raise TypeError("users and messages must be JSON objects")
            users = {
                int(key): UserRecord.model_validate(raw)
                for key, raw in raw_users.items()
            }
            messages = {
                int(key): MessageRecord.model_validate(raw)
                for key, raw in raw_messages.items()
            }
            next_user_id = max(
                int(data.get("nextUserId") or 1), max(users, default=0) + 1
            )
            next_message_id = max(
                int(data.get("nextMessageId") or 1), max(messages, default=0) + 1
            )
        except (TypeError, ValueError):
            logger.exception("Stored data is malformed, starting empty")
            return

        theme_id = data.get("activeThemeId", DEFAULT_THEME_ID)
        if not isinstance(theme_id, int) or theme_id not in self._themes:
            logger.warning("Stored theme %r is unknown, using theme %s", theme_id, DEFAULT_THEME_ID)
            theme_id = DEFAULT_THEME_ID

        self._users = users
        self._messages = messages
        self._next_user_id = next_user_id
        self._next_message_id = next_message_id
        self._active_theme_id = theme_id

        logger.info("Loaded %d users and %d messages", len(self._users), len(self._messages))

    def snapshot(self) -> Snapshot:
        return {
            "users": {
                str(user_id): user.model_dump(mode="json", by_alias=True)
                for user_id, user in self._users.items()
            },
            "messages": {
                str(message_id): message.model_dump(mode="json", by_alias=True)
                for message_id, message in self._messages.items()
            },
            "nextUserId": self._next_user_id,
            "nextMessageId": self._next_message_id,
            "activeThemeId": self._active_theme_id,
        }

    async def _persist(self) -> None:
        await self.persister.save(self.snapshot())

    # Users

    async def get_user(self, user_id: int) -> Optional[UserRecord]:
        return self._users.get(user_id)

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def get_all_users(self) -> List[UserRecord]:
        return list(self._users.values())

    async def create_user(self, signup: SignUpRequest) -> UserRecord:
        if await self.get_user_by_email(signup.email):
            raise DuplicateEmailError(signup.email)
        if await self.get_user_by_username(signup.username):
            raise DuplicateUsernameError(signup.username)

        user_id = candidate_user_id()
        while user_id in self._users:
            user_id += 1

        user = UserRecord(
            id=user_id,
            username=signup.username,
            email=signup.email,
            password=signup.password,
            first_name=signup.first_name,
            last_name=signup.last_name,
            is_online=False,
            created_at=utcnow(),
        )
        self._users[user_id] = user
        self._next_user_id = max(self._next_user_id, user_id + 1)
        await self._persist()
        logger.info("User %s created: %s", user_id, user.username)
        return user

    async def update_user_profile(self, user_id: int, updates: ProfileUpdate) -> Optional[UserRecord]:
        user = self._users.get(user_id)
        if user is None:
            logger.info("User %s not found for profile update", user_id)
            return None

        changes = profile_changes(updates, self.avatar_max_bytes)
        user = user.model_copy(update=changes)
        self._users[user_id] = user
        await self._persist()
        logger.info("Profile updated for user %s: %s", user_id, sorted(changes))
        return user

    async def update_user_activity(self, user_id: int) -> Optional[UserRecord]:
        user = self._users.get(user_id)
        if user is None:
            return None
        user = user.model_copy(update={"last_activity": utcnow(), "is_online": True})
        self._users[user_id] = user
        await self._persist()
        return user

    async def get_user_message_count(self, user_id: int) -> int:
        return sum(1 for message in self._messages.values() if message.user_id == user_id)

    # Messages

    async def get_messages(self) -> List[MessageRecord]:
        return sorted(self._messages.values(), key=lambda m: (m.created_at, m.id))

    async def get_message_by_id(self, message_id: int) -> Optional[MessageRecord]:
        return self._messages.get(message_id)

    async def create_message(self, data: MessageCreate) -> MessageRecord:
        message = MessageRecord(
            id=self._next_message_id,
            content=data.content or "",
            username=data.username,
            user_id=data.user_id,
            attachment_url=data.attachment_url or None,
            attachment_type=data.attachment_type or None,
            attachment_name=data.attachment_name or None,
            created_at=utcnow(),
            updated_at=None,
        )
        self._next_message_id += 1
        self._messages[message.id] = message
        await self._persist()
        return message

    async def update_message(
        self, message_id: int, user_id: int, updates: MessageUpdate
    ) -> Optional[MessageRecord]:
        message = self._messages.get(message_id)
        if message is None or not await self._confirm_owner(message, user_id, "edit"):
            return None

        message = message.model_copy(update={"content": updates.content, "updated_at": utcnow()})
        self._messages[message_id] = message
        await self._persist()
        return message

    async def delete_message(self, message_id: int, user_id: int) -> bool:
        message = self._messages.get(message_id)
        if message is None:
            logger.info("Message %s not found", message_id)
            return False
        if not await self._confirm_owner(message, user_id, "delete"):
            return False

        del self._messages[message_id]
        await self._persist()
        logger.info("Message %s deleted by user %s", message_id, user_id)
        return True

    # Themes

    async def get_active_theme(self) -> ThemeRecord:
        return self._themes[self._active_theme_id].model_copy(update={"is_active": True})

    async def get_available_themes(self) -> List[ThemeRecord]:
        return with_active_flag(list(self._themes.values()), self._active_theme_id)

    async def set_active_theme(self, theme_id: int) -> ThemeRecord:
        if theme_id not in self._themes:
            raise ThemeNotFoundError(theme_id)
        self._active_theme_id = theme_id
        await self._persist()
        logger.info("Active theme switched to %s", theme_id)
        return await self.get_active_theme()
