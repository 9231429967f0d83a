from __future__ import annotations

import logging
from typing import Any, List, Optional

from sqlalchemy import asc, func, select, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from chatroom.core.database import create_session_factory
from chatroom.core.errors import DuplicateEmailError, DuplicateUsernameError, ThemeNotFoundError
from chatroom.core.init_db import init_db
from chatroom.core.timeutil import utcnow
from chatroom.models.message import Message
from chatroom.models.theme import ChatSettings, ChatTheme
from chatroom.models.user import User
from chatroom.schemas.auth import SignUpRequest
from chatroom.schemas.chat import MessageCreate, MessageRecord, MessageUpdate
from chatroom.schemas.theme import ThemeRecord
from chatroom.schemas.user import ProfileUpdate, UserRecord
from chatroom.services.storage import ChatStorage, candidate_user_id, profile_changes
from chatroom.services.themes import DEFAULT_THEME_ID, DEFAULT_THEMES, with_active_flag

logger = logging.getLogger(__name__)


def _user_record(user: Optional[User]) -> Optional[UserRecord]:
    return UserRecord.model_validate(user) if user is not None else None


def _message_record(message: Optional[Message]) -> Optional[MessageRecord]:
    return MessageRecord.model_validate(message) if message is not None else None


class DatabaseStorage(ChatStorage):
    """Chat state in a relational database through SQLAlchemy's async ORM."""

    backend = "database"

    def __init__(self, engine: AsyncEngine, **limits: Any) -> None:
        super().__init__(**limits)
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    async def initialize(self) -> None:
        await init_db(self.engine)
        async with self._session_factory() as session:
            result = await session.execute(select(ChatTheme.id))
            existing = set(result.scalars())
            for theme in DEFAULT_THEMES:
                if theme.id not in existing:
                    session.add(ChatTheme(
                        **theme.model_dump(exclude={"is_active"}),
                        is_active=theme.id == DEFAULT_THEME_ID,
                    ))
            if await self._settings_row(session) is None:
                session.add(ChatSettings(active_theme_id=DEFAULT_THEME_ID))
            await session.commit()

    async def close(self) -> None:
        await self.engine.dispose()

    # Users

    async def get_user(self, user_id: int) -> Optional[UserRecord]:
        async with self._session_factory() as session:
            return _user_record(await session.get(User, user_id))

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        async with self._session_factory() as session:
            result = await session.execute(select(User).where(User.email == email))
            return _user_record(result.scalar_one_or_none())

    async def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        async with self._session_factory() as session:
            result = await session.execute(select(User).where(User.username == username))
            return _user_record(result.scalar_one_or_none())

    async def get_all_users(self) -> List[UserRecord]:
        async with self._session_factory() as session:
            result = await session.execute(select(User).order_by(asc(User.created_at)))
            return [UserRecord.model_validate(user) for user in result.scalars()]

    async def get_total_users_count(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(select(func.count()).select_from(User))
            return result.scalar_one()

    async def create_user(self, signup: SignUpRequest) -> UserRecord:
        async with self._session_factory() as session:
            taken = await session.execute(select(User.id).where(User.email == signup.email))
            if taken.first() is not None:
                raise DuplicateEmailError(signup.email)
            taken = await session.execute(select(User.id).where(User.username == signup.username))
            if taken.first() is not None:
                raise DuplicateUsernameError(signup.username)

            user_id = candidate_user_id()
            while await session.get(User, user_id) is not None:
                user_id += 1

            user = User(
                id=user_id,
                username=signup.username,
                email=signup.email,
                password=signup.password,
                first_name=signup.first_name,
                last_name=signup.last_name,
                avatar=None,
                bio=None,
                location=None,
                website=None,
                date_of_birth=None,
                is_online=False,
                last_activity=None,
                created_at=utcnow(),
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            logger.info("User %s created: %s", user.id, user.username)
            return UserRecord.model_validate(user)

    async def update_user_profile(self, user_id: int, updates: ProfileUpdate) -> Optional[UserRecord]:
        async with self._session_factory() as session:
            user = await session.get(User, user_id)
            if user is None:
                logger.info("User %s not found for profile update", user_id)
                return None

            changes = profile_changes(updates, self.avatar_max_bytes)
            for field, value in changes.items():
                setattr(user, field, value)
            await session.commit()
            await session.refresh(user)
            logger.info("Profile updated for user %s: %s", user_id, sorted(changes))
            return UserRecord.model_validate(user)

    async def update_user_activity(self, user_id: int) -> Optional[UserRecord]:
        async with self._session_factory() as session:
            user = await session.get(User, user_id)
            if user is None:
                return None
            user.last_activity = utcnow()
            user.is_online = True
            await session.commit()
            await session.refresh(user)
            return UserRecord.model_validate(user)

    async def get_user_message_count(self, user_id: int) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(Message).where(Message.user_id == user_id)
            )
            return result.scalar_one()

    # Messages

    async def get_messages(self) -> List[MessageRecord]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(Message).order_by(asc(Message.created_at), asc(Message.id))
            )
            return [MessageRecord.model_validate(message) for message in result.scalars()]

    async def get_message_by_id(self, message_id: int) -> Optional[MessageRecord]:
        async with self._session_factory() as session:
            return _message_record(await session.get(Message, message_id))

    async def create_message(self, data: MessageCreate) -> MessageRecord:
        async with self._session_factory() as session:
            message = Message(
                content=data.content or "",
                username=data.username,
                user_id=data.user_id,
                attachment_url=data.attachment_url or None,
                attachment_type=data.attachment_type or None,
                attachment_name=data.attachment_name or None,
                created_at=utcnow(),
                updated_at=None,
            )
            session.add(message)
            await session.commit()
            await session.refresh(message)
            return MessageRecord.model_validate(message)

    async def update_message(
        self, message_id: int, user_id: int, updates: MessageUpdate
    ) -> Optional[MessageRecord]:
        current = await self.get_message_by_id(message_id)
        if current is None or not await self._confirm_owner(current, user_id, "edit"):
            return None

        async with self._session_factory() as session:
            message = await session.get(Message, message_id)
            if message is None:
                return None
            message.content = updates.content
            message.updated_at = utcnow()
            await session.commit()
            await session.refresh(message)
            return MessageRecord.model_validate(message)

    async def delete_message(self, message_id: int, user_id: int) -> bool:
        current = await self.get_message_by_id(message_id)
        if current is None:
            logger.info("Message %s not found", message_id)
            return False
        if not await self._confirm_owner(current, user_id, "delete"):
            return False

        async with self._session_factory() as session:
            message = await session.get(Message, message_id)
            if message is None:
                return False
            await session.delete(message)
            await session.commit()
        logger.info("Message %s deleted by user %s", message_id, user_id)
        return True

    # Themes

    async def _settings_row(self, session: AsyncSession) -> Optional[ChatSettings]:
        result = await session.execute(
            select(ChatSettings).order_by(ChatSettings.id.desc()).limit(1)
        )
        return result.scalars().first()

    async def _active_theme_id(self, session: AsyncSession) -> int:
        row = await self._settings_row(session)
        if row is None or row.active_theme_id is None:
            return DEFAULT_THEME_ID
        return row.active_theme_id

    async def get_active_theme(self) -> ThemeRecord:
        async with self._session_factory() as session:
            theme = await session.get(ChatTheme, await self._active_theme_id(session))
            record = ThemeRecord.model_validate(theme)
            return record.model_copy(update={"is_active": True})

    async def get_available_themes(self) -> List[ThemeRecord]:
        async with self._session_factory() as session:
            active_id = await self._active_theme_id(session)
            result = await session.execute(select(ChatTheme).order_by(asc(ChatTheme.id)))
            themes = [ThemeRecord.model_validate(theme) for theme in result.scalars()]
            return with_active_flag(themes, active_id)

    async def set_active_theme(self, theme_id: int) -> ThemeRecord:
        async with self._session_factory() as session:
            theme = await session.get(ChatTheme, theme_id)
            if theme is None:
                raise ThemeNotFoundError(theme_id)

            await session.execute(
                update(ChatTheme)
                .values(is_active=ChatTheme.id == theme_id)
                .execution_options(synchronize_session=False)
            )
            row = await self._settings_row(session)
            if row is None:
                row = ChatSettings()
                session.add(row)
            row.active_theme_id = theme_id
            await session.commit()

        logger.info("Active theme switched to %s", theme_id)
        return await self.get_active_theme()
