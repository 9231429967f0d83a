from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, func
from chatroom.core.database import Base


class ChatTheme(Base):
    __tablename__ = "chat_themes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=False)
    name = Column(String, nullable=False)
    primary_color = Column(String, nullable=False)
    secondary_color = Column(String, nullable=False)
    background_color = Column(String, nullable=False)
    message_background_self = Column(String, nullable=False)
    message_background_other = Column(String, nullable=False)
    text_color = Column(String, nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ChatSettings(Base):
    __tablename__ = "chat_settings"

    id = Column(Integer, primary_key=True, index=True)
    active_theme_id = Column(Integer, ForeignKey("chat_themes.id"), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
