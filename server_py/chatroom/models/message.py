from sqlalchemy import Column, DateTime, Integer, String, Text

from chatroom.core.database import Base


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    # No foreign key: ownership is re-checked on every mutation instead
    user_id = Column(Integer, nullable=False, index=True)
    username = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")
    attachment_url = Column(Text, nullable=True)
    attachment_type = Column(String(8), nullable=True)  # 'image' | 'file' | 'gif'
    attachment_name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
