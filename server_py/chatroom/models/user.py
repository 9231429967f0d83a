from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean
from chatroom.core.database import Base

class User(Base):
    __tablename__ = "users"

    # Ids are assigned by the application, see services.storage.generate_user_id
    id = Column(Integer, primary_key=True, index=True, autoincrement=False)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    avatar = Column(Text, nullable=True)  # data URL or external link
    bio = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    website = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    is_online = Column(Boolean, default=False)
    last_activity = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
