from datetime import date, datetime
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError, field_validator
from typing import Optional
from chatroom.core.timeutil import ensure_utc

_HTTP_URL = TypeAdapter(HttpUrl)

# Fields shared by the stored user and everything returned to clients
class UserBase(BaseModel):
    id: int
    username: str
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    avatar: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    date_of_birth: Optional[date] = Field(default=None, alias="dateOfBirth")
    is_online: bool = Field(default=False, alias="isOnline")
    last_activity: Optional[datetime] = Field(default=None, alias="lastActivity")
    created_at: datetime = Field(alias="createdAt")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }

    @field_validator("last_activity", "created_at")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

# Stored user, password included
class UserRecord(UserBase):
    # Plaintext, compared by equality. Not fit for production use.
    password: str

# User as returned by the API
class UserResponse(UserBase):
    pass

# Partial profile update
class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, alias="firstName", min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, alias="lastName", min_length=1, max_length=50)
    bio: Optional[str] = Field(default=None, max_length=500)
    location: Optional[str] = Field(default=None, max_length=100)
    website: Optional[str] = None
    date_of_birth: Optional[date] = Field(default=None, alias="dateOfBirth")
    avatar: Optional[str] = None

    model_config = {"populate_by_name": True}

    @field_validator("website")
    @classmethod
    def check_website(cls, value: Optional[str]) -> Optional[str]:
        # An empty string clears the link
        if not value:
            return value
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError:
            raise ValueError("Invalid website URL")
        return value

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def blank_date(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CountResponse(BaseModel):
    count: int


class ActivityResponse(BaseModel):
    success: bool = True
