from typing import List
from pydantic import BaseModel, Field, StrictInt


class ThemeRecord(BaseModel):
    id: int
    name: str
    primary_color: str = Field(alias="primaryColor")
    secondary_color: str = Field(alias="secondaryColor")
    background_color: str = Field(alias="backgroundColor")
    message_background_self: str = Field(alias="messageBackgroundSelf")
    message_background_other: str = Field(alias="messageBackgroundOther")
    text_color: str = Field(alias="textColor")
    is_active: bool = Field(default=False, alias="isActive")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class ThemeChange(BaseModel):
    theme_id: StrictInt = Field(alias="themeId")

    model_config = {"populate_by_name": True}


class ThemeState(BaseModel):
    current_theme: ThemeRecord = Field(alias="currentTheme")
    available_themes: List[ThemeRecord] = Field(alias="availableThemes")

    model_config = {"populate_by_name": True}
