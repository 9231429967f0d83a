from typing import List

from chatroom.schemas.theme import ThemeRecord

DEFAULT_THEME_ID = 1

# Fixed palette catalogue shared by every participant
DEFAULT_THEMES: List[ThemeRecord] = [
    ThemeRecord(
        id=1,
        name="Classic Blue",
        primary_color="#3b82f6",
        secondary_color="#1e40af",
        background_color="#f8fafc",
        message_background_self="#3b82f6",
        message_background_other="#e2e8f0",
        text_color="#1e293b",
    ),
    ThemeRecord(
        id=2,
        name="Sunset Orange",
        primary_color="#f59e0b",
        secondary_color="#d97706",
        background_color="#fef3c7",
        message_background_self="#f59e0b",
        message_background_other="#fed7aa",
        text_color="#92400e",
    ),
    ThemeRecord(
        id=3,
        name="Forest Green",
        primary_color="#10b981",
        secondary_color="#059669",
        background_color="#ecfdf5",
        message_background_self="#10b981",
        message_background_other="#d1fae5",
        text_color="#064e3b",
    ),
    ThemeRecord(
        id=4,
        name="Purple Dreams",
        primary_color="#8b5cf6",
        secondary_color="#7c3aed",
        background_color="#f3f4f6",
        message_background_self="#8b5cf6",
        message_background_other="#e5e7eb",
        text_color="#374151",
    ),
    ThemeRecord(
        id=5,
        name="Rose Gold",
        primary_color="#f43f5e",
        secondary_color="#e11d48",
        background_color="#fdf2f8",
        message_background_self="#f43f5e",
        message_background_other="#fce7f3",
        text_color="#881337",
    ),
    ThemeRecord(
        id=6,
        name="Dark Mode",
        primary_color="#6366f1",
        secondary_color="#4f46e5",
        background_color="#111827",
        message_background_self="#6366f1",
        message_background_other="#374151",
        text_color="#f9fafb",
    ),
]


def with_active_flag(themes: List[ThemeRecord], active_id: int) -> List[ThemeRecord]:
    return [theme.model_copy(update={"is_active": theme.id == active_id}) for theme in themes]
