class ChatError(Exception):
    """Base class for failures raised by the storage layer."""


class DuplicateEmailError(ChatError):
    def __init__(self, email: str) -> None:
        super().__init__("User with this email already exists")
        self.email = email


class DuplicateUsernameError(ChatError):
    def __init__(self, username: str) -> None:
        super().__init__("Username already taken")
        self.username = username


class AvatarTooLargeError(ChatError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Avatar is too large ({size} bytes, limit {limit} bytes)")
        self.size = size
        self.limit = limit


class ThemeNotFoundError(ChatError):
    def __init__(self, theme_id: int) -> None:
        super().__init__(f"Theme with ID {theme_id} not found")
        self.theme_id = theme_id
