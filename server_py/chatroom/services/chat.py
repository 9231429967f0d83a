from __future__ import annotations

from typing import List, Sequence, Tuple

from chatroom.schemas.chat import MessageRecord

TRUNCATION_MARKER = "...[truncated]"


def preview_message(message: MessageRecord, max_chars: int) -> MessageRecord:
    """Shorten inline (data: URL) image attachments for list responses."""
    url = message.attachment_url
    if (
        url
        and message.attachment_type == "image"
        and url.startswith("data:")
        and len(url) > max_chars
    ):
        return message.model_copy(update={"attachment_url": url[:max_chars] + TRUNCATION_MARKER})
    return message


def paginate_messages(
    messages: Sequence[MessageRecord],
    *,
    page: int,
    limit: int,
    preview_chars: int,
) -> Tuple[List[MessageRecord], int]:
    """Return one page of ``messages`` (oldest first) and the full count."""
    start = (page - 1) * limit
    window = messages[start:start + limit]
    return [preview_message(message, preview_chars) for message in window], len(messages)
