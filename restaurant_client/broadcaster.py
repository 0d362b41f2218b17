"""
Notification Broadcaster

Fan-out of one authored message to a set of recipients, plus the unread
counter bookkeeping the inbox relies on.

Every recipient's message list is newest-first, so a delivered message is
always inserted at index 0.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
import uuid
from typing import Iterable

from restaurant_client.core.exceptions import ValidationError
from restaurant_client.schemas import InboxMessage, MessageType, utcnow

logger = logging.getLogger(__name__)


def validate_notification(title: str, message: str) -> tuple[str, str]:
    """
    Reject empty notifications before anything reaches the store.

    Returns:
        (title, message) with surrounding whitespace removed

    Raises:
        ValidationError: title or message is blank
    """
    title = (title or "").strip()
    message = (message or "").strip()
    if not title:
        raise ValidationError("Notification title must not be empty")
    if not message:
        raise ValidationError("Notification message must not be empty")
    return title, message


def build_messages(
    recipient_ids: Iterable[str],
    title: str,
    message: str,
    message_type: MessageType = MessageType.INFO,
) -> list[InboxMessage]:
    """One fresh, unread message per recipient sharing a single timestamp."""
    created_at = utcnow()
    return [
        InboxMessage(
            id=f"msg-{uuid.uuid4().hex[:16]}",
            user_id=recipient_id,
            title=title,
            message=message,
            type=MessageType(message_type),
            is_read=False,
            created_at=created_at,
        )
        for recipient_id in recipient_ids
    ]


def deliver(
    mailboxes: dict[str, list[InboxMessage]],
    messages: Iterable[InboxMessage],
    unread: "UnreadCounter",
) -> int:
    """
    Prepend each message to its recipient's list.

    Returns:
        Number of messages delivered
    """
    delivered = 0
    for msg in messages:
        mailboxes.setdefault(msg.user_id, []).insert(0, msg)
        unread.on_created(msg)
        delivered += 1
    logger.debug(f"Delivered {delivered} inbox message(s)")
    return delivered


class UnreadCounter:
    """
    Cached unread count per recipient.

    Decrements happen only on a real unread → read change, so repeating a
    mark-as-read is a no-op for the counter.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}

    def rebuild(self, mailboxes: dict[str, list[InboxMessage]]) -> None:
        self._counts = {
            user_id: sum(1 for m in messages if not m.is_read)
            for user_id, messages in mailboxes.items()
        }

    def get(self, user_id: str) -> int:
        return self._counts.get(user_id, 0)

    def on_created(self, msg: InboxMessage) -> None:
        if not msg.is_read:
            self._counts[msg.user_id] = self.get(msg.user_id) + 1

    def mark_read(self, msg: InboxMessage) -> bool:
        """
        Flag a message read in place.

        Returns:
            True if the message was unread before this call
        """
        if msg.is_read:
            return False
        msg.is_read = True
        self._counts[msg.user_id] = max(0, self.get(msg.user_id) - 1)
        return True

    def on_deleted(self, msg: InboxMessage) -> None:
        if not msg.is_read:
            self._counts[msg.user_id] = max(0, self.get(msg.user_id) - 1)

    def clear(self, user_id: str) -> None:
        self._counts[user_id] = 0
