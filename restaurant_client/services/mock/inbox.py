"""
Mock Inbox Service

Inbox table of the MockStore: one newest-first message list per recipient
plus a cached unread count that only moves on real read-state changes.
"""

import logging
from typing import Optional

from restaurant_client import broadcaster
from restaurant_client.core.exceptions import NotFoundError
from restaurant_client.schemas import InboxMessage, MessageType, UserRole
from restaurant_client.services.base import BaseInboxService
from restaurant_client.services.mock.accounts import MockAuthService
from restaurant_client.services.mock.base import MockTable

logger = logging.getLogger(__name__)


class MockInboxService(MockTable, BaseInboxService):
    """
    In-memory inbox.

    Attributes:
        accounts: Accounts table used to resolve broadcast recipients
    """

    def __init__(
        self,
        accounts: MockAuthService,
        min_latency: float = 0.1,
        max_latency: float = 0.4,
    ):
        super().__init__(min_latency, max_latency)
        self.accounts = accounts
        self._mailboxes: dict[str, list[InboxMessage]] = {}
        self._unread = broadcaster.UnreadCounter()

    def load(self, mailboxes: dict[str, list[InboxMessage]]) -> None:
        for user_id, messages in mailboxes.items():
            self._mailboxes.setdefault(user_id, []).extend(self._copy_all(messages))
        self._unread.rebuild(self._mailboxes)

    def reset(self) -> None:
        self._mailboxes.clear()
        self._unread.rebuild(self._mailboxes)

    def _find(self, message_id: str) -> Optional[InboxMessage]:
        for messages in self._mailboxes.values():
            for msg in messages:
                if msg.id == message_id:
                    return msg
        return None

    # =========================================================================
    # RECIPIENT OPERATIONS
    # =========================================================================

    async def get_messages(self, user_id: str) -> list[InboxMessage]:
        await self._simulate_latency()
        return self._copy_all(self._mailboxes.get(user_id, []))

    async def mark_as_read(self, message_id: str) -> InboxMessage:
        await self._simulate_latency()

        msg = self._find(message_id)
        if msg is None:
            raise NotFoundError("Message", message_id)

        if self._unread.mark_read(msg):
            logger.debug(f"Mock: Message {message_id} marked read")
        return self._copy(msg)

    async def mark_all_as_read(self, user_id: str) -> None:
        async with self._locks.hold(user_id):
            await self._simulate_latency()
            for msg in self._mailboxes.get(user_id, []):
                msg.is_read = True
            self._unread.clear(user_id)

    async def delete_message(self, message_id: str) -> None:
        await self._simulate_latency()

        for messages in self._mailboxes.values():
            for index, msg in enumerate(messages):
                if msg.id == message_id:
                    del messages[index]
                    self._unread.on_deleted(msg)
                    logger.debug(f"Mock: Deleted message {message_id}")
                    return

        raise NotFoundError("Message", message_id)

    async def get_unread_count(self, user_id: str) -> int:
        await self._simulate_latency()
        return self._unread.get(user_id)

    # =========================================================================
    # BROADCAST
    # =========================================================================

    async def send_to_all_employees(
        self,
        title: str,
        message: str,
        message_type: MessageType = MessageType.INFO,
    ) -> int:
        await self._simulate_latency()

        recipients = [user.id for user in self.accounts.list_employees()]
        messages = broadcaster.build_messages(recipients, title, message, message_type)
        delivered = broadcaster.deliver(self._mailboxes, messages, self._unread)

        logger.info(f"Mock: Broadcast '{title}' to {delivered} employee(s)")
        return delivered

    async def send_to_employee(
        self,
        employee_id: str,
        title: str,
        message: str,
        message_type: MessageType = MessageType.INFO,
    ) -> InboxMessage:
        await self._simulate_latency()

        user = self.accounts.get_account(employee_id)
        if user is None or user.role != UserRole.EMPLOYEE:
            raise NotFoundError("Employee", employee_id)

        messages = broadcaster.build_messages([user.id], title, message, message_type)
        broadcaster.deliver(self._mailboxes, messages, self._unread)

        logger.info(f"Mock: Sent '{title}' to employee {employee_id}")
        return self._copy(messages[0])
