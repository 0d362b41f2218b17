"""
Remote Inbox Service - `/inbox` endpoints.
"""

from typing import Any

from restaurant_client.schemas import InboxMessage, MessageType, NotificationRequest
from restaurant_client.services.base import BaseInboxService
from restaurant_client.services.remote.base import RemoteService


class RemoteInboxService(RemoteService, BaseInboxService):

    entity = "Message"

    async def get_messages(self, user_id: str) -> list[InboxMessage]:
        data = await self._call("GET", f"/inbox/{user_id}")
        return self._parse_list(InboxMessage, data)

    async def mark_as_read(self, message_id: str) -> InboxMessage:
        data = await self._call("PUT", f"/inbox/{message_id}/read")
        return self._parse(InboxMessage, data)

    async def mark_all_as_read(self, user_id: str) -> None:
        await self._call("PUT", f"/inbox/{user_id}/read-all")

    async def delete_message(self, message_id: str) -> None:
        await self._call("DELETE", f"/inbox/{message_id}")

    async def get_unread_count(self, user_id: str) -> int:
        data = await self._call("GET", f"/inbox/{user_id}/unread-count")
        return self._parse_count(data)

    async def send_to_all_employees(
        self,
        title: str,
        message: str,
        message_type: MessageType = MessageType.INFO,
    ) -> int:
        body = NotificationRequest(title=title, message=message, type=message_type)
        data: Any = await self._call(
            "POST", "/inbox/send-to-all-employees", json=body.to_wire()
        )
        if isinstance(data, list):
            return len(data)
        return self._parse_count(data)

    async def send_to_employee(
        self,
        employee_id: str,
        title: str,
        message: str,
        message_type: MessageType = MessageType.INFO,
    ) -> InboxMessage:
        body = NotificationRequest(title=title, message=message, type=message_type)
        data = await self._call(
            "POST", f"/inbox/send-to-employee/{employee_id}", json=body.to_wire()
        )
        return self._parse(InboxMessage, data)
