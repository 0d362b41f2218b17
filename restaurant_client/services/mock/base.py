"""
Mock Table Base

Shared behavior of every in-memory table in the MockStore:
    - Simulated network latency (uniform between min and max)
    - Deep copies in and out, so callers never hold live references
    - Per-key serialization of read-then-write sequences

Author: Khalil Bannouri
Version: 1.0.0
"""

import asyncio
import random
import uuid
from typing import TypeVar

from pydantic import BaseModel

from restaurant_client.core.locks import KeyedLock

ModelT = TypeVar("ModelT", bound=BaseModel)


class MockTable:
    """
    Base class for the MockStore tables.

    Attributes:
        min_latency: Minimum simulated response time in seconds
        max_latency: Maximum simulated response time in seconds
    """

    def __init__(self, min_latency: float = 0.1, max_latency: float = 0.4):
        self.min_latency = min_latency
        self.max_latency = max_latency
        self._locks = KeyedLock()

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    async def _simulate_latency(self) -> float:
        """
        Simulate network latency.

        Returns:
            float: Actual latency in milliseconds
        """
        latency = random.uniform(self.min_latency, self.max_latency)
        await asyncio.sleep(latency)
        return latency * 1000

    @staticmethod
    def _new_id(prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex[:16]}"

    @staticmethod
    def _copy(record: ModelT) -> ModelT:
        return record.model_copy(deep=True)

    @classmethod
    def _copy_all(cls, records: list[ModelT]) -> list[ModelT]:
        return [cls._copy(r) for r in records]

    def reset(self) -> None:
        """Drop every record held by the table."""
        raise NotImplementedError
