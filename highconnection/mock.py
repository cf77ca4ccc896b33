"""In-memory message store for testing.

Records everything the adapter writes. Status updates are only accepted
for message ids registered as sent, so the not-found path can be
exercised without a database.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import MessageNotFoundError
from .types import InboundMessage, StatusUpdate


class InMemoryStore:
    """Test store that records writes.

    Usage::

        store = InMemoryStore(known_message_ids=[19128317])
        adapter = HighConnectionAdapter(store, AdapterConfig(domain="example.com"))
        adapter.receive_status(channel, {"ret_id": "19128317", "status": "6"})
        assert store.statuses[0].status == DeliveryStatus.DELIVERED

    Simulate a failing database::

        store = InMemoryStore(write_error=RuntimeError("db down"))
    """

    def __init__(
        self,
        *,
        known_message_ids: Iterable[int] = (),
        write_error: Exception | None = None,
    ) -> None:
        self.known_message_ids: set[int] = set(known_message_ids)
        self.write_error = write_error
        self.messages: list[InboundMessage] = []
        self.statuses: list[StatusUpdate] = []

    def write_message(self, message: InboundMessage) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.messages.append(message)

    def write_status(self, status: StatusUpdate) -> None:
        if self.write_error is not None:
            raise self.write_error
        if status.message_id not in self.known_message_ids:
            raise MessageNotFoundError(status.message_id)
        self.statuses.append(status)

    def reset(self) -> None:
        """Clear all recorded writes."""
        self.messages.clear()
        self.statuses.clear()
