"""Host persistence interface consumed by the adapter."""

from __future__ import annotations

from typing import Protocol

from .types import InboundMessage, StatusUpdate


class MessageStore(Protocol):
    """Interface the host's durable message store must implement."""

    def write_message(self, message: InboundMessage) -> None:
        """Persist a newly received message."""
        ...

    def write_status(self, status: StatusUpdate) -> None:
        """Persist a status change for an existing message.

        Must raise ``MessageNotFoundError`` when ``status.message_id`` is
        not a message the host knows.
        """
        ...
