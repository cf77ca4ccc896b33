"""Core types for the High Connection adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class DeliveryStatus(str, Enum):
    """Canonical delivery state of an outbound message."""

    WIRED = "wired"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"
    ERRORED = "errored"


# ── Inbound events ────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """A mobile-originated message decoded from the receive webhook."""

    channel_uuid: str
    originating_address: str  # tel: URN, e.g. tel:+33644961111
    destination_address: str
    body: str
    received_at: datetime


@dataclass(frozen=True, slots=True)
class StatusUpdate:
    """A delivery status change for a previously sent message."""

    channel_uuid: str
    message_id: int
    status: DeliveryStatus


# ── Outbound ──────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    """A message the host wants delivered through the vendor."""

    id: int
    to: str
    text: str
    attachments: tuple[str, ...] = ()

    @property
    def text_and_attachments(self) -> str:
        """Message text followed by one attachment URL per line."""
        parts = [self.text] if self.text else []
        parts.extend(url for url in self.attachments if url)
        return "\n".join(parts)


@dataclass(frozen=True, slots=True)
class Segment:
    """One vendor-sized part of an outbound message."""

    text: str
    index: int


@dataclass(frozen=True, slots=True)
class Credentials:
    account_id: str
    password: str


@dataclass(frozen=True, slots=True)
class CallbackURLs:
    """URLs the vendor calls back for status pushes and replies."""

    status: str
    receive: str


@dataclass(frozen=True, slots=True)
class ChannelLog:
    """Structured record of a single vendor HTTP exchange."""

    description: str
    segment_index: int
    method: str
    url: str
    status_code: int | None = None
    response_body: str | None = None
    error: str | None = None
    elapsed_ms: int = 0
    created_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True, slots=True)
class SendReport:
    """Outcome of sending every segment of one outbound message.

    ``status`` is WIRED only when every segment's call succeeded. A single
    failed segment makes the whole report ERRORED, but ``logs`` still holds
    one entry per attempted segment, in segment order.
    """

    message_id: int
    status: DeliveryStatus
    logs: tuple[ChannelLog, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status == DeliveryStatus.WIRED

    @property
    def failed_segments(self) -> list[int]:
        return [log.segment_index for log in self.logs if log.failed]
