"""HTTP responses for the vendor's webhook calls.

Bodies follow the ``{"message": ..., "data": [...]}`` envelope the host
returns for every channel type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import HighConnectionError, MessageNotFoundError
from .types import InboundMessage, StatusUpdate


@dataclass(frozen=True, slots=True)
class WebhookResponse:
    status_code: int
    body: dict[str, Any]


def message_accepted(message: InboundMessage) -> WebhookResponse:
    return WebhookResponse(
        status_code=200,
        body={
            "message": "Message Accepted",
            "data": [
                {
                    "type": "msg",
                    "channel_uuid": message.channel_uuid,
                    "urn": message.originating_address,
                    "text": message.body,
                    "received_on": message.received_at.isoformat(),
                }
            ],
        },
    )


def status_accepted(status: StatusUpdate) -> WebhookResponse:
    return WebhookResponse(
        status_code=200,
        body={
            "message": "Status Update Accepted",
            "data": [
                {
                    "type": "status",
                    "channel_uuid": status.channel_uuid,
                    "msg_id": status.message_id,
                    "status": status.status.value,
                }
            ],
        },
    )


def request_error(error: HighConnectionError) -> WebhookResponse:
    """Client error for a request the adapter could not accept."""
    entry: dict[str, Any] = {"type": "error", "error": str(error)}
    field = getattr(error, "field", None)
    if field is not None:
        entry["field"] = field
    code = getattr(error, "code", None)
    if code is not None:
        entry["code"] = code
    return WebhookResponse(status_code=400, body={"message": "Error", "data": [entry]})


def message_not_found(error: MessageNotFoundError) -> WebhookResponse:
    return WebhookResponse(
        status_code=404,
        body={
            "message": "Message not found",
            "data": [{"type": "error", "error": str(error), "msg_id": error.message_id}],
        },
    )
