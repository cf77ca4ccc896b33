"""
highconnection: High Connection (HCNX) SMS channel adapter.

Translates between a message-routing host's canonical model (inbound
message, outbound message, delivery status) and the High Connection push
API: query-string webhooks with numeric status codes in, one synchronous
POST per message segment out.

Quick start: sending::

    from highconnection import AdapterConfig, ChannelConfig, HighConnectionAdapter, OutboundMessage

    adapter = HighConnectionAdapter(store, AdapterConfig(domain="courier.example.com"))
    channel = ChannelConfig(uuid="8eb23e93-...", country="FR", username="acc", password="secret")
    report = adapter.send_message(OutboundMessage(id=10, to="tel:+33644961111", text="Hello"), channel)
    if report.succeeded:
        print("wired")

Receiving webhooks::

    from highconnection import parse_request_fields

    fields = parse_request_fields(request.query_string, request.body)
    response = adapter.handle_receive_message(channel, fields)
    # response.status_code, response.body

For testing::

    from highconnection import InMemoryStore

    store = InMemoryStore(known_message_ids=[10])

Module overview
---------------
- ``types``     : Dataclasses: InboundMessage, StatusUpdate, OutboundMessage, SendReport
- ``status``    : Vendor status code → DeliveryStatus
- ``inbound``   : Webhook field decoding and validation
- ``segment``   : Splitting outbound text into 1500-character parts
- ``dispatch``  : Per-segment push API calls and report aggregation
- ``adapter``   : HighConnectionAdapter, the host-facing entry points
- ``responses`` : Webhook HTTP responses
- ``phone/``    : Country-scoped tel: URN normalization
- ``config``    : ChannelConfig, AdapterConfig and wire constants

What this library does NOT own (stays in the host):
- Webhook routing and authentication
- Message persistence and the send queue
- Retry and backoff scheduling
"""

from .adapter import HighConnectionAdapter, channel_credentials
from .config import AdapterConfig, ChannelConfig, MAX_MSG_LENGTH, SEND_URL
from .dispatch import Dispatcher, build_callback_urls, build_send_params
from .errors import (
    ConfigurationError,
    HighConnectionError,
    InvalidStatusError,
    MessageNotFoundError,
    ValidationError,
)
from .inbound import decode_message, decode_status, parse_request_fields
from .mock import InMemoryStore
from .phone import normalize_phone, tel_urn_for_country
from .responses import WebhookResponse
from .segment import split_message
from .status import STATUS_MAPPING, translate_status
from .store import MessageStore
from .types import (
    CallbackURLs,
    ChannelLog,
    Credentials,
    DeliveryStatus,
    InboundMessage,
    OutboundMessage,
    Segment,
    SendReport,
    StatusUpdate,
)

__all__ = [
    # Adapter
    "HighConnectionAdapter",
    "channel_credentials",
    "Dispatcher",
    "build_callback_urls",
    "build_send_params",
    # Config
    "AdapterConfig",
    "ChannelConfig",
    "MAX_MSG_LENGTH",
    "SEND_URL",
    # Errors
    "ConfigurationError",
    "HighConnectionError",
    "InvalidStatusError",
    "MessageNotFoundError",
    "ValidationError",
    # Inbound
    "decode_message",
    "decode_status",
    "parse_request_fields",
    "STATUS_MAPPING",
    "translate_status",
    "WebhookResponse",
    # Outbound
    "split_message",
    # Store
    "MessageStore",
    "InMemoryStore",
    # Phone
    "normalize_phone",
    "tel_urn_for_country",
    # Types
    "CallbackURLs",
    "ChannelLog",
    "Credentials",
    "DeliveryStatus",
    "InboundMessage",
    "OutboundMessage",
    "Segment",
    "SendReport",
    "StatusUpdate",
]
