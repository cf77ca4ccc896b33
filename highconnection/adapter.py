"""High Connection adapter: the entry points the host calls.

Two webhook operations (new message, status callback) and one outbound
operation (send). The adapter keeps no state between calls apart from the
shared HTTP client, so the host may call it concurrently from any number
of threads or tasks.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any, Union

import httpx

from .config import AdapterConfig, ChannelConfig
from .dispatch import Dispatcher, LogSink, build_callback_urls
from .errors import ConfigurationError, InvalidStatusError, MessageNotFoundError, ValidationError
from .inbound import decode_message, decode_status
from .responses import WebhookResponse, message_accepted, message_not_found, request_error, status_accepted
from .types import Credentials, InboundMessage, OutboundMessage, SendReport, StatusUpdate

if TYPE_CHECKING:
    from .store import MessageStore

logger = logging.getLogger(__name__)

CHANNEL_TYPE = "HX"
CHANNEL_NAME = "High Connection"


def channel_credentials(channel: ChannelConfig) -> Credentials:
    """Return the channel's vendor credentials.

    Raises:
        ConfigurationError: if the username or password is not set.
    """
    if not channel.username:
        raise ConfigurationError("no username set for HX channel", key="username")
    if not channel.password:
        raise ConfigurationError("no password set for HX channel", key="password")
    return Credentials(account_id=channel.username, password=channel.password)


class HighConnectionAdapter:
    """Translates between the host's message model and the High Connection API.

    Usage::

        adapter = HighConnectionAdapter(store, AdapterConfig(domain="courier.example.com"))
        channel = ChannelConfig(uuid="8eb2...", country="FR", username="acc", password="secret")

        report = adapter.send_message(OutboundMessage(id=10, to="tel:+33644961111", text="Hi"), channel)
        if not report.succeeded:
            print(report.failed_segments)

    Webhooks take the request's query/form values::

        response = adapter.handle_receive_status(channel, parse_request_fields(query, body))
    """

    channel_type = CHANNEL_TYPE
    name = CHANNEL_NAME

    def __init__(
        self,
        store: MessageStore,
        config: AdapterConfig,
        *,
        client: httpx.Client | None = None,
        log_sink: LogSink | None = None,
    ) -> None:
        self._store = store
        self._config = config
        self._dispatcher = Dispatcher(
            client,
            send_url=config.send_url,
            max_length=config.max_length,
            timeout=config.timeout,
            log_sink=log_sink,
        )

    def close(self) -> None:
        self._dispatcher.close()

    def __enter__(self) -> HighConnectionAdapter:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ── Webhooks ──────────────────────────────────────────────────

    def receive_message(
        self,
        channel: ChannelConfig,
        fields: Mapping[str, Union[str, Sequence[str]]],
        *,
        now: datetime | None = None,
    ) -> InboundMessage:
        """Decode a new-message webhook and write the message to the store."""
        message = decode_message(channel.uuid, channel.country, fields, now=now)
        self._store.write_message(message)
        return message

    def receive_status(
        self,
        channel: ChannelConfig,
        fields: Mapping[str, Union[str, Sequence[str]]],
    ) -> StatusUpdate:
        """Decode a status callback and write the status to the store.

        Raises:
            MessageNotFoundError: if the store does not know ``ret_id``.
        """
        status = decode_status(channel.uuid, fields)
        self._store.write_status(status)
        return status

    def handle_receive_message(
        self,
        channel: ChannelConfig,
        fields: Mapping[str, Union[str, Sequence[str]]],
        *,
        now: datetime | None = None,
    ) -> WebhookResponse:
        """Run ``receive_message`` and render the outcome as an HTTP response."""
        try:
            message = self.receive_message(channel, fields, now=now)
        except ValidationError as exc:
            logger.warning("Rejected HX message webhook for channel %s: %s", channel.uuid, exc)
            return request_error(exc)
        return message_accepted(message)

    def handle_receive_status(
        self,
        channel: ChannelConfig,
        fields: Mapping[str, Union[str, Sequence[str]]],
    ) -> WebhookResponse:
        """Run ``receive_status`` and render the outcome as an HTTP response."""
        try:
            status = self.receive_status(channel, fields)
        except MessageNotFoundError as exc:
            logger.info("HX status for unknown message %s on channel %s", exc.message_id, channel.uuid)
            return message_not_found(exc)
        except (ValidationError, InvalidStatusError) as exc:
            logger.warning("Rejected HX status webhook for channel %s: %s", channel.uuid, exc)
            return request_error(exc)
        return status_accepted(status)

    # ── Outbound ──────────────────────────────────────────────────

    def send_message(
        self,
        message: OutboundMessage,
        channel: ChannelConfig,
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> SendReport:
        """Send a message through the vendor, one API call per segment.

        ``timeout`` bounds the whole send; setting ``cancel`` stops any
        segment not yet started.

        Raises:
            ConfigurationError: if the channel has no username or password.
                Raised before any network call.
        """
        credentials = channel_credentials(channel)
        callbacks = build_callback_urls(
            channel.callback_domain_or(self._config.domain),
            channel.uuid,
            self._config.channel_code,
        )
        return self._dispatcher.send(message, credentials, callbacks, timeout=timeout, cancel=cancel)

    async def send_message_async(
        self,
        message: OutboundMessage,
        channel: ChannelConfig,
        *,
        timeout: float | None = None,
    ) -> SendReport:
        """Send a message asynchronously (runs sync send in a thread).

        Cancelling the awaiting task stops the send before its next segment.
        """
        cancel = threading.Event()
        try:
            return await asyncio.to_thread(self.send_message, message, channel, timeout=timeout, cancel=cancel)
        except asyncio.CancelledError:
            cancel.set()
            raise
