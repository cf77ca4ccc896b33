"""Outbound dispatch of segmented messages to the High Connection push API."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

import httpx

from .config import CHANNEL_CODE, DEFAULT_TIMEOUT_SECONDS, MAX_MSG_LENGTH, SEND_URL
from .phone import urn_path
from .segment import split_message
from .types import CallbackURLs, ChannelLog, Credentials, DeliveryStatus, OutboundMessage, Segment, SendReport

logger = logging.getLogger(__name__)

DATA_CODING = "8"
USER_DATA = "textit"
LOG_DESCRIPTION = "Message Sent"
REDACTED = "********"

LogSink = Callable[[ChannelLog], None]


def build_callback_urls(domain: str, channel_uuid: str, channel_code: str = CHANNEL_CODE) -> CallbackURLs:
    """Build the status and receive callback URLs for a channel."""
    base = f"https://{domain}/c/{channel_code}/{channel_uuid}"
    return CallbackURLs(status=f"{base}/status", receive=f"{base}/receive")


def build_send_params(
    segment: Segment,
    message: OutboundMessage,
    credentials: Credentials,
    callbacks: CallbackURLs,
) -> dict[str, str]:
    """Query parameters of the push API call for one segment."""
    return {
        "accountid": credentials.account_id,
        "password": credentials.password,
        "text": segment.text,
        "to": urn_path(message.to),
        "ret_id": str(message.id),
        "datacoding": DATA_CODING,
        "userdata": USER_DATA,
        "ret_url": callbacks.status,
        "ret_mo_url": callbacks.receive,
    }


class Dispatcher:
    """Sends every segment of a message and aggregates the outcome.

    Each segment gets exactly one attempt. A failed segment does not stop
    the remaining ones, but it turns the whole report ERRORED.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        send_url: str = SEND_URL,
        max_length: int = MAX_MSG_LENGTH,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        log_sink: LogSink | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._send_url = send_url
        self._max_length = max_length
        self._timeout = timeout
        self._log_sink = log_sink

    def close(self) -> None:
        """Close the underlying HTTP client if this dispatcher created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Dispatcher:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(
        self,
        message: OutboundMessage,
        credentials: Credentials,
        callbacks: CallbackURLs,
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> SendReport:
        """Send all segments of ``message`` in order.

        Args:
            timeout: Deadline in seconds for the whole send. Each request
                gets the time still left; segments reached after the
                deadline are skipped. Without it every request uses the
                dispatcher default.
            cancel: Once set, segments not yet started are skipped.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        status = DeliveryStatus.WIRED
        logs: list[ChannelLog] = []

        for segment in split_message(message.text_and_attachments, self._max_length):
            remaining = None if deadline is None else deadline - time.monotonic()
            if cancel is not None and cancel.is_set():
                log = self._skip(segment, message.id, "send cancelled")
            elif remaining is not None and remaining <= 0:
                log = self._skip(segment, message.id, "deadline exceeded")
            else:
                params = build_send_params(segment, message, credentials, callbacks)
                log = self._post(segment, message.id, params, remaining)
            logs.append(log)
            if log.failed:
                status = DeliveryStatus.ERRORED

        return SendReport(message_id=message.id, status=status, logs=tuple(logs))

    def _post(
        self,
        segment: Segment,
        message_id: int,
        params: dict[str, str],
        timeout: float | None,
    ) -> ChannelLog:
        request = self._client.build_request(
            "POST",
            self._send_url,
            params=params,
            timeout=self._timeout if timeout is None else timeout,
        )
        response: httpx.Response | None = None
        error: str | None = None

        started = time.monotonic()
        try:
            response = self._client.send(request)
            if not response.is_success:
                error = f"received non 2xx status: {response.status_code}"
        except httpx.HTTPError as exc:
            error = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
        elapsed_ms = int((time.monotonic() - started) * 1000)

        log = ChannelLog(
            description=LOG_DESCRIPTION,
            segment_index=segment.index,
            method=request.method,
            url=str(request.url.copy_set_param("password", REDACTED)),
            status_code=response.status_code if response is not None else None,
            response_body=response.text if response is not None else None,
            error=error,
            elapsed_ms=elapsed_ms,
        )

        if error:
            logger.error(
                "High Connection send failed for msg=%s segment=%s: %s",
                message_id,
                segment.index,
                error,
            )
        else:
            logger.info(
                "High Connection segment sent for msg=%s segment=%s status=%s",
                message_id,
                segment.index,
                log.status_code,
            )

        if self._log_sink is not None:
            self._log_sink(log)
        return log

    def _skip(self, segment: Segment, message_id: int, reason: str) -> ChannelLog:
        """Record a segment that was never sent."""
        log = ChannelLog(
            description=LOG_DESCRIPTION,
            segment_index=segment.index,
            method="POST",
            url=self._send_url,
            error=f"skipped: {reason}",
        )
        logger.warning(
            "High Connection segment skipped for msg=%s segment=%s: %s",
            message_id,
            segment.index,
            reason,
        )
        if self._log_sink is not None:
            self._log_sink(log)
        return log
