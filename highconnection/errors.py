"""Errors raised by the High Connection adapter.

Transport failures during a send are not raised: they are recorded per
segment and surface through ``SendReport.status``.
"""

from __future__ import annotations


class HighConnectionError(RuntimeError):
    """Base class for adapter errors."""


class ValidationError(HighConnectionError):
    """A webhook request is missing a required field or carries a malformed one."""

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message)
        self.field = field


class InvalidStatusError(HighConnectionError):
    """The vendor sent a status code outside the known set."""

    def __init__(self, code: int) -> None:
        super().__init__(
            f"unknown status '{code}', must be one of 2, 4, 6, 11, 12, 13, 14, 15 or 16"
        )
        self.code = code


class MessageNotFoundError(HighConnectionError):
    """A status callback references a message id the host does not know."""

    def __init__(self, message_id: int) -> None:
        super().__init__(f"message not found: {message_id}")
        self.message_id = message_id


class ConfigurationError(HighConnectionError):
    """The channel lacks configuration needed to send."""

    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message)
        self.key = key
