"""Adapter and channel configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

SEND_URL = "https://highpushfastapi-v2.hcnx.eu/api"
MAX_MSG_LENGTH = 1500
DEFAULT_TIMEOUT_SECONDS = 10.0
CHANNEL_CODE = "hx"


@dataclass(frozen=True, slots=True)
class ChannelConfig:
    """Per-channel settings supplied by the host.

    Credentials may be missing here; sending on such a channel fails with
    ``ConfigurationError`` before any network call.
    """

    uuid: str
    country: str
    username: str | None = None
    password: str | None = None
    callback_domain: str | None = None

    def callback_domain_or(self, default: str) -> str:
        return self.callback_domain or default


@dataclass(frozen=True, slots=True)
class AdapterConfig:
    """Process-wide settings shared by every channel."""

    domain: str
    send_url: str = SEND_URL
    max_length: int = MAX_MSG_LENGTH
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    channel_code: str = CHANNEL_CODE

    def __post_init__(self) -> None:
        if not self.domain:
            raise ValueError("AdapterConfig.domain is required to build callback URLs")
        if self.max_length <= 0:
            raise ValueError("AdapterConfig.max_length must be positive")

    @classmethod
    def from_env(cls) -> AdapterConfig:
        """Build the config from ``HCNX_*`` environment variables."""
        return cls(
            domain=os.getenv("HCNX_DOMAIN", ""),
            send_url=os.getenv("HCNX_SEND_URL", SEND_URL),
            max_length=int(os.getenv("HCNX_MAX_LENGTH", str(MAX_MSG_LENGTH))),
            timeout=float(os.getenv("HCNX_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))),
        )
