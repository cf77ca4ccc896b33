"""Vendor status code translation."""

from __future__ import annotations

import logging
from types import MappingProxyType

from .errors import InvalidStatusError
from .types import DeliveryStatus

logger = logging.getLogger(__name__)

STATUS_MAPPING = MappingProxyType(
    {
        2: DeliveryStatus.FAILED,
        4: DeliveryStatus.SENT,
        6: DeliveryStatus.DELIVERED,
        11: DeliveryStatus.FAILED,
        12: DeliveryStatus.FAILED,
        13: DeliveryStatus.FAILED,
        14: DeliveryStatus.FAILED,
        15: DeliveryStatus.FAILED,
        16: DeliveryStatus.FAILED,
    }
)


def translate_status(code: int) -> DeliveryStatus:
    """Map a vendor numeric status code to a DeliveryStatus.

    Raises:
        InvalidStatusError: if the code is not one the vendor documents.
    """
    try:
        return STATUS_MAPPING[code]
    except KeyError:
        logger.warning("Unknown High Connection status code received: %s", code)
        raise InvalidStatusError(code) from None
