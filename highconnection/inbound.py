"""Decoding of the vendor's inbound webhooks.

The vendor calls back with flat query-string or form-encoded fields. Each
webhook shape is described by a table of fields with a required flag;
every required field is checked before any value is interpreted.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union
from urllib.parse import parse_qsl

from .errors import ValidationError
from .phone import tel_urn_for_country
from .status import translate_status
from .types import InboundMessage, StatusUpdate

RECEPTION_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Zero-padded fields only, e.g. 2017-05-02T21:13:13
_RECEPTION_DATE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}", re.ASCII)
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

FieldValues = Mapping[str, Union[str, Sequence[str]]]


@dataclass(frozen=True, slots=True)
class FormField:
    name: str
    required: bool = False


MESSAGE_FIELDS: tuple[FormField, ...] = (
    FormField("TO", required=True),
    FormField("FROM", required=True),
    FormField("MESSAGE", required=True),
    FormField("RECEPTION_DATE"),
)

STATUS_FIELDS: tuple[FormField, ...] = (
    FormField("ret_id", required=True),
    FormField("status", required=True),
)


def parse_request_fields(query: str | bytes = "", body: str | bytes = "") -> dict[str, str]:
    """Merge a raw query string and a form-encoded body into one field map.

    Body values take precedence over query values; for repeated keys the
    first occurrence wins.
    """
    fields: dict[str, str] = {}
    for source in (body, query):
        if isinstance(source, bytes):
            source = source.decode("utf-8", errors="replace")
        for key, value in parse_qsl(source, keep_blank_values=True):
            fields.setdefault(key, value)
    return fields


def decode_message(
    channel_uuid: str,
    country: str,
    fields: FieldValues,
    *,
    now: datetime | None = None,
) -> InboundMessage:
    """Decode a new-message webhook into an InboundMessage.

    Args:
        channel_uuid: UUID of the channel the webhook was addressed to.
        country: Channel country, used to normalize the sender number.
        fields: Query/form values of the request.
        now: Receive time to use when ``RECEPTION_DATE`` is absent.
            Defaults to the current UTC time, sampled once.

    Raises:
        ValidationError: if TO, FROM or MESSAGE is missing, or
            RECEPTION_DATE is not ``YYYY-MM-DDTHH:MM:SS``.
    """
    received_at = now or datetime.now(timezone.utc)
    values = _extract(fields, MESSAGE_FIELDS)

    reception_date = values.get("RECEPTION_DATE")
    if reception_date:
        received_at = _parse_reception_date(reception_date)

    return InboundMessage(
        channel_uuid=channel_uuid,
        originating_address=tel_urn_for_country(values["FROM"], country),
        destination_address=values["TO"],
        body=values["MESSAGE"],
        received_at=received_at,
    )


def decode_status(channel_uuid: str, fields: FieldValues) -> StatusUpdate:
    """Decode a status callback into a StatusUpdate.

    Raises:
        ValidationError: if ``ret_id`` or ``status`` is missing or not an integer.
        InvalidStatusError: if ``status`` is not a known vendor code.
    """
    values = _extract(fields, STATUS_FIELDS)
    message_id = _required_int(values, "ret_id")
    code = _required_int(values, "status")

    return StatusUpdate(
        channel_uuid=channel_uuid,
        message_id=message_id,
        status=translate_status(code),
    )


# ── Helpers ───────────────────────────────────────────────────────────


def _first(value: str | Sequence[str] | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value[0] if value else ""


def _extract(fields: FieldValues, table: Sequence[FormField]) -> dict[str, str]:
    """Pick the table's fields out of the request, failing on any missing one."""
    values = {spec.name: _first(fields.get(spec.name)) for spec in table}

    missing = [spec.name for spec in table if spec.required and not values[spec.name].strip()]
    if missing:
        raise ValidationError(
            f"missing required field(s): {', '.join(missing)}",
            field=missing[0],
        )
    return values


def _required_int(values: Mapping[str, str], name: str) -> int:
    value = values[name]
    number = int(value) if _INTEGER.fullmatch(value) else None
    if number is None or not INT64_MIN <= number <= INT64_MAX:
        raise ValidationError(f"field '{name}' must be a 64-bit integer, got '{value}'", field=name)
    if number == 0:
        raise ValidationError(f"missing required field(s): {name}", field=name)
    return number


def _parse_reception_date(value: str) -> datetime:
    if _RECEPTION_DATE.fullmatch(value):
        try:
            return datetime.strptime(value, RECEPTION_DATE_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            pass  # well-formed but out of range, e.g. month 13
    raise ValidationError(
        f"field 'RECEPTION_DATE' must match YYYY-MM-DDTHH:MM:SS, got '{value}'",
        field="RECEPTION_DATE",
    )
