"""Tests for webhook decoding."""

from datetime import datetime, timezone

import pytest

from highconnection import (
    DeliveryStatus,
    InvalidStatusError,
    ValidationError,
    decode_message,
    decode_status,
    parse_request_fields,
)

CHANNEL_UUID = "8eb23e93-5ecb-45ba-b726-3b064e0c56ab"

# A real receive callback as posted by the vendor
RECEIVE_BODY = (
    "ID=1164708294&FROM=%2B33644961111&TO=36105&MESSAGE=Msg&VALIDITY_DATE=2017-05-03T21%3A13%3A13"
    "&GET_STATUS=0&CLIENT=LEANCONTACTFAST&CLASS_TYPE=0&RECEPTION_DATE=2017-05-02T21%3A13%3A13"
    "&TO_OP_ID=20810&INITIAL_OP_ID=20810&STATUS=POSTING_30179_1410&EMAIL=&BINARY=0"
    "&PARAM=%7C%7C%7C%7CP223%2F03%2F03&USER_DATA=LEANCONTACTFAST&USER_DATA_2=jours+pas+r%E9gl%E9"
    "&BULK_ID=0&MO_ID=0&APPLICATION_ID=0&ACCOUNT_ID=39&GW_MESSAGE_ID=0&READ_STATUS=0&TARIFF=0"
    "&REQUEST_ID=33609002123&TAC=%28null%29&REASON=2017-05-02+23%3A13%3A13&FORMAT=&MVNO="
    "&ORIG_ID=1164708215&ORIG_MESSAGE=Msg&RET_ID=123456&ORIG_DATE=2017-05-02T21%3A11%3A44"
)


def _message_fields(**overrides: str | None) -> dict[str, str]:
    fields = {
        "FROM": "+33644961111",
        "TO": "36105",
        "MESSAGE": "Msg",
        "RECEPTION_DATE": "2017-05-02T21:13:13",
    }
    for key, value in overrides.items():
        if value is None:
            fields.pop(key, None)
        else:
            fields[key] = value
    return fields


class TestParseRequestFields:
    def test_parses_query(self):
        fields = parse_request_fields("ret_id=19128317&status=6")
        assert fields == {"ret_id": "19128317", "status": "6"}

    def test_body_overrides_query(self):
        fields = parse_request_fields("FROM=%2B33611111111&TO=1", "FROM=%2B33644961111")
        assert fields["FROM"] == "+33644961111"
        assert fields["TO"] == "1"

    def test_first_value_wins(self):
        assert parse_request_fields("status=6&status=2")["status"] == "6"

    def test_accepts_bytes_and_keeps_blank_values(self):
        fields = parse_request_fields(b"", b"EMAIL=&MESSAGE=Hi")
        assert fields["EMAIL"] == ""
        assert fields["MESSAGE"] == "Hi"

    def test_real_vendor_payload(self):
        fields = parse_request_fields("FROM=+33644961111", RECEIVE_BODY)
        assert fields["FROM"] == "+33644961111"
        assert fields["RECEPTION_DATE"] == "2017-05-02T21:13:13"


class TestDecodeMessage:
    def test_vendor_payload(self):
        message = decode_message(CHANNEL_UUID, "FR", parse_request_fields("", RECEIVE_BODY))

        assert message.channel_uuid == CHANNEL_UUID
        assert message.originating_address == "tel:+33644961111"
        assert message.destination_address == "36105"
        assert message.body == "Msg"
        assert message.received_at == datetime(2017, 5, 2, 21, 13, 13, tzinfo=timezone.utc)

    def test_query_string_example(self):
        fields = parse_request_fields(
            "FROM=%2B33644961111&TO=36105&MESSAGE=Msg&RECEPTION_DATE=2017-05-02T21%3A13%3A13"
        )
        message = decode_message(CHANNEL_UUID, "FR", fields)
        assert message.originating_address == "tel:+33644961111"
        assert message.received_at.isoformat() == "2017-05-02T21:13:13+00:00"

    def test_national_sender_normalized_for_channel_country(self):
        message = decode_message(CHANNEL_UUID, "FR", _message_fields(FROM="0644961111"))
        assert message.originating_address == "tel:+33644961111"

    @pytest.mark.parametrize("missing", ["FROM", "TO", "MESSAGE"])
    def test_missing_required_field(self, missing: str):
        with pytest.raises(ValidationError) as exc_info:
            decode_message(CHANNEL_UUID, "FR", _message_fields(**{missing: None}))
        assert exc_info.value.field == missing
        assert missing in str(exc_info.value)

    @pytest.mark.parametrize("empty", ["FROM", "TO", "MESSAGE"])
    def test_empty_required_field(self, empty: str):
        with pytest.raises(ValidationError) as exc_info:
            decode_message(CHANNEL_UUID, "FR", _message_fields(**{empty: ""}))
        assert exc_info.value.field == empty

    @pytest.mark.parametrize("blank", ["FROM", "TO", "MESSAGE"])
    def test_whitespace_only_required_field(self, blank: str):
        with pytest.raises(ValidationError) as exc_info:
            decode_message(CHANNEL_UUID, "FR", _message_fields(**{blank: "  "}))
        assert exc_info.value.field == blank

    def test_all_missing_fields_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            decode_message(CHANNEL_UUID, "FR", {})
        assert exc_info.value.field == "TO"
        assert "TO, FROM, MESSAGE" in str(exc_info.value)

    def test_missing_reception_date_uses_now(self):
        now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        message = decode_message(CHANNEL_UUID, "FR", _message_fields(RECEPTION_DATE=None), now=now)
        assert message.received_at == now

    def test_missing_reception_date_defaults_to_current_time(self):
        before = datetime.now(timezone.utc)
        message = decode_message(CHANNEL_UUID, "FR", _message_fields(RECEPTION_DATE=""))
        after = datetime.now(timezone.utc)
        assert before <= message.received_at <= after

    @pytest.mark.parametrize(
        "bad",
        [
            "2017-05-02",
            "2017-5-2T1:2:3",
            "2017-05-02T21:13:3",
            "\uff12\uff10\uff11\uff17-05-02T21:13:13",
            "2017-13-02T21:13:13",
            "2017-05-02 21:13:13",
            "2017-05-02T21:13:13Z",
            "yesterday",
        ],
    )
    def test_malformed_reception_date(self, bad: str):
        with pytest.raises(ValidationError) as exc_info:
            decode_message(CHANNEL_UUID, "FR", _message_fields(RECEPTION_DATE=bad))
        assert exc_info.value.field == "RECEPTION_DATE"

    def test_required_fields_checked_before_date_parsing(self):
        with pytest.raises(ValidationError) as exc_info:
            decode_message(CHANNEL_UUID, "FR", _message_fields(MESSAGE=None, RECEPTION_DATE="garbage"))
        assert exc_info.value.field == "MESSAGE"

    def test_accepts_list_values(self):
        fields = {"FROM": ["+33644961111"], "TO": ["36105"], "MESSAGE": ["Msg", "ignored"]}
        message = decode_message(CHANNEL_UUID, "FR", fields)
        assert message.body == "Msg"


class TestDecodeStatus:
    def test_delivered(self):
        status = decode_status(CHANNEL_UUID, parse_request_fields("ret_id=19128317&status=6"))
        assert status.message_id == 19128317
        assert status.status == DeliveryStatus.DELIVERED
        assert status.channel_uuid == CHANNEL_UUID

    def test_vendor_example_with_extra_fields(self):
        fields = parse_request_fields("push_id=1164711372&status=4&to=%2B33611441111&ret_id=19128317&text=Msg")
        status = decode_status(CHANNEL_UUID, fields)
        assert status.status == DeliveryStatus.SENT

    @pytest.mark.parametrize("missing", ["ret_id", "status"])
    def test_missing_required_field(self, missing: str):
        fields = {"ret_id": "19128317", "status": "6"}
        del fields[missing]
        with pytest.raises(ValidationError) as exc_info:
            decode_status(CHANNEL_UUID, fields)
        assert exc_info.value.field == missing

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("ret_id", "abc"),
            ("status", "six"),
            ("ret_id", "1.5"),
            ("status", "6_0"),
            ("status", " 6"),
            ("status", "\u0666"),
            ("ret_id", "9223372036854775808"),
        ],
    )
    def test_non_integer_field(self, field: str, value: str):
        fields = {"ret_id": "19128317", "status": "6", field: value}
        with pytest.raises(ValidationError) as exc_info:
            decode_status(CHANNEL_UUID, fields)
        assert exc_info.value.field == field

    def test_explicit_plus_sign_accepted(self):
        status = decode_status(CHANNEL_UUID, {"ret_id": "+19128317", "status": "6"})
        assert status.message_id == 19128317

    def test_int64_bounds(self):
        status = decode_status(CHANNEL_UUID, {"ret_id": "9223372036854775807", "status": "6"})
        assert status.message_id == 2**63 - 1

    def test_zero_counts_as_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            decode_status(CHANNEL_UUID, {"ret_id": "0", "status": "6"})
        assert exc_info.value.field == "ret_id"

    def test_unknown_status_code(self):
        with pytest.raises(InvalidStatusError) as exc_info:
            decode_status(CHANNEL_UUID, {"ret_id": "19128317", "status": "7"})
        assert exc_info.value.code == 7

    def test_validation_precedes_status_translation(self):
        with pytest.raises(ValidationError):
            decode_status(CHANNEL_UUID, {"status": "99"})
