from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from magpie import webhook
from magpie.errors import ErrorType, MagpieError
from magpie.models import Charge
from magpie.webhook import (
    PAYLOAD_INVALID,
    SIGNATURE_INVALID,
    SIGNATURE_MISSING,
    TIMESTAMP_INVALID,
    WebhookSignatureConfig,
    construct_event,
    generate_test_signature,
    is_valid_timestamp,
    verify_signature,
    verify_signature_with_timestamp,
)

SECRET = "whsec_test"
NOW = 1_700_000_000

EVENT = {
    "id": "evt_1",
    "type": "charge.succeeded",
    "created": NOW,
    "livemode": False,
    "data": {"object": {"id": "ch_1", "amount": 20000, "currency": "php", "captured": True}},
}
PAYLOAD = json.dumps(EVENT)


@pytest.fixture(autouse=True)
def frozen_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(webhook, "time", SimpleNamespace(time=lambda: NOW))


def test_generated_signature_verifies() -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    assert signature.startswith("v1=")
    assert len(signature) == len("v1=") + 64
    assert verify_signature(PAYLOAD, signature, SECRET)


def test_any_single_character_change_fails() -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    tampered = PAYLOAD.replace("20000", "20001")
    assert not verify_signature(tampered, signature, SECRET)
    assert not verify_signature(PAYLOAD, signature, SECRET + "x")
    flipped = signature[:-1] + ("0" if signature[-1] != "0" else "1")
    assert not verify_signature(PAYLOAD, flipped, SECRET)


@pytest.mark.parametrize(
    "signature",
    ["", "v1=", "v1=zz", "v1=abc", "sha256=" + "0" * 64, None, 12345],
)
def test_malformed_signatures_return_false(signature) -> None:
    assert verify_signature(PAYLOAD, signature, SECRET) is False


def test_only_exact_lowercase_hex_matches() -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    digest = signature[len("v1="):]
    assert not verify_signature(PAYLOAD, "v1=" + digest.upper(), SECRET)
    assert not verify_signature(PAYLOAD, "v1=" + " ".join([digest[:32], digest[32:]]), SECRET)
    assert not verify_signature(PAYLOAD, signature + " ", SECRET)


def test_missing_prefix_returns_false() -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    assert not verify_signature(PAYLOAD, signature[len("v1="):], SECRET)


def test_bytes_payload_matches_text_payload() -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    assert verify_signature(PAYLOAD.encode("utf-8"), signature, SECRET)
    assert verify_signature(bytearray(PAYLOAD.encode("utf-8")), signature, SECRET)


def test_custom_algorithm_and_prefix() -> None:
    config = {"algorithm": "sha512", "prefix": "sig:"}
    signature = generate_test_signature(PAYLOAD, SECRET, "sha512", "sig:")
    assert len(signature) == len("sig:") + 128
    assert verify_signature(PAYLOAD, signature, SECRET, config)
    assert not verify_signature(PAYLOAD, signature, SECRET)


def test_unsupported_algorithm_is_rejected_quietly() -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    assert not verify_signature(PAYLOAD, signature, SECRET, {"algorithm": "md5"})


def test_timestamp_tolerance() -> None:
    assert is_valid_timestamp(NOW)
    assert is_valid_timestamp(NOW - 300)
    assert is_valid_timestamp(NOW + 300)
    assert not is_valid_timestamp(NOW - 301)
    assert not is_valid_timestamp(NOW - 1000, tolerance=999)
    assert not is_valid_timestamp(None)
    assert not is_valid_timestamp("1700000000")
    assert not is_valid_timestamp(NOW - 1, -1)
    assert not is_valid_timestamp(NOW + 1, -1)
    assert not is_valid_timestamp(NOW - 1, 0)
    assert is_valid_timestamp(NOW, 0)


def test_headers_are_matched_case_insensitively() -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    headers = {"X-Magpie-Signature": signature, "X-Magpie-Timestamp": str(NOW - 10)}
    assert verify_signature_with_timestamp(PAYLOAD, headers, SECRET)


def test_list_valued_headers_use_first_value() -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    headers = {"x-magpie-signature": [signature, "v1=bogus"], "x-magpie-timestamp": [str(NOW)]}
    assert verify_signature_with_timestamp(PAYLOAD, headers, SECRET)


def test_missing_signature_header_raises() -> None:
    with pytest.raises(MagpieError) as excinfo:
        verify_signature_with_timestamp(PAYLOAD, {"x-magpie-timestamp": str(NOW)}, SECRET)

    assert excinfo.value.code == SIGNATURE_MISSING
    assert excinfo.value.type is ErrorType.INVALID_REQUEST_ERROR
    assert "x-magpie-signature" in excinfo.value.message


@pytest.mark.parametrize("timestamp", [str(NOW - 301), str(NOW + 1000), "yesterday"])
def test_stale_or_malformed_timestamp_raises(timestamp) -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    headers = {"x-magpie-signature": signature, "x-magpie-timestamp": timestamp}

    with pytest.raises(MagpieError) as excinfo:
        verify_signature_with_timestamp(PAYLOAD, headers, SECRET)

    assert excinfo.value.code == TIMESTAMP_INVALID


def test_absent_timestamp_skips_the_window_check() -> None:
    signature = generate_test_signature(PAYLOAD, SECRET)
    assert verify_signature_with_timestamp(PAYLOAD, {"x-magpie-signature": signature}, SECRET)
    assert not verify_signature_with_timestamp(PAYLOAD, {"x-magpie-signature": "v1=00"}, SECRET)


def test_custom_header_names_and_tolerance() -> None:
    config = WebhookSignatureConfig(signature_header="x-sig", timestamp_header="x-ts", tolerance=10)
    signature = generate_test_signature(PAYLOAD, SECRET)

    assert verify_signature_with_timestamp(PAYLOAD, {"x-sig": signature, "x-ts": str(NOW - 5)}, SECRET, config)
    with pytest.raises(MagpieError):
        verify_signature_with_timestamp(PAYLOAD, {"x-sig": signature, "x-ts": str(NOW - 60)}, SECRET, config)


def test_construct_event_parses_verified_payload() -> None:
    event = construct_event(PAYLOAD, generate_test_signature(PAYLOAD, SECRET), SECRET)

    assert event.id == "evt_1"
    assert event.type == "charge.succeeded"
    assert event.created == NOW
    assert event.data.object["amount"] == 20000


def test_construct_event_types_the_data_object() -> None:
    event = construct_event(PAYLOAD.encode(), generate_test_signature(PAYLOAD, SECRET), SECRET, object_type=Charge)

    assert isinstance(event.data.object, Charge)
    assert event.data.object.captured is True


def test_construct_event_rejects_bad_signature_before_parsing() -> None:
    garbage = "{not json"
    with pytest.raises(MagpieError) as excinfo:
        construct_event(garbage, "v1=" + "0" * 64, SECRET)
    assert excinfo.value.code == SIGNATURE_INVALID


def test_construct_event_rejects_invalid_json() -> None:
    garbage = "{not json"
    with pytest.raises(MagpieError) as excinfo:
        construct_event(garbage, generate_test_signature(garbage, SECRET), SECRET)
    assert excinfo.value.code == PAYLOAD_INVALID


def test_construct_event_rejects_non_event_json() -> None:
    payload = json.dumps({"hello": "world"})
    with pytest.raises(MagpieError) as excinfo:
        construct_event(payload, generate_test_signature(payload, SECRET), SECRET)
    assert excinfo.value.code == PAYLOAD_INVALID


def test_webhooks_resource_delegates() -> None:
    from magpie.resources import WebhooksResource

    hooks = WebhooksResource()
    signature = hooks.generate_test_signature(PAYLOAD, SECRET)
    assert hooks.verify_signature(PAYLOAD, signature, SECRET)
    assert hooks.construct_event(PAYLOAD, signature, SECRET).id == "evt_1"
    assert hooks.is_valid_timestamp(NOW)
