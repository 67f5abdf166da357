from __future__ import annotations

from magpie.redact import RedactConfig, Redactor, build_redactor


def test_redactor_masks_card_fields_and_keys() -> None:
    redactor = Redactor()
    payload = {
        "type": "card",
        "card": {"name": "Juan", "number": "4242424242424242", "exp_month": "12", "exp_year": "2030", "cvc": "123"},
        "description": "paid with sk_live_abc123",
        "items": [{"otp": "999999"}],
    }

    scrubbed = redactor.body(payload)

    assert scrubbed["card"]["name"] == "Juan"
    assert scrubbed["card"]["number"] == "[REDACTED]"
    assert scrubbed["card"]["cvc"] == "[REDACTED]"
    assert scrubbed["card"]["exp_year"] == "[REDACTED]"
    assert scrubbed["description"] == "paid with [REDACTED]"
    assert scrubbed["items"][0]["otp"] == "[REDACTED]"
    assert payload["card"]["number"] == "4242424242424242"


def test_redactor_masks_headers_case_insensitively() -> None:
    redactor = Redactor(RedactConfig(redaction_token="***"))
    headers = {"authorization": "Basic abc", "Cookie": "a=b", "Accept": "application/json"}

    assert redactor.headers(headers) == {"authorization": "***", "Cookie": "***", "Accept": "application/json"}


def test_build_redactor_extends_defaults() -> None:
    redactor = build_redactor(extra_headers=("X-Api-Token",), extra_fields=("mobile_number",))

    assert redactor.headers({"x-api-token": "t"}) == {"x-api-token": "[REDACTED]"}
    assert redactor.body({"mobile_number": "0917", "cvc": "1"}) == {"mobile_number": "[REDACTED]", "cvc": "[REDACTED]"}


def test_non_container_values_pass_through() -> None:
    redactor = Redactor()
    assert redactor.body(None) is None
    assert redactor.body(42) == 42
    assert redactor.body(("pk_test_1",)) == ("[REDACTED]",)
