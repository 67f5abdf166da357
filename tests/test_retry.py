from __future__ import annotations

import pytest

from magpie.retry import MAX_RETRY_DELAY_MS, calculate_retry_delay, should_retry


def decide(**overrides):
    defaults = dict(method="GET", attempt_count=0, max_retries=3)
    defaults.update(overrides)
    return should_retry(**defaults)


@pytest.mark.parametrize("status", [500, 502, 503, 504, 429])
def test_transient_statuses_are_retried(status):
    assert decide(status_code=status)


@pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422])
def test_client_errors_are_not_retried(status):
    assert not decide(status_code=status)


@pytest.mark.parametrize("code", ["dns_error", "connection_reset", "timeout", "connection_refused"])
def test_transport_codes_are_retried(code):
    assert decide(error_code=code)


@pytest.mark.parametrize("code", ["broken_pipe", "network_error", None])
def test_other_transport_codes_are_not_retried(code):
    assert not decide(error_code=code)


def test_ceiling_is_inclusive():
    assert decide(attempt_count=2, status_code=503)
    assert not decide(attempt_count=3, status_code=503)
    assert not decide(max_retries=0, status_code=503)


def test_post_requires_idempotency_key():
    assert not decide(method="POST", status_code=503)
    assert not decide(method="post", error_code="timeout")
    assert decide(method="POST", has_idempotency_key=True, status_code=503)


def test_other_methods_do_not_need_a_key():
    for method in ("GET", "PUT", "PATCH", "DELETE"):
        assert decide(method=method, status_code=502)


def test_retryable_flag_overrides_everything():
    assert not decide(retryable=False, status_code=503)
    assert not decide(method="POST", has_idempotency_key=True, retryable=False, error_code="timeout")


def test_backoff_doubles_without_jitter():
    delays = [calculate_retry_delay(n, 1000, rand=lambda: 0.0) for n in (1, 2, 3, 4)]
    assert delays == [1000, 2000, 4000, 8000]


def test_jitter_adds_at_most_ten_percent():
    assert calculate_retry_delay(1, 1000, rand=lambda: 0.5) == pytest.approx(1050)
    for n in range(1, 6):
        base = 1000 * 2 ** (n - 1)
        delay = calculate_retry_delay(n, 1000)
        assert base <= delay <= base * 1.1


def test_backoff_is_capped():
    assert calculate_retry_delay(10, 1000, rand=lambda: 0.99) == MAX_RETRY_DELAY_MS
    assert calculate_retry_delay(6, 1000, rand=lambda: 0.0) == MAX_RETRY_DELAY_MS


def test_zero_base_delay():
    assert calculate_retry_delay(3, 0) == 0
