from __future__ import annotations

import pytest

from magpie import generate_idempotency_key, is_valid_idempotency_key


def test_generated_keys_are_unique_hex() -> None:
    keys = {generate_idempotency_key() for _ in range(50)}
    assert len(keys) == 50
    for key in keys:
        assert len(key) == 32
        int(key, 16)
        assert is_valid_idempotency_key(key)


@pytest.mark.parametrize("key,valid", [("a", True), ("x" * 255, True), ("", False), ("x" * 256, False), (None, False), (7, False)])
def test_key_validation(key, valid) -> None:
    assert is_valid_idempotency_key(key) is valid
