from __future__ import annotations

from trackready._redact import redact_params


def test_redact_params_masks_identity_keys() -> None:
    params = {
        "userId": 123,
        "email": "user@example.com",
        "access_token": "abc",
        "profile": {"Phone": "+3100000000", "plan": "pro"},
        "recipients": [{"email": "a@example.com"}],
    }

    redacted = redact_params(params)

    assert redacted["userId"] == 123
    assert redacted["email"] == "<redacted>"
    assert redacted["access_token"] == "<redacted>"
    assert redacted["profile"] == {"Phone": "<redacted>", "plan": "pro"}
    assert redacted["recipients"] == [{"email": "<redacted>"}]
    assert params["email"] == "user@example.com"


def test_redact_params_truncates_long_strings() -> None:
    redacted = redact_params({"note": "x" * 300}, max_string=10)

    assert redacted["note"].startswith("x" * 10)
    assert "<truncated>" in redacted["note"]


def test_redact_params_handles_bytes_and_objects() -> None:
    redacted = redact_params({"blob": b"\x00\x01", "obj": object()})

    assert redacted["blob"] == "<bytes:2b>"
    assert redacted["obj"].startswith("<object object")
