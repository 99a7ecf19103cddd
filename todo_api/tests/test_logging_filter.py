from __future__ import annotations

import pytest

from todo_api.shared.logging.sensitive_filter import sanitize_message, sanitize_record

JWT = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJzdWIiOiIwMTIzNDU2Nzg5YWJjZGVmIn0"
    ".c2lnbmF0dXJlLXBhcnQtZm9yLXRlc3Rz"
)


@pytest.mark.parametrize(
    ("message", "leak"),
    [
        (f"Authorization: Bearer {JWT}", JWT),
        (f"issued {JWT} for user", JWT),
        ("login failed password=hunter22", "hunter22"),
        ("stored password_hash=scrypt:32768:8:1$abcdEFGH$0123abcd", "0123abcd"),
        ("postgresql+psycopg://todo:s3cr3t@db/todo", "s3cr3t"),
        ("register email=alice@example.com", "alice"),
        ("JWT_SECRET=super-secret-value", "super-secret-value"),
    ],
)
def test_sensitive_values_are_redacted(message: str, leak: str) -> None:
    assert leak not in sanitize_message(message)


def test_plain_messages_pass_through() -> None:
    message = "todos.list: ok (user_id=abc, page=1, n=3, total=3, dt_ms=2)"

    assert sanitize_message(message) == message


def test_email_domain_is_kept() -> None:
    assert sanitize_message("user bob@example.org") == "user ***@example.org"


def test_record_filter_rewrites_message_in_place() -> None:
    record = {"message": "password=hunter22"}

    assert sanitize_record(record) is True
    assert "hunter22" not in record["message"]
