"""Tests for exception hierarchy."""

from gmail_autoreply.exceptions import (
    AutoReplyError,
    ConfigError,
    AuthError,
    MailboxError,
    MalformedThreadError,
)


def test_all_inherit_from_base():
    for exc_class in [ConfigError, AuthError, MailboxError, MalformedThreadError]:
        assert issubclass(exc_class, AutoReplyError)


def test_exception_message():
    e = AuthError("test error")
    assert str(e) == "test error"


def test_chained_cause():
    try:
        try:
            raise ValueError("boom")
        except ValueError as inner:
            raise MailboxError("wrapped") from inner
    except MailboxError as e:
        assert isinstance(e.__cause__, ValueError)
