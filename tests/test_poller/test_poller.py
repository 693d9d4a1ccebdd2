"""Tests for the poll driver."""

import logging
import random
from unittest.mock import MagicMock

from gmail_autoreply.config import Settings
from gmail_autoreply.exceptions import AuthError
from gmail_autoreply.poller import Poller


def _fast_settings():
    return Settings(min_interval=0.001, max_interval=0.002)


def _poller(mailbox, settings=None, provider=None, rng=None):
    provider = provider or MagicMock()
    return Poller(
        settings or _fast_settings(),
        provider,
        mailbox_factory=lambda creds: mailbox,
        rng=rng,
    )


def test_intervals_stay_in_window():
    poller = _poller(MagicMock(), settings=Settings(), rng=random.Random(7))
    draws = [poller.next_interval() for _ in range(200)]
    assert all(45 <= d <= 120 for d in draws)
    assert len(set(draws)) > 1


def test_intervals_are_reproducible_with_seeded_rng():
    a = _poller(MagicMock(), settings=Settings(), rng=random.Random(3))
    b = _poller(MagicMock(), settings=Settings(), rng=random.Random(3))
    assert [a.next_interval() for _ in range(5)] == [b.next_interval() for _ in range(5)]


def test_tick_runs_cycle(fake_mailbox_cls, make_raw_thread, make_raw_message):
    mailbox = fake_mailbox_cls(threads=[make_raw_thread("T1", make_raw_message("alice@x.com"))])
    provider = MagicMock()
    poller = _poller(mailbox, provider=provider)

    report = poller.tick()

    provider.get_credentials.assert_called_once()
    assert [r.thread_id for r in report.sent] == ["T1"]


def test_tick_swallows_auth_failure(fake_mailbox_cls, caplog):
    provider = MagicMock()
    provider.get_credentials.side_effect = AuthError("no client secret")
    poller = _poller(fake_mailbox_cls(), provider=provider)

    with caplog.at_level(logging.ERROR):
        assert poller.tick() is None
    assert "Poll cycle failed" in caplog.text


def test_run_continues_after_failed_tick(fake_mailbox_cls):
    provider = MagicMock()
    provider.get_credentials.side_effect = [AuthError("flaky"), MagicMock()]
    mailbox = fake_mailbox_cls(threads=[])
    poller = _poller(mailbox, provider=provider)

    poller.run(max_ticks=2)

    assert provider.get_credentials.call_count == 2
    assert mailbox.profile_calls == 1


def test_identity_shared_across_ticks(fake_mailbox_cls):
    mailbox = fake_mailbox_cls(threads=[])
    poller = _poller(mailbox)

    poller.run(max_ticks=3)

    assert mailbox.profile_calls == 1


def test_overlapping_tick_is_skipped(fake_mailbox_cls):
    provider = MagicMock()
    poller = _poller(fake_mailbox_cls(), provider=provider)

    poller._tick_lock.acquire()
    try:
        assert poller.tick() is None
    finally:
        poller._tick_lock.release()

    provider.get_credentials.assert_not_called()


def test_stop_before_run_exits_without_ticking(fake_mailbox_cls):
    provider = MagicMock()
    poller = _poller(fake_mailbox_cls(), settings=Settings(), provider=provider)

    poller.stop()
    poller.run()

    provider.get_credentials.assert_not_called()
