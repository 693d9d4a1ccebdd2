"""Randomized-interval poll driver."""

from __future__ import annotations

import logging
import random
import threading
from typing import Callable, Optional

from gmail_autoreply.auth import CredentialProvider
from gmail_autoreply.config import Settings
from gmail_autoreply.mailbox import Mailbox
from gmail_autoreply.models import CycleReport
from gmail_autoreply.responder import AutoResponder

logger = logging.getLogger(__name__)


class Poller:
    """Drives credential acquisition and poll cycles for the process lifetime.

    The wait before each tick is drawn uniformly from
    ``[settings.min_interval, settings.max_interval]``. Ticks never overlap:
    a ``tick()`` that starts while another is running is skipped.

    Args:
        settings: Interval window and everything the responder needs.
        credentials: Supplies a session every tick (cheap once cached).
        responder: Defaults to an ``AutoResponder`` over ``settings``.
        mailbox_factory: Builds a ``Mailbox`` from credentials.
        rng: Random source for intervals.
    """

    def __init__(
        self,
        settings: Settings,
        credentials: CredentialProvider,
        responder: Optional[AutoResponder] = None,
        mailbox_factory: Callable[..., Mailbox] = Mailbox,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.credentials = credentials
        self.responder = responder or AutoResponder(settings)
        self.mailbox_factory = mailbox_factory
        self.rng = rng or random.Random()
        self._stop = threading.Event()
        self._tick_lock = threading.Lock()

    def next_interval(self) -> float:
        return self.rng.uniform(self.settings.min_interval, self.settings.max_interval)

    def tick(self) -> Optional[CycleReport]:
        """Run one cycle. Errors are logged, never raised.

        Returns the cycle report, or None if the tick failed or was skipped.
        """
        if not self._tick_lock.acquire(blocking=False):
            logger.warning("Previous poll cycle still running; skipping this tick")
            return None
        try:
            creds = self.credentials.get_credentials()
            mailbox = self.mailbox_factory(creds)
            return self.responder.run_cycle(mailbox)
        except Exception:
            logger.exception("Poll cycle failed")
            return None
        finally:
            self._tick_lock.release()

    def run(self, max_ticks: Optional[int] = None) -> None:
        """Wait a random interval, tick, repeat until stopped.

        ``max_ticks`` bounds the number of ticks; None runs until ``stop()``.
        """
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            interval = self.next_interval()
            logger.debug("Next poll in %.1fs", interval)
            if self._stop.wait(interval):
                break
            self.tick()
            ticks += 1
        logger.info("Poller stopped after %d ticks", ticks)

    def stop(self) -> None:
        self._stop.set()
