"""Reply decision and dispatch.

A thread gets the canned reply when no message in it comes from the
account owner. Nothing is persisted: every cycle re-derives that from the
thread contents, so a thread that has been auto-replied to is skipped from
then on because the reply itself is an owner message.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from gmail_autoreply.config import Settings
from gmail_autoreply.exceptions import MalformedThreadError
from gmail_autoreply.mailbox import Mailbox
from gmail_autoreply.message import build_raw_reply
from gmail_autoreply.models import (
    CycleReport,
    ReplyMessage,
    Thread,
    ThreadMessage,
    ThreadOutcome,
    ThreadResult,
)
from gmail_autoreply.parser import parse_thread

logger = logging.getLogger(__name__)


class AccountIdentity:
    """The authorized account's own address, resolved once per process."""

    def __init__(self, address: Optional[str] = None) -> None:
        self._address = address
        self._lock = threading.Lock()

    @property
    def resolved(self) -> bool:
        return self._address is not None

    def resolve(self, mailbox: Mailbox) -> str:
        with self._lock:
            if self._address is None:
                self._address = mailbox.get_profile_email()
                logger.info("Authenticated as %s", self._address)
            return self._address


# -----------------------------------------------------------------------------
# Pure decision
# -----------------------------------------------------------------------------

def has_replied(messages: Iterable[ThreadMessage], address: str) -> bool:
    """True if any ``From`` header contains ``address``.

    Literal substring match: ``me@y.com`` also matches ``home@y.com``.
    """
    return any(address in m.sender for m in messages)


def build_reply(original: ThreadMessage, body: str) -> ReplyMessage:
    if not original.sender:
        raise MalformedThreadError(
            f"Message {original.gmail_message_id} has no From header"
        )
    return ReplyMessage(
        to=original.sender,
        subject=f"Re: {original.subject}",
        in_reply_to=original.message_id,
        body=body,
    )


def decide_reply(thread: Thread, address: str, body: str) -> Optional[ReplyMessage]:
    """The reply to send for ``thread``, or None if the owner already replied.

    The reply answers the first message of the thread, not the latest.
    """
    if not thread.messages:
        raise MalformedThreadError(f"Thread {thread.thread_id} has no messages")
    if has_replied(thread.messages, address):
        return None
    return build_reply(thread.messages[0], body)


def excerpt(text: str, limit: int = 80) -> str:
    """First ``limit`` characters of ``text`` on one line, for log messages."""
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else flat[:limit - 3] + "..."


# -----------------------------------------------------------------------------
# Network side
# -----------------------------------------------------------------------------

def resolve_label_id(mailbox: Mailbox, name: str) -> str:
    """Id of the label called ``name``, creating the label if needed."""
    for lbl in mailbox.list_labels():
        if lbl.name == name:
            return lbl.id
    return mailbox.create_label(name).id


def dispatch_reply(
    mailbox: Mailbox,
    thread_id: str,
    reply: ReplyMessage,
    label_name: str,
) -> None:
    """Send ``reply`` into ``thread_id``, then tag the thread."""
    mailbox.send_raw(build_raw_reply(reply), thread_id=thread_id)
    mailbox.add_thread_labels(thread_id, [resolve_label_id(mailbox, label_name)])


class AutoResponder:
    """Runs poll cycles against one mailbox.

    Args:
        settings: Query, label name and reply text come from here.
        identity: Shared across cycles so the profile lookup happens once.
    """

    def __init__(self, settings: Settings, identity: Optional[AccountIdentity] = None):
        self.settings = settings
        self.identity = identity or AccountIdentity()

    def run_cycle(self, mailbox: Mailbox) -> CycleReport:
        """One pass over the unread threads, strictly sequential."""
        address = self.identity.resolve(mailbox)
        report = CycleReport()

        thread_ids = mailbox.list_thread_ids(self.settings.query)
        if not thread_ids:
            logger.debug("No threads match %r", self.settings.query)
            return report

        for thread_id in thread_ids:
            report.add(self.process_thread(mailbox, thread_id, address))

        logger.info("Cycle done: %s", report.summary())
        return report

    def process_thread(self, mailbox: Mailbox, thread_id: str, address: str) -> ThreadResult:
        """Reply to one thread if needed. Never raises."""
        try:
            thread = parse_thread(mailbox.get_thread(thread_id))
            reply = decide_reply(thread, address, self.settings.reply_body)
            if reply is None:
                logger.info("Skipping thread that has been previously replied to: %s", thread_id)
                return ThreadResult(thread_id, ThreadOutcome.SKIPPED, "already replied")

            dispatch_reply(mailbox, thread_id, reply, self.settings.label_name)
            original = thread.messages[0]
            logger.info(
                "Sent auto-reply to %s in thread %s (original dated %s: %r)",
                reply.to, thread_id, original.date or "unknown", excerpt(original.body_text),
            )
            return ThreadResult(thread_id, ThreadOutcome.SENT)
        except Exception as e:
            logger.exception("Failed to process thread %s", thread_id)
            return ThreadResult(thread_id, ThreadOutcome.FAILED, str(e))
