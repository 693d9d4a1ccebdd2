"""Data models for threads, replies and cycle reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class ThreadMessage:
    """One message of a Gmail thread, as far as the responder cares."""

    gmail_message_id: str
    sender: str
    subject: str
    message_id: str  # RFC 822 Message-ID, not the Gmail id
    date: str
    body_text: str
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Thread:
    """A conversation; messages are in the order the service returned them."""

    thread_id: str
    messages: list[ThreadMessage] = field(default_factory=list)


@dataclass(frozen=True)
class ReplyMessage:
    to: str
    subject: str
    in_reply_to: str
    body: str


class ThreadOutcome(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ThreadResult:
    thread_id: str
    outcome: ThreadOutcome
    reason: str = ""


@dataclass
class CycleReport:
    """Per-thread results of one poll cycle, in processing order."""

    results: list[ThreadResult] = field(default_factory=list)

    def add(self, result: ThreadResult) -> None:
        self.results.append(result)

    def _with(self, outcome: ThreadOutcome) -> list[ThreadResult]:
        return [r for r in self.results if r.outcome == outcome]

    @property
    def sent(self) -> list[ThreadResult]:
        return self._with(ThreadOutcome.SENT)

    @property
    def skipped(self) -> list[ThreadResult]:
        return self._with(ThreadOutcome.SKIPPED)

    @property
    def failed(self) -> list[ThreadResult]:
        return self._with(ThreadOutcome.FAILED)

    def summary(self) -> str:
        return (
            f"{len(self.results)} threads: {len(self.sent)} sent, "
            f"{len(self.skipped)} skipped, {len(self.failed)} failed"
        )
