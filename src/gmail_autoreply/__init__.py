"""Gmail auto-responder: replies once to unread threads the owner has not answered.

Heavy imports are deferred. Use explicit imports:
    from gmail_autoreply.poller import Poller
    from gmail_autoreply.auth import CredentialProvider
    from gmail_autoreply.mailbox import Mailbox
    etc.
"""

# Light imports only (no external deps)
from gmail_autoreply.config import Settings
from gmail_autoreply.label import Label
from gmail_autoreply.models import CycleReport, ReplyMessage, Thread, ThreadResult

__version__ = "0.1.0"


def __getattr__(name):
    """Lazy imports for classes that require the Google client libraries."""
    if name == "Poller":
        from gmail_autoreply.poller import Poller
        return Poller
    if name == "CredentialProvider":
        from gmail_autoreply.auth import CredentialProvider
        return CredentialProvider
    if name == "Mailbox":
        from gmail_autoreply.mailbox import Mailbox
        return Mailbox
    if name == "AutoResponder":
        from gmail_autoreply.responder import AutoResponder
        return AutoResponder
    raise AttributeError(f"module 'gmail_autoreply' has no attribute {name!r}")


__all__ = [
    "Settings",
    "Label",
    "CycleReport",
    "ReplyMessage",
    "Thread",
    "ThreadResult",
    "Poller",
    "CredentialProvider",
    "Mailbox",
    "AutoResponder",
]
