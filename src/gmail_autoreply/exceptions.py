"""Exception hierarchy for gmail-autoreply."""


class AutoReplyError(Exception):
    """Base exception for all gmail-autoreply errors."""


class ConfigError(AutoReplyError):
    """Invalid or inconsistent settings."""


class AuthError(AutoReplyError):
    """Gmail authentication or authorization failure."""


class MailboxError(AutoReplyError):
    """A call against the Gmail API failed."""


class MalformedThreadError(AutoReplyError):
    """A thread is missing the data needed to build a reply."""
