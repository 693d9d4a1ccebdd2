"""Build raw MIME payloads for ``users.messages.send``."""

from __future__ import annotations

import base64
from email.header import Header
from email.mime.text import MIMEText

from gmail_autoreply.models import ReplyMessage


def encode_subject(subject: str) -> str:
    """RFC 2047 base64 encoded-word, so non-ASCII subjects survive transport."""
    return Header(subject, "utf-8").encode()


def build_reply_mime(reply: ReplyMessage, sender: str = "me") -> MIMEText:
    """Reply envelope with threading headers.

    Gmail replaces ``From: me`` with the authenticated address.
    ``In-Reply-To``/``References`` are left out when the original carried
    no Message-ID.
    """
    msg = MIMEText(reply.body, "plain", "utf-8")
    msg["From"] = sender
    msg["To"] = reply.to
    msg["Subject"] = encode_subject(reply.subject)
    if reply.in_reply_to:
        msg["In-Reply-To"] = reply.in_reply_to
        msg["References"] = reply.in_reply_to
    return msg


def build_raw_reply(reply: ReplyMessage, sender: str = "me") -> str:
    """Base64url-encoded RFC 822 message, ready for the ``raw`` field."""
    msg = build_reply_mime(reply, sender)
    return base64.urlsafe_b64encode(msg.as_bytes()).decode()
