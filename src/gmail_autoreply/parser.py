"""Parse Gmail API thread payloads into structured data."""

from __future__ import annotations

import base64
import re

from bs4 import BeautifulSoup
import dateutil.parser

from gmail_autoreply.models import Thread, ThreadMessage


def parse_thread(raw_thread: dict) -> Thread:
    """Build a ``Thread`` from a ``users.threads.get`` response (format=full).

    Pure function, no network calls. Message order is preserved. Only the
    first message, the one a reply answers, gets its body and date decoded;
    later messages are reduced to headers.
    """
    return Thread(
        thread_id=raw_thread["id"],
        messages=[
            parse_message(m, with_content=(i == 0))
            for i, m in enumerate(raw_thread.get("messages", []))
        ],
    )


def parse_message(raw_message: dict, with_content: bool = True) -> ThreadMessage:
    payload = raw_message.get("payload", {})
    headers = extract_headers(payload)
    date = headers.get("date", "")

    return ThreadMessage(
        gmail_message_id=raw_message.get("id", ""),
        sender=headers.get("from", ""),
        subject=headers.get("subject", ""),
        message_id=headers.get("message-id", ""),
        date=_parse_date(date) if with_content else date,
        body_text=_extract_body(payload) if with_content else "",
        headers=headers,
    )


def extract_headers(payload: dict) -> dict[str, str]:
    """Header map keyed by lower-cased name. The first occurrence wins."""
    headers: dict[str, str] = {}
    for h in payload.get("headers", []):
        headers.setdefault(h["name"].lower(), h["value"])
    return headers


def _parse_date(value: str) -> str:
    if not value:
        return ""
    try:
        return str(dateutil.parser.parse(value).astimezone())
    except (ValueError, OverflowError):
        return value


def _extract_body(payload: dict) -> str:
    mime_type = payload.get("mimeType", "")

    if mime_type == "text/plain":
        return _decode_body_data(payload)

    if mime_type.startswith("multipart/"):
        parts = payload.get("parts", [])
        for part in parts:
            if part.get("mimeType") == "text/plain":
                text = _decode_body_data(part)
                if text:
                    return text
        for part in parts:
            text = _extract_body(part)
            if text:
                return text

    if mime_type == "text/html":
        html = _decode_body_data(payload)
        return _strip_html(html) if html else ""

    return ""


def _decode_body_data(payload: dict) -> str:
    data = payload.get("body", {}).get("data", "")
    if not data:
        return ""
    try:
        return base64.urlsafe_b64decode(data).decode("utf-8", errors="replace")
    except ValueError:
        return ""


def _strip_html(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "head"]):
        tag.decompose()
    text = soup.get_text(separator=" ")
    return re.sub(r"\s+", " ", text).strip()
