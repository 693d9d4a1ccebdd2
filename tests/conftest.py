"""Shared fixtures: raw Gmail payload builders and an in-memory mailbox."""

import base64

import pytest

from gmail_autoreply.exceptions import MailboxError
from gmail_autoreply.label import Label


def raw_message(
    sender,
    subject="Hello",
    message_id="<orig@mail.example.com>",
    body="Hi there",
    msg_id="m1",
    extra_headers=None,
):
    headers = []
    if sender is not None:
        headers.append({"name": "From", "value": sender})
    headers.append({"name": "Subject", "value": subject})
    if message_id:
        headers.append({"name": "Message-ID", "value": message_id})
    headers.extend(extra_headers or [])
    return {
        "id": msg_id,
        "payload": {
            "mimeType": "text/plain",
            "headers": headers,
            "body": {"data": base64.urlsafe_b64encode(body.encode()).decode()},
        },
    }


def raw_thread(thread_id, *messages):
    return {"id": thread_id, "messages": list(messages)}


class FakeMailbox:
    """In-memory stand-in for ``Mailbox`` recording every mutating call."""

    def __init__(self, address="me@y.com", threads=None, labels=None):
        self.address = address
        self.threads = {t["id"]: t for t in threads or []}
        self.labels = list(labels or [])
        self.broken_threads = set()
        self.sent = []
        self.modified = []
        self.created_labels = []
        self.profile_calls = 0

    def get_profile_email(self):
        self.profile_calls += 1
        return self.address

    def list_labels(self):
        return list(self.labels)

    def create_label(self, name):
        lbl = Label(name, f"Label_{len(self.labels) + 1}")
        self.labels.append(lbl)
        self.created_labels.append(lbl)
        return lbl

    def list_thread_ids(self, query=""):
        return list(self.threads)

    def get_thread(self, thread_id):
        if thread_id in self.broken_threads:
            raise MailboxError(f"Failed to fetch thread {thread_id}: 500")
        return self.threads[thread_id]

    def send_raw(self, raw, thread_id=None):
        self.sent.append((thread_id, raw))
        return {"id": f"sent{len(self.sent)}", "threadId": thread_id}

    def add_thread_labels(self, thread_id, labels):
        self.modified.append((thread_id, list(labels)))


@pytest.fixture
def make_raw_message():
    return raw_message


@pytest.fixture
def make_raw_thread():
    return raw_thread


@pytest.fixture
def fake_mailbox_cls():
    return FakeMailbox
