"""Thin adapter over the Gmail API resource.

Every call goes to ``userId='me'``. ``HttpError`` is wrapped into
``MailboxError`` naming the failed operation; the original error is
chained.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError

from gmail_autoreply.exceptions import MailboxError
from gmail_autoreply.label import Label

logger = logging.getLogger(__name__)


class Mailbox:
    """The Gmail operations the auto-responder needs.

    Args:
        credentials: A google.oauth2.credentials.Credentials object.
        user_id: The mailbox owner. ``'me'`` is the authorized account.
        _service: Pre-built Gmail resource. When supplied, ``credentials``
            is not used to build one.
    """

    def __init__(self, credentials=None, user_id: str = 'me', _service=None) -> None:
        self.user_id = user_id
        if _service is not None:
            self._service = _service
        else:
            self._service = build(
                'gmail', 'v1', credentials=credentials,
                cache_discovery=False,
            )

    @property
    def service(self) -> Resource:
        return self._service

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    def get_profile_email(self) -> str:
        """Email address of the authenticated account."""
        try:
            profile = self.service.users().getProfile(userId=self.user_id).execute()
        except HttpError as error:
            raise MailboxError(f"Failed to fetch profile: {error}") from error
        address = profile.get('emailAddress', '')
        if not address:
            raise MailboxError("Profile response carried no emailAddress")
        return address

    # -------------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------------

    def list_labels(self) -> List[Label]:
        try:
            res = self.service.users().labels().list(userId=self.user_id).execute()
        except HttpError as error:
            raise MailboxError(f"Failed to list labels: {error}") from error
        return [Label(name=x['name'], id=x['id']) for x in res.get('labels', [])]

    def create_label(self, name: str) -> Label:
        try:
            res = self.service.users().labels().create(
                userId=self.user_id, body={'name': name},
            ).execute()
        except HttpError as error:
            raise MailboxError(f"Failed to create label {name!r}: {error}") from error
        logger.info("Created label %s (%s)", res['name'], res['id'])
        return Label(res['name'], res['id'])

    # -------------------------------------------------------------------------
    # Threads
    # -------------------------------------------------------------------------

    def list_thread_ids(self, query: str = '') -> List[str]:
        """Ids of threads matching ``query``, across all result pages."""
        ids: List[str] = []
        page_token = None

        while True:
            kwargs: dict = {'userId': self.user_id, 'q': query}
            if page_token:
                kwargs['pageToken'] = page_token
            try:
                response = self.service.users().threads().list(**kwargs).execute()
            except HttpError as error:
                raise MailboxError(
                    f"Failed to list threads for {query!r}: {error}"
                ) from error

            ids.extend(t['id'] for t in response.get('threads', []))

            page_token = response.get('nextPageToken')
            if not page_token:
                break

        return ids

    def get_thread(self, thread_id: str) -> dict:
        """Raw thread with all messages and headers (format=full)."""
        try:
            return self.service.users().threads().get(
                userId=self.user_id, id=thread_id, format='full',
            ).execute()
        except HttpError as error:
            raise MailboxError(f"Failed to fetch thread {thread_id}: {error}") from error

    def add_thread_labels(self, thread_id: str, label_ids: List[str]) -> None:
        body = {'addLabelIds': list(label_ids)}
        try:
            self.service.users().threads().modify(
                userId=self.user_id, id=thread_id, body=body,
            ).execute()
        except HttpError as error:
            raise MailboxError(
                f"Failed to modify labels of thread {thread_id}: {error}"
            ) from error

    # -------------------------------------------------------------------------
    # Sending
    # -------------------------------------------------------------------------

    def send_raw(self, raw: str, thread_id: Optional[str] = None) -> dict:
        """Send a base64url-encoded message, appended to ``thread_id`` if given."""
        body = {'raw': raw}
        if thread_id:
            body['threadId'] = thread_id
        try:
            return self.service.users().messages().send(
                userId=self.user_id, body=body,
            ).execute()
        except HttpError as error:
            raise MailboxError(f"Failed to send message: {error}") from error
