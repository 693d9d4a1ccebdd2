"""OAuth2 credential provider for a single Gmail account."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from gmail_autoreply.exceptions import AuthError

logger = logging.getLogger(__name__)


class CredentialProvider:
    """Loads cached credentials or runs the interactive installed-app flow.

    The cache holds only what is needed to mint new access tokens: the
    client id/secret from the client registration file and the refresh
    token. Cached credentials are returned without a liveness check; an
    expired or revoked token surfaces on the first API call.

    Args:
        scopes: OAuth2 scopes to request.
        token_path: Where the credential cache is read from and written to.
        client_secret_file: Path to the client registration JSON.
    """

    def __init__(
        self,
        scopes: list[str],
        token_path: Path,
        client_secret_file: Path,
    ):
        self.scopes = scopes
        self._token_path = Path(token_path)
        self._client_secret = Path(client_secret_file)

    def get_credentials(self) -> Credentials:
        creds = self.load_cached()
        if creds is not None:
            return creds
        return self.authorize()

    def load_cached(self) -> Credentials | None:
        """Return cached credentials, or None if absent or unparseable."""
        if not self._token_path.exists():
            return None
        try:
            info = json.loads(self._token_path.read_text())
            if not isinstance(info, dict):
                raise ValueError("expected a JSON object")
            return Credentials.from_authorized_user_info(info, self.scopes)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable credential cache %s: %s", self._token_path, e)
            return None

    def authorize(self) -> Credentials:
        """Run interactive OAuth2 flow. Opens a browser."""
        if not self._client_secret.exists():
            raise AuthError(
                f"Client secret not found at {self._client_secret}. "
                "Download it from Google Cloud Console and place it there."
            )

        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                str(self._client_secret), self.scopes,
            )
            creds = flow.run_local_server(port=0)
        except Exception as e:
            raise AuthError(f"Interactive authorization failed: {e}") from e

        if creds.refresh_token:
            self.save(creds)
        else:
            logger.warning(
                "Authorization returned no refresh token; credential cache not written"
            )
        return creds

    def save(self, creds: Credentials) -> None:
        """Write the credential cache from the registration file and ``creds``."""
        key = self._read_client_key()
        payload = {
            "type": "authorized_user",
            "client_id": key["client_id"],
            "client_secret": key["client_secret"],
            "refresh_token": creds.refresh_token,
        }
        self._token_path.parent.mkdir(parents=True, exist_ok=True)
        self._token_path.write_text(json.dumps(payload))
        logger.info("Saved credential cache to %s", self._token_path)

    def _read_client_key(self) -> dict:
        try:
            keys = json.loads(self._client_secret.read_text())
        except (OSError, ValueError) as e:
            raise AuthError(
                f"Cannot read client registration {self._client_secret}: {e}"
            ) from e
        key = None
        if isinstance(keys, dict):
            key = keys.get("installed") or keys.get("web")
        if not key or "client_id" not in key or "client_secret" not in key:
            raise AuthError(
                f"{self._client_secret} has no 'installed' or 'web' client entry"
            )
        return key
