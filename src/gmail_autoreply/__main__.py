"""Entry point: ``python -m gmail_autoreply`` or ``gmail-autoreply``."""

import logging
import sys

from gmail_autoreply.auth import CredentialProvider
from gmail_autoreply.config import Settings
from gmail_autoreply.exceptions import ConfigError
from gmail_autoreply.poller import Poller

logger = logging.getLogger("gmail_autoreply")


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    )
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    logging.getLogger().setLevel(settings.log_level)

    provider = CredentialProvider(
        settings.scopes, settings.token_path, settings.client_secret_path,
    )
    poller = Poller(settings, provider)

    logger.info(
        "Polling %r every %.0f-%.0fs",
        settings.query, settings.min_interval, settings.max_interval,
    )
    try:
        poller.run()
    except KeyboardInterrupt:
        poller.stop()
        logger.info("Stopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
