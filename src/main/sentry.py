import logging
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.redis import RedisIntegration

from loggers import get_logger
from src.main.config import config

logger = get_logger(__name__)

_sentry_initialized = False

# Headers carrying credentials: the bearer token and the issuance key
SCRUBBED_HEADERS = frozenset({"authorization", "x-issuer-key", "cookie"})
FILTERED = "[Filtered]"


def scrub_credentials(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any]:
    """Replace credential headers in the request section of a Sentry event."""
    headers = event.get("request", {}).get("headers")
    if isinstance(headers, dict):
        for name in headers:
            if name.lower() in SCRUBBED_HEADERS:
                headers[name] = FILTERED
    return event


def init_sentry() -> None:
    global _sentry_initialized

    if _sentry_initialized:
        return

    if config.app.DEBUG or config.app.TESTING:
        logger.info("DEBUG/TESTING enabled. Skipping Sentry initialization.")
        return

    if not config.sentry.SENTRY_ENABLED or not config.sentry.SENTRY_DSN:
        logger.info("Sentry disabled or DSN empty. Skipping Sentry initialization.")
        return

    sentry_sdk.init(
        dsn=config.sentry.SENTRY_DSN,
        environment=config.sentry.SENTRY_ENV,
        release=config.app.VERSION,
        send_default_pii=False,
        before_send=scrub_credentials,
        integrations=[
            RedisIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.CRITICAL,
            ),
        ],
    )
    _sentry_initialized = True
    logger.info("Sentry initialized.")
