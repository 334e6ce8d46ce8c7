"""Main entry point: report a test event with sentry-core."""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from sentry_core import SentryOptions, init
from sentry_core.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


async def run(options: SentryOptions, message: str) -> int:
    """Send one message event and report the outcome."""
    async with init(options) as sdk:
        if not sdk.is_enabled:
            logger.warning("SENTRY_DSN is not set, nothing to send")
            return 1

        sdk.add_breadcrumb("main started", category="cli")
        with sdk.push_scope():
            sdk.configure_scope(lambda scope: scope.set_tag("entry_point", "main"))
            response = await sdk.capture_message_async(message)

        logger.info("Capture finished: %s (%s)", response.status.value, response.event_id)
        return 0 if response.success else 2


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    options = SentryOptions.from_env(debug=True)
    setup_logging(options)

    message = " ".join(sys.argv[1:]) or "sentry-core test event"
    sys.exit(asyncio.run(run(options, message)))


if __name__ == "__main__":
    main()
