"""
Task Spammer - Entry Point

Loads settings, wires the submission client into the dispatch loop and
runs it until SIGINT/SIGTERM.
"""

import asyncio
import logging
import signal
from typing import Optional

from .client import SubmissionClient
from .config import Settings
from .deployment import DeploymentResolver
from .dispatch import DispatchLoop
from .errors import ConfigError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _install_signal_handlers(stop_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # add_signal_handler is unavailable on Windows event loops.
            logger.debug("Signal %s handler not installed", sig)


async def run(
    settings: Settings,
    stop_event: Optional[asyncio.Event] = None,
    client: Optional[SubmissionClient] = None
) -> DispatchLoop:
    """
    Run the dispatch loop with a submission client built from settings.

    Args:
        settings: Loaded settings
        stop_event: Optional cancellation token; signals set it when omitted
        client: Optional preconfigured submission client

    Returns:
        The finished loop, for its counters
    """
    if client is None:
        resolver = DeploymentResolver(settings.deployment_source())
        client = SubmissionClient(settings, resolver)
    if stop_event is None:
        stop_event = asyncio.Event()
        _install_signal_handlers(stop_event)

    dispatcher = DispatchLoop(client.submit, interval=settings.interval_seconds)
    try:
        await dispatcher.run(stop_event)
    finally:
        await client.close()
    return dispatcher


def main() -> int:
    """Console entry point. Takes no arguments."""
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        configure_logging()
        logger.error("Configuration error: %s", e)
        return 1

    configure_logging(settings.log_level)
    logger.info(
        "Creating tasks on %s every %ss (chain %s)",
        settings.credentials.endpoint, settings.interval_seconds, settings.chain_id
    )
    asyncio.run(run(settings))
    return 0
