from __future__ import annotations

import asyncio
import logging
import sys

from docsignals.core.handlers.analyze_handler import handle_analyze
from docsignals.core.managers.config_manager import config_manager
from docsignals.core.utils.configure_logging import configure_logger

# Initialize logging based on configuration
DEBUG_LEVEL = config_manager.get_nested("debug.level", "WARNING")
SILENCED_LOGGERS = config_manager.get_nested("debug.silenced_loggers", {})
configure_logger(DEBUG_LEVEL, silenced_loggers=SILENCED_LOGGERS)
logger = logging.getLogger(__name__)


def _setup_windows_event_loop_if_needed() -> None:
    """Installs Windows compatible asyncio policy if possible."""
    if not sys.platform.startswith("win"):
        return
    try:
        policy = asyncio.WindowsSelectorEventLoopPolicy()
        asyncio.set_event_loop_policy(policy)
        logger.info("Using WindowsSelectorEventLoopPolicy for asyncio on Windows.")
    except AttributeError as exc:  # pragma: no cover
        logger.warning("Could not set WindowsSelectorEventLoopPolicy: %s", exc)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for running an analysis from the command line."""
    _setup_windows_event_loop_if_needed()
    args = sys.argv[1:] if argv is None else argv
    try:
        return handle_analyze(args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
