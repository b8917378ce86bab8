# src/docsignals/core/utils/configure_logging.py
import logging
import sys
from typing import Dict, Optional, Union

from tqdm import tqdm

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"

Level = Union[str, int]


class LogWithTqdm(logging.Handler):
    """
    A logging handler that writes through `tqdm.write()`, so log lines emitted
    while samples are being fetched do not break the progress bar.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg, file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def _to_level(level: Optional[Level], fallback: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    if isinstance(level, int):
        return level
    return fallback


def configure_logger(
        general_level: Optional[Level] = 'WARNING',
        module_specific_levels: Optional[Dict[str, Level]] = None,
        silenced_loggers: Optional[Dict[str, Level]] = None
) -> None:
    """
    Configures the root logger with a single tqdm-aware handler.

    Args:
        general_level: Level for the root logger (name or number).
        module_specific_levels: Per-logger overrides, e.g. {'analyzer': 'DEBUG'}.
        silenced_loggers: Noisy third-party loggers and the level to raise them to.
    """
    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.WARNING))

    # Replace handlers so repeated calls do not duplicate output
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, level in (module_specific_levels or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.INFO))

    for name, level in (silenced_loggers or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.CRITICAL))
