# src/docsignals/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package paths.
    """

    @staticmethod
    def get_package_root() -> Path:
        """
        Returns the absolute path of the installed 'docsignals' package
        (the directory holding settings.json).
        """
        return Path(__file__).resolve().parent.parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"
