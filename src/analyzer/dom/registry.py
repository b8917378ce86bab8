# src/analyzer/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Callable, Any, Optional, Set

from .core import ElementDefinition, ElementBase, CheckResult

logger = logging.getLogger(__name__)


class DOMRegistry:
    """
    Central registry for DOM element parsers and element checks.

    Dynamically discovers and loads ElementDefinition modules from the
    'analyzer.dom.elements' package. The registry is a load-once lookup table;
    it never holds per-document state.
    """

    _parsers: Dict[str, Callable] = {}
    _checks: List[Callable[[ElementBase], CheckResult]] = []
    _all_codes: Set[str] = set()
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all element definitions found in the 'analyzer.dom.elements' package.

        Every module exposing a `DEFINITION` (instance of `ElementDefinition`) registers its
        parser for each of its tag names, its checks, and the signal codes those checks can return.
        """
        if cls._loaded:
            return

        try:
            import analyzer.dom.elements as elements_pkg

            for _, name, _ in pkgutil.iter_modules(elements_pkg.__path__):
                full_name = f"analyzer.dom.elements.{name}"
                try:
                    module = importlib.import_module(full_name)
                    if hasattr(module, "DEFINITION") and isinstance(module.DEFINITION, ElementDefinition):
                        defn = module.DEFINITION

                        for tag_name in defn.tag_names:
                            cls._parsers[tag_name] = defn.parser

                        for check in defn.checks:
                            cls._register_check(defn.model, check)

                        cls._all_codes.update(defn.codes)

                        logger.debug("Element definition loaded: %s", ", ".join(defn.tag_names))
                except Exception as e:
                    logger.error("Error loading element module %s: %s", name, e)

            cls._loaded = True
        except ImportError as e:
            logger.error("Could not find elements package: %s", e)

    @classmethod
    def _register_check(cls, model_type: Any, check_func: Callable) -> None:
        """
        Registers a single element check, wrapping it with a type check.

        Args:
            model_type: The class type this check applies to.
            check_func: The function executing the logic.
        """
        def wrapped(node: ElementBase) -> CheckResult:
            if isinstance(node, model_type):
                return check_func(node)
            return []

        cls._checks.append(wrapped)

    @classmethod
    def get_parser(cls, tag_name: str) -> Optional[Callable]:
        """Retrieves the parser function for a specific HTML tag."""
        return cls._parsers.get(tag_name)

    @classmethod
    def run_checks(cls, node: ElementBase) -> CheckResult:
        """Runs every registered check against a node and returns the collected signal codes."""
        codes: CheckResult = []
        for check in cls._checks:
            codes.extend(check(node))
        return codes

    @classmethod
    def get_all_possible_codes(cls) -> List[str]:
        """Returns a sorted list of all unique signal codes registered in the system."""
        return sorted(cls._all_codes)
