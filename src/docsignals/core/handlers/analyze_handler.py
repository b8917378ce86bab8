# src/docsignals/core/handlers/analyze_handler.py
import argparse
import asyncio
import logging
from typing import List, Optional

from docsignals.core.controllers.analysis_controller import AnalysisController, AnalysisError
from docsignals.core.managers.config_manager import config_manager
from docsignals.model import AnalysisReport
from fetcher.utils.url_utils import InvalidUrlError

logger = logging.getLogger(__name__)


def default_fetch_count() -> int:
    return int(config_manager.get_nested("analysis.default_fetch_count", 3))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsignals",
        description="Measure structural and semantic signals of an HTML page and explain "
                    "what they may mean for machine readers."
    )
    parser.add_argument("url", help="URL to analyze (https:// is assumed when no scheme is given).")
    parser.add_argument(
        "-n", "--fetches", type=int, default=None,
        help="Number of sequential fetches used for the consistency check "
             "(default: analysis.default_fetch_count from settings.json)."
    )
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON.")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    parser.add_argument(
        "--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
        help="Override a setting for this run (e.g. analysis.fetch_delay_ms=0). Repeatable."
    )
    return parser


def apply_overrides(overrides: List[str]) -> bool:
    for item in overrides:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            print(f"❌ Invalid override '{item}'. Expected KEY=VALUE.")
            return False
        if not config_manager.set_nested(key.strip(), value.strip()):
            print(f"❌ Error: Failed to set config value for key '{key}'.")
            return False
    return True


def format_report(report: AnalysisReport) -> str:
    structure = report.result.structure
    semantics = report.result.semantics
    images = semantics.images

    lines = [
        f"DocSignals report for {report.url}",
        f"Samples: {report.samples_used} of {report.fetch_count} fetch(es) succeeded",
        "",
        "STRUCTURE",
        f"  Classification:      {structure.classification}",
        f"  Difference count:    {structure.difference_count}",
        f"  DOM nodes:           {structure.dom_nodes}",
        f"  Max DOM depth:       {structure.max_depth}",
        f"  Top-level sections:  {structure.top_level_sections}",
        f"  Shadow DOM hosts:    {structure.custom_elements}",
        "",
        "SEMANTICS",
        f"  Classification:      {semantics.classification}",
        f"  H1 count:            {semantics.headings.h1_count}",
        f"  Heading skips:       {'Yes' if semantics.headings.has_skips else 'No'}",
        f"  Landmarks:           {', '.join(semantics.landmarks.found) or '-'}",
        f"  Landmark coverage:   {semantics.landmarks.coverage_percent}%",
        f"  Div/Span ratio:      {semantics.div_ratio * 100:.1f}%",
        f"  Link issues:         {semantics.link_issues}",
        f"  Time elements:       {semantics.time_elements.with_datetime}/{semantics.time_elements.total} with datetime",
        f"  Lists:               {semantics.lists.total} "
        f"(ol {semantics.lists.ordered}, ul {semantics.lists.unordered}, dl {semantics.lists.description})",
        f"  Tables:              {semantics.tables.with_headers}/{semantics.tables.total} with headers",
        f"  Lang attribute:      {'Yes' if semantics.lang_attribute else 'No'}",
        f"  Images:              {images.total} "
        f"(alt {images.with_alt}, decorative {images.empty_alt}, missing {images.missing_alt})",
        "",
        "INTERPRETATION",
    ]
    for item in report.interpretations:
        lines.append(f"  [{item.category}] {item.finding}")
        lines.append(f"      {item.implication}")

    if report.failures:
        lines.append("")
        lines.append("FAILED FETCHES")
        for failure in report.failures:
            error_type = failure.error_type.value if failure.error_type else "unknown"
            lines.append(f"  - {error_type}: {failure.error}")

    return "\n".join(lines)


def handle_analyze(args: List[str], controller: Optional[AnalysisController] = None) -> int:
    """
    Handler for the analyze command.
    Returns 0 on success, 1 on invalid input or when nothing could be fetched.
    """
    parser = build_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        return 0 if e.code == 0 else 2

    if not apply_overrides(parsed_args.overrides):
        return 1

    # Resolved after the overrides so '--set analysis.default_fetch_count=N' applies
    fetches = parsed_args.fetches if parsed_args.fetches is not None else default_fetch_count()

    if controller is None:
        try:
            controller = AnalysisController(show_progress=not (parsed_args.no_progress or parsed_args.json))
        except ValueError as e:
            print(f"❌ Invalid configuration: {e}")
            return 1

    try:
        report = asyncio.run(controller.run(parsed_args.url, fetches))
    except InvalidUrlError as e:
        print(f"❌ {e}")
        return 1
    except AnalysisError as e:
        logger.error("Analysis of %s failed: %s", parsed_args.url, e)
        print(f"❌ Analysis failed: {e}")
        return 1

    if parsed_args.json:
        print(report.model_dump_json(by_alias=True, indent=2))
    else:
        print(format_report(report))
    return 0
