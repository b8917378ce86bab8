import logging
from typing import Optional

from analyzer.interpretation import interpret
from analyzer.orchestrator import analyze
from docsignals.core.managers.config_manager import config_manager
from docsignals.model import AnalysisReport
from fetcher.model import FetchSettings
from fetcher.services.page_fetcher_service import PageFetcher
from fetcher.services.sample_collector_service import SampleCollector
from fetcher.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)


class AnalysisError(RuntimeError):
    """Raised when no usable sample could be fetched."""


class AnalysisController:
    """
    Orchestrates one analysis run: URL validation, sample collection,
    structural/semantic analysis and interpretation.
    """

    def __init__(self, settings: Optional[FetchSettings] = None, show_progress: bool = True):
        self.settings = settings or self.settings_from_config()
        self.show_progress = show_progress
        self.max_fetch_count = int(config_manager.get_nested("analysis.max_fetch_count", 10))

    @staticmethod
    def settings_from_config() -> FetchSettings:
        return FetchSettings(
            timeout=float(config_manager.get_nested("session.time_out", 30)),
            read_timeout=float(config_manager.get_nested("session.client_read_timeout", 30)),
            delay_ms=int(config_manager.get_nested("analysis.fetch_delay_ms", 300)),
        )

    def bound_fetch_count(self, fetch_count: int) -> int:
        bounded = min(max(1, fetch_count), max(1, self.max_fetch_count))
        if bounded != fetch_count:
            logger.warning("Fetch count %d out of range; using %d.", fetch_count, bounded)
        return bounded

    async def run(self, raw_url: str, fetch_count: int) -> AnalysisReport:
        """
        Runs the complete analysis for one URL.

        Failed fetches are dropped; the analysis proceeds with the successful
        samples in their original order.

        Raises:
            InvalidUrlError: If the URL is malformed, not http(s), or local/private.
            AnalysisError: If none of the fetches returned HTML.
        """
        url = UrlUtils.validate_url(raw_url)
        fetch_count = self.bound_fetch_count(fetch_count)

        async with PageFetcher(self.settings) as fetcher:
            collector = SampleCollector(fetcher, show_progress=self.show_progress)
            samples = await collector.collect(url, fetch_count)

        html_samples = [s.html for s in samples if s.ok]
        failures = [s for s in samples if not s.ok]

        if not html_samples:
            raise AnalysisError(failures[0].error if failures else "Fetch failed")
        if failures:
            logger.warning(
                "%d of %d fetches failed; analyzing the remaining %d sample(s).",
                len(failures), fetch_count, len(html_samples)
            )

        result = analyze(html_samples, url)
        interpretations = interpret(result.structure, result.semantics, len(html_samples))

        return AnalysisReport(
            url=url,
            fetch_count=fetch_count,
            samples_used=len(html_samples),
            result=result,
            interpretations=interpretations,
            failures=failures,
        )
