import asyncio
import logging
from typing import List

from tqdm.auto import tqdm

from fetcher.model import FetchResult
from fetcher.services.page_fetcher_service import PageFetcher

logger = logging.getLogger(__name__)


class SampleCollector:
    """
    Collects N sequential samples of the same URL.

    Samples are fetched one after another with a short pause in between, and
    are returned in fetch order: the first sample is the one the metrics and
    semantic analysis are based on.
    """

    def __init__(self, fetcher: PageFetcher, show_progress: bool = True):
        self.fetcher = fetcher
        self.show_progress = show_progress

    async def collect(self, url: str, count: int) -> List[FetchResult]:
        if count < 1:
            raise ValueError("At least one sample must be collected.")

        delay = self.fetcher.settings.delay_ms / 1000
        samples: List[FetchResult] = []

        with tqdm(total=count, desc="Fetching samples", unit="fetch", disable=not self.show_progress) as bar:
            for i in range(count):
                if i > 0 and delay:
                    await asyncio.sleep(delay)

                bar.set_postfix_str(f"sample {i + 1} of {count}")
                samples.append(await self.fetcher.fetch_html(url))
                bar.update(1)

        failures = sum(1 for s in samples if not s.ok)
        logger.info("Collected %d sample(s) of %s (%d failed).", count, url, failures)
        return samples
