"""Concurrent scrape of the statistics and monitoring sources."""
import asyncio
import logging
import time
from typing import Dict, List, Optional, Tuple

import httpx

from nnfcm_exporter.aggregator import CombinedDataset, aggregate, merge_datasets
from nnfcm_exporter.config import Config, SourceConfig
from nnfcm_exporter.errors import NoDataError, StructuralConfigurationError
from nnfcm_exporter.fetcher import SourceFetcher
from nnfcm_exporter.sources import SourceType

logger = logging.getLogger(__name__)


class ScrapeOrchestrator:
    """Runs one aggregation task per active source and merges the results.

    When one branch fails, its sibling is cancelled and awaited before the
    error propagates, so no aggregation outlives the scrape that started it.
    """

    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport
        self.sources: List[Tuple[SourceType, SourceConfig]] = [
            (SourceType.STATISTICS, config.statistics),
            (SourceType.MONITORING, config.monitoring),
        ]

        self.scrape_count = 0
        self.failed_scrape_count = 0
        self.last_scrape_duration_s: Optional[float] = None

    def active_sources(self) -> List[Tuple[SourceType, SourceConfig]]:
        return [(source_type, cfg) for source_type, cfg in self.sources if cfg.is_active]

    async def scrape(self) -> CombinedDataset:
        """Fetch, normalize and merge every active source into one dataset.

        Raises:
            NoDataError: nothing is configured or every source came back empty.
            StructuralConfigurationError: a branch was given an unknown source type.
        """
        start = time.monotonic()
        self.scrape_count += 1
        try:
            dataset = await self._scrape()
        except Exception:
            self.failed_scrape_count += 1
            raise
        finally:
            self.last_scrape_duration_s = time.monotonic() - start

        logger.info(
            f"Scrape complete: {len(dataset)} categories in {self.last_scrape_duration_s:.3f}s"
        )
        return dataset

    async def _scrape(self) -> CombinedDataset:
        active = self.active_sources()
        if not active:
            raise NoDataError()

        async with httpx.AsyncClient(
            timeout=self.config.global_.fetch_timeout_s,
            transport=self.transport,
        ) as client:
            fetcher = SourceFetcher(client)
            fragments = await self._run_branches(fetcher, active)

        combined: CombinedDataset = {}
        for fragment in fragments:
            merge_datasets(combined, fragment)

        if not combined:
            raise NoDataError()
        return combined

    async def _run_branches(
        self,
        fetcher: SourceFetcher,
        active: List[Tuple[SourceType, SourceConfig]],
    ) -> List[CombinedDataset]:
        tasks: Dict[str, asyncio.Task] = {}
        for source_type, source_config in active:
            name = str(source_type)
            tasks[name] = asyncio.create_task(
                self._branch(fetcher, source_type, source_config),
                name=f"aggregate-{name}",
            )

        try:
            done, _ = await asyncio.wait(
                tasks.values(), return_when=asyncio.FIRST_EXCEPTION
            )
            # Read every finished task's exception so none is reported as unretrieved
            errors = [task.exception() for task in done]
            for error in errors:
                if error is not None:
                    raise error
            return [task.result() for task in tasks.values()]
        finally:
            pending = [task for task in tasks.values() if not task.done()]
            for task in pending:
                logger.info(f"Cancelling {task.get_name()}")
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

    async def _branch(
        self,
        fetcher: SourceFetcher,
        source_type,
        source_config: SourceConfig,
    ) -> CombinedDataset:
        name = str(source_type)
        try:
            return await aggregate(fetcher, source_type, source_config)
        except StructuralConfigurationError as e:
            logger.error(f"Failed to fetch {name} data: {e}")
            raise StructuralConfigurationError(f"failed to fetch {name} data: {e}") from e
