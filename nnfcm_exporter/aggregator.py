"""Per-source aggregation of category payloads into one dataset."""
import logging
from typing import Dict, Mapping

from nnfcm_exporter.coercion import coerce_value
from nnfcm_exporter.config import SourceConfig
from nnfcm_exporter.errors import CoercionError, FetchError, StructuralConfigurationError
from nnfcm_exporter.fetcher import SourceFetcher
from nnfcm_exporter.sources import SourceType

logger = logging.getLogger(__name__)

CategoryMetrics = Dict[str, int]
CombinedDataset = Dict[str, CategoryMetrics]


def add_metrics(dataset: CombinedDataset, key: str, metrics: Mapping[str, int]) -> None:
    """Add ``metrics`` into ``dataset[key]``, summing values on collision."""
    bucket = dataset.setdefault(key, {})
    for metric_name, value in metrics.items():
        bucket[metric_name] = bucket.get(metric_name, 0) + value


def merge_datasets(target: CombinedDataset, fragment: Mapping[str, Mapping[str, int]]) -> CombinedDataset:
    """Merge ``fragment`` into ``target`` additively and return ``target``."""
    for key, metrics in fragment.items():
        add_metrics(target, key, metrics)
    return target


def _accumulate_statistics(dataset: CombinedDataset, category: str, payload) -> None:
    for json_category, metrics in payload.items():
        # null objects become empty categories and null counts become 0
        metrics = {name: value or 0 for name, value in (metrics or {}).items()}
        add_metrics(dataset, f"{category}_{json_category}", metrics)


def _accumulate_monitoring(dataset: CombinedDataset, category: str, payload) -> None:
    # The category key exists once the fetch succeeded, even if every value is dropped
    bucket = dataset.setdefault(category, {})
    for metric_name, raw in payload.items():
        try:
            value = coerce_value(raw)
        except CoercionError as e:
            logger.warning(f"Dropping metric '{metric_name}' in category '{category}': {e}")
            continue
        bucket[metric_name] = bucket.get(metric_name, 0) + value


async def aggregate(
    fetcher: SourceFetcher,
    source_type,
    source_config: SourceConfig,
) -> CombinedDataset:
    """Fetch every configured category of one source type and combine them.

    Categories that fail to fetch are logged and skipped. Only an unknown
    source type is raised, as ``StructuralConfigurationError``.
    """
    try:
        source_type = SourceType(source_type)
    except ValueError as e:
        raise StructuralConfigurationError(f"invalid data type: {source_type}") from e

    if source_type is SourceType.STATISTICS:
        accumulate = _accumulate_statistics
    else:
        accumulate = _accumulate_monitoring

    dataset: CombinedDataset = {}
    base_url = source_config.server.base_url

    for category in source_config.categories:
        try:
            payload = await fetcher.fetch(
                source_type, base_url, category, source_config.query_params
            )
        except FetchError as e:
            logger.warning(f"Error fetching data from {e.url}: {e.reason}")
            continue

        accumulate(dataset, category, payload)

    logger.debug(
        f"Aggregated {source_type.value}: {len(dataset)} categories "
        f"from {len(source_config.categories)} configured"
    )
    return dataset
