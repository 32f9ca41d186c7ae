"""Prometheus publisher that rebuilds its registry on every scrape."""
from typing import Dict, Mapping, Tuple
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest
import logging
import re

logger = logging.getLogger(__name__)

# Classic exposition names; anything else would be escaped by the client and
# could render two families under one name
METRIC_NAME_RE = re.compile(r'^[a-zA-Z_:][a-zA-Z0-9_:]*$')


def build_registry(dataset: Mapping[str, Mapping[str, int]]) -> CollectorRegistry:
    """Register one gauge per (category, metric) pair in a brand new registry."""
    # Use a custom registry to avoid exporting default Python/process metrics
    registry = CollectorRegistry()
    gauges: Dict[str, Gauge] = {}

    for category, metrics in dataset.items():
        for metric_name, value in metrics.items():
            gauge_name = f"{category}_{metric_name}"

            if not METRIC_NAME_RE.match(gauge_name):
                logger.error(f"Error registering metric {gauge_name}: invalid metric name")
                continue

            if gauge_name in gauges:
                # Same series name from two pairs: last write wins
                gauges[gauge_name].set(float(value))
                continue

            try:
                gauge = Gauge(
                    gauge_name,
                    f"Metric {metric_name} from category {category}",
                    registry=registry,
                )
            except ValueError as e:
                logger.error(f"Error registering metric {gauge_name}: {e}")
                continue

            gauge.set(float(value))
            gauges[gauge_name] = gauge

    logger.debug(f"Registered {len(gauges)} gauges")
    return registry


def publish(dataset: Mapping[str, Mapping[str, int]]) -> Tuple[bytes, str]:
    """Render ``dataset`` in the Prometheus text exposition format."""
    registry = build_registry(dataset)
    return generate_latest(registry), CONTENT_TYPE_LATEST
