"""Upstream source types and the payload shape each one returns."""
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import StrictInt, StrictStr, TypeAdapter


# category -> metric -> count; null objects and counts are tolerated
StatisticsPayload = Dict[str, Optional[Dict[str, Optional[StrictInt]]]]
# metric -> "value unit"
MonitoringPayload = Dict[str, StrictStr]

Payload = Union[StatisticsPayload, MonitoringPayload]

_STATISTICS_ADAPTER = TypeAdapter(StatisticsPayload)
_MONITORING_ADAPTER = TypeAdapter(MonitoringPayload)


class SourceType(str, Enum):
    """The two NNFCM APIs scraped by the exporter."""
    STATISTICS = "statistics"
    MONITORING = "monitoring"

    def __str__(self) -> str:
        return self.value

    @property
    def base_path(self) -> str:
        if self is SourceType.STATISTICS:
            return "/nnfcm-statistics/v2/stats"
        return "/nnfcm-monitoring/v2"

    def decode(self, body: bytes) -> Payload:
        """Parse a response body into this source's payload shape.

        Raises ``pydantic.ValidationError`` for malformed JSON as well as for
        a body of the wrong shape.
        """
        if self is SourceType.STATISTICS:
            return _STATISTICS_ADAPTER.validate_json(body)
        return _MONITORING_ADAPTER.validate_json(body)
