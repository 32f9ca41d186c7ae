"""Exception hierarchy for the scrape pipeline."""


class ExporterError(Exception):
    """Base class for all exporter errors."""


class FetchError(ExporterError):
    """A single category could not be fetched or decoded.

    Raised by the fetcher and swallowed (logged) by the aggregator, so one
    unreachable category only removes its own contribution.
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"failed to fetch {url}: {reason}")


class CoercionError(ExporterError):
    """A monitoring value has no parsable numeric token."""

    def __init__(self, raw, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"cannot convert {raw!r} to int: {reason}")


class StructuralConfigurationError(ExporterError):
    """The aggregation was asked for a source type it does not know."""


class NoDataError(ExporterError):
    """No source is configured, or every configured source came back empty."""

    def __init__(self, message: str = "No valid configuration provided for statistics or monitoring"):
        super().__init__(message)
