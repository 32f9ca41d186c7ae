"""HTTP fetcher for NNFCM statistics and monitoring endpoints."""
import logging

import httpx
from pydantic import ValidationError

from nnfcm_exporter.errors import FetchError
from nnfcm_exporter.sources import Payload, SourceType

logger = logging.getLogger(__name__)

QUERY_PARAM_NAME = "operatorIdentifier"


def build_url(source_type: SourceType, base_url: str, category: str) -> str:
    """Return the category endpoint URL, without the query string."""
    return f"{base_url.rstrip('/')}{source_type.base_path}/{category}"


class SourceFetcher:
    """Performs single-attempt GETs against upstream category endpoints."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def fetch(
        self,
        source_type: SourceType,
        base_url: str,
        category: str,
        query_params: str,
    ) -> Payload:
        """Fetch one category and decode it into the source's payload shape.

        Any transport error, non-200 status or undecodable body is raised as
        ``FetchError`` tagged with the full request URL.
        """
        url = build_url(source_type, base_url, category)
        params = {QUERY_PARAM_NAME: query_params}
        request_url = str(httpx.URL(url, params=params))

        logger.info(f"Fetching data from URL: {request_url}")

        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            raise FetchError(request_url, f"request failed: {e}") from e

        if response.status_code != 200:
            raise FetchError(request_url, f"unexpected status code: {response.status_code}")

        try:
            return source_type.decode(response.content)
        except ValidationError as e:
            raise FetchError(
                request_url,
                f"failed to parse {source_type.value} JSON: {e.error_count()} error(s), "
                f"first: {e.errors()[0]['msg']}",
            ) from e
