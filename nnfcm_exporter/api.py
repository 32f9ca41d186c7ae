"""HTTP API serving the scrape endpoint and runtime controls using FastAPI."""
from typing import Optional
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel
import logging
import time

import httpx

from nnfcm_exporter.config import Config
from nnfcm_exporter.errors import NoDataError
from nnfcm_exporter.orchestrator import ScrapeOrchestrator
from nnfcm_exporter.publisher import publish

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogLevelRequest(BaseModel):
    """Request to change log level."""
    level: str


class ExporterAPI:
    """FastAPI application wrapping the scrape pipeline."""

    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the exporter API.

        Args:
            config: Validated exporter configuration
            transport: Optional httpx transport for upstream calls
        """
        self.config = config
        self.orchestrator = ScrapeOrchestrator(config, transport=transport)
        self.start_time = time.time()
        self.app = FastAPI(title="NNFCM Prometheus Exporter")

        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/metrics")
        async def metrics():
            """Scrape upstream sources and return the Prometheus exposition."""
            try:
                dataset = await self.orchestrator.scrape()
            except NoDataError as e:
                logger.warning(f"Scrape produced no data: {e}")
                return PlainTextResponse(str(e), status_code=400)
            except Exception as e:
                logger.error(f"Scrape failed: {e}", exc_info=True)
                return PlainTextResponse(str(e), status_code=500)

            body, content_type = publish(dataset)
            return Response(content=body, media_type=content_type)

        @self.app.get("/healthz")
        async def healthz():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": time.time()}

        @self.app.get("/status")
        async def status():
            """Describe configured sources and scrape counters."""
            sources = {}
            for source_type, source_config in self.orchestrator.sources:
                sources[source_type.value] = {
                    "address": source_config.server.address,
                    "port": source_config.server.port,
                    "categories": list(source_config.categories),
                    "active": source_config.is_active,
                }

            return {
                "uptime_seconds": time.time() - self.start_time,
                "scrape_count": self.orchestrator.scrape_count,
                "failed_scrape_count": self.orchestrator.failed_scrape_count,
                "last_scrape_duration_s": self.orchestrator.last_scrape_duration_s,
                "query_params": self.config.query_params,
                "sources": sources,
            }

        @self.app.post("/control/loglevel")
        async def set_log_level(request: LogLevelRequest):
            """Change log level at runtime."""
            level = request.level.upper()

            if level not in LOG_LEVELS:
                raise HTTPException(
                    status_code=400,
                    detail=f"Invalid log level: {level}"
                )

            logging.getLogger().setLevel(getattr(logging, level))
            logger.info(f"Log level changed to: {level}")

            return {
                "status": "log_level_changed",
                "level": level,
                "timestamp": time.time()
            }

    def run(self):
        """Run the API server."""
        import uvicorn
        uvicorn.run(
            self.app,
            host=self.config.server.address,
            port=self.config.server.port,
            log_level="info",
        )
