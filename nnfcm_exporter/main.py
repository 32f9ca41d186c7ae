"""Main entry point for the NNFCM Prometheus exporter."""
import argparse
import logging
import sys

from nnfcm_exporter.api import ExporterAPI
from nnfcm_exporter.config import load_config


def setup_logging(log_level: str):
    """Setup logging configuration."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Reduce noise from some libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description="NNFCM Prometheus Exporter - republish NNFCM statistics and monitoring data"
    )
    parser.add_argument(
        "--config",
        "-c",
        default="config.yaml",
        help="Path to configuration YAML file"
    )

    args = parser.parse_args()

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.global_.log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("NNFCM Prometheus Exporter")
    logger.info("=" * 60)
    logger.info(f"Configuration loaded from: {args.config}")
    logger.info(f"Statistics categories: {config.statistics_categories}")
    logger.info(f"Monitoring categories: {config.monitoring_categories}")

    api = ExporterAPI(config)
    if not api.orchestrator.active_sources():
        logger.warning("No source is fully configured; /metrics will answer 400")

    logger.info(f"Serving metrics on {config.server.address}:{config.server.port}/metrics")
    try:
        api.run()
    except Exception as e:
        logger.error(f"Exporter failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
