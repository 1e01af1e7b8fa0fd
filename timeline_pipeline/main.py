"""
Channel Timeline - Monthly View Report
Discovers channels, downloads their stats and writes the monthly CSV report.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from shared.storage.storage_manager import CheckpointError, StorageManager

from timeline_pipeline.core.config import AppConfig, ConfigLoader, ConfigValidationError
from timeline_pipeline.core.discovery import ChannelIdDiscoverer, DiscoveryError
from timeline_pipeline.core.pipeline import TimelinePipeline
from timeline_pipeline.core.report import EmptyDatasetError, ReportExportError
from timeline_pipeline.core.stats import BatchFetchError, MetricBatchClient
from timeline_pipeline.core.youtube import TagEnricher, TagEnrichmentError

DEFAULT_CONFIG = Path(__file__).parent / "config.yaml"


def setup_logging(logs_dir: Path) -> logging.Logger:
    """Configure logging with file and console handlers."""
    logs_dir.mkdir(parents=True, exist_ok=True)

    log_file = logs_dir / "app.log"

    log_format = "%(asctime)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=logging.INFO,
        format=log_format,
        datefmt=date_format,
        handlers=[
            logging.FileHandler(log_file, mode='a', encoding='utf-8'),
            logging.StreamHandler()
        ]
    )

    return logging.getLogger(__name__)


def load_configuration(logger: logging.Logger, config_path: Path) -> AppConfig:
    """Load and validate application configuration."""
    logger.info(f"Loading configuration from: {config_path}")

    try:
        config = ConfigLoader(config_path).load()
    except FileNotFoundError as e:
        logger.error(f"Configuration file not found: {e}")
        sys.exit(1)
    except ConfigValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        sys.exit(1)

    logger.info("Configuration validated successfully")
    logger.info(f"  Known channels: {len(config.known_channels)}")
    logger.info(f"  Discovery target: {config.discovery_target}")
    logger.info(f"  Stats window: {config.stats_from.isoformat()} to {config.stats_to.isoformat()}")
    logger.info(f"  Storage root: {config.storage_root}")
    return config


def resolve_path(base_dir: Path, value: str) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return path


def build_pipeline(logger: logging.Logger, config: AppConfig, base_dir: Path) -> TimelinePipeline:
    """Wire the pipeline services from configuration."""
    storage = StorageManager(str(resolve_path(base_dir, config.storage_root)))

    discoverer = ChannelIdDiscoverer(
        session_id=config.discovery_session,
        retry_delay=config.retry_delay,
        max_retries=config.max_retries
    )
    stats_client = MetricBatchClient(
        authorization=config.stats_authorization,
        device_id=config.stats_device_id,
        client_name=config.stats_client,
        batch_size=config.batch_size,
        workers=config.workers
    )

    tag_enricher = None
    credentials_file = resolve_path(base_dir, config.credentials_file)
    if credentials_file.exists():
        logger.info(f"Using YouTube credentials from {credentials_file}")
        try:
            tag_enricher = TagEnricher.from_credentials_file(credentials_file)
        except (OSError, ValueError) as e:
            # google-auth rejects malformed service account files with ValueError
            raise TagEnrichmentError(f"Invalid YouTube credentials in {credentials_file}: {e}")

    return TimelinePipeline(config, storage, discoverer, stats_client, tag_enricher)


def main(argv: Optional[List[str]] = None):
    """Main execution entry for the timeline pipeline."""
    parser = argparse.ArgumentParser(description="Monthly view report for a pool of YouTube channels")
    parser.add_argument("--config", type=str, default=str(DEFAULT_CONFIG), help="Path to config.yaml")
    parser.add_argument("--logs", type=str, default="logs", help="Directory for app.log")
    args = parser.parse_args(argv)

    logger = setup_logging(Path(args.logs))

    logger.info("=" * 60)
    logger.info("Channel Timeline - MONTHLY VIEW REPORT")
    logger.info("=" * 60)

    config_path = Path(args.config).resolve()
    config = load_configuration(logger, config_path)

    try:
        pipeline = build_pipeline(logger, config, config_path.parent)
        report_path = pipeline.run()
    except (DiscoveryError, BatchFetchError, TagEnrichmentError, CheckpointError,
            EmptyDatasetError, ReportExportError) as e:
        logger.error(f"Pipeline aborted: {e}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("Timeline Pipeline Complete")
    print(f"Report stored in: {report_path}")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
