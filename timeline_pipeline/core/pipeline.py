"""
Timeline Pipeline
Sequences discovery, stats retrieval, aggregation and the monthly CSV report.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from shared.storage.storage_manager import CheckpointError, StorageManager

from .analysis import MonthlyAggregator, classify
from .config.app_config import AppConfig
from .discovery import ChannelIdDiscoverer
from .report import ReportWindow, TimelineTableBuilder
from .stats import Channel, MetricBatchClient
from .youtube import ChannelTags, TagEnricher

logger = logging.getLogger(__name__)


def log_phase(title: str):
    logger.info("=" * 60)
    logger.info(title)
    logger.info("=" * 60)


class TimelinePipeline:
    """
    Orchestrates a full run.

    Raw channel stats are checkpointed; when a checkpoint exists, discovery
    and stats retrieval are skipped. Aggregation, classification and the
    report are always rebuilt from the raw data.
    """

    def __init__(
        self,
        config: AppConfig,
        storage: StorageManager,
        discoverer: ChannelIdDiscoverer,
        stats_client: MetricBatchClient,
        tag_enricher: Optional[TagEnricher] = None,
        aggregator: Optional[MonthlyAggregator] = None,
        builder: Optional[TimelineTableBuilder] = None
    ):
        self._config = config
        self._storage = storage
        self._discoverer = discoverer
        self._stats_client = stats_client
        self._tag_enricher = tag_enricher
        self._aggregator = aggregator or MonthlyAggregator()
        self._builder = builder or TimelineTableBuilder()

    def run(self) -> Path:
        """Execute every phase and return the path of the written report."""
        log_phase("Phase 1: Channel Stats")
        channels, downloaded = self.load_or_download_channels()

        log_phase("Phase 2: Channel Tags")
        self.enrich_tags(channels, refresh=downloaded)

        log_phase("Phase 3: Monthly Aggregation")
        monthly = [c.sorted() for c in self._aggregator.aggregate_all(channels)]
        window = ReportWindow.from_channels(monthly)
        logger.info(f"Report window: {window}")

        log_phase("Phase 4: Timeline Report")
        known, other = classify(monthly, self._config.known_channels)
        logger.info(f"There are {len(known)} known channels and {len(other)} other channels!")

        table = self._builder.build_table(known, other, window)
        report_path = self._builder.export_csv(table, self._storage.report_path)
        logger.info("CSV made!")
        return report_path

    def load_or_download_channels(self) -> Tuple[List[Channel], bool]:
        """
        Raw channels from the stats checkpoint, or freshly downloaded.

        Returns:
            (channels, downloaded) where `downloaded` is True when the data
            came from the network in this run.
        """
        records = self._storage.load_checkpoint(self._storage.stats_path)
        if records is not None:
            channels = []
            try:
                for record in records:
                    channel = Channel.from_dict(record)
                    if channel is None:
                        logger.warning(f"No stats cached for channel {record.get('id')}, dropping it")
                        continue
                    channels.append(channel)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise CheckpointError(f"Malformed channel record in {self._storage.stats_path}: {e}")
            logger.info(f"Using {len(channels)} cached channels")
            return channels, False

        ids = self._discoverer.discover(self._config.known_channels, self._config.discovery_target)
        channels = self._stats_client.fetch_all(ids, self._config.stats_from, self._config.stats_to)
        self._storage.save_checkpoint(self._storage.stats_path, [c.to_dict() for c in channels])
        return channels, True

    def enrich_tags(self, channels: List[Channel], refresh: bool = False) -> Optional[List[ChannelTags]]:
        """
        Tags for every channel, from the tag checkpoint or the YouTube API.

        Skipped (returns None) when no tag enricher is configured. The API is
        queried when there is no checkpoint yet or `refresh` is set.
        """
        if self._tag_enricher is None:
            logger.info("Keys not found, not gathering tag list.")
            return None

        if not refresh:
            records = self._storage.load_checkpoint(self._storage.tags_path)
            if records is not None:
                try:
                    return [ChannelTags.from_dict(r) for r in records]
                except (KeyError, TypeError, AttributeError) as e:
                    raise CheckpointError(f"Malformed tag record in {self._storage.tags_path}: {e}")

        tags = self._tag_enricher.fetch_all(channels)
        self._storage.save_checkpoint(self._storage.tags_path, [t.to_dict() for t in tags])
        return tags
