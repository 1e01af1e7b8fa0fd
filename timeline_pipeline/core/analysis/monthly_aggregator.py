"""
Monthly Aggregator Service
Collapses a channel's daily samples into one averaged sample per month.
"""

import logging
from typing import List

import pandas as pd

from ..stats.channel import Channel, Sample

logger = logging.getLogger(__name__)


class MonthlyAggregator:
    """
    Service responsible for turning daily stats into monthly averages.

    Rules:
    - Samples with 0 views are missing observations and are discarded.
    - Samples are bucketed by (year, month).
    - Each bucket yields the integer (floor) average of subscribers, views
      and videos, stamped with the first sample of the bucket.
    - Buckets come out in order of first appearance, not sorted.
    """

    def aggregate(self, channel: Channel) -> Channel:
        """Return a new channel whose samples are the monthly averages."""
        valid = [s for s in channel.samples if s.views != 0]
        if not valid:
            return channel.with_samples([], aggregated=True)

        df = pd.DataFrame({
            "year": [s.recorded_at.year for s in valid],
            "month": [s.recorded_at.month for s in valid],
            "position": range(len(valid)),
            "subscribers": [s.subscribers for s in valid],
            "views": [s.views for s in valid],
            "videos": [s.videos for s in valid],
        })

        buckets = df.groupby(["year", "month"], sort=False).agg(
            first_position=("position", "first"),
            size=("position", "size"),
            subscribers=("subscribers", "sum"),
            views=("views", "sum"),
            videos=("videos", "sum"),
        )

        monthly = [
            Sample(
                recorded_at=valid[int(row.first_position)].recorded_at,
                subscribers=int(row.subscribers) // int(row.size),
                views=int(row.views) // int(row.size),
                videos=int(row.videos) // int(row.size),
            )
            for row in buckets.itertuples(index=False)
        ]
        return channel.with_samples(monthly, aggregated=True)

    def aggregate_all(self, channels: List[Channel]) -> List[Channel]:
        """Aggregate every channel. Sample order is left as produced."""
        result = [self.aggregate(c) for c in channels]
        empty = sum(1 for c in result if not c.samples)
        if empty:
            logger.warning(f"{empty} channels have no valid samples after aggregation")
        logger.info(f"Aggregated monthly stats for {len(result)} channels")
        return result
