"""
Timeline Table Builder
Lays out monthly view counts as one row per channel and one column per month.
"""

import logging
from pathlib import Path
from typing import Dict, List, Tuple

import pandas as pd

from ..stats.channel import Channel
from .report_window import ReportWindow

logger = logging.getLogger(__name__)

TITLE_COLUMN = "Channel name"


class ReportExportError(Exception):
    """Raised when the CSV report cannot be written."""
    pass


class TimelineTableBuilder:
    """
    Builds the CSV grid for the monthly view report.

    Every row has the same length as the header: the channel title followed
    by one cell per month of the window. A cell holds the month's averaged
    view count, or an empty string when the channel has no data for it.
    """

    def build_header(self, window: ReportWindow) -> List[str]:
        """Month labels ("November-2023", ...) for every month in the window."""
        return window.labels()

    def build_row(self, channel: Channel, window: ReportWindow) -> List[str]:
        # Later samples overwrite earlier ones landing in the same month
        views_by_month: Dict[Tuple[int, int], int] = {}
        for sample in channel.samples:
            views_by_month[(sample.recorded_at.year, sample.recorded_at.month)] = sample.views

        row = [channel.title]
        for month in window.months():
            views = views_by_month.get(month)
            row.append("" if views is None else str(views))
        return row

    def build_table(
        self,
        known: List[Channel],
        other: List[Channel],
        window: ReportWindow
    ) -> List[List[str]]:
        """Full grid: header row, known channels, then the remaining ones."""
        table = [[TITLE_COLUMN] + self.build_header(window)]
        for channel in known + other:
            table.append(self.build_row(channel, window))
        return table

    def export_csv(self, table: List[List[str]], output_path: Path) -> Path:
        """
        Write the grid built by `build_table` to `output_path`.

        Raises:
            ReportExportError: If the file cannot be written
        """
        header, rows = table[0], table[1:]
        df = pd.DataFrame(rows, columns=header, dtype=str)

        # A failed export must not leave a partial report at output_path.
        tmp_path = output_path.with_suffix(output_path.suffix + ".tmp")
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(tmp_path, index=False, encoding='utf-8')
            tmp_path.replace(output_path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise ReportExportError(f"Failed to write report to {output_path}: {e}")

        logger.info(f"Successfully saved {len(rows)} channels to {output_path}")
        return output_path
