"""
Report Window
The inclusive month range covered by every channel's samples.
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from ..stats.channel import Channel

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class EmptyDatasetError(Exception):
    """Raised when no channel has any sample to report on."""
    pass


@dataclass(frozen=True)
class ReportWindow:
    """Month range [start, end], both ends inclusive."""
    start_year: int
    start_month: int
    end_year: int
    end_month: int

    @classmethod
    def from_channels(cls, channels: List[Channel]) -> "ReportWindow":
        """
        Window spanning the earliest and latest sample of all channels.

        Raises:
            EmptyDatasetError: If there are no samples at all
        """
        timestamps = [s.recorded_at for c in channels for s in c.samples]
        if not timestamps:
            raise EmptyDatasetError("No samples found in any channel, cannot build a report window")

        start, end = min(timestamps), max(timestamps)
        return cls(start.year, start.month, end.year, end.month)

    def months(self) -> Iterator[Tuple[int, int]]:
        """Yield (year, month) for every month in the window, in order."""
        year, month = self.start_year, self.start_month
        while (year, month) <= (self.end_year, self.end_month):
            yield year, month
            month += 1
            if month > 12:
                year, month = year + 1, 1

    def labels(self) -> List[str]:
        return [f"{MONTH_NAMES[m - 1]}-{y}" for y, m in self.months()]

    def __str__(self) -> str:
        return f"{self.start_year}-{self.start_month:02d}..{self.end_year}-{self.end_month:02d}"
