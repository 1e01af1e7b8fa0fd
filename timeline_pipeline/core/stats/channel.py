"""
Channel Statistics Domain Model
Channels and the time-stamped samples reported by the stats provider.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as emitted by the stats provider."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class Sample:
    """
    One observation of a channel's public counters.
    Immutable once produced.
    """
    recorded_at: datetime
    subscribers: int
    views: int
    videos: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sample":
        """
        Build a sample from a provider or checkpoint record.

        Raises:
            ValueError: If a counter is not an integer or is negative
        """
        counters = {name: int(data.get(name) or 0) for name in ("subscribers", "views", "videos")}
        negative = [name for name, value in counters.items() if value < 0]
        if negative:
            raise ValueError(f"Negative counter(s) {', '.join(negative)} at {data['recorded_at']}")
        return cls(recorded_at=parse_timestamp(data["recorded_at"]), **counters)

    def to_dict(self) -> Dict[str, Any]:
        """Convert object to dictionary for serialization (e.g., JSON)."""
        return {
            "recorded_at": self.recorded_at.isoformat(),
            "subscribers": self.subscribers,
            "views": self.views,
            "videos": self.videos
        }


@dataclass
class Channel:
    """
    A tracked channel and its samples.

    `aggregated` is False for raw daily samples straight from the provider
    and True once the samples have been collapsed into monthly averages.
    """
    id: str
    title: str
    samples: List[Sample] = field(default_factory=list)
    aggregated: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["Channel"]:
        """
        Build a channel from its wire form.
        Returns None when the provider has no stats for the channel.
        """
        stats = data.get("stats")
        if stats is None:
            return None
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            samples=[Sample.from_dict(s) for s in stats],
            aggregated=bool(data.get("aggregated", False))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "stats": [s.to_dict() for s in self.samples],
            "aggregated": self.aggregated
        }

    def with_samples(self, samples: List[Sample], aggregated: Optional[bool] = None) -> "Channel":
        """Return a copy of this channel carrying `samples` instead."""
        if aggregated is None:
            aggregated = self.aggregated
        return replace(self, samples=list(samples), aggregated=aggregated)

    def sorted(self) -> "Channel":
        """Return a copy with samples in ascending `recorded_at` order."""
        return self.with_samples(sorted(self.samples, key=lambda s: s.recorded_at))

    def __repr__(self) -> str:
        return f"Channel(title={self.title!r}, id={self.id!r}, samples={len(self.samples)})"
