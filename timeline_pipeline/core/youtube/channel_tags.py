"""
Channel Tags Domain Model
Topic categories YouTube assigns to a channel.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ChannelTags:
    """Topic category URLs for one channel, possibly none."""
    id: str
    name: str
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelTags":
        return cls(id=data["id"], name=data.get("name", ""), tags=list(data.get("tags") or []))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "tags": list(self.tags)}
