"""
Channel ID accumulator used during discovery.
"""

from typing import Dict, Iterable, List


class ChannelIdSet:
    """
    Insertion-ordered set of unique channel IDs.

    Only grows. Uniqueness is enforced here and nowhere else.
    """

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: Dict[str, None] = {}
        self.add(ids)

    def add(self, ids: Iterable[str]) -> int:
        """Add ids, ignoring ones already present. Returns how many were new."""
        before = len(self._ids)
        for channel_id in ids:
            if channel_id:
                self._ids.setdefault(channel_id, None)
        return len(self._ids) - before

    def size(self) -> int:
        return len(self._ids)

    def snapshot(self) -> List[str]:
        """Copy of the ids in the order they were first seen."""
        return list(self._ids)

    def __repr__(self) -> str:
        return f"ChannelIdSet(size={self.size()})"
