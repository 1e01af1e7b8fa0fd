"""
Splits channels into the curated set and everything else.
"""

from typing import Iterable, List, Tuple

from ..stats.channel import Channel


def classify(channels: List[Channel], known_ids: Iterable[str]) -> Tuple[List[Channel], List[Channel]]:
    """
    Partition channels into (known, other).
    Both lists keep the order of `channels`.
    """
    known_set = set(known_ids)
    known = [c for c in channels if c.id in known_set]
    other = [c for c in channels if c.id not in known_set]
    return known, other
