"""
Channel discovery module
"""

from .channel_discoverer import ChannelIdDiscoverer, DiscoveryError
from .channel_id_set import ChannelIdSet

__all__ = ["ChannelIdDiscoverer", "ChannelIdSet", "DiscoveryError"]
