"""
YouTube API integration module
"""

from .channel_tags import ChannelTags
from .tag_enricher import TagEnricher, TagEnrichmentError

__all__ = ["ChannelTags", "TagEnricher", "TagEnrichmentError"]
