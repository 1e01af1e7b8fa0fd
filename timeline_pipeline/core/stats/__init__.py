"""
Channel statistics module
"""

from .channel import Channel, Sample
from .stats_client import BatchFetchError, MetricBatchClient

__all__ = ["BatchFetchError", "Channel", "MetricBatchClient", "Sample"]
