"""
Stats analysis module
"""

from .classifier import classify
from .monthly_aggregator import MonthlyAggregator

__all__ = ["MonthlyAggregator", "classify"]
