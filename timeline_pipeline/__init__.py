"""
Channel Timeline - monthly view report for a pool of YouTube channels
"""

__version__ = "0.1.0"
