"""
Shared storage utilities
"""

from .storage_manager import CheckpointError, StorageManager

__all__ = ["CheckpointError", "StorageManager"]
