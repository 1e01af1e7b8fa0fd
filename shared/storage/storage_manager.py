"""
Storage Manager for the channel timeline pipeline
Checkpoints and report output under a single storage root.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class CheckpointError(Exception):
    """Raised when a checkpoint file cannot be read or written."""
    pass


class StorageManager:
    """
    Service responsible for the pipeline's on-disk artifacts.

    Responsibilities:
    - Create and validate the storage directory structure.
    - Load and save JSON checkpoints (raw channel stats, channel tags).
    - Provide the canonical report path.
    """

    def __init__(self, storage_root: str = "./storage"):
        """
        Initialize the StorageManager.

        Args:
            storage_root (str): The base directory for all storage.
        """
        self._root = Path(storage_root).resolve()

        self._checkpoint_dir = self._root / "checkpoints"
        self._reports_dir = self._root / "reports"

        self._ensure_directories()

    def _ensure_directories(self):
        """Ensures that all required storage directories exist."""
        for d in (self._checkpoint_dir, self._reports_dir):
            d.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Storage directory verified: {d}")

    @property
    def root(self) -> Path:
        return self._root

    @property
    def stats_path(self) -> Path:
        return self._checkpoint_dir / "stats.json"

    @property
    def tags_path(self) -> Path:
        return self._checkpoint_dir / "tags.json"

    @property
    def report_path(self) -> Path:
        return self._reports_dir / "result.csv"

    def load_checkpoint(self, path: Path) -> Optional[List[Dict[str, Any]]]:
        """
        Load a JSON list checkpoint.

        Returns:
            The decoded records, or None if the checkpoint does not exist.

        Raises:
            CheckpointError: If the file is unreadable or not a JSON list
        """
        if not path.exists():
            logger.info(f"No checkpoint at {path}")
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CheckpointError(f"Failed to read checkpoint {path}: {e}")

        if not isinstance(data, list):
            raise CheckpointError(f"Checkpoint {path} must hold a JSON list, got {type(data).__name__}")

        logger.info(f"Loaded {len(data)} records from {path}")
        return data

    def save_checkpoint(self, path: Path, records: List[Dict[str, Any]]) -> Path:
        """Write records as a JSON list, replacing any previous checkpoint."""
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            tmp_path.replace(path)
        except OSError as e:
            raise CheckpointError(f"Failed to write checkpoint {path}: {e}")

        logger.info(f"Json written! {len(records)} records saved to {path}")
        return path

    def __repr__(self):
        return f"StorageManager(root={self._root})"
