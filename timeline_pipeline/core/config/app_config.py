"""
Application Configuration Model
Represents a validated configuration state
"""

from datetime import date
from typing import List, Optional


class AppConfig:
    """
    Immutable configuration object for the channel timeline pipeline.

    Represents a VALID configuration state only.
    All validation must be performed before instantiation.
    """

    def __init__(
        self,
        known_channels: List[str],
        stats_from: date,
        stats_to: date,
        discovery_session: str = "",
        discovery_target: int = 110,
        retry_delay: float = 5.0,
        max_retries: Optional[int] = None,
        stats_authorization: str = "",
        stats_device_id: str = "",
        stats_client: str = "ext vff/3.43.2",
        batch_size: int = 5,
        workers: int = 1,
        credentials_file: str = "./keys.json",
        storage_root: str = "./storage"
    ):
        """
        Initialize AppConfig with validated values.

        Args:
            known_channels: Curated channel IDs reported before all others
            stats_from: First day of the stats collection window
            stats_to: Last day of the stats collection window
            discovery_session: PHPSESSID cookie for the random channel generator
            discovery_target: Minimum number of unique channel IDs to collect
            retry_delay: Seconds to wait after a failed discovery request
            max_retries: Consecutive discovery failures tolerated (None = unbounded)
            stats_authorization: Authorization header for the stats provider
            stats_device_id: Device ID header for the stats provider
            stats_client: Client identifier header for the stats provider
            batch_size: Channel IDs per stats request (1 - 5)
            workers: Concurrent stats requests (default: 1, sequential)
            credentials_file: Google service account file for tag enrichment
            storage_root: Root directory for checkpoints, report and logs
        """
        self._known_channels = tuple(known_channels)
        self._stats_from = stats_from
        self._stats_to = stats_to
        self._discovery_session = discovery_session
        self._discovery_target = discovery_target
        self._retry_delay = retry_delay
        self._max_retries = max_retries
        self._stats_authorization = stats_authorization
        self._stats_device_id = stats_device_id
        self._stats_client = stats_client
        self._batch_size = batch_size
        self._workers = workers
        self._credentials_file = credentials_file
        self._storage_root = storage_root

    @property
    def known_channels(self) -> List[str]:
        """Curated channel IDs, in their configured order."""
        return list(self._known_channels)

    @property
    def stats_from(self) -> date:
        """First day requested from the stats provider."""
        return self._stats_from

    @property
    def stats_to(self) -> date:
        """Last day requested from the stats provider."""
        return self._stats_to

    @property
    def discovery_session(self) -> str:
        """Session cookie for the discovery endpoint."""
        return self._discovery_session

    @property
    def discovery_target(self) -> int:
        """Minimum number of unique channel IDs to discover."""
        return self._discovery_target

    @property
    def retry_delay(self) -> float:
        """Fixed backoff between failed discovery requests."""
        return self._retry_delay

    @property
    def max_retries(self) -> Optional[int]:
        """Consecutive discovery failures tolerated (None = unbounded)."""
        return self._max_retries

    @property
    def stats_authorization(self) -> str:
        return self._stats_authorization

    @property
    def stats_device_id(self) -> str:
        return self._stats_device_id

    @property
    def stats_client(self) -> str:
        return self._stats_client

    @property
    def batch_size(self) -> int:
        """Channel IDs per stats request."""
        return self._batch_size

    @property
    def workers(self) -> int:
        """Concurrent stats requests."""
        return self._workers

    @property
    def credentials_file(self) -> str:
        """Google credentials used for tag enrichment."""
        return self._credentials_file

    @property
    def storage_root(self) -> str:
        """Root directory for storage."""
        return self._storage_root

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"AppConfig(known_channels={len(self._known_channels)}, "
            f"window={self.stats_from.isoformat()}..{self.stats_to.isoformat()}, "
            f"discovery_target={self.discovery_target}, "
            f"storage_root={self.storage_root!r})"
        )
