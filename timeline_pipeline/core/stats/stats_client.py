"""
Channel Stats Client
Retrieves daily view/subscriber/video history from the vidIQ public stats API.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Callable, List, Optional, Sequence

import requests

from .channel import Channel

logger = logging.getLogger(__name__)

STATS_URL = "https://api.vidiq.com/youtube/channels/public/stats"

# The provider answers at most this many channels per request.
MAX_BATCH_SIZE = 5


class BatchFetchError(Exception):
    """Raised when a stats batch cannot be retrieved or parsed."""
    pass


def chunked(ids: Sequence[str], size: int) -> List[List[str]]:
    """Split ids into consecutive chunks of at most `size`."""
    return [list(ids[i:i + size]) for i in range(0, len(ids), size)]


class MetricBatchClient:
    """
    Client for the stats provider.

    The credentials are opaque tokens lifted from the browser extension;
    this client only forwards them.

    Each worker thread opens its own session from `session_factory`. A
    `session` passed in explicitly is used as is by every worker, so it must
    be safe to share across threads.
    """

    def __init__(
        self,
        authorization: str,
        device_id: str,
        client_name: str = "ext vff/3.43.2",
        batch_size: int = MAX_BATCH_SIZE,
        workers: int = 1,
        session: Optional[requests.Session] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
        timeout: float = 30
    ):
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}")
        self._session = session
        self._session_factory = session_factory
        self._local = threading.local()
        self._batch_size = batch_size
        self._workers = max(1, workers)
        self._timeout = timeout
        self._headers = {
            "X-Amplitude-Device-ID": device_id,
            "Authorization": authorization,
            "Content-Type": "application/json",
            "X-Vidiq-Client": client_name,
        }

    def _http(self) -> requests.Session:
        """Session for the calling thread."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
        return session

    def fetch_batch(self, ids: Sequence[str], from_date: date, to_date: date) -> List[Channel]:
        """
        Low-level call for a single batch of channel IDs.

        Raises:
            ValueError: If more ids are passed than the provider accepts
            BatchFetchError: On any transport, HTTP or parse failure
        """
        if len(ids) > MAX_BATCH_SIZE:
            raise ValueError(f"At most {MAX_BATCH_SIZE} channel ids per batch, got {len(ids)}")
        if not ids:
            return []

        params = {
            "from": from_date.isoformat(),
            "to": to_date.isoformat(),
            "ids": ",".join(ids),
        }
        try:
            response = self._http().get(STATS_URL, params=params, headers=self._headers, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise BatchFetchError(f"Stats request failed for {params['ids']}: {e}")

        if not isinstance(payload, list):
            raise BatchFetchError(f"Unexpected stats payload for {params['ids']}: {type(payload).__name__}")

        channels = []
        try:
            for item in payload:
                channel = Channel.from_dict(item)
                if channel is None:
                    logger.warning(f"No stats returned for channel {item.get('id')}, dropping it")
                    continue
                channels.append(channel)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise BatchFetchError(f"Malformed stats record for {params['ids']}: {e}")

        return channels

    def fetch_all(self, ids: Sequence[str], from_date: date, to_date: date) -> List[Channel]:
        """
        Fetch stats for every id, one request per chunk.

        Results are concatenated in chunk order regardless of `workers`.
        """
        batches = chunked(list(ids), self._batch_size)
        logger.info(f"Requesting stats for {len(ids)} channels in {len(batches)} batches")

        def fetch(indexed_batch):
            index, batch = indexed_batch
            logger.info(f"Processing batch {index + 1}/{len(batches)}: {', '.join(batch)}")
            return self.fetch_batch(batch, from_date, to_date)

        if self._workers == 1:
            results = [fetch(b) for b in enumerate(batches)]
        else:
            with ThreadPoolExecutor(max_workers=self._workers) as executor:
                results = list(executor.map(fetch, enumerate(batches)))

        channels: List[Channel] = []
        for batch_channels in results:
            channels.extend(batch_channels)

        logger.info(f"Found stats for {len(channels)} channels")
        return channels
