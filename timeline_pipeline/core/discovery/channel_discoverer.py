"""
Channel Discovery Service
Collects random channel IDs from the generatorslist.com random channel generator.
"""

import logging
import re
import time
from typing import Callable, Iterable, List, Optional

import requests

from .channel_id_set import ChannelIdSet

logger = logging.getLogger(__name__)

GENERATOR_URL = "https://www.generatorslist.com/random/websites/random-youtube-channel/ajax"
GENERATOR_REFERER = "https://www.generatorslist.com/random/websites/random-youtube-channel"
CHANNEL_URL_PATTERN = re.compile(r"https://www\.youtube\.com/channel/([\w\-]+)")


class DiscoveryError(Exception):
    """Raised when discovery cannot produce any channel IDs."""
    pass


def extract_channel_ids(markup: str) -> List[str]:
    """Channel IDs linked from the generator's HTML fragment, in page order."""
    return CHANNEL_URL_PATTERN.findall(markup)


class ChannelIdDiscoverer:
    """
    Service responsible for growing a pool of channel IDs up to a target size.

    Responsibilities:
    - Request batches of random channels from the generator endpoint.
    - Deduplicate them against the seed and previous batches.
    - Retry failed requests after a fixed delay.
    """

    def __init__(
        self,
        session_id: str,
        retry_delay: float = 5.0,
        max_retries: Optional[int] = None,
        results_per_request: int = 100,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self._session_id = session_id
        self._retry_delay = retry_delay
        self._max_retries = max_retries
        self._results_per_request = results_per_request
        self._http = session or requests.Session()
        self._sleep = sleep

    def discover(self, seed: Iterable[str], target: int = 110) -> List[str]:
        """
        Collect unique channel IDs until at least `target` are known.

        Returns:
            List[str]: Unique IDs, seed first, then in discovery order.

        Raises:
            DiscoveryError: If the seed is empty and the first request yields
                nothing, or if `max_retries` consecutive requests fail.
        """
        ids = ChannelIdSet(seed)
        logger.info(f"Default channels {ids.size()}")

        attempts = 0
        failures = 0
        while ids.size() < target:
            attempts += 1
            try:
                batch = self.fetch_channel_ids()
            except (requests.RequestException, ValueError) as e:
                if attempts == 1 and ids.size() == 0:
                    raise DiscoveryError(f"No seed channels and the first discovery request failed: {e}")
                failures += 1
                if self._max_retries is not None and failures > self._max_retries:
                    raise DiscoveryError(f"Discovery failed {failures} times in a row, giving up: {e}")
                logger.warning(f"Discovery request failed ({e}), retrying in {self._retry_delay:g}s")
                self._sleep(self._retry_delay)
                continue

            failures = 0
            added = ids.add(batch)
            logger.info(f"Found {len(batch)} channels ({added} new, {ids.size()}/{target})")

            if attempts == 1 and ids.size() == 0:
                raise DiscoveryError("No seed channels and the first discovery request returned no channels")

        logger.info(f"Found {ids.size()} channels total!")
        return ids.snapshot()

    def fetch_channel_ids(self) -> List[str]:
        """
        Low-level call returning one batch of freshly generated channel IDs.

        Raises:
            requests.RequestException: On transport or HTTP errors
            ValueError: If the response is not the expected JSON document
        """
        response = self._http.post(
            GENERATOR_URL,
            data={"numResults": str(self._results_per_request)},
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Referer": GENERATOR_REFERER,
            },
            cookies={"PHPSESSID": self._session_id},
            timeout=30
        )
        response.raise_for_status()
        payload = response.json()

        if not isinstance(payload, dict) or not isinstance(payload.get("Content"), str):
            raise ValueError("Generator response has no 'Content' markup")

        return extract_channel_ids(payload["Content"])
