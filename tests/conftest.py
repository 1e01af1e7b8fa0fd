from datetime import datetime, timezone

import pytest
import requests

from timeline_pipeline.core.stats import Channel, Sample


def make_sample(year, month, day=1, views=100, subscribers=10, videos=1):
    return Sample(
        recorded_at=datetime(year, month, day, tzinfo=timezone.utc),
        subscribers=subscribers,
        views=views,
        videos=videos,
    )


def make_channel(channel_id, samples=(), title=None):
    return Channel(id=channel_id, title=title or f"Title {channel_id}", samples=list(samples))


class FakeResponse:
    def __init__(self, payload=None, status_code=200, error=None):
        self._payload = payload
        self.status_code = status_code
        self._error = error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._error is not None:
            raise self._error
        return self._payload


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records calls."""

    def __init__(self, responses=()):
        self.responses = list(responses)
        self.calls = []

    def _next(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)


@pytest.fixture
def sleeps():
    return []
