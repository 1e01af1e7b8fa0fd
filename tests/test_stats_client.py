import math
import threading
from datetime import date

import pytest
import requests

from conftest import FakeResponse, FakeSession
from timeline_pipeline.core.stats import BatchFetchError, MetricBatchClient
from timeline_pipeline.core.stats.channel import Sample
from timeline_pipeline.core.stats.stats_client import STATS_URL, chunked

FROM = date(2020, 4, 11)
TO = date(2021, 3, 11)


def stats_record(channel_id, views=(100,)):
    return {
        "id": channel_id,
        "title": f"Title {channel_id}",
        "stats": [
            {"recorded_at": f"2020-05-{day:02d}T00:00:00Z", "subscribers": 10, "views": v, "videos": 2}
            for day, v in enumerate(views, start=1)
        ],
    }


def echo_session(ids):
    """One response per chunk of 5, each echoing the ids of its chunk."""
    return FakeSession([FakeResponse([stats_record(i) for i in chunk]) for chunk in chunked(ids, 5)])


def make_client(session, **kwargs):
    return MetricBatchClient("auth-token", "device-1", session=session, **kwargs)


def test_chunked_splits_into_consecutive_groups():
    assert chunked(["a", "b", "c", "d", "e", "f", "g"], 5) == [["a", "b", "c", "d", "e"], ["f", "g"]]
    assert chunked([], 5) == []


def test_fetch_batch_sends_window_ids_and_credentials():
    session = FakeSession([FakeResponse([stats_record("UC1"), stats_record("UC2")])])
    channels = make_client(session).fetch_batch(["UC1", "UC2"], FROM, TO)

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", STATS_URL)
    assert kwargs["params"] == {"from": "2020-04-11", "to": "2021-03-11", "ids": "UC1,UC2"}
    assert kwargs["headers"]["Authorization"] == "auth-token"
    assert kwargs["headers"]["X-Amplitude-Device-ID"] == "device-1"
    assert kwargs["headers"]["X-Vidiq-Client"]

    assert [c.id for c in channels] == ["UC1", "UC2"]
    assert channels[0].samples[0].views == 100
    assert channels[0].samples[0].recorded_at.year == 2020
    assert channels[0].aggregated is False


def test_fetch_batch_rejects_more_than_five_ids():
    with pytest.raises(ValueError):
        make_client(FakeSession()).fetch_batch(["a", "b", "c", "d", "e", "f"], FROM, TO)


def test_fetch_batch_drops_channels_without_stats():
    payload = [stats_record("UC1"), {"id": "UC2", "title": "No data", "stats": None}]
    channels = make_client(FakeSession([FakeResponse(payload)])).fetch_batch(["UC1", "UC2"], FROM, TO)

    assert [c.id for c in channels] == ["UC1"]


@pytest.mark.parametrize("response", [
    requests.ConnectionError("down"),
    FakeResponse(status_code=401),
    FakeResponse(error=ValueError("bad json")),
    FakeResponse({"error": "not a list"}),
    FakeResponse([{"title": "missing id", "stats": []}]),
    FakeResponse([{"id": "UC1", "stats": [{"views": 3}]}]),
])
def test_fetch_batch_failures_are_fatal(response):
    with pytest.raises(BatchFetchError):
        make_client(FakeSession([response])).fetch_batch(["UC1"], FROM, TO)


@pytest.mark.parametrize("count", [1, 5, 6, 12])
def test_fetch_all_issues_one_call_per_chunk_in_order(count):
    ids = [f"UC{i:02d}" for i in range(count)]
    session = echo_session(ids)

    channels = make_client(session).fetch_all(ids, FROM, TO)

    assert len(session.calls) == math.ceil(count / 5)
    assert [c.id for c in channels] == ids
    assert all(len(call[2]["params"]["ids"].split(",")) <= 5 for call in session.calls)


class ChunkEchoSession(FakeSession):
    """Answers every request with records for exactly the requested ids."""

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs, threading.get_ident()))
        return FakeResponse([stats_record(i) for i in kwargs["params"]["ids"].split(",")])


def test_fetch_all_with_workers_preserves_chunk_order():
    ids = [f"UC{i:02d}" for i in range(23)]
    sessions = []

    def new_session():
        session = ChunkEchoSession()
        sessions.append(session)
        return session

    client = MetricBatchClient("auth-token", "device-1", workers=4, session_factory=new_session)
    channels = client.fetch_all(ids, FROM, TO)

    assert sum(len(s.calls) for s in sessions) == 5
    assert [c.id for c in channels] == ids


def test_each_worker_thread_gets_its_own_session():
    ids = [f"UC{i:02d}" for i in range(40)]
    sessions = []
    def new_session():
        session = ChunkEchoSession()
        sessions.append(session)
        return session

    client = MetricBatchClient("auth-token", "device-1", workers=3, session_factory=new_session)
    client.fetch_all(ids, FROM, TO)

    assert 1 <= len(sessions) <= 3
    for session in sessions:
        assert len({call[3] for call in session.calls}) == 1
    owners = [session.calls[0][3] for session in sessions if session.calls]
    assert len(owners) == len(set(owners))


def test_sequential_fetch_reuses_one_session():
    sessions = []

    def new_session():
        session = ChunkEchoSession()
        sessions.append(session)
        return session

    client = MetricBatchClient("auth-token", "device-1", session_factory=new_session)
    client.fetch_all([f"UC{i}" for i in range(12)], FROM, TO)

    assert len(sessions) == 1
    assert len(sessions[0].calls) == 3


def test_fetch_all_aborts_on_first_failure():
    ids = [f"UC{i}" for i in range(10)]
    session = FakeSession([FakeResponse([stats_record(i) for i in ids[:5]]), FakeResponse(status_code=500)])

    with pytest.raises(BatchFetchError):
        make_client(session).fetch_all(ids, FROM, TO)


def test_sample_rejects_negative_counters():
    record = {"recorded_at": "2020-05-01T00:00:00Z", "subscribers": 10, "views": -5, "videos": 2}

    with pytest.raises(ValueError, match="views"):
        Sample.from_dict(record)


def test_sample_treats_missing_counters_as_zero():
    sample = Sample.from_dict({"recorded_at": "2020-05-01T00:00:00Z", "views": None})

    assert (sample.subscribers, sample.views, sample.videos) == (0, 0, 0)


def test_negative_counter_in_batch_is_fatal():
    record = stats_record("UC1", views=(100, -1))
    session = FakeSession([FakeResponse([record])])

    with pytest.raises(BatchFetchError):
        make_client(session).fetch_batch(["UC1"], FROM, TO)
