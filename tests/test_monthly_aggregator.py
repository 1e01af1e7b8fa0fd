from conftest import make_channel, make_sample
from timeline_pipeline.core.analysis import MonthlyAggregator


def test_averages_each_month_with_floor_division():
    channel = make_channel("UC1", [
        make_sample(2020, 5, 1, views=100, subscribers=10, videos=1),
        make_sample(2020, 5, 2, views=101, subscribers=11, videos=2),
        make_sample(2020, 5, 3, views=103, subscribers=11, videos=2),
        make_sample(2020, 6, 1, views=500, subscribers=50, videos=5),
    ])

    result = MonthlyAggregator().aggregate(channel)

    may, june = result.samples
    assert (may.views, may.subscribers, may.videos) == (101, 10, 1)
    assert may.recorded_at == channel.samples[0].recorded_at
    assert (june.views, june.subscribers, june.videos) == (500, 50, 5)
    assert result.aggregated is True


def test_input_channel_is_left_untouched():
    channel = make_channel("UC1", [make_sample(2020, 5, 1), make_sample(2020, 5, 2)])
    MonthlyAggregator().aggregate(channel)

    assert len(channel.samples) == 2
    assert channel.aggregated is False


def test_zero_view_samples_are_discarded():
    channel = make_channel("UC1", [
        make_sample(2020, 5, 1, views=0, subscribers=999),
        make_sample(2020, 5, 2, views=200, subscribers=20),
    ])

    (may,) = MonthlyAggregator().aggregate(channel).samples

    assert may.views == 200
    assert may.subscribers == 20
    assert may.recorded_at.day == 2


def test_channel_with_only_zero_views_aggregates_to_nothing():
    channel = make_channel("UC1", [make_sample(2020, 5, d, views=0) for d in range(1, 4)])
    result = MonthlyAggregator().aggregate(channel)

    assert result.samples == []
    assert result.aggregated is True


def test_channel_without_samples_aggregates_to_nothing():
    assert MonthlyAggregator().aggregate(make_channel("UC1")).samples == []


def test_aggregating_twice_is_idempotent():
    channel = make_channel("UC1", [
        make_sample(2020, m, d, views=100 * m + d) for m in (4, 5, 6) for d in (1, 15, 28)
    ])
    aggregator = MonthlyAggregator()

    once = aggregator.aggregate(channel)
    twice = aggregator.aggregate(once)

    assert set(twice.samples) == set(once.samples)
    assert len(once.samples) == 3


def test_same_month_of_different_years_is_not_merged():
    channel = make_channel("UC1", [
        make_sample(2020, 5, 1, views=100),
        make_sample(2021, 5, 1, views=300),
    ])

    samples = MonthlyAggregator().aggregate(channel).samples

    assert sorted((s.recorded_at.year, s.views) for s in samples) == [(2020, 100), (2021, 300)]


def test_buckets_follow_first_appearance_order():
    channel = make_channel("UC1", [
        make_sample(2020, 7, 1, views=7),
        make_sample(2020, 5, 1, views=5),
        make_sample(2020, 7, 2, views=9),
    ])

    samples = MonthlyAggregator().aggregate(channel).samples

    assert [s.recorded_at.month for s in samples] == [7, 5]
    assert samples[0].views == 8


def test_aggregate_all_keeps_channel_order():
    channels = [make_channel(f"UC{i}", [make_sample(2020, 5, 1)]) for i in range(3)]
    result = MonthlyAggregator().aggregate_all(channels)

    assert [c.id for c in result] == ["UC0", "UC1", "UC2"]
    assert all(c.aggregated for c in result)
