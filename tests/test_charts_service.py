from __future__ import annotations

from datetime import UTC, datetime

import pytest

from db.models import Journey, JourneySection, StationPass
from stats.models import Period
from stats.services.charts_service import ChartsService
from stats.services.periods import labels_for, window_start

NOW = datetime(2024, 1, 10, 18, 0, tzinfo=UTC)


def _journey(departure: datetime) -> Journey:
    return Journey(
        userId="user-1",
        departureTime=departure,
        sections=[
            JourneySection(
                passes=[
                    StationPass(stationCoordinateX=47.0, stationCoordinateY=8.0),
                    StationPass(stationCoordinateX=47.1, stationCoordinateY=8.0),
                ]
            )
        ],
    )


def _patch_queries(
    monkeypatch: pytest.MonkeyPatch,
    rows: list[dict],
    journeys: list[Journey],
) -> dict:
    calls: dict = {}

    async def fake_aggregate_to_list(model, pipeline, **_kwargs):
        calls["model"] = model
        calls["pipeline"] = pipeline
        return rows

    async def fake_fetch(user_id, start):
        calls["fetch"] = (user_id, start)
        return journeys

    monkeypatch.setattr(
        "stats.services.charts_service.aggregate_to_list",
        fake_aggregate_to_list,
    )
    monkeypatch.setattr(
        ChartsService,
        "fetch_window_journeys",
        staticmethod(fake_fetch),
    )
    return calls


def _fixed_distances(
    monkeypatch: pytest.MonkeyPatch,
    distances: list[tuple[Journey, float]],
) -> None:
    """Give each journey a known distance in km."""
    by_sections = {id(journey.sections): km for journey, km in distances}

    def fake_distance(sections):
        return by_sections[id(sections)]

    monkeypatch.setattr(
        "stats.services.charts_service.calculate_journey_distance",
        fake_distance,
    )


@pytest.mark.asyncio
async def test_week_example_single_journey(
    monkeypatch: pytest.MonkeyPatch,
    beanie_db,
) -> None:
    journey = _journey(datetime(2024, 1, 8, 7, 30, tzinfo=UTC))
    _patch_queries(
        monkeypatch,
        rows=[{"label": datetime(2024, 1, 8, tzinfo=UTC), "value": 1}],
        journeys=[journey],
    )
    _fixed_distances(monkeypatch, [(journey, 12.3)])

    charts = await ChartsService.get_period_charts(
        "user-1", Period.WEEK, now=NOW, tz_name="UTC"
    )

    counts = {b.label: b.value for b in charts.journeyCount}
    distances = {b.label: b.value for b in charts.distanceCount}
    assert len(charts.journeyCount) == 7
    assert counts["2024-01-08"] == 1
    assert sum(counts.values()) == 1
    assert distances["2024-01-08"] == pytest.approx(12.3)
    assert all(v == 0 for label, v in distances.items() if label != "2024-01-08")
    assert [b.label for b in charts.journeyCount] == [
        b.label for b in charts.distanceCount
    ]


@pytest.mark.asyncio
async def test_empty_window_is_zero_filled(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_queries(monkeypatch, rows=[], journeys=[])

    charts = await ChartsService.get_period_charts(
        "user-1", Period.MONTH, now=NOW, tz_name="UTC"
    )

    assert len(charts.journeyCount) == 30
    assert len(charts.distanceCount) == 30
    assert all(b.value == 0 for b in charts.journeyCount)
    assert all(b.value == 0 for b in charts.distanceCount)


@pytest.mark.asyncio
async def test_series_length_ignores_extra_rows(monkeypatch: pytest.MonkeyPatch) -> None:
    rows = [
        # Outside the window and in the future: both dropped.
        {"label": datetime(2023, 12, 1, tzinfo=UTC), "value": 4},
        {"label": datetime(2024, 1, 11, tzinfo=UTC), "value": 2},
        {"label": datetime(2024, 1, 9, tzinfo=UTC), "value": 3},
    ]
    _patch_queries(monkeypatch, rows=rows, journeys=[])

    charts = await ChartsService.get_period_charts(
        "user-1", Period.WEEK, now=NOW, tz_name="UTC"
    )

    assert len(charts.journeyCount) == 7
    assert [b.value for b in charts.journeyCount] == [0, 0, 0, 0, 0, 3, 0]


@pytest.mark.asyncio
async def test_year_counts_sum_to_journeys_in_window(
    monkeypatch: pytest.MonkeyPatch,
    beanie_db,
) -> None:
    rows = [
        {"label": datetime(2023, 2, 1, tzinfo=UTC), "value": 2},
        {"label": datetime(2023, 7, 1, tzinfo=UTC), "value": 5},
        {"label": datetime(2024, 1, 1, tzinfo=UTC), "value": 1},
    ]
    early_feb = _journey(datetime(2023, 2, 3, tzinfo=UTC))
    late_feb = _journey(datetime(2023, 2, 28, 22, 0, tzinfo=UTC))
    january = _journey(datetime(2024, 1, 9, tzinfo=UTC))
    calls = _patch_queries(
        monkeypatch, rows=rows, journeys=[early_feb, late_feb, january]
    )
    _fixed_distances(monkeypatch, [(early_feb, 10.0), (late_feb, 5.0), (january, 2.5)])

    charts = await ChartsService.get_period_charts(
        "user-1", Period.YEAR, now=NOW, tz_name="UTC"
    )

    labels = [b.label for b in charts.journeyCount]
    assert labels[0] == "2023-02-01"
    assert labels[-1] == "2024-01-01"
    assert sum(b.value for b in charts.journeyCount) == 8
    distances = {b.label: b.value for b in charts.distanceCount}
    assert distances["2023-02-01"] == pytest.approx(15.0)
    assert distances["2024-01-01"] == pytest.approx(2.5)
    assert calls["fetch"] == ("user-1", datetime(2023, 2, 1, tzinfo=UTC))


@pytest.mark.asyncio
async def test_count_pipeline_uses_window_and_granularity(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls = _patch_queries(monkeypatch, rows=[], journeys=[])

    await ChartsService.get_period_charts(
        "user-1", Period.WEEK, now=NOW, tz_name="Europe/Zurich"
    )

    assert calls["model"] is Journey
    match = calls["pipeline"][0]["$match"]
    assert match["userId"] == "user-1"
    # Midnight of 2024-01-04 in Zurich is 23:00 UTC the day before.
    assert match["departureTime"]["$gte"] == datetime(2024, 1, 3, 23, 0, tzinfo=UTC)
    group_id = calls["pipeline"][1]["$group"]["_id"]["$dateTrunc"]
    assert group_id["unit"] == "day"
    assert group_id["timezone"] == "Europe/Zurich"

    year_pipeline = ChartsService.build_count_pipeline(
        "user-1", Period.YEAR, NOW, "UTC"
    )
    assert year_pipeline[1]["$group"]["_id"]["$dateTrunc"]["unit"] == "month"


@pytest.mark.asyncio
@pytest.mark.parametrize("period", list(Period))
async def test_both_queries_share_the_period_window(
    monkeypatch: pytest.MonkeyPatch,
    period: Period,
) -> None:
    calls = _patch_queries(monkeypatch, rows=[], journeys=[])

    charts = await ChartsService.get_period_charts(
        "user-1", period, now=NOW, tz_name="Europe/Zurich"
    )

    start = window_start(period, NOW, "Europe/Zurich")
    assert calls["pipeline"][0]["$match"]["departureTime"]["$gte"] == start
    assert calls["fetch"] == ("user-1", start)
    assert [b.label for b in charts.journeyCount] == labels_for(
        period, NOW, "Europe/Zurich"
    )


@pytest.mark.asyncio
async def test_buckets_follow_timezone(
    monkeypatch: pytest.MonkeyPatch,
    beanie_db,
) -> None:
    # 23:30 UTC on the 8th is the 9th in Zurich.
    journey = _journey(datetime(2024, 1, 8, 23, 30, tzinfo=UTC))
    rows = [{"label": datetime(2024, 1, 8, 23, 0, tzinfo=UTC), "value": 1}]
    _patch_queries(monkeypatch, rows=rows, journeys=[journey])
    _fixed_distances(monkeypatch, [(journey, 4.0)])

    charts = await ChartsService.get_period_charts(
        "user-1", Period.WEEK, now=NOW, tz_name="Europe/Zurich"
    )

    counts = {b.label: b.value for b in charts.journeyCount}
    distances = {b.label: b.value for b in charts.distanceCount}
    assert counts["2024-01-09"] == 1
    assert distances["2024-01-09"] == pytest.approx(4.0)
    assert counts["2024-01-08"] == 0


@pytest.mark.asyncio
async def test_database_errors_propagate(monkeypatch: pytest.MonkeyPatch) -> None:
    async def failing_aggregate(*_args, **_kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(
        "stats.services.charts_service.aggregate_to_list",
        failing_aggregate,
    )

    with pytest.raises(RuntimeError, match="connection reset"):
        await ChartsService.get_period_charts("user-1", Period.WEEK, now=NOW)


@pytest.mark.asyncio
async def test_fill_distance_buckets_uses_real_distance(beanie_db) -> None:
    journey = _journey(NOW)

    series = ChartsService.fill_distance_buckets(
        ["2024-01-09", "2024-01-10"], [journey], Period.WEEK, "UTC"
    )

    assert series[0].value == 0
    # 0.1 degree of latitude.
    assert series[1].value == pytest.approx(11.119, abs=0.01)


@pytest.mark.asyncio
async def test_fetch_window_journeys_scopes_to_user(beanie_db) -> None:
    inside = _journey(datetime(2024, 1, 8, 7, 30, tzinfo=UTC))
    other_user = _journey(datetime(2024, 1, 8, 9, 0, tzinfo=UTC))
    other_user.userId = "user-2"
    await inside.insert()
    await other_user.insert()

    journeys = await ChartsService.fetch_window_journeys(
        "user-1", datetime(2024, 1, 1, tzinfo=UTC)
    )

    assert [j.id for j in journeys] == [inside.id]
