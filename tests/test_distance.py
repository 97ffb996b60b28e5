import pytest

from core.spatial import GeometryService
from db.models import JourneySection, StationPass
from journeys.services.distance import calculate_journey_distance, section_coordinates


def _section(*points: tuple[float | None, float | None]) -> JourneySection:
    """Section whose passes have the given (x, y) = (lat, lon) coordinates."""
    return JourneySection(
        passes=[
            StationPass(
                stationName=f"Stop {i}",
                stationCoordinateX=x,
                stationCoordinateY=y,
            )
            for i, (x, y) in enumerate(points)
        ]
    )


def test_repeated_pass_does_not_change_distance() -> None:
    with_repeat = _section((0, 0), (0, 1), (0, 1), (1, 1))
    without_repeat = _section((0, 0), (0, 1), (1, 1))

    assert calculate_journey_distance([with_repeat]) == pytest.approx(
        calculate_journey_distance([without_repeat])
    )
    assert calculate_journey_distance([with_repeat]) > 0


def test_empty_and_single_pass_sections_are_zero() -> None:
    assert calculate_journey_distance([JourneySection()]) == 0.0
    assert calculate_journey_distance([_section((47.3, 8.5))]) == 0.0
    assert calculate_journey_distance([_section((47.3, 8.5), (47.3, 8.5))]) == 0.0
    assert calculate_journey_distance([]) == 0.0


def test_distance_sums_sections() -> None:
    first = _section((47.0, 8.0), (47.5, 8.0))
    second = _section((47.5, 8.0), (47.5, 8.5))

    total = calculate_journey_distance([first, second])

    assert total == pytest.approx(
        calculate_journey_distance([first]) + calculate_journey_distance([second])
    )


def test_x_is_latitude_and_y_is_longitude() -> None:
    # Zurich HB -> Bern: roughly 95 km as the crow flies.
    section = _section((47.378177, 8.540192), (46.948832, 7.439136))

    assert section_coordinates(section) == [
        [8.540192, 47.378177],
        [7.439136, 46.948832],
    ]
    assert calculate_journey_distance([section]) == pytest.approx(95.5, abs=1.5)


def test_distance_unit_can_be_overridden() -> None:
    section = _section((0.0, 0.0), (1.0, 0.0))

    km = calculate_journey_distance([section], unit="km")
    meters = calculate_journey_distance([section], unit="meters")

    assert meters == pytest.approx(km * 1000.0)
    assert km == pytest.approx(
        GeometryService.haversine_distance(0.0, 0.0, 0.0, 1.0, unit="km")
    )


def test_malformed_passes_are_skipped() -> None:
    section = _section((47.0, 8.0), (None, 8.2), (95.0, 8.3), (47.1, 8.0))

    assert section_coordinates(section) == [[8.0, 47.0], [8.0, 47.1]]
    assert calculate_journey_distance([section]) == pytest.approx(
        GeometryService.haversine_distance(8.0, 47.0, 8.0, 47.1, unit="km")
    )
