"""Tests for great-circle distance and boundary checks."""
import pytest
from hypothesis import given, strategies as st

from app.application.services.bounding_box_provider import ATHENS_BOUNDING_BOX
from app.application.services.geographical_service import GeographicalService
from app.domain.value_objects.coordinates import Coordinates

coordinates = st.builds(
    Coordinates,
    st.floats(min_value=-90, max_value=90),
    st.floats(min_value=-180, max_value=180),
)


class TestCalculateDistance:
    """Haversine distance properties."""

    @given(coordinates)
    def test_distance_to_self_is_zero(self, point):
        assert GeographicalService().calculate_distance(point, point) == pytest.approx(0.0, abs=1e-6)

    @given(coordinates, coordinates)
    def test_distance_is_symmetric(self, a, b):
        service = GeographicalService()
        assert service.calculate_distance(a, b) == pytest.approx(
            service.calculate_distance(b, a), rel=1e-9, abs=1e-6
        )

    @given(coordinates, coordinates)
    def test_distance_is_bounded_by_half_circumference(self, a, b):
        service = GeographicalService()
        distance = service.calculate_distance(a, b)
        assert 0.0 <= distance <= 3.1416 * service.earth_radius_meters

    def test_one_degree_of_latitude(self):
        distance = GeographicalService().calculate_distance(
            Coordinates(37.0, 23.7), Coordinates(38.0, 23.7)
        )
        assert distance == pytest.approx(111_195, rel=1e-3)

    def test_syntagma_to_acropolis(self):
        distance = GeographicalService().calculate_distance(
            Coordinates(37.9755, 23.7348), Coordinates(37.9715, 23.7257)
        )
        assert 850 < distance < 950


class TestIsWithinBoundary:

    def test_inside(self):
        assert GeographicalService().is_within_boundary(37.9838, 23.7275, ATHENS_BOUNDING_BOX)

    def test_outside(self):
        assert not GeographicalService().is_within_boundary(40.0, 23.7275, ATHENS_BOUNDING_BOX)

    def test_edge_is_inside(self):
        assert GeographicalService().is_within_boundary(38.1, 23.6, ATHENS_BOUNDING_BOX)
