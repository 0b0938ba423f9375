"""Unit tests for per-facility coverage analysis."""

import pytest

from src.domain.coverage import CoverageAnalyzer
from src.domain.distance import distance_m
from src.domain.entities import (
    GeoPoint,
    InvalidFacility,
    InvalidRequest,
    SimulationRequest,
)
from src.domain.enums import OrderType

from tests.conftest import CUSTOMER, MIDTOWN


def _request(**overrides) -> SimulationRequest:
    fields = dict(point=CUSTOMER, product="Product A", order_type=OrderType.STANDARD)
    fields.update(overrides)
    return SimulationRequest(**fields)


class TestRadius:
    def setup_method(self):
        self.analyzer = CoverageAnalyzer()

    def test_out_of_radius(self, make_facility):
        facility = make_facility(radius_meters=3000)
        [result] = self.analyzer.analyze(CUSTOMER, [facility], _request())
        assert result.distance_meters > 3000
        assert not result.is_in_range
        assert not result.can_fulfill

    def test_in_radius_with_eta(self, make_facility):
        facility = make_facility(radius_meters=6000, capacity=100, current_load=50)
        [result] = self.analyzer.analyze(CUSTOMER, [facility], _request())
        assert result.is_in_range
        assert result.has_product
        assert result.load_percentage == 50
        assert result.travel_time_minutes == 16
        assert result.delivery_time_minutes == 19
        assert result.can_fulfill

    def test_radius_boundary_is_inclusive(self, make_facility):
        exact = distance_m(CUSTOMER, MIDTOWN)
        facility = make_facility(radius_meters=exact)
        [result] = self.analyzer.analyze(CUSTOMER, [facility], _request())
        assert result.is_in_range


class TestAvailability:
    def setup_method(self):
        self.analyzer = CoverageAnalyzer()

    @pytest.mark.parametrize("product", [None, "", "any", "all", "ANY"])
    def test_no_product_filter(self, make_facility, product):
        facility = make_facility(products=frozenset())
        [result] = self.analyzer.analyze(CUSTOMER, [facility], _request(product=product))
        assert result.has_product

    def test_missing_product(self, make_facility):
        facility = make_facility(products={"Product B"})
        [result] = self.analyzer.analyze(CUSTOMER, [facility], _request())
        assert not result.has_product
        assert not result.can_fulfill

    def test_variant_available_through_parent_product(self, make_facility, variants):
        facility = make_facility()
        [result] = self.analyzer.analyze(
            CUSTOMER, [facility], _request(product=None, variant_id="var-1"), variants
        )
        assert result.has_variant
        assert result.can_fulfill

    def test_variant_of_unstocked_product(self, make_facility, variants):
        facility = make_facility()
        [result] = self.analyzer.analyze(
            CUSTOMER, [facility], _request(product=None, variant_id="var-9"), variants
        )
        assert not result.has_variant
        assert not result.can_fulfill

    def test_unknown_variant_never_matches(self, make_facility, variants):
        facility = make_facility()
        [result] = self.analyzer.analyze(
            CUSTOMER, [facility], _request(variant_id="var-404"), variants
        )
        assert not result.has_variant

    def test_variant_sentinel_means_no_filter(self, make_facility):
        [result] = self.analyzer.analyze(
            CUSTOMER, [make_facility()], _request(variant_id="all")
        )
        assert result.has_variant

    def test_inactive_facility_cannot_fulfill(self, make_facility):
        facility = make_facility(is_active=False)
        [result] = self.analyzer.analyze(CUSTOMER, [facility], _request())
        assert result.is_in_range and result.has_product
        assert not result.can_fulfill


class TestAnalyze:
    def test_preserves_input_order(self, make_facility):
        facilities = [
            make_facility(id="far", coordinates=GeoPoint(40.9, -74.0)),
            make_facility(id="near", coordinates=CUSTOMER),
            make_facility(id="mid", coordinates=MIDTOWN),
        ]
        results = CoverageAnalyzer().analyze(CUSTOMER, facilities, _request())
        assert [r.facility.id for r in results] == ["far", "near", "mid"]

    def test_overload_is_not_clamped(self, make_facility):
        facility = make_facility(capacity=100, current_load=150)
        [result] = CoverageAnalyzer().analyze(CUSTOMER, [facility], _request())
        assert result.load_percentage == 150
        # 16 min base x 1.5 high-load factor
        assert result.delivery_time_minutes == 24

    def test_empty_facility_list(self):
        assert CoverageAnalyzer().analyze(CUSTOMER, [], _request()) == []


class TestNearest:
    def test_nearest_by_distance_with_preparation(self, make_facility):
        facilities = [
            make_facility(id="mid", coordinates=MIDTOWN),
            make_facility(id="here", coordinates=CUSTOMER, current_load=99),
            make_facility(id="off", coordinates=CUSTOMER, is_active=False),
        ]
        check = CoverageAnalyzer().nearest(CUSTOMER, facilities, _request())
        assert check.nearest.facility.id == "here"
        assert check.eta_minutes == 10  # 0 min travel + 10 min preparation
        assert [r.facility.id for r in check.alternatives] == ["mid"]

    def test_rank_nearest_reuses_analysed_results(self, make_facility):
        facilities = [
            make_facility(id="mid", coordinates=MIDTOWN),
            make_facility(id="here", coordinates=CUSTOMER),
        ]
        analyzer = CoverageAnalyzer()
        results = analyzer.analyze(CUSTOMER, facilities, _request())
        check = analyzer.rank_nearest(results)
        assert check == analyzer.nearest(CUSTOMER, facilities, _request())
        assert check.nearest is results[1]

    def test_nearest_none_when_nothing_fulfils(self, make_facility):
        facility = make_facility(radius_meters=100)
        assert CoverageAnalyzer().nearest(CUSTOMER, [facility], _request()) is None


class TestValidation:
    def test_zero_capacity_rejected(self, make_facility):
        with pytest.raises(InvalidFacility):
            make_facility(capacity=0)

    def test_negative_radius_rejected(self, make_facility):
        with pytest.raises(InvalidFacility):
            make_facility(radius_meters=-1)

    def test_negative_load_rejected(self, make_facility):
        with pytest.raises(InvalidFacility):
            make_facility(current_load=-5)

    def test_unknown_order_type_is_invalid_request(self):
        with pytest.raises(InvalidRequest, match="unknown order type"):
            _request(order_type="overnight")

    def test_order_type_string_coerced(self):
        assert _request(order_type="express").order_type is OrderType.EXPRESS

    def test_quantity_must_be_positive(self):
        with pytest.raises(InvalidRequest):
            _request(quantity=0)

    def test_products_stored_as_frozenset(self, make_facility):
        facility = make_facility(products=["Product A", "Product A", "Product B"])
        assert facility.products == frozenset({"Product A", "Product B"})
