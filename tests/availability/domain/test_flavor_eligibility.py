"""Tests for flavor selection and flavor-level stock rollups."""

import dataclasses

import pytest
from availability.stock.flavors import (
    LegacyFlavor,
    TrackedFlavor,
    eligible_flavors,
    flavor_options,
    flavor_stock_status,
    is_flavor_low_stock,
    is_flavor_out_of_stock,
    low_stock_flavors,
    out_of_stock_flavors,
    product_stock_status,
    product_total_available,
)
from availability.stock.levels import StockStatus


def _flavors():
    return [
        TrackedFlavor(name="Mango Ice", inventory=20, reserved_inventory=2),
        TrackedFlavor(name="Blueberry", inventory=4, reserved_inventory=4),
        TrackedFlavor(name="Watermelon", inventory=3, reserved_inventory=0),
        TrackedFlavor(name="Grape", inventory=30, active=False),
    ]


def _names(flavors):
    return [f.name for f in flavors]


class TestVariants:
    def test_legacy_flavor_is_always_active(self):
        assert LegacyFlavor(name="Mint").active is True

    def test_tracked_flavor_defaults(self):
        flavor = TrackedFlavor(name="Mint")
        assert flavor.inventory == 0
        assert flavor.reserved_inventory == 0
        assert flavor.low_stock_threshold == 5
        assert flavor.active is True
        assert flavor.flavor_id is None

    def test_variants_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            TrackedFlavor(name="Mint").inventory = 3


class TestEligibleFlavorsTracked:
    def test_excludes_out_of_stock_and_inactive(self):
        assert _names(eligible_flavors(_flavors(), tracks_inventory=True)) == ["Mango Ice", "Watermelon"]

    def test_excludes_active_flavor_with_nothing_available(self):
        flavors = [TrackedFlavor(name="Peach", inventory=2, reserved_inventory=5)]
        assert eligible_flavors(flavors, tracks_inventory=True) == []

    def test_low_stock_flavor_is_still_eligible(self):
        flavors = [TrackedFlavor(name="Peach", inventory=1)]
        assert _names(eligible_flavors(flavors, tracks_inventory=True)) == ["Peach"]

    def test_preserves_order(self):
        flavors = [TrackedFlavor(name=n, inventory=10) for n in ("C", "A", "B")]
        assert _names(eligible_flavors(flavors, tracks_inventory=True)) == ["C", "A", "B"]

    def test_accepts_mappings(self):
        flavors = [
            {"name": "Kiwi", "inventory": 5, "reserved_inventory": 0, "low_stock_threshold": 5, "active": True},
            {"name": "Lime", "inventory": 0, "reserved_inventory": 0, "low_stock_threshold": 5, "active": True},
        ]
        assert [f["name"] for f in eligible_flavors(flavors, tracks_inventory=True)] == ["Kiwi"]


class TestEligibleFlavorsUntracked:
    def test_returns_every_active_flavor_regardless_of_stock(self):
        assert _names(eligible_flavors(_flavors(), tracks_inventory=False)) == ["Mango Ice", "Blueberry", "Watermelon"]

    def test_legacy_flavors_all_eligible(self):
        flavors = [LegacyFlavor(name="Mint"), LegacyFlavor(name="Cola")]
        assert eligible_flavors(flavors, tracks_inventory=False) == flavors

    def test_legacy_flavor_in_tracked_mode_has_no_stock_to_gate_on(self):
        flavors = [LegacyFlavor(name="Mint")]
        assert eligible_flavors(flavors, tracks_inventory=True) == flavors

    def test_empty_list(self):
        assert eligible_flavors([], tracks_inventory=False) == []
        assert eligible_flavors([], tracks_inventory=True) == []


class TestFlavorClassification:
    def test_inactive_flavor_is_out_of_stock(self):
        flavor = TrackedFlavor(name="Grape", inventory=30, active=False)
        assert is_flavor_out_of_stock(flavor)
        assert flavor_stock_status(flavor) == StockStatus.OUT_OF_STOCK

    def test_inactive_flavor_is_never_low_stock(self):
        assert not is_flavor_low_stock(TrackedFlavor(name="Grape", inventory=2, active=False))

    def test_active_flavor_statuses(self):
        assert flavor_stock_status(TrackedFlavor(name="A", inventory=20)) == StockStatus.IN_STOCK
        assert flavor_stock_status(TrackedFlavor(name="B", inventory=5)) == StockStatus.LOW_STOCK
        assert flavor_stock_status(TrackedFlavor(name="C", inventory=0)) == StockStatus.OUT_OF_STOCK


class TestProductRollups:
    def test_total_available_counts_active_flavors_only(self):
        # 18 + 0 + 3, Grape is inactive
        assert product_total_available(_flavors()) == 21

    def test_status_low_when_any_active_flavor_is_low(self):
        assert product_stock_status(_flavors()) == StockStatus.LOW_STOCK

    def test_status_in_stock(self):
        flavors = [TrackedFlavor(name="A", inventory=20), TrackedFlavor(name="B", inventory=0)]
        assert product_stock_status(flavors) == StockStatus.IN_STOCK

    def test_status_out_when_every_active_flavor_is_out(self):
        flavors = [
            TrackedFlavor(name="A", inventory=2, reserved_inventory=2),
            TrackedFlavor(name="B", inventory=50, active=False),
        ]
        assert product_stock_status(flavors) == StockStatus.OUT_OF_STOCK

    def test_status_out_without_active_flavors(self):
        assert product_stock_status([]) == StockStatus.OUT_OF_STOCK
        assert product_stock_status([TrackedFlavor(name="A", inventory=9, active=False)]) == StockStatus.OUT_OF_STOCK

    def test_low_and_out_lists_skip_inactive(self):
        assert _names(low_stock_flavors(_flavors())) == ["Watermelon"]
        assert _names(out_of_stock_flavors(_flavors())) == ["Blueberry"]


class TestFlavorOptions:
    def test_records_produce_tracked_options(self):
        records = [TrackedFlavor(name="Mango Ice", inventory=3, flavor_id="fl-1")]
        options, tracks = flavor_options(["Ignored"], records)

        assert tracks is True
        assert options == [TrackedFlavor(name="Mango Ice", inventory=3, flavor_id="fl-1")]

    def test_names_produce_legacy_options(self):
        options, tracks = flavor_options(["Mint", "Cola"], [])

        assert tracks is False
        assert options == [LegacyFlavor(name="Mint"), LegacyFlavor(name="Cola")]

    def test_nothing_at_all(self):
        assert flavor_options(None, None) == ([], False)
