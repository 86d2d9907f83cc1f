"""Tests for engine/rentals.py — price precedence and refund bookkeeping."""

from __future__ import annotations

from charter_quote.config import Catalog, Selection
from charter_quote.engine.pricing import price_selection
from charter_quote.engine.rentals import compute_rental_lines, resolve_rental


class TestResolveRental:

    def test_current_trip_type_table_first(self, catalog: Catalog):
        assert resolve_rental(catalog, "charter", "午前アジ", "ビシセット").price == 1_200
        assert resolve_rental(catalog, "shared", "午前アジ", "ビシセット").price == 1_500

    def test_shared_plan_table_second(self, catalog: Catalog):
        # charter マダイ has no rental table of its own
        assert resolve_rental(catalog, "charter", "マダイ", "竿（手巻き）").price == 1_500

    def test_plan_table_beats_common(self, catalog: Catalog):
        assert resolve_rental(catalog, "shared", "午前アジ", "クーラーボックス").price == 800
        assert resolve_rental(catalog, "shared", "マダイ", "クーラーボックス").price == 1_000

    def test_common_table_last(self, catalog: Catalog):
        assert resolve_rental(catalog, "charter", "ライトゲーム", "竿（竿,リール）").price == 1_000

    def test_unknown_name(self, catalog: Catalog):
        assert resolve_rental(catalog, "shared", "午前アジ", "謎の道具") is None

    def test_no_plan_uses_common(self, catalog: Catalog):
        assert resolve_rental(catalog, "shared", None, "竿（竿,リール）").price == 1_000


class TestRentalLines:

    def test_amounts_and_refunds(self, catalog: Catalog):
        lines, total = compute_rental_lines(catalog, "shared", "午前アジ", {"ビシセット": 2, "竿（竿,リール）": 1})
        # 2 × 1,500 + 1 × 1,000
        assert total == 4_000
        bishi = lines[0]
        assert (bishi.name, bishi.quantity, bishi.unit_price, bishi.amount) == ("ビシセット", 2, 1_500, 3_000)
        assert (bishi.refund_per_unit, bishi.refund_total) == (500, 1_000)

    def test_refund_not_deducted(self, catalog: Catalog, shared_selection: Selection):
        shared_selection.rentals = {"ビシセット": 2}
        r = price_selection(shared_selection, catalog)
        assert r.rental_total == 3_000
        assert r.refund_total == 1_000
        assert r.total == 26_000 + 3_000

    def test_zero_quantity_skipped(self, catalog: Catalog):
        lines, total = compute_rental_lines(catalog, "shared", "午前アジ", {"ビシセット": 0})
        assert lines == []
        assert total == 0

    def test_info_only_rental_never_priced(self, catalog: Catalog):
        lines, total = compute_rental_lines(catalog, "charter", "午前アジ", {"仕掛け": 3, "ビシセット": 1})
        assert [line.name for line in lines] == ["ビシセット"]
        assert total == 1_200

    def test_unpriced_name_contributes_zero(self, catalog: Catalog):
        lines, total = compute_rental_lines(catalog, "shared", "午前アジ", {"謎の道具": 2, "ライフジャケット": 1})
        assert total == 0
        assert [(line.name, line.amount) for line in lines] == [("謎の道具", 0), ("ライフジャケット", 0)]

    def test_same_rentals_on_both_trip_types(self, catalog: Catalog):
        shared = Selection(trip_type="shared", plan="マダイ", rentals={"竿（手巻き）": 2})
        charter = Selection(trip_type="charter", plan="マダイ", rentals={"竿（手巻き）": 2})
        assert price_selection(shared, catalog).rental_total == 3_000
        assert price_selection(charter, catalog).rental_total == 3_000

    def test_garbage_quantities(self, catalog: Catalog):
        lines, total = compute_rental_lines(catalog, "shared", "午前アジ", {"ビシセット": "abc", "竿（竿,リール）": None})
        assert lines == []
        assert total == 0

    def test_no_quantities(self, catalog: Catalog):
        assert compute_rental_lines(catalog, "shared", "午前アジ", None) == ([], 0)
