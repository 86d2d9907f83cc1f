"""Catalog schema, YAML loading and settings."""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest
from pydantic import ValidationError

from charter_quote.config import (
    Catalog,
    CatalogNotFoundError,
    CharterRule,
    Fare,
    RentalItem,
    Selection,
    load_catalog,
    load_settings,
    parse_catalog,
)
from charter_quote.config.settings import DEFAULT_CATALOG_PATH
from charter_quote.engine.pricing import price_selection


# ═══════════════════════════════════════════════════════════════════════════
# Schema
# ═══════════════════════════════════════════════════════════════════════════

class TestCatalogSchema:

    def test_empty_catalog_is_valid(self):
        c = Catalog()
        assert c.shared == {}
        assert c.charter == {}
        assert c.common_rental == {}
        assert c.holidays == set()
        assert c.default_charter_plan == "午前アジ"
        assert c.info_only_rentals == ["仕掛け"]

    def test_null_sections_tolerated(self):
        c = parse_catalog({"shared": None, "charter": None, "common_rental": None, "holidays": None})
        assert c.shared == {} and c.holidays == set()

    def test_parse_none(self):
        assert parse_catalog(None) == Catalog()

    def test_bare_number_rental(self):
        c = parse_catalog({"common_rental": {"竿": 1000, "クーラー": {"price": 800, "refund": 200}}})
        assert c.common_rental["竿"] == RentalItem(price=1000)
        assert c.common_rental["クーラー"].refund == 200

    def test_bare_number_plan_rental(self):
        c = parse_catalog({"shared": {"午前アジ": {"rental": {"ビシセット": 1500}}}})
        assert c.shared["午前アジ"].rental["ビシセット"].price == 1500

    def test_holidays_from_iso_strings(self):
        c = parse_catalog({"holidays": ["2026-09-21", "2026-09-22"]})
        assert dt.date(2026, 9, 22) in c.holidays

    def test_negative_fare_rejected(self):
        with pytest.raises(ValidationError):
            Fare(men=-1)

    def test_negative_rental_rejected(self):
        with pytest.raises(ValidationError):
            RentalItem(price=-100)

    def test_negative_min_people_rejected(self):
        with pytest.raises(ValidationError):
            CharterRule(min_people=-1)

    def test_unknown_difficulty_rejected(self):
        with pytest.raises(ValidationError):
            parse_catalog({"shared": {"x": {"difficulty": "expert"}}})

    def test_rule_for(self):
        c = parse_catalog({"charter": {"p": {"holiday": {"min_people": 5}}}})
        entry = c.charter["p"]
        assert entry.rule_for("holiday").min_people == 5
        assert entry.rule_for("weekday") is None
        assert entry.rule_for("fare") is None

    def test_table(self, catalog: Catalog):
        assert catalog.table("shared") is catalog.shared
        assert catalog.table("charter") is catalog.charter
        assert catalog.table("ferry") == {}


# ═══════════════════════════════════════════════════════════════════════════
# YAML loading
# ═══════════════════════════════════════════════════════════════════════════

class TestLoadCatalog:

    def test_bundled_catalog_loads(self):
        c = load_catalog(DEFAULT_CATALOG_PATH)
        assert "午前アジ" in c.shared
        assert c.shared["午前アジ"].fare.men > 0
        assert "午前アジ" in c.charter
        assert dt.date(2026, 9, 22) in c.holidays
        assert c.common_rental["竿（竿,リール）"].price == 1000
        assert c.shared["マダイ"].rental["竿（手巻き）"].replaces == ["竿（竿,リール）"]
        assert c.sessions["afternoon"].meet == "12:30"

    def test_bundled_catalog_quotes(self):
        c = load_catalog(DEFAULT_CATALOG_PATH)
        r = price_selection(Selection(trip_type="charter", plan="午前アジ", date="2026-10-14", men=5), c)
        fare = c.shared["午前アジ"].fare.men
        assert r.total == 5 * fare

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(CatalogNotFoundError):
            load_catalog(tmp_path / "nope.yaml")

    def test_missing_file_is_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "nope.yaml")

    def test_partial_file(self, tmp_path: Path):
        path = tmp_path / "catalog.yaml"
        path.write_text("shared:\n  午前アジ:\n    fare: {men: 9000, women: 8000, student: 5000}\n", encoding="utf-8")
        c = load_catalog(path)
        assert c.charter == {}
        assert c.shared["午前アジ"].fare.student == 5000

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "catalog.yaml"
        path.write_text("", encoding="utf-8")
        assert load_catalog(path) == Catalog()

    def test_invalid_file(self, tmp_path: Path):
        path = tmp_path / "catalog.yaml"
        path.write_text("shared:\n  x:\n    fare: {men: -5}\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_catalog(path)


# ═══════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════

class TestSettings:

    def test_defaults(self):
        s = load_settings({})
        assert s.catalog_path == DEFAULT_CATALOG_PATH
        assert s.mail_to == "yoyaku@example.com"
        assert s.mail_subject == "釣り船予約依頼"
        assert s.max_count == 100

    def test_env_overrides(self, tmp_path: Path):
        s = load_settings({
            "CHARTER_QUOTE_CATALOG_PATH": str(tmp_path / "c.yaml"),
            "CHARTER_QUOTE_MAIL_TO": "booking@example.jp",
            "CHARTER_QUOTE_MAX_COUNT": "50",
            "UNRELATED": "x",
        })
        assert s.catalog_path == tmp_path / "c.yaml"
        assert s.mail_to == "booking@example.jp"
        assert s.max_count == 50

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            load_settings({"CHARTER_QUOTE_LOG_LEVEL": "LOUD"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("CHARTER_QUOTE_MAIL_SUBJECT", "テスト")
        assert load_settings().mail_subject == "テスト"
