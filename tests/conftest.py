"""Shared test fixtures — a small catalog covering every fallback path."""

from __future__ import annotations

import datetime as dt

import pytest

from charter_quote.config import (
    Catalog,
    CharterRule,
    Fare,
    PlanEntry,
    RentalItem,
    Selection,
    TackleNote,
)

WEDNESDAY = dt.date(2026, 10, 14)


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        shared={
            "午前アジ": PlanEntry(
                fare=Fare(men=9_000, women=8_000, student=5_000),
                difficulty="beginner",
                rental={
                    "ビシセット": RentalItem(price=1_500, refund=500),
                    "クーラーボックス": RentalItem(price=800),
                },
                tackle=[TackleNote(name="仕掛け", price=375, note="250〜500円")],
            ),
            "マダイ": PlanEntry(
                fare=Fare(men=12_000, women=11_000, student=7_000),
                difficulty="intermediate",
                rental={"竿（手巻き）": RentalItem(price=1_500, replaces=["竿（竿,リール）"])},
                tackle=[TackleNote(name="仕掛け", price=550, note="500〜600円")],
            ),
            "キス": PlanEntry(session="afternoon"),
        },
        charter={
            "午前アジ": PlanEntry(
                rental={"ビシセット": RentalItem(price=1_200)},
                weekday=CharterRule(min_people=4, min_price=36_000),
                saturday=CharterRule(min_people=5, min_price=45_000),
                sunday=CharterRule(min_people=6, min_price=54_000),
            ),
            "マダイ": PlanEntry(
                weekday=CharterRule(min_people=4, min_price=48_000),
                holiday=CharterRule(min_people=6, min_price=72_000),
            ),
            "ライトゲーム": PlanEntry(
                rental={"ライトタックル": RentalItem(price=800)},
                weekday=CharterRule(min_people=3, min_price=30_000),
            ),
        },
        common_rental={
            "竿（竿,リール）": RentalItem(price=1_000),
            "クーラーボックス": RentalItem(price=1_000, refund=300),
            "仕掛け": RentalItem(price=500),
            "ライフジャケット": RentalItem(price=0),
        },
        holidays={
            dt.date(2026, 9, 21),
            dt.date(2026, 9, 22),
            dt.date(2026, 9, 23),
            dt.date(2026, 11, 23),
            dt.date(2027, 1, 1),
        },
    )


@pytest.fixture
def shared_selection() -> Selection:
    return Selection(trip_type="shared", plan="午前アジ", date=WEDNESDAY, men=2, women=1)


@pytest.fixture
def charter_selection() -> Selection:
    return Selection(trip_type="charter", plan="午前アジ", date=WEDNESDAY, men=5)
