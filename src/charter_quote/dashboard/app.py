"""Booking form — Streamlit front end for the fare quote engine.

Run with:
    streamlit run src/charter_quote/dashboard/app.py

Layout: sidebar inputs (trip type, plan, date, party, rentals) → main area
with the headline total, fare breakdown table, reservation summary and a
mailto button.  The ``Selection`` lives in ``st.session_state``; every widget
change reruns the script and the quote is recomputed from scratch.
"""

from __future__ import annotations

import datetime as dt

import pandas as pd
import streamlit as st

from charter_quote.api.formatter import (
    CATEGORY_LABELS,
    build_email_body,
    build_mailto,
    difficulty_text,
    format_date_with_weekday,
    render_summary,
    yen,
)
from charter_quote.config.catalog import TRIP_TYPE_LABELS
from charter_quote.config.loader import load_catalog
from charter_quote.config.selection import PARTY_CATEGORIES, new_selection
from charter_quote.config.settings import load_settings
from charter_quote.engine.plans import (
    difficulty_of,
    display_fare,
    plan_options,
    plan_times,
    rental_options,
    tackle_notes,
)
from charter_quote.engine.pricing import price_selection

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(page_title="釣り船 料金計算", page_icon="🎣", layout="wide")

SETTINGS = load_settings()


@st.cache_resource
def _catalog():
    return load_catalog(SETTINGS.catalog_path)


CATALOG = _catalog()

if "selection" not in st.session_state:
    st.session_state["selection"] = new_selection(CATALOG)
selection = st.session_state["selection"]

# ---------------------------------------------------------------------------
# Sidebar — inputs (each change mutates the Selection)
# ---------------------------------------------------------------------------
st.sidebar.header("ご予約内容")

_TRIP_TYPES = list(TRIP_TYPE_LABELS)
trip_type = st.sidebar.radio(
    "乗船タイプ", _TRIP_TYPES,
    index=_TRIP_TYPES.index(selection.trip_type),
    format_func=TRIP_TYPE_LABELS.get,
)
if trip_type != selection.trip_type:
    selection.change_trip_type(CATALOG, trip_type)

_PLANS = plan_options(CATALOG, selection.trip_type)
if _PLANS:
    plan = st.sidebar.selectbox(
        "プラン", _PLANS,
        index=_PLANS.index(selection.plan) if selection.plan in _PLANS else 0,
    )
    if plan != selection.plan:
        selection.change_plan(CATALOG, plan)
else:
    st.sidebar.warning("選択できるプランがありません")

_times = plan_times(CATALOG, selection.trip_type, selection.plan)
if _times is not None:
    st.sidebar.caption(f"集合 {_times.meet} / 出船 {_times.depart}")
_difficulty = difficulty_text(difficulty_of(CATALOG, selection.trip_type, selection.plan))
if _difficulty:
    st.sidebar.info(_difficulty)

picked = st.sidebar.date_input("日付", value=selection.date or dt.date.today())
selection.date = picked if isinstance(picked, dt.date) else None
st.sidebar.caption(format_date_with_weekday(selection.date))

with st.sidebar.expander("人数", expanded=True):
    _fare = display_fare(CATALOG, selection.trip_type, selection.plan)
    for category in PARTY_CATEGORIES:
        label = CATEGORY_LABELS[category]
        if _fare is not None:
            label += f"（{yen(_fare.for_category(category))}）"
        value = st.number_input(
            label, 0, SETTINGS.max_count, getattr(selection, category), 1, key=f"count_{category}",
        )
        selection.set_count(category, value, SETTINGS.max_count)

with st.sidebar.expander("レンタル", expanded=True):
    for name, item in rental_options(CATALOG, selection.trip_type, selection.plan):
        label = f"{name}：{yen(item.price)}"
        if item.refund:
            label += f"（返却時返金：{yen(item.refund)}）"
        qty = st.number_input(
            label, 0, SETTINGS.max_count, selection.rentals.get(name, 0), 1,
            key=f"rental_{selection.trip_type}_{selection.plan}_{name}",
        )
        selection.set_rental(name, qty, SETTINGS.max_count)

_notes = tackle_notes(CATALOG, selection.trip_type, selection.plan)
with st.sidebar.expander("仕掛け（参考）"):
    if _notes:
        for note in _notes:
            st.write(f"{note.name}：{note.note}" if note.note else note.name)
    else:
        st.write("このプランには対応する仕掛けはありません")

if st.sidebar.button("リセット", use_container_width=True):
    selection.reset(CATALOG)
    for key in list(st.session_state):
        if key.startswith(("count_", "rental_")):
            del st.session_state[key]
    st.rerun()

# ---------------------------------------------------------------------------
# Main area — quote
# ---------------------------------------------------------------------------
result = price_selection(selection, CATALOG)

st.title("釣り船 料金計算")

col1, col2, col3 = st.columns(3)
col1.metric("合計", yen(result.total))
col2.metric("乗船料金", yen(result.subtotal))
col3.metric("レンタル", yen(result.rental_total))

if result.trip_type == "charter" and not result.pricing_available:
    st.warning("この日付の仕立て料金は設定されていません。お問い合わせください。")

rows = [
    {"項目": CATEGORY_LABELS[c.category], "人数": c.count, "単価": c.unit_price, "金額": c.amount}
    for c in result.breakdown.category_charges
]
rows += [
    {"項目": line.name, "人数": line.quantity, "単価": line.unit_price, "金額": line.amount}
    for line in result.rental_lines
]
if rows:
    st.subheader("料金内訳")
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

st.subheader("予約内容")
st.text(render_summary(selection, result, CATALOG))

body = build_email_body(selection, result, CATALOG)
st.link_button(
    "メールで予約を依頼する",
    build_mailto(SETTINGS.mail_to, SETTINGS.mail_subject, body),
    type="primary",
)
with st.expander("メール本文"):
    st.text(body)
