"""Formatter — reservation summary text, email body and ``mailto:`` link.

Consumes a ``PricingResult`` plus the ``Selection`` it was computed from.
All text is in the fixed Japanese locale of the booking form.
"""

from __future__ import annotations

from urllib.parse import quote

from charter_quote.config.catalog import TRIP_TYPE_LABELS, Catalog
from charter_quote.config.selection import Selection
from charter_quote.engine.plans import plan_times, reference_fare, tackle_notes
from charter_quote.engine.rate_type import parse_day
from charter_quote.models.results import PricingResult

WEEKDAY_NAMES = ("月", "火", "水", "木", "金", "土", "日")

CATEGORY_LABELS = {
    "men": "男性",
    "women": "女性",
    "student": "子供",
    "average": "平均",
}

DIFFICULTY_TEXT = {
    "beginner": "初心者向け：釣り初心者の方でも安心して楽しんでいただけます",
    "intermediate": "中級者向け：船釣りの経験がある方がおすすめです",
    "advanced": "上級者向け：熟練の方におすすめの釣り物です",
}

TACKLE_REMARK = "仕掛けはレンタル扱いではありません（250〜500円／釣り物により変動）。実際の金額は当日ご案内します。"

# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def yen(amount: int) -> str:
    return f"{amount:,}円"


def format_date_with_weekday(value: object) -> str:
    """``2026-10-16（金）``; ``未選択`` when no usable date."""
    day = parse_day(value)
    if day is None:
        return "未選択"
    return f"{day.isoformat()}（{WEEKDAY_NAMES[day.weekday()]}）"


def plan_label(selection: Selection) -> str:
    label = TRIP_TYPE_LABELS.get(selection.trip_type, selection.trip_type)
    return f"{label} {selection.plan}" if selection.plan else label


def _refund_lines(result: PricingResult, indent: str) -> list[str]:
    return [
        f"{indent}・{line.name}：{yen(line.refund_per_unit)} × {line.quantity} = {yen(line.refund_total)}"
        for line in result.rental_lines
        if line.refund_per_unit
    ]


def render_summary(selection: Selection, result: PricingResult, catalog: Catalog) -> str:
    """Itemised breakdown shown under the booking form."""
    parts: list[str] = ["", f"プラン：{plan_label(selection)}", "", f"日付：{format_date_with_weekday(selection.date)}"]
    bd = result.breakdown

    if result.trip_type == "charter":
        if not result.pricing_available:
            parts += ["", "料金内訳：", "  ・この日付の仕立て料金は設定されていません（お問い合わせください）"]
        elif bd.min_people_used:
            fare = reference_fare(catalog, selection.plan)
            basis = "（乗合船の大人料金で計算）" if fare is not None and fare.men else ""
            parts += ["", "料金内訳：", f"  ・最低料金：{bd.min_people_used}名分 = {yen(bd.min_price_used)}{basis}"]
            if bd.shortage_count > 0:
                parts.append(
                    f"  ・不足分：{bd.shortage_count}名分は最低料金により加算されています（実人数が最低人数に満たないため）"
                )
            if bd.extra_count > 0:
                parts.append(f"  ・超過分：{bd.extra_count}名分の追加料金 = {yen(bd.extra_charge_amount)}")
    elif reference_fare(catalog, selection.plan) is not None:
        parts += ["", "料金内訳："]
        for charge in bd.category_charges:
            parts.append(
                f" ・{CATEGORY_LABELS[charge.category]} {charge.count}名 × {yen(charge.unit_price)} = {yen(charge.amount)}"
            )

    parts.append("")
    if result.rental_lines:
        parts.append("レンタル：")
        parts += [f" ・{line.name} × {line.quantity} = {yen(line.amount)}" for line in result.rental_lines]
    else:
        parts.append("レンタル：なし")

    refunds = _refund_lines(result, " ")
    if refunds:
        parts += ["", "※返却時に返金のあるレンタル：", *refunds]

    parts += ["", f"合計金額：{yen(result.total)}"]
    return "\n".join(parts)


def build_email_body(selection: Selection, result: PricingResult, catalog: Catalog) -> str:
    """Plain-text body of the reservation request email."""
    lines = ["【予約内容】", f"プラン：{plan_label(selection)}", "", f"日付：{format_date_with_weekday(selection.date)}"]

    times = plan_times(catalog, selection.trip_type, selection.plan)
    if times is not None and times.meet and times.depart:
        lines.append(f"集合時間：{times.meet}、出船時間：{times.depart}")

    lines += ["", "レンタル："]
    if result.rental_lines:
        lines += [f"  ・{line.name}×{line.quantity}" for line in result.rental_lines]
    else:
        lines.append("  なし")

    lines += ["", "備考：", f"  {TACKLE_REMARK}"]
    for note in tackle_notes(catalog, selection.trip_type, selection.plan):
        lines.append(f"  ・{note.name}：{note.note}" if note.note else f"  ・{note.name}")

    refunds = _refund_lines(result, "  ")
    if refunds:
        lines += ["", "※レンタル返却時に一部返金があるもの：", *refunds]

    lines += ["", f"合計金額：{yen(result.total)}"]
    return "\n".join(lines)


def build_mailto(to: str, subject: str, body: str) -> str:
    """``mailto:`` link with encodeURIComponent-style escaping."""
    return (
        f"mailto:{to}"
        f"?subject={quote(subject, safe=_URI_COMPONENT_SAFE)}"
        f"&body={quote(body, safe=_URI_COMPONENT_SAFE)}"
    )


def difficulty_text(difficulty: str | None) -> str:
    return DIFFICULTY_TEXT.get(difficulty or "", "")
