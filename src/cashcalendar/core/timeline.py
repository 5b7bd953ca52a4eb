"""
Presentation-ready timeline rows for the cash-flow calendar.

Nothing here is rendered. The functions turn projections and summaries into
the labels and flags a view needs: display dates, day offsets, signed amount
strings and highlight flags.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

import pandas as pd

from .dates import (
    DEFAULT_SOON_WINDOW_DAYS,
    Clock,
    SystemClock,
    days_label,
    days_until,
    format_display_date,
    is_soon,
)
from .entry import Certainty, Entry, EntryType
from .money import format_money
from .projection import Projection
from .summary import Summary

TIMELINE_COLUMNS = [
    "date",
    "display_date",
    "days",
    "days_label",
    "type",
    "description",
    "amount",
    "amount_label",
    "running_balance",
    "balance_label",
    "status",
    "certainty",
    "certainty_note",
    "is_past",
    "is_today",
    "is_soon",
]


class CriticalCard(NamedTuple):
    """Headline card for the next critical payment."""

    headline: str  # Day label, or "Clear"
    detail: str  # Entry description, or "No critical dates"
    days: int | None  # Day offset, None when nothing is due


def amount_label(entry: Entry, symbol: str = "£") -> str:
    """'+£500' for income, '-£300' for outgoings and '-' for events."""
    if entry.type is EntryType.IN:
        return "+" + format_money(entry.amount, symbol)
    if entry.type is EntryType.OUT:
        return "-" + format_money(entry.amount, symbol)
    return "-"


def certainty_note(certainty: Certainty) -> str:
    """Empty for complete entries, otherwise e.g. 'medium certainty'."""
    if certainty is Certainty.COMPLETE:
        return ""
    return f"{certainty.value} certainty"


def timeline_frame(
    projections: Sequence[Projection],
    clock: Clock | None = None,
    *,
    soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS,
    currency_symbol: str = "£",
) -> pd.DataFrame:
    """
    Build the timeline table shown under the summary cards.

    Day offsets are computed against `clock` at call time, so rebuild the
    frame rather than keeping it across days.

    Args:
        projections: Output of `project`
        clock: Source of "today"; defaults to the system clock
        soon_window_days: Rows within this many days ahead get `is_soon`
        currency_symbol: Symbol used in the label columns

    Returns:
        DataFrame with `TIMELINE_COLUMNS`, one row per projection
    """
    clock = clock or SystemClock()
    rows = []
    for p in projections:
        entry = p.entry
        days = days_until(entry.date, clock)
        rows.append(
            {
                "date": pd.Timestamp(entry.date),
                "display_date": format_display_date(entry.date),
                "days": days,
                "days_label": days_label(days),
                "type": entry.type.value,
                "description": entry.description,
                "amount": float(entry.amount),
                "amount_label": amount_label(entry, currency_symbol),
                "running_balance": float(p.running_balance),
                "balance_label": format_money(p.running_balance, currency_symbol),
                "status": entry.status.value,
                "certainty": entry.certainty.value,
                "certainty_note": certainty_note(entry.certainty),
                "is_past": days < 0,
                "is_today": days == 0,
                "is_soon": is_soon(days, soon_window_days),
            }
        )
    df = pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def next_critical_card(summary: Summary, clock: Clock | None = None) -> CriticalCard:
    """Card for the next due payment, or the all-clear card."""
    entry = summary.next_critical
    if entry is None:
        return CriticalCard("Clear", "No critical dates", None)
    days = days_until(entry.date, clock)
    return CriticalCard(days_label(days), entry.description, days)
