"""
Core module for CashCalendar.

This module contains the entry model, the projection engine, the summary
aggregator and the date helpers the cash-flow calendar is built from.
"""

from .calendar import CalendarConfig, CashflowCalendar
from .dates import (
    Clock,
    FixedClock,
    SystemClock,
    days_label,
    days_until,
    format_display_date,
    is_soon,
)
from .entry import HIGH_CERTAINTY, Certainty, Entry, EntryType, Status
from .errors import CashflowSourceError, InvalidEntry
from .loader import CashflowBook, load_cashflow, parse_cashflow
from .money import format_money, to_decimal
from .projection import Projection, project, projection_frame, sort_entries
from .summary import Summary, next_critical_entry, summarize
from .timeline import (
    CriticalCard,
    amount_label,
    certainty_note,
    next_critical_card,
    timeline_frame,
)
from .validation import ValidationReport, validate_source

__all__ = [
    # Errors
    "CashflowSourceError",
    "InvalidEntry",
    # Entries
    "Entry",
    "EntryType",
    "Status",
    "Certainty",
    "HIGH_CERTAINTY",
    # Dates
    "Clock",
    "SystemClock",
    "FixedClock",
    "format_display_date",
    "days_until",
    "days_label",
    "is_soon",
    # Money
    "format_money",
    "to_decimal",
    # Projection and summary
    "Projection",
    "project",
    "projection_frame",
    "sort_entries",
    "Summary",
    "summarize",
    "next_critical_entry",
    # Timeline
    "CriticalCard",
    "amount_label",
    "certainty_note",
    "next_critical_card",
    "timeline_frame",
    # Loading and validation
    "CashflowBook",
    "load_cashflow",
    "parse_cashflow",
    "ValidationReport",
    "validate_source",
    # Session
    "CalendarConfig",
    "CashflowCalendar",
]
