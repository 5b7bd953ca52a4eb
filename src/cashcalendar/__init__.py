"""
CashCalendar - Forward-looking cash-flow calendar

CashCalendar turns a list of dated financial entries (money in, money out and
informational events) plus a starting balance into a chronological projection
with a running balance, and a set of headline planning figures.

Key Features:
- **Running balance**: Entries sorted by date (stable on ties) and folded from
  the starting balance
- **Certainty filter**: Optionally keep only `complete`/`high` certainty entries
  in the projection
- **Planning figures**: Committed outflow, expected inflow under two certainty
  regimes, net positions and the next payment that is due
- **Injectable clock**: Day offsets ("3d overdue", "Today", "Tomorrow") are
  computed against a clock that tests can pin
- **Tidy outputs**: pandas DataFrames for timelines and KPIs, optional Plotly charts

Quick Start:
    ```python
    from datetime import date
    from cashcalendar import Entry, project, summarize

    entries = [
        Entry(date(2026, 10, 20), "in", "Lamb sales", 500, "pending", "high"),
        Entry(date(2026, 10, 23), "out", "Feed invoice", 300, "due", "complete"),
    ]
    rows = project(entries, 1000)
    [r.running_balance for r in rows]   # [Decimal('1500'), Decimal('1200')]
    summarize(entries, 1000).net_position_high   # Decimal('1200')
    ```

License:
    This is a proof-of-concept for educational and research purposes.
"""

# Version information
__version__ = "0.1.0"
__author__ = "CashCalendar Team"
__description__ = "Forward-looking cash-flow calendar and projection engine"

from .core import (
    HIGH_CERTAINTY,
    CalendarConfig,
    CashflowBook,
    CashflowCalendar,
    CashflowSourceError,
    Certainty,
    Clock,
    CriticalCard,
    Entry,
    EntryType,
    FixedClock,
    InvalidEntry,
    Projection,
    Status,
    Summary,
    SystemClock,
    ValidationReport,
    days_label,
    days_until,
    format_display_date,
    format_money,
    load_cashflow,
    next_critical_card,
    project,
    projection_frame,
    summarize,
    timeline_frame,
    validate_source,
)

# Import KPI utilities
from .kpi import daily_net_flow, first_shortfall, lowest_balance, totals_by_certainty

# Import chart functions (optional - requires plotly)
from .charts import PLOTLY_AVAILABLE as CHARTS_AVAILABLE
from .charts import balance_timeline, cashflow_bars, save_chart

# Define what gets imported with "from cashcalendar import *"
__all__ = [
    # Entries
    "Entry",
    "EntryType",
    "Status",
    "Certainty",
    "HIGH_CERTAINTY",
    # Errors
    "InvalidEntry",
    "CashflowSourceError",
    # Engine
    "Projection",
    "project",
    "projection_frame",
    "Summary",
    "summarize",
    # Dates
    "Clock",
    "SystemClock",
    "FixedClock",
    "format_display_date",
    "days_until",
    "days_label",
    # Presentation values
    "format_money",
    "timeline_frame",
    "CriticalCard",
    "next_critical_card",
    # Loading and session
    "CashflowBook",
    "load_cashflow",
    "ValidationReport",
    "validate_source",
    "CalendarConfig",
    "CashflowCalendar",
    # KPI utilities
    "lowest_balance",
    "first_shortfall",
    "daily_net_flow",
    "totals_by_certainty",
    # Charts (raise ImportError on use when plotly is missing)
    "CHARTS_AVAILABLE",
    "balance_timeline",
    "cashflow_bars",
    "save_chart",
    # Version info
    "__version__",
    "__author__",
    "__description__",
]
