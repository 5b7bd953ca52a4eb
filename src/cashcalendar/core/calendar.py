"""
Calendar session: the three inputs of a cash-flow view and their derived results.

The projection depends on (entries, starting balance, certainty toggle) and
the summary on (entries, starting balance) only. Each is recomputed when one
of its own inputs changes and served from cache otherwise. The cache is an
optimization: `project` and `summarize` called directly give the same values.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable
from dataclasses import dataclass, replace
from decimal import Decimal
from pathlib import Path
from typing import Any

import pandas as pd

from .dates import DEFAULT_SOON_WINDOW_DAYS, Clock, SystemClock
from .entry import Entry
from .loader import CashflowBook, load_cashflow
from .money import to_decimal
from .projection import Projection, project, projection_frame
from .summary import Summary, summarize
from .timeline import CriticalCard, next_critical_card, timeline_frame
from .validation import find_duplicates

log = logging.getLogger(__name__)


@dataclass
class CalendarConfig:
    """Configuration options for a calendar session."""

    soon_window_days: int = DEFAULT_SOON_WINDOW_DAYS
    currency_symbol: str = "£"
    warn_on_duplicates: bool = True


class CashflowCalendar:
    """
    Stateful view over a cash-flow calendar.

    Holds the entries, the starting balance and the "high certainty only"
    toggle, and derives the projection and summary from them on demand.

    **Example:**
        ```python
        from cashcalendar import CashflowCalendar, FixedClock

        cal = CashflowCalendar.from_source("cashflow.json")
        cal.summary.net_position_high
        cal.high_certainty_only = True     # summary is not recomputed
        cal.timeline()                     # DataFrame of rows to display
        ```
    """

    def __init__(
        self,
        entries: Iterable[Entry],
        starting_balance: Decimal | float | int,
        *,
        high_certainty_only: bool = False,
        config: CalendarConfig | None = None,
        clock: Clock | None = None,
        title: str | None = None,
    ):
        self.config = config or CalendarConfig()
        self.clock = clock or SystemClock()
        self.title = title
        self._entries: tuple[Entry, ...] = ()
        self._starting_balance = Decimal("0")
        self._high_certainty_only = bool(high_certainty_only)
        self._projection_key: tuple | None = None
        self._projection: list[Projection] = []
        self._summary_key: tuple | None = None
        self._summary: Summary | None = None

        self.entries = entries
        self.starting_balance = starting_balance

    @classmethod
    def from_book(cls, book: CashflowBook, **kwargs: Any) -> CashflowCalendar:
        """
        Create a session from a loaded document.

        The document's `currency_symbol` is used only when no `config` is
        passed; an explicit config always wins.
        """
        config = kwargs.pop("config", None)
        if config is None:
            config = CalendarConfig()
            symbol = book.metadata.get("currency_symbol")
            if symbol:
                config = replace(config, currency_symbol=symbol)
        kwargs.setdefault("title", book.title)
        return cls(book.entries, book.starting_balance, config=config, **kwargs)

    @classmethod
    def from_source(
        cls, source: str | Path | dict[str, Any], **kwargs: Any
    ) -> CashflowCalendar:
        """Load a JSON/YAML document (or mapping) and create a session."""
        return cls.from_book(load_cashflow(source), **kwargs)

    # --- inputs ---------------------------------------------------------

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    @entries.setter
    def entries(self, value: Iterable[Entry]) -> None:
        entries = tuple(value)
        if self.config.warn_on_duplicates:
            dupes = find_duplicates(list(enumerate(entries)))
            if dupes:
                warnings.warn(
                    f"Calendar contains duplicate entries at positions {dupes}; "
                    "each one is counted separately.",
                    UserWarning,
                    stacklevel=2,
                )
        self._entries = entries

    @property
    def starting_balance(self) -> Decimal:
        return self._starting_balance

    @starting_balance.setter
    def starting_balance(self, value: Decimal | float | int) -> None:
        self._starting_balance = to_decimal(value)

    @property
    def high_certainty_only(self) -> bool:
        return self._high_certainty_only

    @high_certainty_only.setter
    def high_certainty_only(self, value: bool) -> None:
        self._high_certainty_only = bool(value)

    # --- derived --------------------------------------------------------

    @property
    def projection(self) -> list[Projection]:
        """Running-balance rows for the current toggle state."""
        key = (self._entries, self._starting_balance, self._high_certainty_only)
        if key != self._projection_key:
            log.debug(
                "Recomputing projection (%d entries, high_certainty_only=%s)",
                len(self._entries),
                self._high_certainty_only,
            )
            self._projection = project(
                self._entries, self._starting_balance, self._high_certainty_only
            )
            self._projection_key = key
        return list(self._projection)

    @property
    def summary(self) -> Summary:
        """Headline figures; independent of the certainty toggle."""
        key = (self._entries, self._starting_balance)
        if key != self._summary_key or self._summary is None:
            log.debug("Recomputing summary (%d entries)", len(self._entries))
            self._summary = summarize(self._entries, self._starting_balance)
            self._summary_key = key
        return self._summary

    def projection_frame(self) -> pd.DataFrame:
        """Projection as a tidy DataFrame."""
        return projection_frame(self.projection)

    def timeline(self) -> pd.DataFrame:
        """Timeline rows with day offsets evaluated against the clock now."""
        return timeline_frame(
            self.projection,
            self.clock,
            soon_window_days=self.config.soon_window_days,
            currency_symbol=self.config.currency_symbol,
        )

    def next_critical_card(self) -> CriticalCard:
        return next_critical_card(self.summary, self.clock)

    def closing_balance(self) -> Decimal:
        """Balance after the last projected entry (starting balance if none)."""
        rows = self.projection
        return rows[-1].running_balance if rows else self._starting_balance

    def __repr__(self) -> str:
        return (
            f"CashflowCalendar(entries={len(self._entries)}, "
            f"starting_balance={self._starting_balance}, "
            f"high_certainty_only={self._high_certainty_only})"
        )
