"""
Error classes for CashCalendar.

This module defines the exceptions raised while ingesting cash-flow data.
The projection and summary computations themselves have no error paths:
invalid input is rejected wholesale before any balance is computed.
"""

from __future__ import annotations


class CashflowSourceError(ValueError):
    """
    Raised when a cash-flow document cannot be parsed or has the wrong shape.

    **Common Causes:**
    - Root of the document is not a mapping
    - Unsupported file format (only JSON and YAML are read)
    - `entries` missing or not a list
    - `startingBalance` missing or not numeric
    """


class InvalidEntry(ValueError):
    """
    A single entry failed validation at ingestion time.

    Attributes:
        field: Name of the offending field (e.g. 'amount', 'certainty')
        index: Position of the entry in the source list, if known
        value: The rejected value

    **Example Usage:**
        ```python
        from cashcalendar.core.errors import InvalidEntry
        from cashcalendar.core.entry import Entry

        try:
            Entry.from_dict({"date": "2026-10-20", "type": "out", "amount": -5})
        except InvalidEntry as e:
            print(e.field)  # 'amount'
        ```
    """

    def __init__(
        self,
        field: str,
        message: str,
        *,
        index: int | None = None,
        value: object = None,
    ):
        self.field = field
        self.index = index
        self.value = value
        self.message = message
        super().__init__(self._fmt(message))

    def _fmt(self, msg: str) -> str:
        """Prefix the message with the entry position and field name."""
        where = f"entries[{self.index}]." if self.index is not None else ""
        return f"{where}{self.field}: {msg}"

    def at_index(self, index: int) -> InvalidEntry:
        """Return a copy of this error tagged with the entry position."""
        return InvalidEntry(self.field, self.message, index=index, value=self.value)
