"""
Entry records for CashCalendar.

An entry is one dated line of the cash-flow calendar: money coming in, money
going out, or an informational event with no balance effect. Entries are
immutable; projections and summaries are always derived as new values.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from .dates import local_day
from .errors import InvalidEntry
from .money import to_decimal


class EntryType(Enum):
    """Direction of an entry's effect on the balance."""

    IN = "in"  # Increases balance
    OUT = "out"  # Decreases balance
    EVENT = "event"  # Informational only


class Status(Enum):
    """Settlement state of an entry. Not used in balance math."""

    RECEIVED = "received"
    PENDING = "pending"
    DUE = "due"


class Certainty(Enum):
    """
    Confidence that an entry materializes as stated.

    Ordered complete > high > medium > low. `complete` and `high` are
    jointly treated as "high certainty".
    """

    COMPLETE = "complete"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Confidence rank, 3 for complete down to 0 for low."""
        return _CERTAINTY_RANK[self]

    @property
    def is_high(self) -> bool:
        return self in HIGH_CERTAINTY

    def __lt__(self, other: Certainty) -> bool:
        if not isinstance(other, Certainty):
            return NotImplemented
        return self.rank < other.rank


_CERTAINTY_RANK = {
    Certainty.COMPLETE: 3,
    Certainty.HIGH: 2,
    Certainty.MEDIUM: 1,
    Certainty.LOW: 0,
}

HIGH_CERTAINTY = frozenset({Certainty.COMPLETE, Certainty.HIGH})

REQUIRED_FIELDS = ("date", "type", "description", "amount", "status", "certainty")


@dataclass(frozen=True, slots=True)
class Entry:
    """
    One dated cash-flow calendar entry.

    Attributes:
        date: Calendar date of the entry (local-day granularity)
        type: `EntryType.IN`, `EntryType.OUT` or `EntryType.EVENT`
        description: Free-text label
        amount: Non-negative magnitude; the sign comes from `type`
        status: Settlement state (received, pending, due)
        certainty: Confidence level (complete, high, medium, low)

    Enum fields also accept their string values, and `amount` accepts any
    number; both are normalized on construction. Invalid values raise
    `InvalidEntry` naming the field.
    """

    date: date
    type: EntryType
    description: str
    amount: Decimal
    status: Status
    certainty: Certainty

    def __post_init__(self):
        object.__setattr__(self, "date", _coerce_date(self.date))
        object.__setattr__(self, "type", _coerce_enum(EntryType, self.type, "type"))
        object.__setattr__(self, "status", _coerce_enum(Status, self.status, "status"))
        object.__setattr__(
            self, "certainty", _coerce_enum(Certainty, self.certainty, "certainty")
        )
        object.__setattr__(self, "amount", _coerce_amount(self.amount))
        if not isinstance(self.description, str):
            raise InvalidEntry(
                "description", "expected a string", value=self.description
            )
        if not self.description.strip():
            raise InvalidEntry(
                "description", "must not be blank", value=self.description
            )

    @property
    def is_high_certainty(self) -> bool:
        """True for `complete` and `high` certainty entries."""
        return self.certainty.is_high

    @property
    def signed_amount(self) -> Decimal:
        """Balance effect of this entry: +amount, -amount, or zero for events."""
        if self.type is EntryType.IN:
            return self.amount
        if self.type is EntryType.OUT:
            return -self.amount
        return Decimal("0")

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, index: int | None = None) -> Entry:
        """
        Build an entry from a source mapping (e.g. one JSON object).

        Args:
            data: Mapping with date, type, description, amount, status, certainty
            index: Position in the source list, used in error messages

        Raises:
            InvalidEntry: If a field is missing or malformed
        """
        if not isinstance(data, dict):
            raise InvalidEntry("entry", "expected a mapping", index=index, value=data)
        for name in REQUIRED_FIELDS:
            if name not in data or data[name] is None:
                raise InvalidEntry(name, "field is required", index=index)
        try:
            return cls(
                date=data["date"],
                type=data["type"],
                description=data["description"],
                amount=data["amount"],
                status=data["status"],
                certainty=data["certainty"],
            )
        except InvalidEntry as exc:
            if index is None:
                raise
            raise exc.at_index(index) from exc

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable mapping in the source schema."""
        return {
            "date": self.date.isoformat(),
            "type": self.type.value,
            "description": self.description,
            "amount": float(self.amount),
            "status": self.status.value,
            "certainty": self.certainty.value,
        }


def _coerce_enum(enum_cls: type[Enum], value: Any, field: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidEntry(
            field, f"unknown value {value!r} (expected one of: {allowed})", value=value
        ) from exc


def _coerce_amount(value: Any) -> Decimal:
    try:
        amount = to_decimal(value)
    except ValueError as exc:
        raise InvalidEntry("amount", str(exc), value=value) from exc
    if amount < 0:
        raise InvalidEntry("amount", "must be non-negative", value=value)
    return amount


def _coerce_date(value: Any) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return local_day(value)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return local_day(datetime.fromisoformat(text))
        except ValueError as exc:
            raise InvalidEntry(
                "date", f"invalid ISO date {value!r}", value=value
            ) from exc
    raise InvalidEntry("date", "expected an ISO date string", value=value)
