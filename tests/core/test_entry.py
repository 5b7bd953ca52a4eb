"""
Tests for the Entry record and its enums.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from cashcalendar.core.entry import Certainty, Entry, EntryType, Status
from cashcalendar.core.errors import InvalidEntry


def _raw(**overrides):
    data = {
        "date": "2026-10-20",
        "type": "out",
        "description": "Feed invoice",
        "amount": 300,
        "status": "due",
        "certainty": "complete",
    }
    data.update(overrides)
    return data


class TestEntryConstruction:
    """Normalization of entry fields."""

    def test_from_dict_normalizes_fields(self):
        entry = Entry.from_dict(_raw())

        assert entry.date == date(2026, 10, 20)
        assert entry.type is EntryType.OUT
        assert entry.status is Status.DUE
        assert entry.certainty is Certainty.COMPLETE
        assert entry.amount == Decimal("300")

    def test_float_amount_keeps_decimal_digits(self):
        entry = Entry.from_dict(_raw(amount=0.1))
        assert entry.amount == Decimal("0.1")

    def test_datetime_string_is_truncated_to_day(self):
        entry = Entry.from_dict(_raw(date="2026-10-20T18:30:00"))
        assert entry.date == date(2026, 10, 20)

    def test_datetime_object_is_truncated_to_day(self):
        entry = Entry.from_dict(_raw(date=datetime(2026, 10, 20, 9, 0)))
        assert entry.date == date(2026, 10, 20)
        assert type(entry.date) is date

    def test_aware_datetime_uses_local_day(self):
        west = Entry.from_dict(_raw(date="2026-10-20T23:30:00-05:00"))
        utc = Entry.from_dict(_raw(date="2026-10-21T04:30:00+00:00"))
        instant = datetime(2026, 10, 21, 4, 30, tzinfo=timezone.utc)
        assert west.date == utc.date == instant.astimezone().date()

    def test_entries_are_immutable(self):
        entry = Entry.from_dict(_raw())
        with pytest.raises(FrozenInstanceError):
            entry.amount = Decimal("1")

    def test_equal_entries_hash_equal(self):
        assert hash(Entry.from_dict(_raw())) == hash(Entry.from_dict(_raw()))

    def test_to_dict_round_trips_source_schema(self):
        raw = _raw(amount=12.5)
        assert Entry.from_dict(raw).to_dict() == raw


class TestEntryValidation:
    """Out-of-contract values raise InvalidEntry naming the field."""

    @pytest.mark.parametrize(
        "field,value",
        [
            ("type", "transfer"),
            ("status", "overdue"),
            ("certainty", "certain"),
            ("amount", -1),
            ("amount", "lots"),
            ("amount", True),
            ("date", "20/10/2026"),
            ("date", 20261020),
            ("description", 42),
            ("description", ""),
            ("description", "   "),
        ],
    )
    def test_invalid_field(self, field, value):
        with pytest.raises(InvalidEntry) as exc_info:
            Entry.from_dict(_raw(**{field: value}))
        assert exc_info.value.field == field

    def test_missing_field(self):
        raw = _raw()
        del raw["certainty"]
        with pytest.raises(InvalidEntry, match="certainty: field is required"):
            Entry.from_dict(raw)

    def test_index_is_cited(self):
        with pytest.raises(InvalidEntry) as exc_info:
            Entry.from_dict(_raw(amount=-5), index=3)
        err = exc_info.value
        assert err.index == 3
        assert str(err).startswith("entries[3].amount:")

    def test_not_a_mapping(self):
        with pytest.raises(InvalidEntry):
            Entry.from_dict(["2026-10-20", "out"], index=0)

    def test_zero_amount_is_allowed(self):
        assert Entry.from_dict(_raw(type="event", amount=0)).amount == Decimal("0")


class TestEntryBehaviour:
    """Derived entry properties."""

    @pytest.mark.parametrize(
        "certainty,expected",
        [("complete", True), ("high", True), ("medium", False), ("low", False)],
    )
    def test_is_high_certainty(self, certainty, expected):
        assert Entry.from_dict(_raw(certainty=certainty)).is_high_certainty is expected

    @pytest.mark.parametrize(
        "entry_type,expected",
        [("in", Decimal("300")), ("out", Decimal("-300")), ("event", Decimal("0"))],
    )
    def test_signed_amount(self, entry_type, expected):
        assert Entry.from_dict(_raw(type=entry_type)).signed_amount == expected

    def test_certainty_ordering(self):
        ordered = sorted([Certainty.HIGH, Certainty.LOW, Certainty.COMPLETE, Certainty.MEDIUM])
        assert ordered == [
            Certainty.LOW,
            Certainty.MEDIUM,
            Certainty.HIGH,
            Certainty.COMPLETE,
        ]
