"""
Tests for loading cash-flow documents from JSON/YAML/mappings.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from cashcalendar.core.errors import CashflowSourceError, InvalidEntry
from cashcalendar.core.loader import load_cashflow, parse_cashflow

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def test_load_json_document():
    book = load_cashflow(DATA_DIR / "cashflow.json")

    assert book.starting_balance == Decimal("1000")
    assert len(book.entries) == 5
    assert book.title == "Cinder Hill Farm"
    assert book.source.endswith("cashflow.json")
    # Source order is preserved; sorting is the projection's job
    assert book.entries[0].description == "Feed merchant invoice"
    assert book.entries[3].amount == Decimal("250.5")


def test_load_yaml_document():
    book = load_cashflow(DATA_DIR / "cashflow.yaml")

    assert book.starting_balance == Decimal("1000")
    assert book.metadata["currency_symbol"] == "€"
    assert [e.date for e in book.entries] == [date(2026, 10, 20), date(2026, 10, 23)]


def test_load_mapping_does_not_alias_input():
    raw = {"startingBalance": 5, "entries": []}
    book = load_cashflow(raw)
    raw["startingBalance"] = 10
    assert book.starting_balance == Decimal("5")
    assert book.source == "<mapping>"


def test_missing_entries_means_empty_calendar():
    book = parse_cashflow({"startingBalance": 750})
    assert book.entries == ()


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_cashflow(tmp_path / "nope.json")


def test_unsupported_format(tmp_path: Path):
    path = tmp_path / "cashflow.csv"
    path.write_text("date,type\n", encoding="utf-8")
    with pytest.raises(CashflowSourceError, match="Unsupported"):
        load_cashflow(path)


def test_invalid_json(tmp_path: Path):
    path = tmp_path / "cashflow.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CashflowSourceError, match="Invalid JSON"):
        load_cashflow(path)


def test_root_must_be_mapping(tmp_path: Path):
    path = tmp_path / "cashflow.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(CashflowSourceError, match="mapping"):
        load_cashflow(path)


@pytest.mark.parametrize(
    "doc",
    [
        {"entries": []},
        {"startingBalance": "plenty", "entries": []},
        {"startingBalance": 0, "entries": {"a": 1}},
        {"startingBalance": 0, "entries": [], "title": 7},
    ],
)
def test_document_errors(doc):
    with pytest.raises(CashflowSourceError):
        parse_cashflow(doc)


def test_bad_entry_rejects_whole_document():
    doc = {
        "startingBalance": 0,
        "entries": [
            {
                "date": "2026-10-20",
                "type": "in",
                "description": "ok",
                "amount": 1,
                "status": "pending",
                "certainty": "high",
            },
            {
                "date": "2026-10-21",
                "type": "in",
                "description": "bad",
                "amount": -1,
                "status": "pending",
                "certainty": "high",
            },
        ],
    }
    with pytest.raises(InvalidEntry) as exc_info:
        parse_cashflow(doc)
    assert exc_info.value.index == 1
    assert exc_info.value.field == "amount"


def test_unknown_keys_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="cashcalendar.core.loader"):
        parse_cashflow({"startingBalance": 0, "entries": [], "owner": "me"})
    assert "owner" in caplog.text


def test_book_to_dict_round_trip():
    book = load_cashflow(DATA_DIR / "cashflow.json")
    again = parse_cashflow(book.to_dict())
    assert again.entries == book.entries
    assert again.starting_balance == book.starting_balance
    assert again.title == book.title
