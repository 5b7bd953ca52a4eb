"""Utilities for loading cash-flow calendars from YAML/JSON sources."""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from .entry import Entry
from .errors import CashflowSourceError
from .money import to_decimal

__all__ = [
    "CashflowBook",
    "load_cashflow",
    "parse_cashflow",
    "read_source",
]

log = logging.getLogger(__name__)

_STARTING_BALANCE_KEYS = ("startingBalance", "starting_balance")
_METADATA_KEYS = ("title", "currency_symbol", "version")
_KNOWN_KEYS = {*_STARTING_BALANCE_KEYS, "entries", *_METADATA_KEYS}


@dataclass(frozen=True, slots=True)
class CashflowBook:
    """
    Validated contents of one cash-flow document.

    Attributes:
        starting_balance: Balance before the first entry
        entries: Entries in source order
        metadata: Optional document fields (title, currency_symbol, version)
        source: Path or label the document came from
    """

    starting_balance: Decimal
    entries: tuple[Entry, ...]
    metadata: dict[str, Any] = field(default_factory=dict)
    source: str = "<memory>"

    @property
    def title(self) -> str | None:
        return self.metadata.get("title")

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the source schema for JSON output."""
        data: dict[str, Any] = {
            k: v for k, v in self.metadata.items() if v is not None
        }
        data["startingBalance"] = float(self.starting_balance)
        data["entries"] = [e.to_dict() for e in self.entries]
        return data


def load_cashflow(
    source: str | Path | dict[str, Any], *, format: str | None = None
) -> CashflowBook:
    """
    Parse a cash-flow document from a YAML/JSON file or a mapping.

    The document needs `startingBalance` (or `starting_balance`) and an
    `entries` list. Every entry is validated before anything is returned,
    so a bad document is rejected as a whole.

    Raises:
        FileNotFoundError: If a path does not exist
        CashflowSourceError: If the document has the wrong shape
        InvalidEntry: If an entry field is missing or malformed
    """
    mapping, label = read_source(source, format=format)
    book = parse_cashflow(mapping, source=label)
    log.debug("Loaded %d entries from %s", len(book.entries), label)
    return book


def parse_cashflow(mapping: dict[str, Any], *, source: str = "<mapping>") -> CashflowBook:
    """Validate an already-decoded document mapping."""
    if not isinstance(mapping, dict):
        raise CashflowSourceError(f"Cash-flow root must be a mapping (source={source})")

    unknown = sorted(set(mapping) - _KNOWN_KEYS)
    if unknown:
        log.warning("%s: ignoring unknown keys: %s", source, ", ".join(unknown))

    starting_balance = _read_starting_balance(mapping, source)
    raw_entries = mapping.get("entries")
    if raw_entries is None:
        raw_entries = []
    if not isinstance(raw_entries, list):
        raise CashflowSourceError(f"{source}::entries: expected a list")

    entries: list[Entry] = []
    for idx, raw in enumerate(raw_entries):
        entries.append(Entry.from_dict(raw, index=idx))

    metadata = {key: deepcopy(mapping[key]) for key in _METADATA_KEYS if key in mapping}
    for key in ("title", "currency_symbol"):
        value = metadata.get(key)
        if value is not None and not isinstance(value, str):
            raise CashflowSourceError(f"{source}::{key}: expected a string")

    return CashflowBook(
        starting_balance=starting_balance,
        entries=tuple(entries),
        metadata=metadata,
        source=source,
    )


def read_source(
    source: str | Path | dict[str, Any], *, format: str | None = None
) -> tuple[dict[str, Any], str]:
    """Decode a file or copy a mapping; returns (mapping, source label)."""
    if isinstance(source, dict):
        return deepcopy(source), "<mapping>"

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(path)

    fmt = (format or path.suffix.lstrip(".")).lower()
    text = path.read_text(encoding="utf-8")
    if fmt in {"yaml", "yml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise CashflowSourceError(f"Invalid YAML in {path}: {exc}") from exc
    elif fmt in {"json", ""}:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CashflowSourceError(f"Invalid JSON in {path}: {exc}") from exc
    else:
        raise CashflowSourceError(f"Unsupported cash-flow format '{fmt}' for {path}")

    if not isinstance(data, dict):
        raise CashflowSourceError(f"Cash-flow root must be a mapping (source={path})")
    return data, str(path)


def _read_starting_balance(mapping: dict[str, Any], label: str) -> Decimal:
    for key in _STARTING_BALANCE_KEYS:
        if key in mapping:
            try:
                return to_decimal(mapping[key])
            except ValueError as exc:
                raise CashflowSourceError(f"{label}::{key}: {exc}") from exc
    raise CashflowSourceError(f"{label}: 'startingBalance' is required")

