"""
Validation and reporting utilities for cash-flow documents.

`load_cashflow` stops at the first bad entry. The report here walks the whole
document so every problem can be shown at once.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .entry import Entry
from .errors import CashflowSourceError, InvalidEntry
from .loader import parse_cashflow, read_source


@dataclass
class ValidationReport:
    """
    Structured validation report for a cash-flow document.

    Attributes:
        source: Path or label of the document
        document_error: Problem with the document shape, if any
        entry_errors: One `InvalidEntry` per bad entry
        duplicates: Indices of entries identical to an earlier entry
        entry_count: Number of entries in the document
    """

    source: str
    document_error: str | None = None
    entry_errors: list[InvalidEntry] = field(default_factory=list)
    duplicates: list[int] = field(default_factory=list)
    entry_count: int = 0

    def has_errors(self) -> bool:
        """Check if there are any hard errors."""
        return bool(self.document_error or self.entry_errors)

    def has_warnings(self) -> bool:
        """Check if there are any warnings (duplicate entries)."""
        return bool(self.duplicates)

    def is_valid(self) -> bool:
        """Check if validation passed (no errors, warnings are OK)."""
        return not self.has_errors()

    def get_exit_code(self) -> int:
        """
        Get appropriate CLI exit code.

        Returns:
            0: Valid (no errors)
            1: Errors present
            2: Warnings only
        """
        if self.has_errors():
            return 1
        elif self.has_warnings():
            return 2
        else:
            return 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source,
            "entry_count": self.entry_count,
            "document_error": self.document_error,
            "entry_errors": [
                {"index": e.index, "field": e.field, "message": e.message}
                for e in self.entry_errors
            ],
            "duplicates": self.duplicates,
            "has_errors": self.has_errors(),
            "has_warnings": self.has_warnings(),
            "is_valid": self.is_valid(),
            "exit_code": self.get_exit_code(),
        }

    def __str__(self) -> str:
        """Human-readable string representation."""
        lines = []

        if self.is_valid():
            lines.append(f"✅ Validation passed ({self.entry_count} entries)")
        else:
            lines.append("❌ Validation failed")

        if self.document_error:
            lines.append(f"Document: {self.document_error}")

        for err in self.entry_errors:
            lines.append(f"Entry error: {err}")

        if self.duplicates:
            lines.append(
                "Duplicate entries at: " + ", ".join(str(i) for i in self.duplicates)
            )

        return "\n".join(lines)


def validate_source(
    source: str | Path | dict[str, Any], *, format: str | None = None
) -> ValidationReport:
    """
    Validate a cash-flow document without stopping at the first problem.

    File-not-found still raises; everything else ends up in the report.
    """
    try:
        mapping, label = read_source(source, format=format)
    except CashflowSourceError as exc:
        return ValidationReport(source=str(source), document_error=str(exc))

    report = ValidationReport(source=label)
    raw_entries = mapping.get("entries")
    if isinstance(raw_entries, list):
        report.entry_count = len(raw_entries)
        entries: list[tuple[int, Entry]] = []
        for idx, raw in enumerate(raw_entries):
            try:
                entries.append((idx, Entry.from_dict(raw, index=idx)))
            except InvalidEntry as exc:
                report.entry_errors.append(exc)
        report.duplicates = find_duplicates(entries)

    # Document-level checks (starting balance, entries shape, metadata)
    mapping_without_entries = {k: v for k, v in mapping.items() if k != "entries"}
    if raw_entries is not None and not isinstance(raw_entries, list):
        mapping_without_entries["entries"] = raw_entries
    try:
        parse_cashflow(mapping_without_entries, source=label)
    except CashflowSourceError as exc:
        report.document_error = str(exc)

    return report


def find_duplicates(indexed: list[tuple[int, Entry]]) -> list[int]:
    """Indices of entries equal to an entry that appeared earlier."""
    seen: Counter[Entry] = Counter()
    out: list[int] = []
    for idx, entry in indexed:
        if seen[entry]:
            out.append(idx)
        seen[entry] += 1
    return out
