"""
Command-line interface for CashCalendar.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from cashcalendar import __version__
from cashcalendar.core.calendar import CashflowCalendar
from cashcalendar.core.dates import DEFAULT_SOON_WINDOW_DAYS, FixedClock, SystemClock
from cashcalendar.core.money import format_money
from cashcalendar.core.validation import validate_source

log = logging.getLogger(__name__)

EXAMPLE_DOCUMENT = {
    "title": "Cinder Hill Farm",
    "startingBalance": 2450,
    "entries": [
        {
            "date": "2026-10-20",
            "type": "out",
            "description": "Feed merchant invoice",
            "amount": 640,
            "status": "due",
            "certainty": "complete",
        },
        {
            "date": "2026-10-22",
            "type": "in",
            "description": "Lamb sale at market",
            "amount": 1800,
            "status": "pending",
            "certainty": "high",
        },
        {
            "date": "2026-10-24",
            "type": "event",
            "description": "Vet visit booked",
            "amount": 0,
            "status": "pending",
            "certainty": "complete",
        },
        {
            "date": "2026-10-31",
            "type": "out",
            "description": "Land rent",
            "amount": 1200,
            "status": "due",
            "certainty": "complete",
        },
        {
            "date": "2026-11-07",
            "type": "in",
            "description": "Farm shop takings",
            "amount": 450,
            "status": "pending",
            "certainty": "medium",
        },
        {
            "date": "2026-11-15",
            "type": "in",
            "description": "Hedgerow grant payment",
            "amount": 900,
            "status": "pending",
            "certainty": "low",
        },
    ],
}


def _build_calendar(args) -> CashflowCalendar:
    """Load the input document into a calendar session for the CLI flags."""
    clock = FixedClock(date.fromisoformat(args.today)) if args.today else SystemClock()
    cal = CashflowCalendar.from_source(
        args.input,
        clock=clock,
        high_certainty_only=getattr(args, "high_certainty_only", False),
    )
    # Only the window is overridden; currency_symbol comes from the document
    cal.config.soon_window_days = getattr(
        args, "soon_days", DEFAULT_SOON_WINDOW_DAYS
    )
    return cal


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars and pandas timestamps."""

    def default(self, obj):
        import numpy as np
        import pandas as pd

        if isinstance(obj, np.generic):
            return obj.item()
        elif isinstance(obj, pd.Timestamp):
            return obj.strftime("%Y-%m-%d")
        return super().default(obj)


def _dump_json(data) -> None:
    json.dump(data, sys.stdout, indent=2, cls=NumpyEncoder)
    sys.stdout.write("\n")


def cmd_example(_) -> int:
    """Print a minimal working cash-flow JSON document."""
    _dump_json(EXAMPLE_DOCUMENT)
    return 0


def cmd_validate(args) -> int:
    """Validate a cash-flow document."""
    try:
        report = validate_source(args.input)
    except Exception as e:
        if args.format == "json":
            _dump_json(
                {
                    "has_errors": True,
                    "has_warnings": False,
                    "is_valid": False,
                    "exit_code": 1,
                    "error": str(e),
                }
            )
        else:
            print(f"Validation failed: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        _dump_json(report.to_dict())
    else:
        print(str(report))
    return report.get_exit_code()


def cmd_summary(args) -> int:
    """Print the headline planning figures."""
    try:
        cal = _build_calendar(args)
        summary = cal.summary
        card = cal.next_critical_card()

        if args.json:
            output = summary.to_dict()
            output["next_critical_label"] = card.headline
            output["next_critical_days"] = card.days
            _dump_json(output)
            return 0

        symbol = cal.config.currency_symbol
        if cal.title:
            print(cal.title)
        print(f"Today: {cal.clock.today().isoformat()}")
        print()
        print(f"  Due Out:                {format_money(summary.total_out, symbol)}")
        print(
            "  Expected In (certain):  "
            f"{format_money(summary.total_in_high_certainty, symbol)}"
        )
        print(
            "  Expected In (all):      "
            f"{format_money(summary.total_in_all, symbol)}"
        )
        print(
            "  Net Position:           "
            f"{format_money(summary.net_position_high, symbol)}"
        )
        print(
            "  Net Position (all):     "
            f"{format_money(summary.net_position_all, symbol)}"
        )
        print(f"  Next critical:          {card.headline} - {card.detail}")
        return 0

    except Exception as e:
        print(f"Error computing summary: {e}", file=sys.stderr)
        return 1


def cmd_timeline(args) -> int:
    """Print the projected timeline with running balance."""
    try:
        cal = _build_calendar(args)
        df = cal.timeline()

        if args.json:
            records = df.to_dict("records")
            _dump_json(
                {
                    "starting_balance": float(cal.starting_balance),
                    "high_certainty_only": cal.high_certainty_only,
                    "rows": records,
                }
            )
            return 0

        symbol = cal.config.currency_symbol
        start_label = format_money(cal.starting_balance, symbol)
        print(f" {'Today':<22} {'Starting balance':<40} {'':>12} {start_label:>12}")
        for row in df.itertuples(index=False):
            marker = "*" if row.is_today else ("!" if row.is_soon else " ")
            when = f"{row.display_date} ({row.days_label})"
            text = row.description
            if row.certainty_note:
                text = f"{text} [{row.certainty_note}]"
            print(
                f"{marker}{when:<22} {text:<40} {row.amount_label:>12} "
                f"{row.balance_label:>12}"
            )
        return 0

    except Exception as e:
        print(f"Error building timeline: {e}", file=sys.stderr)
        return 1


def cmd_chart(args) -> int:
    """Write the running-balance chart to a file."""
    try:
        from cashcalendar.charts import balance_timeline, save_chart

        cal = _build_calendar(args)
        fig, _ = balance_timeline(
            cal.projection_frame(), float(cal.starting_balance), title=cal.title
        )
        save_chart(fig, args.output, format=args.format)
        print(f"Chart saved to {args.output}")
        return 0

    except Exception as e:
        print(f"Error writing chart: {e}", file=sys.stderr)
        return 1


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-i", "--input", required=True, help="Input cash-flow JSON/YAML file"
    )
    parser.add_argument(
        "--today", help="Evaluate day offsets as of this date (YYYY-MM-DD)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cashcal", description="CashCalendar - Cash-flow calendar and projection"
    )

    parser.add_argument(
        "--version", action="version", version=f"CashCalendar {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(
        dest="cmd", required=True, help="Available commands"
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example", help="Print a sample cash-flow JSON document"
    )
    example_parser.set_defaults(func=cmd_example)

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", help="Validate a cash-flow document"
    )
    validate_parser.add_argument(
        "-i", "--input", required=True, help="Input cash-flow JSON/YAML file"
    )
    validate_parser.add_argument(
        "--format", choices=["human", "json"], default="human", help="Output format"
    )
    validate_parser.set_defaults(func=cmd_validate)

    # Summary command
    summary_parser = subparsers.add_parser(
        "summary", help="Show headline planning figures"
    )
    _add_common(summary_parser)
    summary_parser.add_argument(
        "--json", action="store_true", help="Output in JSON format"
    )
    summary_parser.set_defaults(func=cmd_summary)

    # Timeline command
    timeline_parser = subparsers.add_parser(
        "timeline", help="Show entries with running balance"
    )
    _add_common(timeline_parser)
    timeline_parser.add_argument(
        "--high-certainty-only",
        action="store_true",
        help="Only show complete/high certainty entries",
    )
    timeline_parser.add_argument(
        "--soon-days",
        type=int,
        default=DEFAULT_SOON_WINDOW_DAYS,
        help=f"Highlight entries due within N days (default: {DEFAULT_SOON_WINDOW_DAYS})",
    )
    timeline_parser.add_argument(
        "--json", action="store_true", help="Output in JSON format"
    )
    timeline_parser.epilog = """
Markers:
  * due today
  ! due within the --soon-days window
    """
    timeline_parser.set_defaults(func=cmd_timeline)

    # Chart command
    chart_parser = subparsers.add_parser(
        "chart", help="Write the running-balance chart (requires plotly)"
    )
    _add_common(chart_parser)
    chart_parser.add_argument(
        "-o", "--output", required=True, help="Output chart file"
    )
    chart_parser.add_argument(
        "--format",
        choices=["html", "png", "pdf", "svg"],
        default="html",
        help="Output format (default: html)",
    )
    chart_parser.add_argument(
        "--high-certainty-only",
        action="store_true",
        help="Only plot complete/high certainty entries",
    )
    chart_parser.set_defaults(func=cmd_chart)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    log.debug("Running command %s", args.cmd)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
