"""
Chart functions for visualizing cash-flow projections.

All chart functions take the DataFrame from `projection_frame` (or a
calendar's `timeline()`) and return (figure, tidy_dataframe_used).
"""

from __future__ import annotations

import pandas as pd

# Plotly imports with graceful fallback
try:
    import plotly.graph_objects as go

    PLOTLY_AVAILABLE = True
except ImportError:
    PLOTLY_AVAILABLE = False

TYPE_COLORS = {
    "in": "green",
    "out": "red",
    "event": "goldenrod",
}

TYPE_NAMES = {
    "in": "Income",
    "out": "Outgoing",
    "event": "Event",
}


def _check_plotly() -> None:
    """Check if Plotly is available and raise helpful error if not."""
    if not PLOTLY_AVAILABLE:
        raise ImportError(
            "Plotly is required for chart functions. Install with:\n"
            "pip install 'cashcalendar[viz]'"
        )


def balance_timeline(
    df: pd.DataFrame,
    starting_balance: float,
    title: str | None = None,
) -> tuple[go.Figure, pd.DataFrame]:
    """
    Plot the running balance as a step line with one marker per entry.

    The series starts from the starting balance on the first entry's date.
    Markers are colored by entry type and a dashed line marks zero.

    **Args:**
        df: Projection frame with date, type, description, running_balance
        starting_balance: Balance before the first entry
        title: Chart title (default: "Projected Balance")

    **Returns:**
        Tuple of (plotly_figure, tidy_dataframe_used)

    **Example:**
        ```python
        from cashcalendar import CashflowCalendar, balance_timeline

        cal = CashflowCalendar.from_source("cashflow.json")
        fig, data = balance_timeline(cal.projection_frame(), cal.starting_balance)
        fig.show()
        ```
    """
    _check_plotly()

    data = df.sort_values("date", kind="stable").reset_index(drop=True)
    fig = go.Figure()

    if not data.empty:
        start_row = pd.DataFrame(
            {"date": [data["date"].iloc[0]], "running_balance": [float(starting_balance)]}
        )
        line = pd.concat([start_row, data[["date", "running_balance"]]], ignore_index=True)
        fig.add_trace(
            go.Scatter(
                x=line["date"],
                y=line["running_balance"],
                mode="lines",
                line={"shape": "hv", "color": "gray"},
                name="Balance",
                hoverinfo="skip",
            )
        )

        for entry_type, type_data in data.groupby("type", sort=False):
            fig.add_trace(
                go.Scatter(
                    x=type_data["date"],
                    y=type_data["running_balance"],
                    mode="markers",
                    marker={"size": 9, "color": TYPE_COLORS.get(entry_type, "gray")},
                    name=TYPE_NAMES.get(entry_type, entry_type),
                    text=type_data["description"],
                    hovertemplate="<b>%{text}</b><br>"
                    + "Date: %{x}<br>"
                    + "Balance: %{y:,.2f}<br>"
                    + "<extra></extra>",
                )
            )

    fig.add_hline(y=0, line_dash="dash", line_color="red", opacity=0.5)
    fig.update_layout(
        title=title or "Projected Balance",
        xaxis_title="Date",
        yaxis_title="Balance",
        hovermode="closest",
    )

    return fig, data


def cashflow_bars(df: pd.DataFrame) -> tuple[go.Figure, pd.DataFrame]:
    """
    Plot daily inflow and outflow totals as grouped bars.

    Events carry no amount and are left out.

    **Returns:**
        Tuple of (plotly_figure, tidy_dataframe_used) where the tidy frame
        has columns date, type, amount
    """
    _check_plotly()

    money = df[df["type"].isin(["in", "out"])]
    tidy = money.groupby(["date", "type"], as_index=False)["amount"].sum()

    fig = go.Figure()
    for entry_type in ("in", "out"):
        type_data = tidy[tidy["type"] == entry_type]
        fig.add_trace(
            go.Bar(
                x=type_data["date"],
                y=type_data["amount"],
                name=TYPE_NAMES[entry_type],
                marker_color=TYPE_COLORS[entry_type],
            )
        )

    fig.update_layout(
        title="Cash In / Out by Day",
        xaxis_title="Date",
        yaxis_title="Amount",
        barmode="group",
    )

    return fig, tidy


def save_chart(fig: go.Figure, filename: str, format: str = "html") -> None:
    """
    Save chart to file.

    Args:
        fig: Plotly figure
        filename: Output filename
        format: Output format ('html', 'png', 'pdf', 'svg')
    """
    _check_plotly()

    if format == "html":
        fig.write_html(filename)
    elif format in {"png", "pdf", "svg"}:
        fig.write_image(filename, format=format)
    else:
        raise ValueError(f"Unsupported format: {format}")
