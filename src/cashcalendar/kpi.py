"""
KPI utilities for cash-flow projections.

This module provides standalone functions over the DataFrame returned by
`projection_frame` (columns `date`, `type`, `amount`, `running_balance`, ...).
"""

from __future__ import annotations

import numpy as np
import pandas as pd


def lowest_balance(
    df: pd.DataFrame,
    starting_balance: float,
    balance_col: str = "running_balance",
) -> float:
    """
    Lowest balance reached over the projection, including the starting point.

    Args:
        df: Projection frame
        starting_balance: Balance before the first row
        balance_col: Column name for the running balance

    Returns:
        Minimum of the starting balance and every running balance
    """
    balances = np.append(df[balance_col].to_numpy(dtype=float), float(starting_balance))
    return float(balances.min())


def first_shortfall(
    df: pd.DataFrame,
    balance_col: str = "running_balance",
) -> pd.Series | None:
    """
    First row where the running balance drops below zero.

    Returns:
        The offending row, or None if the balance never goes negative
    """
    negative = df[df[balance_col] < 0]
    if negative.empty:
        return None
    return negative.iloc[0]


def daily_net_flow(
    df: pd.DataFrame,
    signed_col: str = "signed_amount",
) -> pd.Series:
    """
    Net balance change per calendar day.

    Returns:
        Series indexed by date, named 'net_flow'
    """
    if df.empty:
        return pd.Series(dtype=float, name="net_flow")
    flow = df.groupby("date")[signed_col].sum()
    flow.name = "net_flow"
    return flow


def totals_by_certainty(
    df: pd.DataFrame,
    amount_col: str = "amount",
) -> pd.DataFrame:
    """
    Inflow and outflow totals per certainty level.

    Returns:
        DataFrame indexed by certainty (complete, high, medium, low) with
        'in' and 'out' columns; levels with no entries show zero
    """
    levels = ["complete", "high", "medium", "low"]
    money = df[df["type"].isin(["in", "out"])]
    if money.empty:
        return pd.DataFrame(0.0, index=levels, columns=["in", "out"])
    table = money.pivot_table(
        index="certainty",
        columns="type",
        values=amount_col,
        aggfunc="sum",
        fill_value=0.0,
    )
    return table.reindex(index=levels, columns=["in", "out"], fill_value=0.0)
