"""
Formatting utilities for the AGORA Governance Dashboard.
Consolidates presentation logic used by the Streamlit app, the API and the CLI.

All helpers are pure. ``time_remaining`` takes ``now`` explicitly so callers
(and tests) control the clock; its result is only valid at that instant.
"""

import math
import numbers
from datetime import datetime, timezone
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, NamedTuple, Optional, Union

import pandas as pd

PLACEHOLDER = "—"

_SECONDS_PER_HOUR = 60 * 60

# wide enough to quantize any finite float to three places
_DECIMAL_CONTEXT = Context(prec=400)


class TimeRemaining(NamedTuple):
    expired: bool
    text: str


class VoteSplit(NamedTuple):
    yes: int
    no: int
    abstain: int


def _is_missing(value: Any) -> bool:
    return not isinstance(value, numbers.Number) or pd.isna(value)


def _round_half_away(value: float, places: int = 0) -> Decimal:
    # Decimal(float) keeps the exact binary value; ROUND_HALF_UP rounds away from zero.
    exp = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(exp, rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(_round_half_away(value))


def _is_infinite(value: Any) -> bool:
    # math.isinf overflows on ints wider than a float
    return isinstance(value, float) and math.isinf(value)


def _scaled_text(value: int, divisor: int) -> str:
    """One-decimal ``value / divisor`` in integer arithmetic, ties away from zero."""
    tenths, rem = divmod(abs(value) * 10, divisor)
    if rem * 2 >= divisor:
        tenths += 1
    whole, frac = divmod(tenths, 10)
    sign = "-" if value < 0 else ""
    return f"{sign}{whole}" if frac == 0 else f"{sign}{whole}.{frac}"


def comma_number(value: Any) -> str:
    """
    Format a number with thousands separators and no scaling.
    At most three fraction digits are kept, trailing zeros dropped.
    Example: 1234.5 -> "1,234.5", 120.0 -> "120"
    """
    if _is_missing(value):
        return PLACEHOLDER
    if _is_infinite(value):
        return "-∞" if value < 0 else "∞"
    if isinstance(value, numbers.Integral):
        return f"{int(value):,}"

    d = _round_half_away(value, 3)
    if d == 0:
        d = Decimal(0)
    text = f"{d:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def compact_number(value: Any) -> str:
    """
    Format a number with K/M suffixes, one decimal, trailing ".0" stripped.
    Below 1,000 falls back to ``comma_number``.
    Example: 1500 -> "1.5K", 2000000 -> "2M", 999 -> "999"
    """
    if _is_missing(value):
        return PLACEHOLDER
    if _is_infinite(value):
        return comma_number(value)

    abs_val = abs(value)
    if abs_val >= 1_000_000:
        divisor, suffix = 1_000_000, "M"
    elif abs_val >= 1_000:
        divisor, suffix = 1_000, "K"
    else:
        return comma_number(value)

    try:
        scaled = value / divisor
    except OverflowError:
        return _scaled_text(int(value), divisor) + suffix

    text = f"{_round_half_away(scaled, 1):f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text + suffix


def sol_amount(value: Any) -> str:
    """Example: 7500 -> "7,500 SOL"."""
    if _is_missing(value):
        return PLACEHOLDER
    return comma_number(value) + " SOL"


def _as_utc(moment: Union[datetime, str]) -> datetime:
    if isinstance(moment, str):
        moment = datetime.fromisoformat(moment.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def time_remaining(
    end_time: Union[datetime, str],
    now: Optional[Union[datetime, str]] = None,
) -> TimeRemaining:
    """
    Whole days and hours left until ``end_time``.

    Returns ``TimeRemaining(True, "Ended")`` once the deadline has passed,
    ``"{d}d {h}h"`` while a day or more remains, and ``"{h}h"`` otherwise.
    Naive datetimes are interpreted as UTC; ISO-8601 strings are accepted.
    """
    end = _as_utc(end_time)
    current = _as_utc(now) if now is not None else datetime.now(timezone.utc)

    delta = end - current
    if delta.total_seconds() <= 0:
        return TimeRemaining(True, "Ended")

    # timedelta normalizes to floor days plus a non-negative remainder
    days = delta.days
    hours = delta.seconds // _SECONDS_PER_HOUR
    if days > 0:
        return TimeRemaining(False, f"{days}d {hours}h")
    return TimeRemaining(False, f"{hours}h")


def vote_percentage(yes: float, no: float) -> int:
    """Share of yes votes as an integer percentage; 0 when nobody voted."""
    total = yes + no
    if total == 0:
        return 0
    return round_half_away(yes / total * 100)


def vote_percentage_with_abstain(yes: float, no: float, abstain: float) -> VoteSplit:
    """
    Three-way split of a vote as integer percentages.

    Each share is rounded on its own, so the fields can sum to 99 or 101
    (1/1/1 -> 33/33/33). Display code should not assume an exact 100.
    """
    total = yes + no + abstain
    if total == 0:
        return VoteSplit(0, 0, 0)
    return VoteSplit(
        yes=round_half_away(yes / total * 100),
        no=round_half_away(no / total * 100),
        abstain=round_half_away(abstain / total * 100),
    )


def sanction_rate_to_percent(rate: float) -> float:
    """Stored sanction rates are percent × 100: 1000 -> 10.0."""
    return rate / 100


def gas_pool_usage_percent(total_balance: float, used_balance: float) -> int:
    """
    Used share of everything ever deposited in the gas pool, as a percentage.
    An empty pool (both balances zero) reports 0.
    """
    deposited = total_balance + used_balance
    if deposited == 0:
        return 0
    return round_half_away(used_balance / deposited * 100)
