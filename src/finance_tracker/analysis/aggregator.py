#!/usr/bin/env python3
"""
Transaction Aggregation Functions

Pure, side-effect-free functions computing derived figures from a ledger
snapshot. Every function is total over well-formed transactions: empty input
yields zero or an empty result, never an error. Malformed records are refused
at the ledger boundary, so nothing here re-validates amounts.
"""

import calendar
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from finance_tracker.core.dates import FinancialDate
from finance_tracker.core.errors import ValidationError
from finance_tracker.core.models import Transaction, TransactionType
from finance_tracker.core.money import Money

Number = int | float | Decimal


@dataclass(frozen=True)
class MonthlyTotals:
    """Income and expense totals for one calendar month."""

    month: int
    income: Money
    expense: Money

    @property
    def net(self) -> Money:
        return self.income - self.expense

    @property
    def label(self) -> str:
        """Abbreviated month name, e.g. 'Jan'."""
        return calendar.month_abbr[self.month]


def _txn_type(value: TransactionType | str) -> TransactionType:
    return TransactionType.parse(value)


def percentage_of(part: Money | Number, whole: Money | Number) -> float:
    """
    Express ``part`` as a percentage of ``whole``.

    Returns 0.0 when ``whole`` is zero, so callers never see a division error,
    NaN or infinity. Results are not clamped: 150 of 120 is 125.0.

    Examples:
        percentage_of(Money.from_cents(15000), Money.from_cents(12000)) -> 125.0
        percentage_of(50, 0) -> 0.0
    """
    part_value = part.cents if isinstance(part, Money) else part
    whole_value = whole.cents if isinstance(whole, Money) else whole
    if not whole_value:
        return 0.0
    if isinstance(part_value, Decimal) or isinstance(whole_value, Decimal):
        return float(Decimal(part_value) * 100 / Decimal(whole_value))
    return part_value * 100 / whole_value


def sum_by_type(transactions: Iterable[Transaction], txn_type: TransactionType | str) -> Money:
    """Sum of amounts over transactions of the given type. Empty input gives zero."""
    wanted = _txn_type(txn_type)
    return Money.sum(t.amount for t in transactions if t.type is wanted)


def sum_by_category(
    transactions: Iterable[Transaction],
    category: str,
    txn_type: TransactionType | str | None = None,
) -> Money:
    """
    Sum of amounts over transactions whose category exactly equals ``category``.

    Args:
        transactions: Ledger snapshot
        category: Category label, matched by exact string equality
        txn_type: Optional type filter
    """
    wanted = _txn_type(txn_type) if txn_type is not None else None
    return Money.sum(
        t.amount for t in transactions if t.category == category and (wanted is None or t.type is wanted)
    )


def net_income(transactions: Iterable[Transaction]) -> Money:
    """Income minus expenses."""
    income = expense = 0
    for t in transactions:
        if t.is_income:
            income += t.amount.cents
        else:
            expense += t.amount.cents
    return Money.from_cents(income - expense)


def savings_rate(income: Money, expense: Money) -> float:
    """Share of income left after expenses, as a percentage. Zero income gives 0.0."""
    return percentage_of(income - expense, income)


def category_totals(transactions: Iterable[Transaction], txn_type: TransactionType | str) -> dict[str, Money]:
    """Per-category totals for one transaction type, in first-encountered category order."""
    wanted = _txn_type(txn_type)
    totals: dict[str, int] = {}
    for t in transactions:
        if t.type is wanted:
            totals[t.category] = totals.get(t.category, 0) + t.amount.cents
    return {category: Money.from_cents(cents) for category, cents in totals.items()}


def top_categories(
    transactions: Iterable[Transaction],
    txn_type: TransactionType | str,
    limit: int,
) -> list[tuple[str, Money]]:
    """
    Largest categories for a transaction type, descending by amount.

    Ties keep first-encountered order (the sort is stable). ``limit`` truncates
    the result and never pads it.

    Raises:
        ValidationError: If limit is negative
    """
    if limit < 0:
        raise ValidationError(f"limit must not be negative, got {limit}", field="limit")
    totals = category_totals(transactions, txn_type)
    ranked = sorted(totals.items(), key=lambda item: item[1].cents, reverse=True)
    return ranked[:limit]


def group_by_month(transactions: Iterable[Transaction], year: int) -> list[MonthlyTotals]:
    """
    Income and expense totals per calendar month of ``year``.

    Always returns 12 entries in calendar order (January..December); months
    with no activity are zero-filled.
    """
    income = [0] * 12
    expense = [0] * 12
    for t in transactions:
        if t.date.year != year:
            continue
        index = t.date.month - 1
        if t.is_income:
            income[index] += t.amount.cents
        else:
            expense[index] += t.amount.cents

    return [
        MonthlyTotals(
            month=index + 1,
            income=Money.from_cents(income[index]),
            expense=Money.from_cents(expense[index]),
        )
        for index in range(12)
    ]


def _average(values: Sequence[int]) -> Money:
    if not values:
        return Money.zero()
    mean = (Decimal(sum(values)) / len(values)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return Money.from_cents(int(mean))


def average_monthly(monthly: Sequence[MonthlyTotals], end_month: int, window: int = 6) -> tuple[Money, Money]:
    """
    Average monthly income and expense over a trailing window.

    The window ends at ``end_month`` (1-12) and is clipped at January, so in
    March a six-month window averages three months.

    Returns:
        (average income, average expense), rounded half up to whole minor units
    """
    if not 1 <= end_month <= 12:
        raise ValidationError(f"month must be 1-12, got {end_month}", field="month")
    if window < 1:
        raise ValidationError(f"window must be at least 1, got {window}", field="window")
    start = max(0, end_month - window)
    selected = monthly[start:end_month]
    return (
        _average([m.income.cents for m in selected]),
        _average([m.expense.cents for m in selected]),
    )


def transactions_in_month(transactions: Iterable[Transaction], year: int, month: int) -> list[Transaction]:
    """Transactions dated within the given calendar month."""
    return [t for t in transactions if t.date.year == year and t.date.month == month]


def filter_transactions(
    transactions: Iterable[Transaction],
    search: str = "",
    txn_type: TransactionType | str | None = None,
    category: str | None = None,
    month: str | None = None,
) -> list[Transaction]:
    """
    Filter transactions the way the transaction list view does.

    Args:
        search: Case-insensitive substring matched against description or category
        txn_type: Keep only this type
        category: Keep only this exact category
        month: Keep only this month, formatted "YYYY-MM"
    """
    wanted = _txn_type(txn_type) if txn_type is not None else None
    needle = search.lower()
    month_key = FinancialDate.from_string(f"{month}-01").month_key() if month is not None else None

    result = []
    for t in transactions:
        if needle and needle not in t.description.lower() and needle not in t.category.lower():
            continue
        if wanted is not None and t.type is not wanted:
            continue
        if category is not None and t.category != category:
            continue
        if month_key is not None and t.date.month_key() != month_key:
            continue
        result.append(t)
    return result


def recent_transactions(transactions: Iterable[Transaction], limit: int = 5) -> list[Transaction]:
    """Newest transactions first; same-day records keep ledger order."""
    return sorted(transactions, key=lambda t: t.date.date, reverse=True)[: max(limit, 0)]


def available_months(transactions: Iterable[Transaction]) -> list[str]:
    """Distinct "YYYY-MM" months that have activity, newest first."""
    return sorted({t.date.month_key() for t in transactions}, reverse=True)


def count_by_type(transactions: Iterable[Transaction]) -> dict[TransactionType, int]:
    """Number of transactions of each type (both keys always present)."""
    counts = dict.fromkeys(TransactionType, 0)
    for t in transactions:
        counts[t.type] += 1
    return counts


def count_recurring(transactions: Iterable[Transaction]) -> int:
    """Number of transactions flagged as recurring."""
    return sum(1 for t in transactions if t.recurring)
