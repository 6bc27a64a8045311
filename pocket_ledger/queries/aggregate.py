"""
Balance Aggregation

Totals are accumulated as exact decimals; rounding to cents is left
to whoever prints them.
"""

from decimal import Decimal
from typing import Sequence

from pocket_ledger.models.transaction import BalanceSummary, Transaction


def balance(transactions: Sequence[Transaction]) -> BalanceSummary:
    """
    Total income, total expenses and the net between them.

    Income sums the positive amounts, expenses sum the absolute value
    of the negative ones. Zero amounts count toward neither.
    """
    income = Decimal("0")
    expenses = Decimal("0")

    for transaction in transactions:
        if transaction.amount > 0:
            income += transaction.amount
        elif transaction.amount < 0:
            expenses += -transaction.amount

    return BalanceSummary(
        total_income=income,
        total_expenses=expenses,
        net=income - expenses,
        transaction_count=len(transactions),
    )
