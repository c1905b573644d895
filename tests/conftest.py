"""Shared fixtures: a store with a fixed clock and a record factory."""

from decimal import Decimal

import pytest

from data_store import ExpenseRecord, ExpenseStore


@pytest.fixture
def store():
    return ExpenseStore(clock=lambda: 1_700_000_000_000)


@pytest.fixture
def make_record():
    counter = iter(range(1, 10_000))

    def _make(amount, category="Food", description="Item", date="2024-01-01"):
        return ExpenseRecord(
            id=next(counter),
            amount=Decimal(str(amount)),
            category=category,
            description=description,
            date=date,
        )

    return _make
