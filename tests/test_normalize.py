from __future__ import annotations

from decimal import Decimal

from kubera.banks.hdfc_savings import OPENING_RE
from kubera.models import Direction
from kubera.normalize import BalanceReconciler, find_opening_balance


def test_debit_then_credit_from_running_balance():
    rec = BalanceReconciler(Decimal("10000.00"))

    assert rec.infer(Decimal("1000.00"), Decimal("9000.00")) == Direction.DEBIT
    assert rec.balance == Decimal("9000.00")

    # 9,000.00 + 500.00 == 9,500.00
    assert rec.infer(Decimal("500.00"), Decimal("9500.00")) == Direction.CREDIT
    assert rec.balance == Decimal("9500.00")


def test_wrong_guess_does_not_compound():
    # sin saldo inicial la primera inferencia puede fallar, pero el saldo se re-ancla
    rec = BalanceReconciler(None)
    assert not rec.opening_known
    assert rec.balance == Decimal("0.00")

    assert rec.infer(Decimal("200.00"), Decimal("5000.00")) == Direction.DEBIT
    assert rec.balance == Decimal("5000.00")

    assert rec.infer(Decimal("200.00"), Decimal("5200.00")) == Direction.CREDIT
    assert rec.infer(Decimal("300.00"), Decimal("4900.00")) == Direction.DEBIT


def test_tolerance_is_one_paisa():
    rec = BalanceReconciler(Decimal("100.00"))
    assert rec.infer(Decimal("50.00"), Decimal("150.01")) == Direction.DEBIT

    rec = BalanceReconciler(Decimal("100.00"))
    assert rec.infer(Decimal("50.004"), Decimal("150.00")) == Direction.CREDIT


def test_opening_balance_from_summary():
    text = (
        "STATEMENT SUMMARY :-\n"
        "Opening Balance Dr Count Cr Count Debits Credits Closing Bal\n"
        "  12,345.67 2 1 3,000.00 500.00 9,845.67\n"
    )
    assert find_opening_balance(text, OPENING_RE) == Decimal("12345.67")


def test_missing_opening_balance_is_none():
    assert find_opening_balance("STATEMENT SUMMARY :-\nnothing here", OPENING_RE) is None
