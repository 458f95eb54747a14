from __future__ import annotations

from decimal import Decimal
from typing import Optional, Pattern

from .models import Direction
from .parse import parse_amount

EPSILON = Decimal("0.01")


def find_opening_balance(text: str, opening_re: Pattern[str]) -> Optional[Decimal]:
    """Busca el saldo inicial en el resumen. None si no aparece o no es un monto."""
    m = opening_re.search(text)
    if not m:
        return None
    try:
        return parse_amount(m.group(1))
    except ValueError:
        return None


class BalanceReconciler:
    """
    Infiere débito/crédito cuando el estado solo trae el saldo de cierre:
    - crédito si saldo_actual + monto == saldo_cierre (tolerancia 0.01)
    - débito en cualquier otro caso
    Después de cada decisión el saldo actual pasa a ser el saldo de cierre del
    estado, aunque la inferencia haya fallado, así un error no se arrastra.
    """

    def __init__(self, opening_balance: Optional[Decimal] = None) -> None:
        self.opening_known = opening_balance is not None
        self.balance = opening_balance if opening_balance is not None else Decimal("0.00")

    def infer(self, amount: Decimal, closing_balance: Decimal) -> Direction:
        predicted_credit = abs(self.balance + amount - closing_balance) < EPSILON
        self.balance = closing_balance
        return Direction.CREDIT if predicted_credit else Direction.DEBIT
