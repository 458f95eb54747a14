from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterator, Optional, Pattern, Union

from .models import Direction

TWO_PLACES = Decimal("0.01")

MARKERS = {
    "Dr": Direction.DEBIT,
    "Cr": Direction.CREDIT,
}


@dataclass(frozen=True)
class CardCandidate:
    date: str
    narration: str
    amount: Decimal
    direction: Direction


@dataclass(frozen=True)
class SavingsCandidate:
    date: str
    narration: str
    ref_no: str
    value_date: str
    amount: Decimal
    closing_balance: Decimal


@dataclass(frozen=True)
class Malformed:
    text: str
    reason: str


CardExtraction = Union[CardCandidate, Malformed]
SavingsExtraction = Union[SavingsCandidate, Malformed]


def parse_amount(raw: str) -> Decimal:
    """'1,234.56' -> Decimal('1234.56'). Solo ',' como separador de miles."""
    s = (raw or "").strip().replace(",", "")
    if not s:
        raise ValueError("monto vacío")
    try:
        value = Decimal(s)
    except InvalidOperation as exc:
        raise ValueError(f"monto inválido: {raw!r}") from exc
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def clean_text(value: Optional[str]) -> str:
    return " ".join((value or "").split())


def scan_credit_card(text: str, tx_re: Pattern[str], row_start_re: Pattern[str]) -> Iterator[CardExtraction]:
    """
    Recorre el texto línea por línea: cada línea que comienza con fecha es un
    candidato y debe cumplir la forma completa en esa misma línea
    (fecha, narración, monto y marca Dr/Cr).
    Grupos requeridos: date, narration, amount, marker.
    """
    for line in text.splitlines():
        line = line.strip()
        if not row_start_re.match(line):
            continue

        m = tx_re.match(line)
        if not m:
            yield Malformed(text=clean_text(line), reason="la línea no tiene la forma esperada")
            continue

        raw = clean_text(m.group(0))
        date = m.group("date")
        narration = clean_text(m.group("narration"))
        amount_raw = m.group("amount")
        marker = m.group("marker")

        missing = [
            name
            for name, val in (("date", date), ("narration", narration), ("amount", amount_raw), ("marker", marker))
            if not val
        ]
        if missing:
            yield Malformed(text=raw, reason="faltan campos: " + ", ".join(missing))
            continue

        direction = MARKERS.get(marker)
        if direction is None:
            yield Malformed(text=raw, reason=f"marca desconocida: {marker!r}")
            continue

        try:
            amount = parse_amount(amount_raw)
        except ValueError as exc:
            yield Malformed(text=raw, reason=str(exc))
            continue

        yield CardCandidate(date=date, narration=narration, amount=amount, direction=direction)


def extract_savings_block(block: str, block_re: Pattern[str]) -> SavingsExtraction:
    """
    Aplica el patrón del perfil de ahorro a un bloque ya reagrupado.
    Grupos requeridos: date, narration, ref, value_date, amount, balance.
    El grupo opcional 'tail' (texto después del balance) se suma a la narración.
    """
    m = block_re.match(block)
    if not m:
        return Malformed(text=block, reason="el bloque no tiene la forma esperada")

    required = ("date", "narration", "ref", "value_date", "amount", "balance")
    missing = [name for name in required if not m.group(name)]
    if missing:
        return Malformed(text=block, reason="faltan campos: " + ", ".join(missing))

    try:
        amount = parse_amount(m.group("amount"))
        balance = parse_amount(m.group("balance"))
    except ValueError as exc:
        return Malformed(text=block, reason=str(exc))

    narration = clean_text(m.group("narration") + " " + (m.group("tail") or ""))

    return SavingsCandidate(
        date=m.group("date"),
        narration=narration,
        ref_no=m.group("ref"),
        value_date=m.group("value_date"),
        amount=amount,
        closing_balance=balance,
    )
