from __future__ import annotations

import re
from datetime import datetime
from typing import List

from ..fingerprint import compute_fingerprint
from ..logging_setup import get_logger
from ..models import ParseResult, ParseWarning, SourceType, Transaction
from ..normalize import BalanceReconciler, find_opening_balance
from ..parse import Malformed, extract_savings_block
from ..segment import BlockLayout, segment_blocks
from .base import Profile

logger = get_logger(__name__)

LAYOUT = BlockLayout(
    pagination_re=re.compile(r"Page No \.:[\s\S]*?-- \d+ of \d+ --"),
    summary_marker="STATEMENT SUMMARY",
    block_start_re=re.compile(r"^\d{2}/\d{2}/\d{2}\s"),
)

# Fecha | Narración | Ref | Fecha valor | Monto | Saldo de cierre | resto de la narración
BLOCK_RE = re.compile(
    r"^(?P<date>\d{2}/\d{2}/\d{2})\s+(?P<narration>.*?)\s+(?P<ref>\S+)\s+"
    r"(?P<value_date>\d{2}/\d{2}/\d{2})\s+(?P<amount>[\d,]+\.\d{2})\s+"
    r"(?P<balance>[\d,]+\.\d{2})(?P<tail>.*)$"
)

OPENING_RE = re.compile(r"Opening Balance[\s\S]*?\n[ \t]*([\d,]+\.\d{2})")


class HDFCSavingsProfile(Profile):
    name = "HDFC Savings Account"
    source = SourceType.DEBIT_UPI
    identity_re = re.compile(r"HDFC BANK[\s\S]*SAVINGS A/C", re.IGNORECASE)

    def parse(self, text: str, imported_at: datetime) -> ParseResult:
        opening = find_opening_balance(text, OPENING_RE)
        reconciler = BalanceReconciler(opening)

        txs: List[Transaction] = []
        warnings: List[ParseWarning] = []

        for block in segment_blocks(text, LAYOUT):
            cand = extract_savings_block(block, BLOCK_RE)
            if isinstance(cand, Malformed):
                warnings.append(self._drop(cand))
                continue

            direction = reconciler.infer(cand.amount, cand.closing_balance)

            txs.append(
                Transaction(
                    date=cand.date,
                    amount=cand.amount,
                    direction=direction,
                    merchant=cand.narration,
                    description=cand.narration,
                    source=self.source,
                    # la narración es ruidosa; la referencia es única por transacción
                    fingerprint=compute_fingerprint(cand.date, cand.ref_no, cand.amount, direction),
                    imported_at=imported_at,
                )
            )

        if opening is None and txs:
            first = txs[0]
            msg = (
                "No se encontró 'Opening Balance'; se asumió 0.00 y la dirección de la "
                f"primera transacción ({first.date} {first.amount}) es de baja confianza"
            )
            logger.warning("%s: %s", self.name, msg)
            warnings.append(ParseWarning(kind="ambiguous_direction", message=msg, fingerprint=first.fingerprint))

        return ParseResult(
            profile=self.name,
            source=self.source,
            opening_balance=opening,
            transactions=txs,
            warnings=warnings,
        )


HDFC_SAVINGS = HDFCSavingsProfile()
