from __future__ import annotations

import re
from datetime import datetime
from typing import List

from ..fingerprint import compute_fingerprint
from ..models import ParseResult, ParseWarning, SourceType, Transaction
from ..parse import Malformed, scan_credit_card
from .base import Profile

ROW_START_RE = re.compile(r"^\d{2}/\d{2}/\d{4}\b")
# Ejemplo: 20/12/2023 AMAZON SELLER SERVICES 2,500.00 Dr
TX_RE = re.compile(
    r"(?P<date>\d{2}/\d{2}/\d{4})[ \t]+(?P<narration>.*?)[ \t]+(?P<amount>[\d,]+\.\d{2})[ \t]+(?P<marker>Cr|Dr)\b"
)


class HDFCCreditProfile(Profile):
    name = "HDFC Credit Card"
    source = SourceType.CREDIT_CARD
    identity_re = re.compile(r"HDFC BANK.*CREDIT CARD", re.IGNORECASE)

    def parse(self, text: str, imported_at: datetime) -> ParseResult:
        # Cada transacción ocupa una línea y trae su marca Dr/Cr: no hace falta segmentar
        txs: List[Transaction] = []
        warnings: List[ParseWarning] = []

        for cand in scan_credit_card(text, TX_RE, ROW_START_RE):
            if isinstance(cand, Malformed):
                warnings.append(self._drop(cand))
                continue

            txs.append(
                Transaction(
                    date=cand.date,
                    amount=cand.amount,
                    direction=cand.direction,
                    merchant=cand.narration,
                    description=cand.narration,
                    source=self.source,
                    fingerprint=compute_fingerprint(cand.date, cand.narration, cand.amount, cand.direction),
                    imported_at=imported_at,
                )
            )

        return ParseResult(profile=self.name, source=self.source, transactions=txs, warnings=warnings)


HDFC_CREDIT = HDFCCreditProfile()
