from __future__ import annotations

import datetime
from typing import List, Optional, Sequence

from .banks.base import Profile
from .detect import PROFILES, select_profile
from .logging_setup import get_logger
from .models import ParseResult, Transaction

logger = get_logger(__name__)

AUTO_MONTH = "Auto"
_DATE_FORMATS = ("%d/%m/%Y", "%d/%m/%y")


def month_label(date_str: str) -> str:
    """'20/12/2023' -> 'Dec 23'. Si la fecha no se entiende, 'Auto'."""
    for fmt in _DATE_FORMATS:
        try:
            dt = datetime.datetime.strptime(date_str.strip(), fmt)
        except ValueError:
            continue
        return dt.strftime("%b %y")
    return AUTO_MONTH


def parse_statement_detailed(
    text: str,
    *,
    imported_at: Optional[datetime.datetime] = None,
    month_sheet: Optional[str] = None,
    profiles: Sequence[Profile] = PROFILES,
) -> ParseResult:
    """
    Texto -> transacciones, con el perfil usado y las advertencias.
    - month_sheet: hoja destino para todas; si no se pasa, se deriva de la fecha
    - imported_at: por defecto, ahora (UTC)
    No guarda estado entre llamadas.
    """
    profile = select_profile(text, profiles)
    logger.info("Perfil detectado: %s", profile.name)

    stamp = imported_at or datetime.datetime.now(datetime.timezone.utc)
    result = profile.parse(text, stamp)

    txs = [
        t.model_copy(update={"month_sheet": month_sheet or month_label(t.date)})
        for t in result.transactions
    ]
    logger.info(
        "%s: %d transacciones, %d advertencias", profile.name, len(txs), len(result.warnings)
    )
    return result.model_copy(update={"transactions": txs})


def parse_statement(
    text: str,
    *,
    imported_at: Optional[datetime.datetime] = None,
    month_sheet: Optional[str] = None,
    profiles: Sequence[Profile] = PROFILES,
) -> List[Transaction]:
    return parse_statement_detailed(
        text, imported_at=imported_at, month_sheet=month_sheet, profiles=profiles
    ).transactions
