from __future__ import annotations

from collections import OrderedDict
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from pydantic import BaseModel, Field

from .logging_setup import get_logger
from .models import Transaction

logger = get_logger(__name__)


class LedgerFile(BaseModel):
    version: int = 1
    transactions: List[Transaction] = Field(default_factory=list)


class Ledger:
    """
    Destino local de las transacciones, indexado por fingerprint.
    Reimportar el mismo estado no agrega duplicados (skip-on-exists).
    """

    def __init__(self, path: Union[str, Path], transactions: Iterable[Transaction] = ()) -> None:
        self.path = Path(path)
        self._by_fp: "OrderedDict[str, Transaction]" = OrderedDict()
        for t in transactions:
            self._by_fp.setdefault(t.fingerprint, t)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Ledger":
        p = Path(path)
        if not p.exists():
            return cls(p)
        data = LedgerFile.model_validate_json(p.read_text(encoding="utf-8"))
        return cls(p, data.transactions)

    def __len__(self) -> int:
        return len(self._by_fp)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._by_fp

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._by_fp.values())

    def add(self, transactions: Iterable[Transaction]) -> Tuple[int, int]:
        """Devuelve (agregadas, omitidas por fingerprint repetido)."""
        added = skipped = 0
        for t in transactions:
            if t.fingerprint in self._by_fp:
                skipped += 1
                continue
            self._by_fp[t.fingerprint] = t
            added += 1
        if skipped:
            logger.info("%d transacciones ya existían y se omitieron", skipped)
        return added, skipped

    def by_month(self) -> Dict[str, List[Transaction]]:
        out: Dict[str, List[Transaction]] = OrderedDict()
        for t in self._by_fp.values():
            out.setdefault(t.month_sheet, []).append(t)
        return out

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = LedgerFile(transactions=self.transactions)
        self.path.write_text(payload.model_dump_json(indent=2), encoding="utf-8")
