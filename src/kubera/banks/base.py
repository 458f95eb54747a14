from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Pattern

from ..logging_setup import get_logger
from ..models import ParseResult, ParseWarning, SourceType
from ..parse import Malformed

logger = get_logger(__name__)


class Profile(ABC):
    """
    Estrategia de parseo para un formato de estado de cuenta.
    Sin estado: una instancia se registra una vez y se reutiliza en cada llamada.
    """

    name: str
    source: SourceType
    identity_re: Pattern[str]

    def identify(self, text: str) -> bool:
        return bool(self.identity_re.search(text or ""))

    @abstractmethod
    def parse(self, text: str, imported_at: datetime) -> ParseResult:
        ...

    def _drop(self, bad: Malformed) -> ParseWarning:
        logger.warning("%s: candidato descartado (%s): %s", self.name, bad.reason, bad.text)
        return ParseWarning(kind="malformed_candidate", message=bad.reason, block=bad.text)

    def __repr__(self) -> str:
        return f"<Profile {self.name!r}>"
