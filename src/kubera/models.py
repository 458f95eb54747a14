from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"


class SourceType(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_UPI = "debit_upi"


class Category(str, Enum):
    GROCERY = "grocery"
    TRANSPORT = "transport"
    ELECTRICITY_BILL = "electricity bill"
    PHONE_WIFI_BILL = "phone/wifi bill"
    GAS_BILL = "gas bill"
    MEDICINES = "medicines"
    SIBLING_EDUCATION = "sibling education"
    DEPENDENTS = "dependents"
    EATING_OUT = "eating out"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    HOUSE_MAINTENANCE = "house maintenance"
    CASH_WITHDRAWAL = "cash withdrawal"
    DEBT = "debt"
    MISC = "misc"
    INVESTED = "invested"


class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="Fecha tal como aparece en el estado de cuenta")
    amount: Decimal = Field(..., ge=0, description="Monto sin signo, dos decimales")
    direction: Direction
    merchant: str
    description: str
    source: SourceType
    category: Optional[Category] = None
    month_sheet: str = Field("Auto", description="Hoja destino, p.ej. 'Dec 25'")
    fingerprint: str = Field(..., pattern=r"^[0-9a-f]{64}$", description="sha256 para idempotencia")
    imported_at: datetime = Field(..., description="Momento del procesamiento")


class ParseWarning(BaseModel):
    kind: Literal["malformed_candidate", "ambiguous_direction"]
    message: str
    block: Optional[str] = None
    fingerprint: Optional[str] = Field(None, description="Transacción afectada, si la hay")


class ParseResult(BaseModel):
    profile: str
    source: SourceType
    opening_balance: Optional[Decimal] = None
    transactions: List[Transaction] = Field(default_factory=list)
    warnings: List[ParseWarning] = Field(default_factory=list)
