from __future__ import annotations

import hashlib
from decimal import Decimal
from typing import Union

from .models import Direction

FieldValue = Union[str, Decimal, Direction]


def _render(value: FieldValue) -> str:
    if isinstance(value, Direction):
        return value.value
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return " ".join(str(value).split())


def compute_fingerprint(*fields: FieldValue) -> str:
    """
    sha256 (hex, 64 caracteres) de los campos unidos con '|'.
    Cada perfil decide qué campos forman su identidad:
    - tarjeta de crédito: fecha, narración, monto, dirección
    - ahorro/UPI: fecha, referencia, monto, dirección
    """
    if not fields:
        raise ValueError("compute_fingerprint necesita al menos un campo")
    source = "|".join(_render(f) for f in fields)
    return hashlib.sha256(source.encode("utf-8")).hexdigest()
