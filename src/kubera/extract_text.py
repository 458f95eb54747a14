from __future__ import annotations

import hashlib
import io
from pathlib import Path
from typing import Optional, Union

import pdfplumber

from .errors import TextExtractionError
from .logging_setup import get_logger

logger = get_logger(__name__)


def content_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _read_pdf_text(data: bytes, password: Optional[str]) -> str:
    try:
        with pdfplumber.open(io.BytesIO(data), password=password) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as exc:  # pdfminer lanza varios tipos (contraseña, PDF dañado)
        raise TextExtractionError(f"No se pudo leer el PDF: {exc}") from exc
    return "\n".join(pages)


def extract_text(
    pdf_path: Union[str, Path],
    password: Optional[str] = None,
    cache_dir: Union[str, Path] = ".cache",
) -> str:
    """
    Texto plano de un PDF, con caché por contenido:
    <cache_dir>/<sha256 de los bytes>.txt. El mismo archivo no se procesa dos veces.
    Si el PDF no trae texto se devuelve "" y no se guarda en caché.
    """
    path = Path(pdf_path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise TextExtractionError(f"No existe o no se puede leer: {path}") from exc

    cache_path = Path(cache_dir) / f"{content_hash(data)}.txt"
    if cache_path.exists():
        logger.info("Usando texto en caché para %s", path.name)
        return cache_path.read_text(encoding="utf-8")

    logger.info("Extrayendo texto de %s...", path.name)
    text = _read_pdf_text(data, password)

    if text.strip():
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(text, encoding="utf-8")
    else:
        logger.warning("%s no contiene texto extraíble", path.name)

    return text
