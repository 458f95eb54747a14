from __future__ import annotations

from dataclasses import dataclass
from typing import List, Pattern


@dataclass(frozen=True)
class BlockLayout:
    pagination_re: Pattern[str]     # artefactos de paginación (encabezado/pie)
    summary_marker: str             # desde aquí ya no hay transacciones
    block_start_re: Pattern[str]    # línea que inicia una transacción


def strip_pagination(text: str, layout: BlockLayout) -> str:
    return layout.pagination_re.sub("", text)


def truncate_summary(text: str, layout: BlockLayout) -> str:
    idx = text.find(layout.summary_marker)
    if idx == -1:
        return text
    return text[:idx]


def segment_blocks(text: str, layout: BlockLayout) -> List[str]:
    """
    Reagrupa las líneas del estado de cuenta en bloques, uno por transacción:
    - se quita la paginación y todo lo que viene después del resumen final
    - una línea que comienza con fecha abre un bloque nuevo
    - las líneas siguientes (sin fecha) se agregan al bloque actual con un espacio
    - las líneas antes de la primera fecha (encabezados) se descartan
    El orden de salida es el del documento.
    """
    cleaned = truncate_summary(strip_pagination(text, layout), layout)
    lines = [ln.strip() for ln in cleaned.splitlines()]

    blocks: List[str] = []
    current = ""

    for line in lines:
        if not line:
            continue

        if layout.block_start_re.match(line):
            if current:
                blocks.append(current.strip())
            current = line
        elif current:
            current += " " + line

    if current:
        blocks.append(current.strip())

    return blocks
