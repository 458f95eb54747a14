from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import requests

from .errors import CategorizationError
from .logging_setup import get_logger
from .models import Category, Transaction

logger = get_logger(__name__)

DEFAULT_CATEGORY = Category.MISC

# Punto de partida del diccionario aprendido
DEFAULT_CONTEXT: Dict[str, str] = {
    "milk": "grocery",
    "subji": "grocery",
    "dahi": "grocery",
    "breakfast": "grocery",
    "chai": "eating out",
    "gas": "gas bill",
    "flight": "transport",
    "train": "transport",
    "uber": "transport",
    "ola": "transport",
    "zomato": "eating out",
    "swiggy": "eating out",
    "amazon": "shopping",
    "flipkart": "shopping",
    "myntra": "shopping",
    "pharmacy": "medicines",
    "medical": "medicines",
    "hospital": "medicines",
}

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


@dataclass
class CategoryContext:
    """
    Diccionario aprendido palabra(s) -> categoría, guardado en JSON.
    Ciclo de vida explícito: load() al arrancar, save() solo si hubo cambios.
    """

    path: Path
    rules: Dict[str, str] = field(default_factory=dict)
    dirty: bool = False

    @classmethod
    def load(cls, path: Union[str, Path]) -> "CategoryContext":
        p = Path(path)
        if not p.exists():
            ctx = cls(path=p, rules=dict(DEFAULT_CONTEXT), dirty=True)
            ctx.save()
            return ctx

        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise CategorizationError(f"{p} no es JSON válido") from exc
        if not isinstance(data, dict):
            raise CategorizationError(f"{p} debe contener un objeto JSON")
        return cls(path=p, rules={str(k): str(v) for k, v in data.items()})

    def learn(self, merchant: str, category: Category) -> bool:
        # Solo comercios cortos (1-3 palabras, solo letras) y nunca "misc"
        if category == DEFAULT_CATEGORY:
            return False
        words = re.sub(r"[^a-z\s]", "", merchant.lower()).split()
        key = " ".join(words)
        if not (0 < len(words) <= 3 and len(key) > 3):
            return False
        if key in self.rules:
            return False
        self.rules[key] = category.value
        self.dirty = True
        return True

    def save(self) -> None:
        if not self.dirty:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.rules, indent=2, ensure_ascii=False), encoding="utf-8")
        self.dirty = False


def build_system_prompt(rules: Dict[str, str], count: int) -> str:
    valid = [c.value for c in Category]
    return (
        "You are an expert personal finance categorization assistant running locally.\n"
        f"Your job is to read a JSON object of {count} transaction narrations mapping an ID to a string, "
        "and strictly categorize them into ONE of these exact categories:\n"
        f"{json.dumps(valid)}\n\n"
        f'If no specific category fits perfectly, or if the narration is ambiguous, map it to "{DEFAULT_CATEGORY.value}".\n'
        "You must examine the known mappings (knowledge base) as a guiding signal:\n"
        f"{json.dumps(rules, indent=2)}\n\n"
        "Respond ONLY with a valid JSON object mapping the exact same IDs to the category string.\n"
        "Do not add markdown formatting or any conversational text. Return the raw JSON object."
    )


def strip_fences(text: str) -> str:
    return _FENCE_RE.sub("", text.strip()).strip()


def _ask_ollama(
    system: str,
    prompt: str,
    *,
    ollama_url: str,
    model: str,
    session: Optional[requests.Session],
    timeout: float,
) -> Dict[str, object]:
    post = session.post if session is not None else requests.post
    try:
        response = post(
            f"{ollama_url.rstrip('/')}/api/generate",
            json={"model": model, "system": system, "prompt": prompt, "stream": False},
            timeout=timeout,
        )
        response.raise_for_status()
        body = response.json()
    except requests.exceptions.ConnectionError as exc:
        raise CategorizationError(
            "Ollama no responde. Verifica que esté corriendo ('ollama serve') y que el modelo esté descargado."
        ) from exc
    except requests.exceptions.RequestException as exc:
        raise CategorizationError(f"Error de la API de Ollama: {exc}") from exc
    except ValueError as exc:
        raise CategorizationError("Ollama devolvió una respuesta que no es JSON") from exc

    if not isinstance(body, dict):
        raise CategorizationError("Respuesta inesperada de Ollama")
    raw = strip_fences(str(body.get("response", "")))
    try:
        predicted = json.loads(raw)
    except ValueError as exc:
        raise CategorizationError(f"El modelo no devolvió JSON: {raw[:200]!r}") from exc
    if not isinstance(predicted, dict):
        raise CategorizationError("El modelo debe devolver un objeto JSON id -> categoría")
    return predicted


def categorize_transactions(
    transactions: Sequence[Transaction],
    *,
    context: CategoryContext,
    ollama_url: str = "http://localhost:11434",
    model: str = "llama3",
    session: Optional[requests.Session] = None,
    timeout: float = 120.0,
) -> List[Transaction]:
    """
    Clasifica un lote de transacciones con un modelo local (Ollama).
    Devuelve copias con 'category'; las de entrada no se modifican.
    - si el modelo responde menos de la mitad de los ids, se devuelven sin categoría
    - etiquetas fuera del enum se registran y se dejan sin categoría
    - comercios cortos bien clasificados se aprenden en el diccionario
    """
    txs = list(transactions)
    if not txs:
        return txs

    inputs = {str(i): (t.description or t.merchant) for i, t in enumerate(txs)}
    system = build_system_prompt(context.rules, len(txs))
    prompt = f"Classify these {len(txs)} transactions:\n{json.dumps(inputs, indent=2)}"

    logger.info("Enviando %d transacciones a Ollama (%s)...", len(txs), model)
    predicted = _ask_ollama(system, prompt, ollama_url=ollama_url, model=model, session=session, timeout=timeout)

    if len(predicted) < len(txs) * 0.5:
        logger.warning(
            "El modelo devolvió %d de %d ids; se dejan sin categoría", len(predicted), len(txs)
        )
        return txs

    out: List[Transaction] = []
    for i, t in enumerate(txs):
        label = predicted.get(str(i))
        if not isinstance(label, str):
            out.append(t)
            continue
        try:
            category = Category(label.strip().lower())
        except ValueError:
            logger.warning("Categoría desconocida %r para %r", label, t.merchant)
            out.append(t)
            continue

        context.learn(t.merchant, category)
        out.append(t.model_copy(update={"category": category}))

    if context.dirty:
        context.save()
        logger.info("Diccionario actualizado: %s", context.path)

    return out
