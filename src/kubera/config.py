from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    cache_dir: Path = Path(".cache")
    context_file: Path = Path("categories-context.json")
    ledger_file: Path = Path("transactions.json")
    ollama_url: str = "http://localhost:11434"
    model: str = "llama3"

    @classmethod
    def from_env(cls) -> "Settings":
        """Lee KUBERA_* del entorno; lo que falte queda con el valor por defecto."""
        default = cls()
        return cls(
            cache_dir=Path(os.getenv("KUBERA_CACHE_DIR") or default.cache_dir),
            context_file=Path(os.getenv("KUBERA_CONTEXT_FILE") or default.context_file),
            ledger_file=Path(os.getenv("KUBERA_LEDGER_FILE") or default.ledger_file),
            ollama_url=(os.getenv("KUBERA_OLLAMA_URL") or default.ollama_url).rstrip("/"),
            model=os.getenv("KUBERA_MODEL") or default.model,
        )
