from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from .categorize import CategoryContext, categorize_transactions
from .config import Settings
from .errors import KuberaError
from .extract_text import extract_text
from .logging_setup import configure_logging
from .models import ParseResult
from .parser import parse_statement_detailed
from .store import Ledger

console = Console()


def _print_result(result: ParseResult) -> None:
    table = Table(title=f"{result.profile} ({len(result.transactions)} transacciones)")
    table.add_column("Fecha")
    table.add_column("Descripción", overflow="fold")
    table.add_column("Monto", justify="right")
    table.add_column("Dir")
    table.add_column("Hoja")
    table.add_column("Categoría")
    for t in result.transactions:
        style = "green" if t.direction.value == "credit" else None
        table.add_row(
            t.date,
            t.description,
            f"{t.amount:,.2f}",
            t.direction.value,
            t.month_sheet,
            t.category.value if t.category else "",
            style=style,
        )
    console.print(table)

    for w in result.warnings:
        console.print(f"[yellow]Advertencia ({w.kind}):[/yellow] {w.message}")


def _cmd_dry_run(args: argparse.Namespace, settings: Settings) -> int:
    text = extract_text(args.file, password=args.password, cache_dir=settings.cache_dir)
    result = parse_statement_detailed(text)
    _print_result(result)
    return 0


def _cmd_parse_text(args: argparse.Namespace, settings: Settings) -> int:
    text = Path(args.file).read_text(encoding="utf-8")
    result = parse_statement_detailed(text, month_sheet=args.month)
    payload = result.model_dump(mode="json")

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        console.print(f"OK -> {out_path}", style="bold green")
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=2))

    console.print(f"Transacciones detectadas: {len(result.transactions)}", style="bold cyan")
    return 0


def _cmd_import(args: argparse.Namespace, settings: Settings) -> int:
    text = extract_text(args.file, password=args.password, cache_dir=settings.cache_dir)
    result = parse_statement_detailed(text, month_sheet=args.month)
    txs = result.transactions

    if args.categorize:
        context = CategoryContext.load(settings.context_file)
        txs = categorize_transactions(
            txs,
            context=context,
            ollama_url=settings.ollama_url,
            model=args.model or settings.model,
        )
        result = result.model_copy(update={"transactions": txs})

    _print_result(result)

    ledger = Ledger.load(args.ledger or settings.ledger_file)
    added, skipped = ledger.add(txs)
    ledger.save()

    console.print(
        f"Agregadas: {added}  Omitidas (ya existían): {skipped}  -> {ledger.path}", style="bold cyan"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubera", description="Importador local de estados de cuenta bancarios"
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING... (o KUBERA_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_dry = sub.add_parser("dry-run", help="Parsear y mostrar el resultado sin guardar nada")
    p_dry.add_argument("file", help="Ruta al PDF")
    p_dry.add_argument("-p", "--password", default=None, help="Contraseña del PDF")
    p_dry.set_defaults(func=_cmd_dry_run)

    p_imp = sub.add_parser("import", help="Importar transacciones de un PDF al libro local")
    p_imp.add_argument("file", help="Ruta al PDF")
    p_imp.add_argument("-m", "--month", default=None, help="Hoja destino (p.ej. 'Dec 25')")
    p_imp.add_argument("-p", "--password", default=None, help="Contraseña del PDF")
    p_imp.add_argument("--ledger", default=None, help="Archivo JSON destino")
    p_imp.add_argument("--categorize", action="store_true", help="Clasificar con Ollama")
    p_imp.add_argument("--model", default=None, help="Modelo de Ollama")
    p_imp.set_defaults(func=_cmd_import)

    p_txt = sub.add_parser("parse-text", help="Parsear un texto ya extraído")
    p_txt.add_argument("file", help="Ruta al .txt")
    p_txt.add_argument("-m", "--month", default=None, help="Hoja destino")
    p_txt.add_argument("--out", default="", help="Ruta de salida JSON (opcional)")
    p_txt.set_defaults(func=_cmd_parse_text)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if not Path(args.file).exists():
        raise SystemExit(f"No existe el archivo: {args.file}")

    settings = Settings.from_env()
    console.print(f"Procesando: {args.file}", style="bold")
    try:
        return args.func(args, settings)
    except KuberaError as exc:
        raise SystemExit(f"Error: {exc}") from exc


if __name__ == "__main__":
    raise SystemExit(main())
