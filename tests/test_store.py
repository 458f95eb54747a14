from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from kubera.parser import parse_statement
from kubera.store import Ledger

SAMPLES = Path(__file__).resolve().parent / "samples"


def _parse(name: str):
    text = (SAMPLES / name).read_text(encoding="utf-8")
    return parse_statement(text, imported_at=datetime(2024, 5, 1, tzinfo=timezone.utc))


def test_reimport_skips_existing_fingerprints(tmp_path):
    path = tmp_path / "ledger.json"
    txs = _parse("hdfc_savings.txt")

    ledger = Ledger.load(path)
    assert len(ledger) == 0
    assert ledger.add(txs) == (3, 0)
    ledger.save()

    again = Ledger.load(path)
    assert again.add(_parse("hdfc_savings.txt")) == (0, 3)
    assert len(again) == 3


def test_ledger_round_trip_keeps_fields(tmp_path):
    path = tmp_path / "nested" / "ledger.json"
    txs = _parse("hdfc_credit_card.txt")

    ledger = Ledger(path)
    ledger.add(txs)
    ledger.save()

    loaded = Ledger.load(path)
    assert loaded.transactions == txs
    assert txs[0].fingerprint in loaded


def test_by_month_groups_in_insertion_order(tmp_path):
    ledger = Ledger(tmp_path / "l.json")
    ledger.add(_parse("hdfc_credit_card.txt"))
    ledger.add(_parse("hdfc_savings.txt"))

    groups = ledger.by_month()

    assert list(groups) == ["Dec 23", "Jan 24", "Apr 24"]
    assert [len(v) for v in groups.values()] == [3, 1, 3]
