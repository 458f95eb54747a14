from __future__ import annotations

from pathlib import Path

import pytest

from kubera.banks.hdfc_credit import HDFC_CREDIT
from kubera.banks.hdfc_savings import HDFC_SAVINGS
from kubera.detect import PROFILES, select_profile
from kubera.errors import NoMatchingProfileError

SAMPLES = Path(__file__).resolve().parent / "samples"


def _sample(name: str) -> str:
    return (SAMPLES / name).read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("hdfc_credit_card.txt", HDFC_CREDIT),
        ("hdfc_savings.txt", HDFC_SAVINGS),
    ],
)
def test_exactly_one_profile_matches_each_sample(name, expected):
    text = _sample(name)

    matching = [p for p in PROFILES if p.identify(text)]
    assert matching == [expected], f"Perfiles que reconocen {name}: {matching}"
    assert select_profile(text) is expected


def test_identity_is_case_insensitive():
    assert HDFC_CREDIT.identify("hdfc bank regalia credit card statement")
    assert HDFC_SAVINGS.identify("Hdfc Bank Ltd.\nAccount Type : Savings A/C")


def test_credit_card_identity_needs_same_line():
    # banco y tipo de cuenta en líneas distintas no bastan para tarjeta
    assert not HDFC_CREDIT.identify("HDFC BANK\nCREDIT CARD")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   \n  ",
        "ICICI BANK SAVINGS A/C",
        "Some random document without a bank name",
    ],
)
def test_unknown_text_raises(text):
    with pytest.raises(NoMatchingProfileError):
        select_profile(text)


def test_registry_order_breaks_ties():
    text = "HDFC BANK CREDIT CARD\nlinked SAVINGS A/C"
    assert HDFC_CREDIT.identify(text) and HDFC_SAVINGS.identify(text)

    assert select_profile(text) is HDFC_CREDIT
    assert select_profile(text, profiles=(HDFC_SAVINGS, HDFC_CREDIT)) is HDFC_SAVINGS
