from __future__ import annotations

from kubera.banks.hdfc_savings import LAYOUT
from kubera.segment import segment_blocks, strip_pagination, truncate_summary


def test_continuation_lines_are_folded_into_previous_block():
    text = "\n".join(
        [
            "Date Narration Chq./Ref.No.",
            "01/04/24 UPI-ZOMATO 0001 01/04/24 100.00 900.00",
            "  ORDER 42  ",
            "",
            "PAID VIA APP",
            "02/04/24 UPI-OLA 0002 02/04/24 50.00 850.00",
        ]
    )

    blocks = segment_blocks(text, LAYOUT)

    assert blocks == [
        "01/04/24 UPI-ZOMATO 0001 01/04/24 100.00 900.00 ORDER 42 PAID VIA APP",
        "02/04/24 UPI-OLA 0002 02/04/24 50.00 850.00",
    ]


def test_lines_before_first_date_are_ignored():
    text = "HDFC BANK Ltd.\nMR JOHN DOE\n03/04/24 NEFT CR-X N1 03/04/24 5.00 5.00"
    assert segment_blocks(text, LAYOUT) == ["03/04/24 NEFT CR-X N1 03/04/24 5.00 5.00"]


def test_long_dates_do_not_start_blocks():
    # el formato de ahorro usa DD/MM/YY; una fecha DD/MM/YYYY es continuación
    text = "01/04/24 A 1 01/04/24 1.00 1.00\n01/04/2024 not a new row"
    assert segment_blocks(text, LAYOUT) == ["01/04/24 A 1 01/04/24 1.00 1.00 01/04/2024 not a new row"]


def test_pagination_is_removed():
    text = "01/04/24 A\nPage No .: 1\nHDFC BANK LIMITED\n-- 1 of 3 --\nB"
    assert strip_pagination(text, LAYOUT) == "01/04/24 A\n\nB"


def test_everything_after_summary_is_dropped():
    text = "01/04/24 A 1 01/04/24 1.00 1.00\nSTATEMENT SUMMARY :-\n02/04/24 B 2 02/04/24 1.00 2.00"

    assert truncate_summary(text, LAYOUT) == "01/04/24 A 1 01/04/24 1.00 1.00\n"
    assert segment_blocks(text, LAYOUT) == ["01/04/24 A 1 01/04/24 1.00 1.00"]


def test_empty_text_has_no_blocks():
    assert segment_blocks("", LAYOUT) == []
