"""Unit tests for the flat cell-scan extractor.

Tests cover:
- Combined bilingual label lookup
- Bank account splitting into account number and recipient
- Zero-filled amounts on parse failure
- No defaults applied
"""

from decimal import Decimal

import pytest

from receipt_verifier.extraction.cell_scan import CellScanExtractor
from receipt_verifier.extraction.markup import parse_markup
from receipt_verifier.shared.config import Settings


@pytest.fixture
def extractor(settings: Settings) -> CellScanExtractor:
    """Create cell-scan extractor."""
    return CellScanExtractor(settings)


def test_strategy_name(extractor: CellScanExtractor) -> None:
    """Strategy name should be 'cell_scan'."""
    assert extractor.strategy_name == "cell_scan"


def test_extract_full_receipt(extractor: CellScanExtractor, combined_receipt_html: str) -> None:
    """Every combined label is mapped, wherever its cell sits."""
    fields = extractor.extract(combined_receipt_html)

    assert fields == {
        "payer_name": "Selam Haile",
        "payer_phone": "2519****5678",
        "bank_acc_no": "1000123456",
        "to": "John Doe",
        "transaction_status": "Completed",
        "receiptNo": "FT25XYZ789",
        "date": "01-11-2025 09:15:44",
        "settled_amount": Decimal("500.00"),
        "discount_amount": Decimal("0"),
        "total_amount": Decimal("500.00"),
        "payment_mode": "telebirr",
        "payment_reason": "Transfer to bank",
        "payment_channel": "App",
    }


def test_scan_reports_zero_filled_amounts(
    extractor: CellScanExtractor, combined_receipt_html: str
) -> None:
    """Amounts recorded as zero after a parse failure are reported."""
    scan = extractor.scan(parse_markup(combined_receipt_html))

    assert scan.zero_filled == {"discount_amount"}
    assert scan.fields["discount_amount"] == Decimal("0")


def test_bank_account_split(extractor: CellScanExtractor) -> None:
    """The bank account value yields account number and recipient name."""
    html = (
        "<table><tr><td>የባንክ አካውንት ቁጥር<br>Bank account number</td>"
        "<td>1000123456 John Doe</td></tr></table>"
    )

    assert extractor.extract(html) == {"bank_acc_no": "1000123456", "to": "John Doe"}


def test_label_in_last_cell_is_ignored(extractor: CellScanExtractor) -> None:
    """A label with no following cell has no value."""
    html = "<table><tr><td>ሌላ</td><td>የክፍያ ቀን<br>Payment date</td></tr></table>"

    assert extractor.extract(html) == {}


def test_slash_labels_are_not_matched(
    extractor: CellScanExtractor, slash_receipt_html: str
) -> None:
    """Slash-separated labels belong to the row scan; no defaults are added."""
    assert extractor.extract(slash_receipt_html) == {}


def test_currency_suffix_is_case_insensitive(extractor: CellScanExtractor) -> None:
    """Currency words in any case are stripped."""
    html = (
        "<table><tr><td>ጠቅላላ የተክፈለ<br>Total Paid Amount</td><td>12.5 bIrR</td></tr></table>"
    )

    assert extractor.extract(html) == {"total_amount": Decimal("12.5")}
