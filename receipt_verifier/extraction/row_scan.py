"""Structural row-scan extraction for slash-labelled receipts.

Handles receipts whose label cells read ``የክፍያ ቀን/Payment date``:

1. The row after the "Transaction details" column headers carries the
   receipt number, payment date and settled amount positionally.
2. Every other two-cell row is a label/value pair. The English half of the
   label is matched against ENGLISH_LABELS by substring containment.
3. The "Total Paid Amount" row is laid out differently: the marker sits in
   the value cell and the amount in the third cell.

Amounts that fail to parse are left out of the result rather than recorded
as zero.
"""

import logging
import re

from bs4 import BeautifulSoup, Tag

from receipt_verifier.extraction import schema
from receipt_verifier.extraction.base import ReceiptExtractor
from receipt_verifier.extraction.labels import DEFAULT_FIELDS, ENGLISH_LABELS, WHOLE_WORD_LABELS
from receipt_verifier.extraction.markup import flatten_text, row_cells, table_rows
from receipt_verifier.extraction.normalize import english_label, loose_normalize, parse_amount
from receipt_verifier.extraction.schema import ExtractedFields
from receipt_verifier.shared.config import Settings

logger = logging.getLogger(__name__)


def match_english_label(label: str) -> str | None:
    """Map a label to its canonical field name.

    Args:
        label: Label text, already reduced to its English half

    Keys in WHOLE_WORD_LABELS only match as a separate word, so ``VAT``
    matches ``15% VAT`` but not ``Private note``.

    Args:
        label: Label text, already reduced to its English half

    Returns:
        Field name of the first matching ENGLISH_LABELS key, or None
    """
    lowered = label.lower()
    for key, field_name in ENGLISH_LABELS.items():
        if key in WHOLE_WORD_LABELS:
            if re.search(rf"\b{re.escape(key)}\b", label, re.IGNORECASE):
                return field_name
        elif key.lower() in lowered or key in label:
            return field_name
    return None


def apply_defaults(fields: ExtractedFields) -> None:
    """Fill status, mode and reason with their fixed defaults when absent."""
    for field_name, default in DEFAULT_FIELDS.items():
        fields.setdefault(field_name, default)


class RowScanExtractor(ReceiptExtractor):
    """Strategy A: walk table rows and read label/value cell pairs."""

    def __init__(self, settings: Settings, apply_defaults: bool = True) -> None:
        """Initialize row-scan extractor.

        Args:
            settings: Application settings
            apply_defaults: Fill missing status/mode/reason with fixed defaults
        """
        super().__init__(settings)
        self.apply_defaults = apply_defaults

    @property
    def strategy_name(self) -> str:
        """Get strategy name for logging/metrics.

        Returns:
            Strategy identifier 'row_scan'
        """
        return "row_scan"

    def extract_tree(self, tree: BeautifulSoup) -> ExtractedFields:
        """Extract fields from a parsed receipt.

        Args:
            tree: Parsed receipt document

        Returns:
            Mapping of canonical field name to value
        """
        fields: ExtractedFields = {}
        rows = table_rows(tree)

        self._extract_details(rows, fields)
        for row in rows:
            self._extract_labelled_row(row, fields)

        if self.apply_defaults:
            apply_defaults(fields)

        logger.debug(f"row_scan extracted {len(fields)} fields from {len(rows)} rows")
        return fields

    def _extract_details(self, rows: list[Tag], fields: ExtractedFields) -> None:
        """Read receipt number, date and settled amount from the details table.

        Rows containing the section title are skipped; the first row after
        it holds the column headers and the second one the values.
        """
        details_rows: list[Tag] = []
        in_details = False
        for row in rows:
            if self.settings.details_section_title in flatten_text(row):
                in_details = True
                continue
            if in_details:
                details_rows.append(row)

        if len(details_rows) < 2:
            return

        cells = row_cells(details_rows[1])
        if len(cells) < 3:
            return

        fields[schema.RECEIPT_NO] = loose_normalize(flatten_text(cells[0]))
        fields[schema.DATE] = loose_normalize(flatten_text(cells[1]))
        self._store_amount(fields, schema.SETTLED_AMOUNT, flatten_text(cells[2]))

    def _extract_labelled_row(self, row: Tag, fields: ExtractedFields) -> None:
        """Read one label/value row into the result mapping."""
        cells = row_cells(row)
        if len(cells) < 2:
            return

        label = loose_normalize(flatten_text(cells[0]))
        value = loose_normalize(flatten_text(cells[1]))

        if self.settings.total_amount_marker in value:
            if len(cells) >= 3:
                self._store_amount(fields, schema.TOTAL_AMOUNT, flatten_text(cells[2]))
            return

        field_name = match_english_label(english_label(label))
        if field_name is None:
            return

        if schema.is_amount_field(field_name):
            self._store_amount(fields, field_name, value)
        else:
            fields[field_name] = value

    def _store_amount(self, fields: ExtractedFields, field_name: str, text: str) -> None:
        amount = parse_amount(text, self.settings.currency_unit)
        if amount is None:
            logger.debug(f"row_scan skipped unparsable {field_name}: {text!r}")
            return
        fields[field_name] = amount
