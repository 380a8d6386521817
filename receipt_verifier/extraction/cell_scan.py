"""Flat cell-sequence extraction for receipts with combined bilingual labels.

Handles receipts where a label cell holds the Amharic and English label run
together (``የክፍያ ቀን<br>Payment date``) and the value sits in the next cell,
regardless of row structure.

Unlike the row scan, an amount that fails to parse is recorded as zero and
no defaults are applied. ``CellScan.zero_filled`` records which amounts were
zero-filled so callers can tell them apart from a printed zero.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from bs4 import BeautifulSoup

from receipt_verifier.extraction import schema
from receipt_verifier.extraction.base import ReceiptExtractor
from receipt_verifier.extraction.labels import BILINGUAL_LABELS
from receipt_verifier.extraction.markup import flatten_text, table_cells
from receipt_verifier.extraction.normalize import (
    loose_normalize,
    parse_amount,
    split_bank_account,
    strict_normalize,
)
from receipt_verifier.extraction.schema import ExtractedFields

logger = logging.getLogger(__name__)


@dataclass
class CellScan:
    """Outcome of a cell scan.

    Attributes:
        fields: Extracted fields
        zero_filled: Amount fields recorded as zero because parsing failed
    """

    fields: ExtractedFields = field(default_factory=dict)
    zero_filled: set[str] = field(default_factory=set)


class CellScanExtractor(ReceiptExtractor):
    """Strategy B: look up each cell as a label, read the next cell as its value."""

    @property
    def strategy_name(self) -> str:
        """Get strategy name for logging/metrics.

        Returns:
            Strategy identifier 'cell_scan'
        """
        return "cell_scan"

    def extract_tree(self, tree: BeautifulSoup) -> ExtractedFields:
        """Extract fields from a parsed receipt.

        Args:
            tree: Parsed receipt document

        Returns:
            Mapping of canonical field name to value
        """
        return self.scan(tree).fields

    def scan(self, tree: BeautifulSoup) -> CellScan:
        """Scan every table cell and record zero-filled amounts.

        Args:
            tree: Parsed receipt document

        Returns:
            CellScan with the fields and the set of zero-filled amount fields
        """
        result = CellScan()
        cells = table_cells(tree)

        for index, cell in enumerate(cells):
            field_name = BILINGUAL_LABELS.get(strict_normalize(flatten_text(cell)))
            if field_name is None or index + 1 >= len(cells):
                continue
            value = loose_normalize(flatten_text(cells[index + 1]))
            self._store(result, field_name, value)

        logger.debug(f"cell_scan extracted {len(result.fields)} fields from {len(cells)} cells")
        return result

    def _store(self, result: CellScan, field_name: str, value: str) -> None:
        """Coerce one label's value and record it under its field name(s)."""
        if field_name == schema.BANK_ACC_NO:
            account_number, holder = split_bank_account(value)
            if account_number:
                result.fields[schema.BANK_ACC_NO] = account_number
            if holder:
                result.fields[schema.RECIPIENT_NAME] = holder
            return

        if schema.is_amount_field(field_name):
            amount = parse_amount(value, self.settings.currency_unit)
            if amount is None:
                logger.debug(f"cell_scan recorded zero for unparsable {field_name}: {value!r}")
                result.zero_filled.add(field_name)
                amount = Decimal(0)
            else:
                result.zero_filled.discard(field_name)
            result.fields[field_name] = amount
            return

        result.fields[field_name] = value
