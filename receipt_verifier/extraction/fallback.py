"""Coordinating extractor: row scan first, cell scan for what it missed.

Merge policy:
- The row scan runs first, without defaults.
- If any of ``Settings.fallback_required_fields`` is missing, the cell scan
  runs on the same tree and contributes only fields the row scan did not
  produce. Row-scan values are never overridden.
- Amounts the cell scan zero-filled after a parse failure are dropped, so a
  failed extraction never turns into a false zero.
- Row-scan defaults are applied last, so a status, mode or reason printed in
  the combined-label layout wins over the fixed defaults.
"""

import logging

from bs4 import BeautifulSoup

from receipt_verifier.extraction.base import ReceiptExtractor
from receipt_verifier.extraction.cell_scan import CellScanExtractor
from receipt_verifier.extraction.row_scan import RowScanExtractor, apply_defaults
from receipt_verifier.extraction.schema import ExtractedFields
from receipt_verifier.shared.config import Settings

logger = logging.getLogger(__name__)


class FallbackExtractor(ReceiptExtractor):
    """Row scan with a cell-scan fallback for missing key fields."""

    def __init__(self, settings: Settings) -> None:
        """Initialize both underlying strategies.

        Args:
            settings: Application settings
        """
        super().__init__(settings)
        self._row_scan = RowScanExtractor(settings, apply_defaults=False)
        self._cell_scan = CellScanExtractor(settings)

    @property
    def strategy_name(self) -> str:
        """Get strategy name for logging/metrics.

        Returns:
            Strategy identifier 'fallback'
        """
        return "fallback"

    def extract_tree(self, tree: BeautifulSoup) -> ExtractedFields:
        """Extract fields, falling back to the cell scan when key fields are missing.

        Args:
            tree: Parsed receipt document

        Returns:
            Mapping of canonical field name to value
        """
        fields = self._row_scan.extract_tree(tree)

        missing = [name for name in self.settings.fallback_required_fields if name not in fields]
        if missing:
            logger.info(f"row_scan missed {', '.join(missing)}; falling back to cell_scan")
            scan = self._cell_scan.scan(tree)
            for field_name, value in scan.fields.items():
                if field_name in fields:
                    continue
                if field_name in scan.zero_filled:
                    logger.warning(f"Ignoring unparsable {field_name} from cell_scan")
                    continue
                fields[field_name] = value

        apply_defaults(fields)
        return fields
