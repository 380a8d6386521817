"""Abstract base class for receipt extraction strategies.

Receipts are observed in two label-rendering conventions, so extraction is
split into interchangeable strategies behind one interface:

- RowScanExtractor: slash-separated bilingual labels, structural row scan
- CellScanExtractor: combined bilingual label tokens, flat cell scan
- FallbackExtractor: row scan first, cell scan for missing key fields

Based on Strategy Pattern:
https://refactoring.guru/design-patterns/strategy/python
"""

from abc import ABC, abstractmethod

from bs4 import BeautifulSoup

from receipt_verifier.extraction.markup import MalformedMarkupError, parse_markup
from receipt_verifier.extraction.schema import ExtractedFields
from receipt_verifier.shared.config import Settings

__all__ = ["MalformedMarkupError", "ReceiptExtractor"]


class ReceiptExtractor(ABC):
    """Abstract base class for receipt field extraction strategies.

    Implementations never fail on an unrecognized document: a receipt with no
    known labels yields an empty (or defaults-only) mapping. The only error
    is MalformedMarkupError, raised before any field is extracted.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize extractor with settings.

        Args:
            settings: Application settings
        """
        self.settings = settings

    def extract(self, markup: str | bytes) -> ExtractedFields:
        """Parse receipt markup and extract its fields.

        Args:
            markup: Raw receipt document body

        Returns:
            Fresh mapping of canonical field name to value

        Raises:
            MalformedMarkupError: If the markup cannot be parsed
        """
        tree = parse_markup(markup, encoding=self.settings.markup_encoding)
        return self.extract_tree(tree)

    @abstractmethod
    def extract_tree(self, tree: BeautifulSoup) -> ExtractedFields:
        """Extract fields from an already parsed receipt tree.

        Args:
            tree: Parsed receipt document

        Returns:
            Fresh mapping of canonical field name to value
        """
        pass

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """Get strategy name for logging/metrics.

        Returns:
            Strategy identifier (e.g., 'row_scan', 'cell_scan')
        """
        pass
