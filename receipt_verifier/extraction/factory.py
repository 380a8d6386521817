"""Factory for creating receipt extractors based on configuration.

Implements Factory Pattern for strategy selection with registry pattern for extensibility.

Based on:
- Factory Pattern: https://refactoring.guru/design-patterns/factory-method/python
- Registry Pattern: Python Cookbook 3rd Edition, Recipe 9.22
"""

import logging

from receipt_verifier.extraction.base import ReceiptExtractor
from receipt_verifier.extraction.cell_scan import CellScanExtractor
from receipt_verifier.extraction.fallback import FallbackExtractor
from receipt_verifier.extraction.row_scan import RowScanExtractor
from receipt_verifier.shared.config import Settings

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """Registry of available extraction strategies.

    Maintains a mapping of strategy names to their implementation classes.
    Supports runtime registration of new strategies.
    """

    _extractors: dict[str, type[ReceiptExtractor]] = {
        "row_scan": RowScanExtractor,
        "cell_scan": CellScanExtractor,
        "fallback": FallbackExtractor,
    }

    @classmethod
    def register(cls, name: str, extractor_class: type[ReceiptExtractor]) -> None:
        """Register a new strategy.

        Args:
            name: Strategy identifier
            extractor_class: Class implementing ReceiptExtractor
        """
        cls._extractors[name] = extractor_class
        logger.info(f"Registered extraction strategy: {name}")

    @classmethod
    def get_extractor_class(cls, name: str) -> type[ReceiptExtractor]:
        """Get extractor class by name.

        Args:
            name: Strategy identifier

        Returns:
            Extractor class implementing ReceiptExtractor

        Raises:
            ValueError: If strategy not found in registry
        """
        if name not in cls._extractors:
            available = ", ".join(cls._extractors.keys())
            raise ValueError(
                f"Unknown extraction strategy: '{name}'. " f"Available strategies: {available}"
            )
        return cls._extractors[name]

    @classmethod
    def list_extractors(cls) -> list[str]:
        """List all registered strategy names.

        Returns:
            List of strategy names
        """
        return list(cls._extractors.keys())


def create_extractor(settings: Settings, strategy: str | None = None) -> ReceiptExtractor:
    """Factory function to create a receipt extractor.

    Args:
        settings: Application settings with extraction_strategy field
        strategy: Strategy name overriding settings.extraction_strategy

    Returns:
        Configured extractor instance

    Raises:
        ValueError: If the strategy is unknown

    Example:
        >>> settings = Settings(extraction_strategy="row_scan")
        >>> extractor = create_extractor(settings)
        >>> fields = extractor.extract("<table>...</table>")
    """
    name = strategy or settings.extraction_strategy
    extractor = ExtractorRegistry.get_extractor_class(name)(settings)
    logger.info(f"Created receipt extractor: {name}")
    return extractor
