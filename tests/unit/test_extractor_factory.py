"""Unit tests for extraction strategy registry and factory.

Tests cover:
- Strategy registry lookups
- Factory function extractor creation
- Configuration-based selection
- Error handling for unknown strategies
"""

import pytest

from receipt_verifier.extraction.base import ReceiptExtractor
from receipt_verifier.extraction.cell_scan import CellScanExtractor
from receipt_verifier.extraction.factory import ExtractorRegistry, create_extractor
from receipt_verifier.extraction.fallback import FallbackExtractor
from receipt_verifier.extraction.row_scan import RowScanExtractor
from receipt_verifier.extraction.schema import ExtractedFields
from receipt_verifier.shared.config import Settings


def test_registry_default_strategies() -> None:
    """Test that registry contains the built-in strategies."""
    strategies = ExtractorRegistry.list_extractors()

    assert "row_scan" in strategies
    assert "cell_scan" in strategies
    assert "fallback" in strategies


def test_registry_get_row_scan() -> None:
    """Test getting the row-scan extractor from registry."""
    assert ExtractorRegistry.get_extractor_class("row_scan") == RowScanExtractor


def test_registry_unknown_strategy() -> None:
    """Test that unknown strategy raises ValueError."""
    with pytest.raises(ValueError, match="Unknown extraction strategy"):
        ExtractorRegistry.get_extractor_class("nonexistent")


def test_registry_register_custom_strategy() -> None:
    """Test registering a custom strategy."""

    class StaticExtractor(ReceiptExtractor):
        def extract_tree(self, tree: object) -> ExtractedFields:  # type: ignore[override]
            return {"receiptNo": "STATIC"}

        @property
        def strategy_name(self) -> str:
            return "static"

    ExtractorRegistry.register("static", StaticExtractor)
    try:
        extractor = create_extractor(Settings(_env_file=None), "static")
        assert extractor.extract("<p></p>") == {"receiptNo": "STATIC"}
    finally:
        ExtractorRegistry._extractors.pop("static")


def test_create_extractor_default_is_fallback(settings: Settings) -> None:
    """Test that the default configuration selects the fallback strategy."""
    extractor = create_extractor(settings)

    assert isinstance(extractor, FallbackExtractor)
    assert extractor.strategy_name == "fallback"


def test_create_extractor_from_settings() -> None:
    """Test that settings.extraction_strategy selects the strategy."""
    settings = Settings(_env_file=None, extraction_strategy="cell_scan")

    assert isinstance(create_extractor(settings), CellScanExtractor)


def test_create_extractor_override(settings: Settings) -> None:
    """Test that an explicit strategy overrides settings."""
    assert isinstance(create_extractor(settings, "row_scan"), RowScanExtractor)


def test_create_extractor_logs_creation(
    settings: Settings, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that factory logs the created strategy."""
    with caplog.at_level("INFO"):
        create_extractor(settings, "cell_scan")

    assert "Created receipt extractor: cell_scan" in caplog.text


def test_extractor_is_abstract(settings: Settings) -> None:
    """Test that ReceiptExtractor cannot be instantiated directly."""
    with pytest.raises(TypeError, match="Can't instantiate abstract class"):
        ReceiptExtractor(settings)  # type: ignore[abstract]


def test_extractor_requires_strategy_name(settings: Settings) -> None:
    """Test that concrete extractors must implement strategy_name."""

    class IncompleteExtractor(ReceiptExtractor):
        def extract_tree(self, tree: object) -> ExtractedFields:  # type: ignore[override]
            return {}

    with pytest.raises(TypeError, match="Can't instantiate abstract class"):
        IncompleteExtractor(settings)  # type: ignore[abstract]
