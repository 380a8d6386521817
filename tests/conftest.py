"""Shared pytest fixtures for receipt extraction tests."""

from collections.abc import Callable
from html import escape
from pathlib import Path

import pytest

from receipt_verifier.shared.config import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def slash_receipt_html() -> str:
    """Receipt whose labels read ``local/English`` in one cell."""
    return (FIXTURES_DIR / "receipt_slash_labels.html").read_text(encoding="utf-8")


@pytest.fixture
def combined_receipt_html() -> str:
    """Receipt whose labels run Amharic and English together in one cell."""
    return (FIXTURES_DIR / "receipt_combined_labels.html").read_text(encoding="utf-8")


@pytest.fixture
def render_rows() -> Callable[[list[list[str]]], str]:
    """Render a list of rows (each a list of cell texts) as an HTML table."""

    def render(rows: list[list[str]]) -> str:
        body = "".join(
            "<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>" for row in rows
        )
        return f"<html><body><table>{body}</table></body></html>"

    return render
