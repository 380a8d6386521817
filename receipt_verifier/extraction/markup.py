"""Markup tree helpers built on BeautifulSoup.

Receipts are parsed with the standard library ``html.parser`` backend, which
does not insert implicit ``tbody`` elements, so table rows stay direct
children of their tables and cells stay direct children of their rows.

Based on the Beautiful Soup documentation:
https://www.crummy.com/software/BeautifulSoup/bs4/doc/
"""

import logging

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import PreformattedString

logger = logging.getLogger(__name__)


class MalformedMarkupError(ValueError):
    """Raised when receipt markup cannot be parsed into a tree."""


def parse_markup(markup: str | bytes, encoding: str = "utf-8") -> BeautifulSoup:
    """Parse raw receipt markup into a navigable tree.

    Args:
        markup: Document body as text, or bytes in ``encoding``
        encoding: Encoding used to decode byte input

    Returns:
        Parsed document tree

    Raises:
        MalformedMarkupError: If the input is not text, cannot be decoded,
            or is rejected by the parser
    """
    if isinstance(markup, bytes):
        try:
            markup = markup.decode(encoding)
        except UnicodeDecodeError as e:
            raise MalformedMarkupError(f"Markup is not valid {encoding}: {e}") from e
        except LookupError as e:
            raise MalformedMarkupError(f"Unknown markup encoding: {encoding}") from e

    if not isinstance(markup, str):
        raise MalformedMarkupError(f"Expected markup text, got {type(markup).__name__}")

    try:
        return BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as e:
        logger.warning(f"Parser rejected receipt markup: {e}")
        raise MalformedMarkupError(f"Failed to parse HTML: {e}") from e


def flatten_text(node: Tag) -> str:
    """Concatenate the text content of a subtree in document order.

    Each element's text is trimmed before it is joined into its parent's,
    so whitespace between block-level cells collapses. Comments, doctypes
    and other non-content strings are skipped.

    Args:
        node: Root of the subtree

    Returns:
        Trimmed text content
    """
    parts: list[str] = []
    for child in node.children:
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
        elif isinstance(child, Tag):
            parts.append(flatten_text(child))
    return "".join(parts).strip()


def table_rows(tree: Tag) -> list[Tag]:
    """Return every ``tr`` element in document order, nested tables included."""
    return tree.find_all("tr")


def row_cells(row: Tag) -> list[Tag]:
    """Return the ``td`` elements that are direct children of a row."""
    return row.find_all("td", recursive=False)


def table_cells(tree: Tag) -> list[Tag]:
    """Return every ``td`` element in document order."""
    return tree.find_all("td")
