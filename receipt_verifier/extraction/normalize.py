"""Text normalization and value coercion for receipt cells."""

import re
from decimal import Decimal, InvalidOperation

# Characters removed by strict normalization. Nothing else is touched, so
# Ethiopic script, digits and non-breaking spaces survive unchanged.
_STRICT_REMOVED = str.maketrans("", "", " \t\n\r")

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_DIGITS_PATTERN = re.compile(r"\d+")


def loose_normalize(text: str) -> str:
    """Trim surrounding whitespace only (substring matching mode)."""
    return text.strip()


def strict_normalize(text: str) -> str:
    """Lowercase and drop every space, tab, newline and carriage return.

    Produces the compact token used for exact lookups of combined
    bilingual labels.

    Args:
        text: Raw cell text

    Returns:
        Normalized token
    """
    return text.lower().translate(_STRICT_REMOVED)


def english_label(label: str) -> str:
    """Return the English half of a ``local/English`` label.

    Only the text after the last slash is kept. Labels without a slash are
    returned unchanged.
    """
    if "/" not in label:
        return label
    return loose_normalize(label.rsplit("/", 1)[1])


def parse_amount(text: str, currency: str = "Birr") -> Decimal | None:
    """Parse an amount cell such as ``"1,234.50 Birr"``.

    The trailing currency word is matched case-insensitively and thousands
    separators are dropped before parsing.

    Args:
        text: Raw cell text
        currency: Currency word printed after the number

    Returns:
        Parsed amount, or None when the remainder is not a finite number
    """
    value = text.strip()
    if currency and value.lower().endswith(currency.lower()):
        value = value[: -len(currency)].strip()
    value = value.replace(",", "")
    if not _NUMBER_PATTERN.fullmatch(value):
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        return None


def split_bank_account(value: str) -> tuple[str, str]:
    """Split ``"1000123456 John Doe"`` into account number and holder name.

    Args:
        value: Text of the bank account cell

    Returns:
        Tuple of (every digit in order, letters and spaces with whitespace collapsed).
        Either part is an empty string when absent.
    """
    account_number = "".join(_DIGITS_PATTERN.findall(value))
    letters = "".join(char for char in value if char.isalpha() or char.isspace())
    return account_number, " ".join(letters.split())
