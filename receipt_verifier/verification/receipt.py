"""Verification of extracted receipt fields against expected values.

Equality is typed: text compares to text exactly, numbers compare to numbers
by value, and nothing is ever coerced between the two.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from typing import Any

logger = logging.getLogger(__name__)

Fields = Mapping[str, Any]


def _as_decimal(value: Any) -> Decimal | None:
    # bool is an int subclass but never an amount
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # Shortest repr, so 0.1 compares equal to Decimal("0.1")
        return Decimal(repr(value))
    return None


def equals(a: Any, b: Any) -> bool:
    """Compare two field values with typed equality.

    Args:
        a: First value (str, int, float or Decimal)
        b: Second value

    Returns:
        True for equal strings (case-sensitive) or numerically equal numbers;
        False for every other pairing, including None
    """
    if isinstance(a, str) or isinstance(b, str):
        return isinstance(a, str) and isinstance(b, str) and a == b

    left = _as_decimal(a)
    right = _as_decimal(b)
    if left is None or right is None:
        return False
    return left == right


class ReceiptVerifier:
    """Checks parsed receipt fields against caller-supplied expectations.

    Attributes:
        parsed_fields: Fields extracted from the receipt
        expected_fields: Fields the caller expects to find
    """

    def __init__(self, parsed_fields: Fields, expected_fields: Fields) -> None:
        self.parsed_fields = parsed_fields
        self.expected_fields = expected_fields

    equals = staticmethod(equals)

    def verify(self, predicate: Callable[[Fields, Fields], bool]) -> bool:
        """Apply an ad hoc predicate over (parsed, expected).

        Example:
            >>> verifier.verify(
            ...     lambda parsed, expected: equals(parsed.get("to"), expected.get("to"))
            ...     and equals(parsed.get("total_amount"), expected.get("total_amount"))
            ... )
        """
        return bool(predicate(self.parsed_fields, self.expected_fields))

    def verify_all(self, exclude: Iterable[str] = ()) -> bool:
        """Check every expected field except the excluded ones.

        Args:
            exclude: Expected keys to skip

        Returns:
            False when nothing was parsed; otherwise True only if every
            checked key exists in the parsed fields with an equal value
        """
        if not self.parsed_fields:
            logger.info("Verification failed: no fields were parsed from the receipt")
            return False

        skipped = set(exclude)
        for key, expected in self.expected_fields.items():
            if key in skipped:
                continue
            if key not in self.parsed_fields or not equals(self.parsed_fields[key], expected):
                logger.info(f"Verification failed on field '{key}'")
                return False
        return True

    def verify_only(self, field_names: Iterable[str]) -> bool:
        """Check only the named fields.

        Args:
            field_names: Fields that must exist in both mappings and be equal

        Returns:
            False for an empty selection or any missing/unequal field
        """
        names = list(field_names)
        if not names:
            return False

        for key in names:
            if key not in self.parsed_fields or key not in self.expected_fields:
                logger.info(f"Verification failed: field '{key}' is missing")
                return False
            if not equals(self.parsed_fields[key], self.expected_fields[key]):
                logger.info(f"Verification failed on field '{key}'")
                return False
        return True
