"""Share count validation.

Turns raw user text into a ShareCount, or a tagged rejection naming the
first check that failed. Checks run in a fixed order: empty, not a number,
negative, not whole, exceeds total.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum

from ownership.config import ReferenceConstants

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_RADIX = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY = re.compile(r"[+-]?Infinity")


class ValidationError(Enum):
    """Reasons a share count is rejected."""

    EMPTY_INPUT = "empty_input"
    NOT_A_NUMBER = "not_a_number"
    NEGATIVE = "negative"
    NOT_WHOLE_NUMBER = "not_whole_number"
    EXCEEDS_TOTAL = "exceeds_total"


_MESSAGES: dict[ValidationError, str] = {
    ValidationError.EMPTY_INPUT: "Please enter the number of shares.",
    ValidationError.NOT_A_NUMBER: "Please enter a valid number.",
    ValidationError.NEGATIVE: "Please enter a positive number of shares.",
    ValidationError.NOT_WHOLE_NUMBER: "Please enter a whole number of shares.",
}


@dataclass(frozen=True)
class ShareCount:
    """A validated whole number of shares, 0 <= value <= total."""

    value: int


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one raw input.

    Attributes:
        shares: The validated count. None when rejected.
        error: Rejection reason. None when accepted.
        message: User-facing rejection message, empty when accepted.
    """

    shares: ShareCount | None
    error: ValidationError | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


def rejection_message(error: ValidationError, constants: ReferenceConstants) -> str:
    """Return the user-facing message for a rejection reason."""
    if error is ValidationError.EXCEEDS_TOTAL:
        return (
            f"Cannot exceed total diluted shares "
            f"({constants.total_diluted_shares:,} shares)."
        )
    return _MESSAGES[error]


def _parse_number(text: str) -> float | None:
    """Parse stripped text as a number, or None if it is not numeric.

    Accepts ASCII decimal notation with an optional sign, fraction and
    exponent, unsigned 0x/0o/0b integers, and a signed ``Infinity``.
    Digit-group separators, non-ASCII digits, ``inf`` and ``nan`` spellings
    are not numbers.
    """
    if _DECIMAL.fullmatch(text) or _INFINITY.fullmatch(text):
        return float(text)
    if _RADIX.fullmatch(text):
        try:
            return float(int(text, 0))
        except OverflowError:
            return math.inf
    return None


def _reject(error: ValidationError, constants: ReferenceConstants) -> ValidationResult:
    message = rejection_message(error, constants)
    logger.debug("Rejected share input: %s", error.value)
    return ValidationResult(shares=None, error=error, message=message)


def validate_shares(
    raw: str | None,
    constants: ReferenceConstants,
) -> ValidationResult:
    """Validate raw share-count text against the reference constants.

    Args:
        raw: Text as entered by the user. None is treated as empty.
        constants: Reference figures providing the upper bound.

    Returns:
        ValidationResult carrying either a ShareCount or the first
        rejection reason triggered.
    """
    if raw is None or not raw.strip():
        return _reject(ValidationError.EMPTY_INPUT, constants)

    value = _parse_number(raw.strip())
    if value is None:
        return _reject(ValidationError.NOT_A_NUMBER, constants)

    if value < 0:
        return _reject(ValidationError.NEGATIVE, constants)

    # Infinities are numbers but never whole.
    if not math.isfinite(value) or not value.is_integer():
        return _reject(ValidationError.NOT_WHOLE_NUMBER, constants)

    if value > constants.total_diluted_shares:
        return _reject(ValidationError.EXCEEDS_TOTAL, constants)

    return ValidationResult(shares=ShareCount(int(value)))
