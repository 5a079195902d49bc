"""Share ownership calculator.

Converts a share count into a percentage of total diluted shares and the
matching annual diluted earnings.
"""

from ownership.calculator import OwnershipMetrics, derive
from ownership.config import ReferenceConstants
from ownership.session import CalculatorSession
from ownership.validation import ShareCount, ValidationError, validate_shares

__all__ = [
    "CalculatorSession",
    "OwnershipMetrics",
    "ReferenceConstants",
    "ShareCount",
    "ValidationError",
    "derive",
    "validate_shares",
]
