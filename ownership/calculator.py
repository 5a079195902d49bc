"""Ownership metrics: percentage of diluted shares and annual earnings."""

from __future__ import annotations

from dataclasses import dataclass

from ownership.config import ReferenceConstants
from ownership.validation import ShareCount


@dataclass(frozen=True)
class OwnershipMetrics:
    """Metrics derived from a validated share count.

    Attributes:
        ownership_percent: Share of total diluted shares, in [0, 100].
        annual_earnings: Share count times diluted EPS, in dollars.
    """

    ownership_percent: float
    annual_earnings: float


def derive(shares: ShareCount, constants: ReferenceConstants) -> OwnershipMetrics:
    """Compute ownership percentage and annual earnings.

    No rounding is applied; formatting is left to the presentation layer.

    Args:
        shares: Validated share count.
        constants: Total diluted shares and diluted EPS.

    Returns:
        OwnershipMetrics for the share count.
    """
    percent = (shares.value / constants.total_diluted_shares) * 100
    earnings = shares.value * constants.diluted_eps
    return OwnershipMetrics(ownership_percent=percent, annual_earnings=earnings)
