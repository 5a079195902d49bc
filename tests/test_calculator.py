"""Tests for ownership metric derivation."""

from __future__ import annotations

import pytest

from ownership.calculator import OwnershipMetrics, derive
from ownership.config import ReferenceConstants
from ownership.formatting import format_currency, format_percentage
from ownership.validation import ShareCount, validate_shares

TOTAL = 909_241_619
EPS = 0.37


@pytest.fixture
def constants() -> ReferenceConstants:
    return ReferenceConstants(total_diluted_shares=TOTAL, diluted_eps=EPS)


class TestDerive:
    """Percentage and earnings formulas."""

    @pytest.mark.parametrize("shares", [0, 1, 7, 1_000, 1_000_000, 123_456_789, TOTAL])
    def test_percentage_formula(
        self, shares: int, constants: ReferenceConstants
    ) -> None:
        metrics = derive(ShareCount(shares), constants)
        assert metrics.ownership_percent == pytest.approx(shares / TOTAL * 100)

    @pytest.mark.parametrize("shares", [0, 1, 7, 1_000, 1_000_000, TOTAL])
    def test_earnings_formula(
        self, shares: int, constants: ReferenceConstants
    ) -> None:
        metrics = derive(ShareCount(shares), constants)
        assert metrics.annual_earnings == pytest.approx(shares * EPS)

    def test_zero_shares(self, constants: ReferenceConstants) -> None:
        metrics = derive(ShareCount(0), constants)
        assert metrics.ownership_percent == 0
        assert metrics.annual_earnings == 0

    def test_all_shares_is_exactly_one_hundred(
        self, constants: ReferenceConstants
    ) -> None:
        metrics = derive(ShareCount(TOTAL), constants)
        assert metrics.ownership_percent == 100.0

    def test_no_rounding_applied(self, constants: ReferenceConstants) -> None:
        """Derived values keep full float precision."""
        metrics = derive(ShareCount(1), constants)
        assert metrics.ownership_percent == 1 / TOTAL * 100
        assert metrics.ownership_percent < 1e-6

    def test_repeated_calls_are_identical(
        self, constants: ReferenceConstants
    ) -> None:
        shares = ShareCount(424_242)
        first = derive(shares, constants)
        second = derive(shares, constants)
        assert first == second
        assert first.ownership_percent.hex() == second.ownership_percent.hex()
        assert first.annual_earnings.hex() == second.annual_earnings.hex()

    def test_zero_eps(self) -> None:
        constants = ReferenceConstants(total_diluted_shares=100, diluted_eps=0.0)
        metrics = derive(ShareCount(50), constants)
        assert metrics.ownership_percent == 50.0
        assert metrics.annual_earnings == 0.0

    def test_metrics_frozen(self, constants: ReferenceConstants) -> None:
        metrics = derive(ShareCount(10), constants)
        with pytest.raises(AttributeError):
            metrics.annual_earnings = 0.0  # type: ignore[misc]


class TestEndToEnd:
    """Raw text through validation, derivation and formatting."""

    def test_one_million_shares(self, constants: ReferenceConstants) -> None:
        result = validate_shares("1000000", constants)
        assert result.shares is not None

        metrics = derive(result.shares, constants)
        assert isinstance(metrics, OwnershipMetrics)

        percent_text = format_percentage(metrics.ownership_percent)
        assert percent_text.startswith("0.10998")
        assert percent_text == f"{1_000_000 / TOTAL * 100:.10f}%"
        assert format_currency(metrics.annual_earnings) == "$370000.00"
