"""Calculator configuration dataclasses."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

# Q1 2025 10-K filing figures.
DEFAULT_TOTAL_DILUTED_SHARES: int = 909_241_619
DEFAULT_DILUTED_EPS: float = 0.37


@dataclass(frozen=True)
class ReferenceConstants:
    """Fixed reference figures every calculation is measured against.

    Attributes:
        total_diluted_shares: Total diluted share count, the ownership
            denominator.
        diluted_eps: Diluted earnings per share, in dollars.
    """

    total_diluted_shares: int = DEFAULT_TOTAL_DILUTED_SHARES
    diluted_eps: float = DEFAULT_DILUTED_EPS

    def __post_init__(self) -> None:
        """Validate the reference figures."""
        if self.total_diluted_shares <= 0:
            raise ValueError(
                f"total_diluted_shares must be positive, "
                f"got {self.total_diluted_shares}."
            )
        if not math.isfinite(self.diluted_eps):
            raise ValueError(f"diluted_eps must be finite, got {self.diluted_eps}.")
        if self.diluted_eps < 0:
            raise ValueError(
                f"diluted_eps must be non-negative, got {self.diluted_eps}."
            )


@dataclass
class ChartConfig:
    """Ownership pie chart appearance."""

    min_visible_percent: float = 0.5
    owner_color: str = "#000000"
    other_color: str = "#E5E5E5"
    owner_label: str = "Your Ownership"
    other_label: str = "Other Shareholders"
    scaled_suffix: str = " (scaled for visibility)"
    figsize: tuple[float, float] = (6.0, 6.0)

    def __post_init__(self) -> None:
        if not 0 <= self.min_visible_percent < 100:
            raise ValueError(
                f"min_visible_percent must be in [0, 100), "
                f"got {self.min_visible_percent}."
            )


@dataclass
class ReportConfig:
    """PDF export settings."""

    title: str = "Share Ownership Report"
    source_citation: str = "Diluted share count and EPS from the Q1 2025 10-K filing"
    source_url: str = "https://www.sec.gov/edgar/search/"
    output_dir: Path = Path("output")
