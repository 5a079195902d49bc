"""Data contracts passed from the session to its output sinks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ownership.calculator import OwnershipMetrics
from ownership.charts.ownership import ChartSlice
from ownership.config import ReferenceConstants
from ownership.validation import ShareCount


@dataclass(frozen=True)
class Presentation:
    """Display state produced by one input event.

    Attributes:
        percent_text: Formatted ownership percentage, or the placeholder.
        earnings_text: Formatted annual earnings, or the placeholder.
        error_message: Rejection message, empty on success.
        ownership_percent: Exact percentage drawn on the chart (0 on error).
        chart: Wedge sizes handed to the chart sink.
    """

    percent_text: str
    earnings_text: str
    error_message: str
    ownership_percent: float
    chart: ChartSlice

    @property
    def ok(self) -> bool:
        return not self.error_message


@dataclass(frozen=True)
class ReportData:
    """Snapshot of the last successful calculation, for export."""

    shares: ShareCount
    metrics: OwnershipMetrics
    constants: ReferenceConstants
    generated_at: datetime
