"""Calculation session: runs the validate-derive-present cycle per input.

The session is the single owner of the "last computed metrics" snapshot.
Each input event overwrites it on success; a rejected input leaves the
session in the error state, in which export is refused.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum

from ownership.calculator import OwnershipMetrics, derive
from ownership.charts.ownership import OwnershipChart, scale_for_display
from ownership.config import ChartConfig, ReferenceConstants
from ownership.contracts import Presentation, ReportData
from ownership.formatting import PLACEHOLDER, format_currency, format_percentage
from ownership.validation import ShareCount, validate_shares

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Where the session is in its input cycle."""

    AWAITING_INPUT = "awaiting_input"
    SUCCESS = "success"
    ERROR = "error"


class ExportUnavailableError(RuntimeError):
    """Raised when export is requested without a valid current calculation."""


class CalculatorSession:
    """Owns the reference constants and the latest successful calculation.

    Args:
        constants: Reference figures. Defaults to ReferenceConstants().
        chart_config: Chart settings (minimum visible wedge).
        chart: Optional chart sink, redrawn on every input event.
    """

    def __init__(
        self,
        constants: ReferenceConstants | None = None,
        chart_config: ChartConfig | None = None,
        chart: OwnershipChart | None = None,
    ) -> None:
        self.constants = constants or ReferenceConstants()
        self.chart_config = chart_config or ChartConfig()
        self.chart = chart
        self.state = SessionState.AWAITING_INPUT
        self.last_shares: ShareCount | None = None
        self.last_metrics: OwnershipMetrics | None = None
        self.last_presentation: Presentation | None = None

    def handle_input(self, raw: str | None) -> Presentation:
        """Process one input event and return what should be displayed.

        Args:
            raw: Share-count text as entered.

        Returns:
            Presentation with formatted figures, or placeholders and the
            rejection message when the input is invalid.
        """
        result = validate_shares(raw, self.constants)

        if result.shares is None:
            self.state = SessionState.ERROR
            presentation = Presentation(
                percent_text=PLACEHOLDER,
                earnings_text=PLACEHOLDER,
                error_message=result.message,
                ownership_percent=0.0,
                chart=scale_for_display(0.0, self.chart_config.min_visible_percent),
            )
        else:
            metrics = derive(result.shares, self.constants)
            self.state = SessionState.SUCCESS
            self.last_shares = result.shares
            self.last_metrics = metrics
            presentation = Presentation(
                percent_text=format_percentage(metrics.ownership_percent),
                earnings_text=format_currency(metrics.annual_earnings),
                error_message="",
                ownership_percent=metrics.ownership_percent,
                chart=scale_for_display(
                    metrics.ownership_percent,
                    self.chart_config.min_visible_percent,
                ),
            )
            logger.debug(
                "%d shares -> %s, %s",
                result.shares.value,
                presentation.percent_text,
                presentation.earnings_text,
            )

        if self.chart is not None:
            self.chart.update(presentation.ownership_percent, presentation.chart)

        self.last_presentation = presentation
        return presentation

    @property
    def can_export(self) -> bool:
        return (
            self.state is SessionState.SUCCESS
            and self.last_shares is not None
            and self.last_metrics is not None
        )

    def report_data(self, generated_at: datetime | None = None) -> ReportData:
        """Snapshot the current calculation for export.

        Args:
            generated_at: Report timestamp. Defaults to now.

        Returns:
            ReportData built from the last successful calculation.

        Raises:
            ExportUnavailableError: If no input has been accepted yet, or
                the most recent input was rejected.
        """
        shares = self.last_shares
        metrics = self.last_metrics
        if not self.can_export or shares is None or metrics is None:
            if self.state is SessionState.ERROR:
                reason = "the current input is invalid"
            else:
                reason = "no share count has been entered yet"
            raise ExportUnavailableError(f"Cannot export report: {reason}.")

        return ReportData(
            shares=shares,
            metrics=metrics,
            constants=self.constants,
            generated_at=generated_at or datetime.now(),
        )
