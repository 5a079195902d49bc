"""Tests for the calculation session controller."""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from ownership.charts import ChartSlice, OwnershipChart
from ownership.config import ChartConfig, ReferenceConstants
from ownership.session import CalculatorSession, ExportUnavailableError, SessionState
from ownership.validation import ShareCount


@pytest.fixture(autouse=True)
def _close_figures() -> Generator[None, None, None]:
    yield
    plt.close("all")


@pytest.fixture
def session() -> CalculatorSession:
    return CalculatorSession(ReferenceConstants())


class TestHandleInput:
    """One input event through the full cycle."""

    def test_initial_state(self, session: CalculatorSession) -> None:
        assert session.state is SessionState.AWAITING_INPUT
        assert session.last_metrics is None
        assert not session.can_export

    def test_valid_input(self, session: CalculatorSession) -> None:
        presentation = session.handle_input("1000000")

        assert presentation.ok
        assert presentation.error_message == ""
        assert presentation.percent_text.startswith("0.10998")
        assert presentation.percent_text.endswith("%")
        assert presentation.earnings_text == "$370000.00"
        assert session.state is SessionState.SUCCESS
        assert session.last_shares == ShareCount(1_000_000)
        assert session.last_metrics is not None

    def test_invalid_input_shows_placeholders(self, session: CalculatorSession) -> None:
        presentation = session.handle_input("abc")

        assert not presentation.ok
        assert presentation.percent_text == "-"
        assert presentation.earnings_text == "-"
        assert presentation.error_message == "Please enter a valid number."
        assert session.state is SessionState.ERROR

    def test_invalid_input_resets_chart_to_zero(self, session: CalculatorSession) -> None:
        session.handle_input("500000000")
        presentation = session.handle_input("-5")

        assert presentation.ownership_percent == 0.0
        assert presentation.chart == ChartSlice(
            display_percent=0.0, complement_percent=100.0, scaled=False,
        )

    def test_small_stake_chart_is_scaled_but_percent_exact(
        self, session: CalculatorSession
    ) -> None:
        presentation = session.handle_input("1000000")

        assert presentation.chart.scaled is True
        assert presentation.chart.display_percent == 0.5
        assert presentation.ownership_percent == pytest.approx(
            1_000_000 / 909_241_619 * 100
        )
        assert session.last_metrics is not None
        assert session.last_metrics.ownership_percent == presentation.ownership_percent

    def test_zero_shares(self, session: CalculatorSession) -> None:
        presentation = session.handle_input("0")
        assert presentation.ok
        assert presentation.percent_text == "0.0000000000%"
        assert presentation.earnings_text == "$0.00"
        assert presentation.chart.complement_percent == 100.0
        assert presentation.chart.scaled is False

    def test_last_write_wins(self, session: CalculatorSession) -> None:
        session.handle_input("10")
        session.handle_input("20")
        assert session.last_shares == ShareCount(20)

    def test_error_keeps_last_successful_snapshot(
        self, session: CalculatorSession
    ) -> None:
        session.handle_input("10")
        session.handle_input("")
        assert session.last_shares == ShareCount(10)
        assert session.state is SessionState.ERROR

    def test_custom_min_visible(self) -> None:
        session = CalculatorSession(
            ReferenceConstants(total_diluted_shares=1000),
            ChartConfig(min_visible_percent=5.0),
        )
        presentation = session.handle_input("10")
        assert presentation.ownership_percent == 1.0
        assert presentation.chart.display_percent == 5.0


class TestChartSink:
    """Attached chart is redrawn on every input event."""

    def test_chart_redrawn_on_each_event(self) -> None:
        chart = OwnershipChart()
        session = CalculatorSession(ReferenceConstants(), chart=chart)

        session.handle_input("1000")
        fig = chart.figure
        session.handle_input("bad")
        session.handle_input("2000")

        assert chart.draw_count == 3
        assert chart.figure is fig

    def test_chart_draws_session_slice(self) -> None:
        """The drawn wedge follows the session's floor, not the chart's own."""
        chart = OwnershipChart()
        session = CalculatorSession(
            ReferenceConstants(total_diluted_shares=1000),
            ChartConfig(min_visible_percent=5.0),
            chart=chart,
        )

        presentation = session.handle_input("10")

        assert presentation.chart == ChartSlice(
            display_percent=5.0, complement_percent=95.0, scaled=True
        )
        owner_wedge = chart.axes.patches[0]
        assert abs(owner_wedge.theta2 - owner_wedge.theta1) == pytest.approx(18.0)
        legend = [text.get_text() for text in chart.axes.get_legend().get_texts()]
        assert legend[0] == "Your Ownership (scaled for visibility)"


class TestExport:
    """Export is only available while the current input is valid."""

    def test_no_input_yet(self, session: CalculatorSession) -> None:
        with pytest.raises(ExportUnavailableError, match="no share count"):
            session.report_data()

    def test_error_state_refuses_export(self, session: CalculatorSession) -> None:
        session.handle_input("100")
        session.handle_input("3.5")
        assert not session.can_export
        with pytest.raises(ExportUnavailableError, match="invalid"):
            session.report_data()

    def test_report_data_after_success(self, session: CalculatorSession) -> None:
        session.handle_input("100")
        stamp = datetime(2025, 5, 1, 9, 30)
        report = session.report_data(generated_at=stamp)

        assert report.shares == ShareCount(100)
        assert report.metrics == session.last_metrics
        assert report.constants == session.constants
        assert report.generated_at == stamp

    def test_recovers_after_error(self, session: CalculatorSession) -> None:
        session.handle_input("x")
        session.handle_input("250")
        assert session.can_export
        assert session.report_data().shares == ShareCount(250)

    def test_default_timestamp_is_now(self, session: CalculatorSession) -> None:
        session.handle_input("1")
        before = datetime.now()
        report = session.report_data()
        assert before <= report.generated_at <= datetime.now()
