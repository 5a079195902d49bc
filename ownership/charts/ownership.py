"""Ownership pie chart and the visibility-scaling rule behind it.

Ownership stakes are usually tiny fractions of the diluted share count, so
a true-to-scale wedge would be invisible. The chart floors the rendered
wedge at ``min_visible_percent`` while every label that reports a number
uses the exact percentage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ownership.config import ChartConfig
from ownership.formatting import format_percentage

logger = logging.getLogger(__name__)

DEFAULT_MIN_VISIBLE_PERCENT: float = 0.5


@dataclass(frozen=True)
class ChartSlice:
    """Rendered wedge sizes for one ownership percentage.

    Attributes:
        display_percent: Size of the owner wedge as drawn.
        complement_percent: Size of the other-shareholders wedge as drawn.
        scaled: True if the owner wedge was enlarged to stay visible.
    """

    display_percent: float
    complement_percent: float
    scaled: bool


def scale_for_display(
    percent: float,
    min_visible: float = DEFAULT_MIN_VISIBLE_PERCENT,
) -> ChartSlice:
    """Apply the minimum-visible-wedge floor to an ownership percentage.

    Args:
        percent: Exact ownership percentage, in [0, 100].
        min_visible: Smallest owner wedge drawn for a non-zero stake.

    Returns:
        ChartSlice for rendering. Zero ownership is never scaled up.
    """
    if percent == 0:
        return ChartSlice(display_percent=0.0, complement_percent=100.0, scaled=False)

    display = max(percent, min_visible)
    return ChartSlice(
        display_percent=display,
        complement_percent=100 - display,
        scaled=0 < percent < min_visible,
    )


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def legend_labels(chart_slice: ChartSlice, config: ChartConfig) -> list[str]:
    """Legend entries, flagging the owner entry when the wedge was scaled."""
    owner = config.owner_label
    if chart_slice.scaled:
        owner += config.scaled_suffix
    return [owner, config.other_label]


def value_labels(percent: float, config: ChartConfig) -> list[str]:
    """Exact, unscaled percentages for each wedge."""
    return [
        f"{config.owner_label}: {format_percentage(percent)}",
        f"{config.other_label}: {format_percentage(100 - percent)}",
    ]


def _draw_pie(
    ax: Axes,
    percent: float,
    config: ChartConfig,
    chart_slice: ChartSlice | None = None,
) -> ChartSlice:
    """Draw the two-slice pie for *percent* onto *ax*.

    Wedge sizes come from *chart_slice* when given, otherwise from the
    scaling rule with the configured floor.
    """
    if chart_slice is None:
        chart_slice = scale_for_display(percent, config.min_visible_percent)

    wedges, _ = ax.pie(
        [chart_slice.display_percent, chart_slice.complement_percent],
        colors=[config.owner_color, config.other_color],
        startangle=90,
        counterclock=False,
        wedgeprops={"linewidth": 0},
    )
    ax.set_aspect("equal")
    ax.legend(
        wedges,
        legend_labels(chart_slice, config),
        loc="upper center",
        bbox_to_anchor=(0.5, 0.0),
        frameon=False,
    )
    ax.text(
        0.5,
        -0.18,
        "\n".join(value_labels(percent, config)),
        transform=ax.transAxes,
        ha="center",
        va="top",
        fontsize=9,
        color="dimgrey",
    )
    return chart_slice


# ===================================================================
# Public chart functions
# ===================================================================


def ownership_pie(percent: float, config: ChartConfig | None = None) -> Figure:
    """Standalone pie chart of the owner's share against all other holders.

    Args:
        percent: Exact ownership percentage.
        config: Chart appearance. Defaults to ChartConfig().

    Returns:
        Matplotlib Figure with the ownership pie.
    """
    config = config or ChartConfig()
    fig, ax = plt.subplots(figsize=config.figsize)
    _draw_pie(ax, percent, config)
    return fig


class OwnershipChart:
    """Pie chart that is redrawn in place on every update.

    The figure and axes are created on the first update and reused
    afterwards, so callers holding the figure always see the latest state.
    """

    def __init__(self, config: ChartConfig | None = None) -> None:
        self.config = config or ChartConfig()
        self.figure: Figure | None = None
        self._ax: Axes | None = None
        self.draw_count = 0

    @property
    def axes(self) -> Axes | None:
        return self._ax

    def update(
        self,
        percent: float,
        chart_slice: ChartSlice | None = None,
    ) -> ChartSlice:
        """Redraw the chart for a new ownership percentage.

        Args:
            percent: Exact ownership percentage, used for the value labels.
            chart_slice: Wedge sizes to draw. Computed from *percent* and
                this chart's config when omitted.

        Returns:
            The slice that was drawn.
        """
        if self.figure is None or self._ax is None:
            self.figure, self._ax = plt.subplots(figsize=self.config.figsize)
        else:
            self._ax.clear()

        chart_slice = _draw_pie(self._ax, percent, self.config, chart_slice)
        self.draw_count += 1
        logger.debug(
            "Chart redrawn (#%d): display=%.4f scaled=%s",
            self.draw_count,
            chart_slice.display_percent,
            chart_slice.scaled,
        )
        return chart_slice

    def save(self, path: Path) -> Path:
        """Write the current chart to an image file."""
        if self.figure is None:
            raise RuntimeError("Chart has not been drawn yet")
        path.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(path, dpi=150, bbox_inches="tight")
        logger.info("Chart written to %s", path)
        return path

    def close(self) -> None:
        if self.figure is not None:
            plt.close(self.figure)
        self.figure = None
        self._ax = None
