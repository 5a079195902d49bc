"""Chart functions for share ownership.

The pie chart and its visibility-scaling rule live in ``ownership``.
"""

from ownership.charts.ownership import (
    ChartSlice,
    OwnershipChart,
    legend_labels,
    ownership_pie,
    scale_for_display,
    value_labels,
)

__all__ = [
    "ChartSlice",
    "OwnershipChart",
    "legend_labels",
    "ownership_pie",
    "scale_for_display",
    "value_labels",
]
