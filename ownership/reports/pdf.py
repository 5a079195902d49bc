"""PDF report generation using Jinja2 templates and WeasyPrint.

Renders the last successful calculation, its ownership chart and the
reference figures into a Jinja2 HTML template and converts it to PDF via
WeasyPrint.
"""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jinja2
import matplotlib
import matplotlib.pyplot as plt
import weasyprint

from ownership.charts import ownership_pie
from ownership.config import ChartConfig, ReportConfig
from ownership.formatting import (
    format_currency,
    format_percentage,
    format_shares,
)

if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from ownership.contracts import ReportData

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def report_filename(report: ReportData) -> str:
    """File name for a report, dated by its generation time."""
    return f"ownership-report-{report.generated_at:%Y-%m-%d}.pdf"


def generate_pdf(
    report: ReportData,
    output_dir: Path,
    config: ReportConfig | None = None,
    chart_config: ChartConfig | None = None,
) -> Path:
    """Generate a one-page ownership PDF report.

    Args:
        report: Snapshot of the last successful calculation.
        output_dir: Directory the PDF is written into.
        config: Report title and source citation.
        chart_config: Appearance of the embedded ownership chart.

    Returns:
        Path to the generated PDF file.
    """
    # Use non-interactive backend for rendering
    matplotlib.use("Agg")

    config = config or ReportConfig()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / report_filename(report)

    context = _build_context(report, config, chart_config)
    html_content = render_html(context)

    pdf_doc = weasyprint.HTML(string=html_content).write_pdf()
    output_path.write_bytes(pdf_doc)

    logger.info("PDF report generated: %s", output_path)
    return output_path


def render_html(context: dict[str, Any]) -> str:
    """Render the report template with *context*."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template("report.html")
    return template.render(**context)


def _build_context(
    report: ReportData,
    config: ReportConfig,
    chart_config: ChartConfig | None = None,
) -> dict[str, Any]:
    """Build the Jinja2 template context."""
    metrics = report.metrics
    constants = report.constants

    # Chart shows the exact percentage; any wedge scaling stays in the image.
    chart = _fig_to_base64(ownership_pie(metrics.ownership_percent, chart_config))

    return {
        "title": config.title,
        "generated_at": report.generated_at.strftime("%d %B %Y %H:%M:%S"),
        "shares": format_shares(report.shares.value),
        "ownership_percent": format_percentage(metrics.ownership_percent),
        "annual_earnings": format_currency(metrics.annual_earnings),
        "total_diluted_shares": format_shares(constants.total_diluted_shares),
        "diluted_eps": format_currency(constants.diluted_eps),
        "source_citation": config.source_citation,
        "source_url": config.source_url,
        "chart": chart,
    }


def _fig_to_base64(fig: Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    buf.seek(0)
    result = base64.b64encode(buf.read()).decode("ascii")
    buf.close()
    return result
