"""Batch calculation over a CSV column of share counts.

Each row goes through the same validate-then-derive cycle as an interactive
input. Rejected rows keep their rejection message and empty metrics.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ownership.calculator import derive
from ownership.config import ReferenceConstants
from ownership.validation import validate_shares

logger = logging.getLogger(__name__)

OUTPUT_COLUMNS = ["input", "shares", "ownership_percent", "annual_earnings", "error"]


def load_inputs(path: Path, column: str = "shares") -> list[str]:
    """Read raw share-count text from one column of a CSV file.

    Cells are read as text so the validator sees exactly what was entered;
    blank cells become empty strings.

    Args:
        path: CSV file path.
        column: Name of the column holding share counts.

    Returns:
        Raw cell values, in file order.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If *column* is not in the file.
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    if column not in df.columns:
        raise ValueError(
            f"Column {column!r} not found in {path}. "
            f"Available columns: {list(df.columns)}"
        )
    return df[column].tolist()


def calculate_batch(
    raw_values: Iterable[str | None],
    constants: ReferenceConstants,
) -> pd.DataFrame:
    """Validate and derive metrics for every raw value.

    Args:
        raw_values: Share-count text, one entry per row.
        constants: Reference figures.

    Returns:
        DataFrame with columns input, shares, ownership_percent,
        annual_earnings and error. ``shares`` is a nullable integer column;
        metrics are NaN and ``error`` holds the message for rejected rows.
    """
    inputs: list[str] = []
    shares: list[int | None] = []
    percents: list[float] = []
    earnings: list[float] = []
    errors: list[str] = []

    for raw in raw_values:
        result = validate_shares(raw, constants)
        inputs.append("" if raw is None else raw)
        if result.shares is None:
            shares.append(None)
            percents.append(math.nan)
            earnings.append(math.nan)
            errors.append(result.message)
            continue

        metrics = derive(result.shares, constants)
        shares.append(result.shares.value)
        percents.append(metrics.ownership_percent)
        earnings.append(metrics.annual_earnings)
        errors.append("")

    df = pd.DataFrame({
        "input": inputs,
        "shares": pd.array(shares, dtype="Int64"),
        "ownership_percent": pd.Series(percents, dtype=float),
        "annual_earnings": pd.Series(earnings, dtype=float),
        "error": errors,
    }, columns=OUTPUT_COLUMNS)

    n_rejected = sum(1 for e in errors if e)
    logger.info(
        "Batch: %d rows, %d valid, %d rejected",
        len(df),
        len(df) - n_rejected,
        n_rejected,
    )
    return df


def export_csv(df: pd.DataFrame, output_path: Path) -> Path:
    """Write batch results to CSV.

    Args:
        df: Output of calculate_batch.
        output_path: Destination CSV path.

    Returns:
        The path written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.info("Exported %s (%d rows)", output_path, len(df))
    return output_path
