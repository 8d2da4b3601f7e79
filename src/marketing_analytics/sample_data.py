"""Generate synthetic monthly spend/revenue data for demos and testing."""

from __future__ import annotations

import csv
import random
from datetime import date
from pathlib import Path

from marketing_analytics.models import MONTH_COLUMN, NUMERIC_COLUMNS

_MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def generate_rows(
    n_rows: int = 12, seed: int = 7, start: date = date(2023, 1, 1)
) -> list[list[str | float]]:
    """Monthly rows where revenue is a noisy linear function of spend."""
    rng = random.Random(seed)
    rows: list[list[str | float]] = []
    for offset in range(n_rows):
        month_index = start.month - 1 + offset
        label = f"{_MONTH_NAMES[month_index % 12]}-{start.year + month_index // 12}"
        tv = rng.uniform(4_000, 8_000)
        radio = rng.uniform(2_000, 4_500)
        social = rng.uniform(1_500, 4_000)
        noise = rng.uniform(-800, 800)
        revenue = 2_500 + 1.6 * tv + 0.9 * radio + 1.2 * social + noise
        rows.append([label, round(tv, 2), round(radio, 2), round(social, 2), round(revenue, 2)])
    return rows


def write_sample_csv(output_path: Path, n_rows: int = 12, seed: int = 7) -> Path:
    """Write a sample dataset with the required header row."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as file_obj:
        writer = csv.writer(file_obj, lineterminator="\n")
        writer.writerow([MONTH_COLUMN, *NUMERIC_COLUMNS])
        writer.writerows(generate_rows(n_rows=n_rows, seed=seed))
    return output_path
