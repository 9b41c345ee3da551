"""summary.py

Summer til konklusjon på utvalget. Alle beløp er absoluttbeløp.

    total populasjon            = nøkkelposter + utvalgspopulasjon + utelatte
    populasjon (ekskl. utelatte) = nøkkelposter + utvalgspopulasjon

``sample_total`` er bare de trukne postene; ``population_total`` er hele den
filtrerte populasjonen trekket er gjort fra.
"""

from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from models import SampleSummary
from target_selection import amount_series

logger = logging.getLogger(__name__)


def total_amount(df: Optional[pd.DataFrame], amount_column: int) -> float:
    if df is None or df.empty:
        return 0.0
    return float(amount_series(df, amount_column).sum())


def summarize(
    population: pd.DataFrame,
    targets: Optional[pd.DataFrame],
    excluded: Optional[pd.DataFrame],
    sample: pd.DataFrame,
    amount_column: int,
) -> SampleSummary:
    target_total = total_amount(targets, amount_column)
    population_total = total_amount(population, amount_column)
    sample_total = total_amount(sample, amount_column)
    excluded_total = total_amount(excluded, amount_column)

    summary = SampleSummary(
        target_total=target_total,
        population_total=population_total,
        sample_total=sample_total,
        excluded_total=excluded_total,
        population_without_excluded=target_total + population_total,
        grand_total=target_total + population_total + excluded_total,
    )
    logger.info(
        "Oppsummering: nøkkelposter=%.2f, populasjon=%.2f, utvalg=%.2f, utelatt=%.2f, total=%.2f",
        summary.target_total, summary.population_total, summary.sample_total,
        summary.excluded_total, summary.grand_total,
    )
    return summary
