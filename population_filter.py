import logging
from typing import Optional

import pandas as pd

from models import FilterResult
from target_selection import amount_series

logger = logging.getLogger(__name__)


def filter_by_minimum_value(
    remaining: pd.DataFrame,
    amount_column: int,
    min_value: Optional[float],
) -> FilterResult:
    """Fjern uvesentlige poster (|beløp| under minimumsverdi) fra restpopulasjonen.

    Parametre
    ---------
    remaining : DataFrame
        Rader som ikke er nøkkelposter.
    amount_column : int
        1-basert beløpskolonne.
    min_value : float, optional
        Minimumsverdi. None eller <= 0 slår av filteret.

    Returnerer
    ----------
    FilterResult
        ``population`` (beholdt), ``excluded`` (under grensen), antall utelatt
        og faktisk brukt minimumsverdi (0 når filteret er av).
    """
    n0 = int(len(remaining))

    if min_value is None or float(min_value) <= 0:
        return FilterResult(
            population=remaining.copy(),
            excluded=remaining.iloc[0:0].copy(),
            excluded_count=0,
            original_count=n0,
            min_value=0.0,
        )

    limit = float(min_value)
    amounts = amount_series(remaining, amount_column)
    keep = amounts >= limit

    population = remaining.loc[keep].copy()
    excluded = remaining.loc[~keep].copy()

    logger.info("Minimumsfilter %.2f: beholdt %d, utelot %d", limit, len(population), len(excluded))
    return FilterResult(
        population=population,
        excluded=excluded,
        excluded_count=n0 - int(len(population)),
        original_count=n0,
        min_value=limit,
    )
