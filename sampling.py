"""sampling.py

Trekking av utvalg fra (filtrert) populasjon.

To metoder:

* **Tilfeldig utvalg (SRS)** – Fisher–Yates-stokking av radindeksene, ta de
  n første og sorter tilbake til opprinnelig rekkefølge. Alle rader har lik
  sannsynlighet, ingen rad trekkes to ganger.

* **Beløpsvektet utvalg (MUS)** – rader med større |beløp| har
  proporsjonalt større sjanse. Vi trekker et tilfeldig punkt i
  [0, totalbeløp) og velger raden der kumulativ sum først er >= punktet.
  Duplikater ignoreres, så vi trekker på nytt inntil
  ``min(n * 10, antall_kandidater * 2)`` ganger. Blir vi ikke ferdige,
  fylles resten deterministisk med de første ikke-valgte kandidatene i
  opprinnelig rekkefølge.

  Dette er en tilnærming, ikke eksakt PPS uten tilbakelegging. Den er
  beholdt uendret fordi tidligere arbeidspapirer er laget med den.
  Rader med beløp 0 kan aldri trekkes.

Tilfeldighetskilden kan injiseres (``rng``), slik at tester kan gi en
deterministisk sekvens. Standard er ``numpy.random.default_rng()`` uten seed.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

import numpy as np
import pandas as pd

from errors import SamplingInputError
from models import METHOD_MUS, METHOD_SRS, METHODS
from target_selection import amount_series

logger = logging.getLogger(__name__)

MUS_DRAWS_PER_ITEM = 10
MUS_DRAWS_PER_CANDIDATE = 2


class RandomSource(Protocol):
    """Det vi bruker av ``numpy.random.Generator``."""

    def random(self) -> float: ...

    def integers(self, low: int, high: int) -> int: ...


def _rng_or_default(rng: Optional[RandomSource]) -> RandomSource:
    return rng if rng is not None else np.random.default_rng()


def _check_size(n: int) -> int:
    n = int(n)
    if n < 0:
        raise SamplingInputError(f"Utvalgsstørrelsen kan ikke være negativ ({n}).", {"requested": n})
    return n


# --------------------------- SRS ---------------------------------------

def srs_positions(size: int, n: int, rng: Optional[RandomSource] = None) -> List[int]:
    """Trekk n av posisjonene 0..size-1 (uten tilbakelegging), stigende sortert."""
    n = _check_size(n)
    size = int(size)
    if n > size:
        raise SamplingInputError(
            f"Utvalgsstørrelsen ({n}) kan ikke være større enn filtrert populasjon ({size}).",
            {"requested": n, "available": size},
        )
    if n == 0:
        return []

    rng = _rng_or_default(rng)
    indices = list(range(size))
    # Fisher–Yates: bytt element i med et tilfeldig element på plass <= i
    for i in range(size - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        indices[i], indices[j] = indices[j], indices[i]

    return sorted(indices[:n])


def simple_random_sample(
    population: pd.DataFrame,
    n: int,
    rng: Optional[RandomSource] = None,
) -> pd.DataFrame:
    if population is None or population.empty:
        raise SamplingInputError("Ingen poster igjen etter nøkkelposter og minimumsfilter.")
    positions = srs_positions(len(population), n, rng)
    logger.debug("SRS: %d av %d trukket", len(positions), len(population))
    return population.iloc[positions].copy()


# --------------------------- MUS ---------------------------------------

def mus_positions(
    amounts: Sequence[float],
    n: int,
    rng: Optional[RandomSource] = None,
) -> List[int]:
    """Beløpsvektet trekk av n posisjoner (stigende sortert).

    ``amounts`` er beløp per rad i populasjonen (fortegn ignoreres).
    """
    n = _check_size(n)
    values = np.abs(np.asarray(amounts, dtype="float64"))
    if n == 0:
        return []

    eligible = np.flatnonzero(values > 0)
    if eligible.size == 0:
        raise SamplingInputError("Fant ingen poster med beløp ulik 0 i beløpskolonnen.")
    if n > eligible.size:
        raise SamplingInputError(
            f"Utvalgsstørrelsen ({n}) er større enn antall poster med beløp ({eligible.size}).",
            {"requested": n, "available": int(eligible.size)},
        )

    rng = _rng_or_default(rng)
    cumulative = np.cumsum(values[eligible])
    total = float(cumulative[-1])
    max_draws = min(n * MUS_DRAWS_PER_ITEM, int(eligible.size) * MUS_DRAWS_PER_CANDIDATE)

    selected: set[int] = set()
    draws = 0
    while draws < max_draws and len(selected) < n:
        point = float(rng.random()) * total
        # første kandidat der kumulativ sum >= punktet
        k = int(np.searchsorted(cumulative, point, side="left"))
        selected.add(int(eligible[min(k, eligible.size - 1)]))
        draws += 1

    if len(selected) < n:
        missing = n - len(selected)
        for idx in eligible:
            if len(selected) >= n:
                break
            selected.add(int(idx))
        logger.warning(
            "MUS: %d trekk ga bare %d unike poster, fylte %d deterministisk i opprinnelig rekkefølge",
            draws, n - missing, missing,
        )

    return sorted(selected)


def monetary_unit_sample(
    population: pd.DataFrame,
    amount_column: int,
    n: int,
    rng: Optional[RandomSource] = None,
) -> pd.DataFrame:
    if population is None or population.empty:
        raise SamplingInputError("Ingen poster igjen etter nøkkelposter og minimumsfilter.")
    amounts = amount_series(population, amount_column).to_numpy()
    positions = mus_positions(amounts, n, rng)
    logger.debug("MUS: %d av %d trukket", len(positions), len(population))
    return population.iloc[positions].copy()


def draw_sample(
    method: str,
    population: pd.DataFrame,
    amount_column: int,
    n: int,
    rng: Optional[RandomSource] = None,
) -> pd.DataFrame:
    """Trekk utvalg med valgt metode ("srs" eller "mus")."""
    m = (method or "").strip().lower()
    if m == METHOD_SRS:
        return simple_random_sample(population, n, rng)
    if m == METHOD_MUS:
        return monetary_unit_sample(population, amount_column, n, rng)
    raise SamplingInputError(f"Ukjent utvalgsmetode: {method!r}. Gyldige: {', '.join(METHODS)}.")
