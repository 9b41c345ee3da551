"""target_selection.py

Nøkkelposter: poster som alltid testes 100 %.

En rad er nøkkelpost hvis
  * |beløp| >= terskel (når terskel er satt), eller
  * ID-en står i listen over spesifikt valgte ID-er.

Resten går videre til minimumsfilter og trekking. Rekkefølgen i input
beholdes i begge deler (stabil partisjon, ikke sortering).

Før klassifisering sjekker vi at beløpskolonnen finnes og faktisk ser
numerisk ut, slik at brukeren ikke trekker utvalg på f.eks. en tekstkolonne.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, Optional, Union

import pandas as pd

from errors import SamplingInputError
from models import ParsedTable, TargetSplit
from number_parsing import clean_amount, looks_numeric

logger = logging.getLogger(__name__)

NUMERIC_CHECK_ROWS = 10


def parse_target_ids(text: Optional[Union[str, Iterable[str]]]) -> FrozenSet[str]:
    """'A-1, B-2,, C-3 ' -> {'A-1', 'B-2', 'C-3'}"""
    if text is None:
        return frozenset()
    parts = text.split(",") if isinstance(text, str) else list(text)
    return frozenset(p.strip() for p in map(str, parts) if p.strip())


def validate_amount_column(table: ParsedTable, amount_column: Optional[int]) -> None:
    """Kaster SamplingInputError hvis beløpskolonnen er ugyldig.

    Sjekker mot lengden på første datarad (slik den ble limt inn), og krever
    at minst én av de første 10 radene har et tall (≠ 0 eller bokstavelig "0").
    """
    if amount_column is None or int(amount_column) < 1:
        raise SamplingInputError(
            "Oppgi en gyldig kolonneindeks (1 eller høyere).",
            {"column": amount_column},
        )

    col = int(amount_column)
    first_row = table.rows[0] if table.rows else None
    row_length = len(first_row) if first_row is not None else 0
    if col > row_length:
        raise SamplingInputError(
            f"Kolonne {col} er utenfor dataene. Dataene har {row_length} kolonner.",
            {"column": col, "row_length": row_length},
        )

    idx = col - 1
    first_rows = table.rows[:NUMERIC_CHECK_ROWS]
    valid = sum(1 for row in first_rows if idx < len(row) and looks_numeric(row[idx]))
    if valid == 0:
        raise SamplingInputError(
            f"Kolonne {col} ser ikke ut til å inneholde gyldige tall. Sjekk kolonneindeksen.",
            {"column": col, "rows_checked": len(first_rows)},
        )


def amount_series(df: pd.DataFrame, amount_column: int) -> pd.Series:
    """|beløp| per rad for 1-basert kolonneindeks. Ugyldige celler gir 0."""
    if df.empty:
        return pd.Series([], index=df.index, dtype="float64")
    idx = int(amount_column) - 1
    if idx < 0 or idx >= df.shape[1]:
        return pd.Series(0.0, index=df.index, dtype="float64")
    return df.iloc[:, idx].map(clean_amount).astype("float64")


def identify_targets(
    df: pd.DataFrame,
    id_column: int,
    amount_column: int,
    target_value: Optional[float] = None,
    target_ids: Optional[Union[str, Iterable[str]]] = None,
) -> TargetSplit:
    """Del datarader i nøkkelposter og resten.

    Parametre
    ---------
    df : DataFrame
        Datarader (indeks = opprinnelig radposisjon).
    id_column, amount_column : int
        1-baserte kolonneindekser.
    target_value : float, optional
        Terskel for nøkkelposter. None eller <= 0 betyr ingen terskel.
    target_ids : str | iterable, optional
        Kommaseparert liste (eller ferdig liste) med ID-er som alltid tas med.
    """
    ids = parse_target_ids(target_ids)
    amounts = amount_series(df, amount_column)

    if target_value is not None and float(target_value) > 0:
        by_value = amounts >= float(target_value)
    else:
        by_value = pd.Series(False, index=df.index)

    id_idx = int(id_column) - 1
    if ids and 0 <= id_idx < df.shape[1]:
        row_ids = df.iloc[:, id_idx].map(lambda v: "" if v is None else str(v).strip())
        by_id = row_ids.isin(sorted(ids))
    else:
        by_id = pd.Series(False, index=df.index)

    mask = (by_value | by_id).astype(bool)
    split = TargetSplit(targets=df.loc[mask].copy(), remaining=df.loc[~mask].copy())

    logger.info(
        "Nøkkelposter: %d av %d rader (terskel=%s, %d ID-er, %d treff på ID)",
        split.target_count, len(df), target_value, len(ids), int(by_id.sum()),
    )
    return split
