from __future__ import annotations
import math
from typing import Any, Optional

import pandas as pd

CURRENCY_SUFFIX = "kr"


def _to_float(x: Any) -> Optional[float]:
    """Skalar -> float. None, tom tekst og NaN gir None; ugyldig gir ValueError/TypeError."""
    if x is None:
        return None
    if isinstance(x, (pd.Series, pd.DataFrame)):
        raise TypeError("forventer skalar")
    if isinstance(x, str) and not x.strip():
        return None
    v = float(x)
    return None if math.isnan(v) else v


def _nordic(text: str) -> str:
    # 1,234,567.89 -> 1 234 567,89
    return text.replace(",", " ").replace(".", ",")


def format_number_no(x: Any, decimals: int = 2) -> str:
    """Skandinavisk visning: mellomrom som tusenskiller, komma som desimal.

    None/tom/NaN gir "", verdier som ikke er tall vises uendret.
    """
    try:
        v = _to_float(x)
    except (TypeError, ValueError):
        return str(x)
    return "" if v is None else _nordic(f"{v:,.{decimals}f}")


def format_int_no(x: Any) -> str:
    """Heltall med mellomrom som tusenskiller ("12.0" -> "12")."""
    if x is None:
        return ""
    try:
        v = int(x)
    except (TypeError, ValueError, OverflowError):
        try:
            v = int(float(x))
        except (TypeError, ValueError, OverflowError):
            return str(x)
    return _nordic(f"{v:,}")


def format_currency(x: Any) -> str:
    """Beløp med to desimaler og valutasuffiks: 1234.5 -> '1 234,50 kr'."""
    txt = format_number_no(x, decimals=2)
    if txt == "":
        txt = format_number_no(0.0)
    return f"{txt} {CURRENCY_SUFFIX}"


def exclusion_message(filter_result: Any) -> str:
    """Melding til brukeren når minimumsfilteret har fjernet poster.

    Tom streng når ingenting ble utelatt.
    """
    count = int(getattr(filter_result, "excluded_count", 0) or 0)
    if count <= 0:
        return ""
    limit = getattr(filter_result, "min_value", 0.0)
    return f"Utelot {format_int_no(count)} poster under terskelen på {format_currency(limit)}."


def is_number_like_col(col_name: str) -> bool:
    lname = (col_name or "").lower()
    return any(k in lname for k in ["beløp", "belop", "belopp", "sum", "total", "populasjon", "amount", "value"])
