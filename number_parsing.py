"""number_parsing.py

Tolking av beløp fra innlimte celler.

Cellene kommer rett fra Excel og kan være på norsk/svensk form
("1 234,56 kr"), engelsk form ("1,234.56") eller blandet. Vi gjetter
tusenskiller vs. desimaltegn etter faste regler, og returnerer alltid et
endelig tall. En celle som ikke kan tolkes gir 0 i stedet for exception,
slik at én rar celle ikke stopper hele utvalget.
"""

from __future__ import annotations

import math
import re
from typing import Any

# Bare ASCII-siffer; andre Unicode-siffer regnes som støy
_NOT_NUMBER_CHARS = re.compile(r"[^\d,.\-\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s", re.ASCII)
# Komma etterfulgt av nøyaktig tre siffer og så ikke-siffer/slutt => tusenskiller
_THOUSANDS_COMMA = re.compile(r",(?=\d{3}(?!\d))", re.ASCII)
# Ledende tall (som en prefiks-parse): "-12.5abc" -> "-12.5"
_NUMBER_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


def _normalize_separators(text: str) -> str:
    s = _NOT_NUMBER_CHARS.sub("", text)
    s = _WHITESPACE.sub("", s)

    s = _THOUSANDS_COMMA.sub("", s)
    s = s.replace(",", ".")

    parts = s.split(".")
    if len(parts) > 2:
        # Alle punktum unntatt det siste er tusenskiller
        s = "".join(parts[:-1]) + "." + parts[-1]
    return s


def clean_number(value: Any) -> float:
    """
    Tolk en celle som tall.

    - "1 234,56"   -> 1234.56
    - "1,234.56"   -> 1234.56
    - "1.234,56"   -> 1234.56
    - "-500 kr"    -> -500.0
    - "abc" / ""   -> 0.0

    Kaster aldri.
    """
    if value is None:
        return 0.0
    if isinstance(value, float) and math.isnan(value):
        return 0.0

    s = _normalize_separators(str(value))
    m = _NUMBER_PREFIX.match(s)
    if not m:
        return 0.0
    try:
        v = float(m.group(0))
    except (ValueError, OverflowError):
        return 0.0
    return v if math.isfinite(v) else 0.0


def clean_amount(value: Any) -> float:
    """Absoluttbeløp – grunnlaget for terskler, vekting og summer."""
    return abs(clean_number(value))


def looks_numeric(value: Any) -> bool:
    """True hvis cellen gir et tall ≠ 0, eller er bokstavelig talt "0".

    Skiller en ekte null fra en celle som ikke lot seg tolke.
    """
    if value is None:
        return False
    if clean_number(value) != 0:
        return True
    return str(value).strip() == "0"
