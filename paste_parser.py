"""
paste_parser.py

Deler innlimt tekst (kopiert fra Excel) i header + datarader.

- Linjer splittes på linjeskift (\\n eller \\r\\n)
- Linjer som er tomme etter trimming hoppes over
- Celler splittes på fast skilletegn (tab som standard) og trimmes
- Hvis ``has_headers`` er satt, blir første gjenværende linje header
"""

from __future__ import annotations

import logging
import re

from errors import SamplingInputError
from models import ParsedTable, rows_as_tuples

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = "\t"

_LINE_BREAK = re.compile(r"\r?\n")


def parse_pasted_table(text: str, has_headers: bool = True, delimiter: str = DEFAULT_DELIMITER) -> ParsedTable:
    if text is None or not str(text).strip():
        raise SamplingInputError("Lim inn data først.")

    lines = [ln for ln in _LINE_BREAK.split(str(text)) if ln.strip() != ""]
    rows = [[cell.strip() for cell in ln.split(delimiter)] for ln in lines]

    if has_headers:
        headers = tuple(rows[0])
        data = rows[1:]
    else:
        headers = None
        data = rows

    logger.debug("Innlimt tabell: %d datarader, header=%s", len(data), headers is not None)
    return ParsedTable(headers=headers, rows=rows_as_tuples(data))
