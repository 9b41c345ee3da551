"""
excel_formatting.py
-------------------
Etterbehandling av resultatark skrevet med openpyxl:

- Frys topprekke
- Kolonnebredde etter lengste verdi (de første radene)
- Tallformat på beløpskolonner (bare celler som faktisk er tall)

Innlimte celler er tekst og beholdes som tekst; det er i praksis bare
Oppsummering-arket som har ekte tall.
"""

from __future__ import annotations

from typing import Set

from openpyxl.utils import get_column_letter
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from formatting import is_number_like_col

AMOUNT_FORMAT = '#,##0.00'  # vises som '# ##0,00' i norsk Excel
MIN_WIDTH, MAX_WIDTH = 10, 65
WIDTH_SAMPLE_ROWS = 400
NUMBER_SCAN_ROWS = 100


def _is_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _autosize(ws: Worksheet, sample_rows: int = WIDTH_SAMPLE_ROWS) -> None:
    last = min(ws.max_row, sample_rows)
    for j, col in enumerate(ws.iter_cols(min_row=1, max_row=last, values_only=True), start=1):
        longest = max((len(str(v)) for v in col if v is not None), default=0)
        ws.column_dimensions[get_column_letter(j)].width = max(MIN_WIDTH, min(MAX_WIDTH, longest + 2))


def _amount_columns(ws: Worksheet) -> Set[int]:
    cols = {j for j, c in enumerate(ws[1], start=1) if isinstance(c.value, str) and is_number_like_col(c.value)}
    last = min(ws.max_row, NUMBER_SCAN_ROWS)
    for j in range(1, ws.max_column + 1):
        if any(_is_number(ws.cell(row=r, column=j).value) for r in range(2, last + 1)):
            cols.add(j)
    return cols


def _format_number_columns(ws: Worksheet) -> None:
    for j in _amount_columns(ws):
        for (cell,) in ws.iter_rows(min_row=2, min_col=j, max_col=j):
            if _is_number(cell.value):
                cell.number_format = AMOUNT_FORMAT


def polish_sheet(ws: Worksheet) -> None:
    ws.freeze_panes = "A2"
    _autosize(ws)
    _format_number_columns(ws)


def polish_workbook(wb: Workbook) -> None:
    for ws in wb.worksheets:
        polish_sheet(ws)
