from openpyxl import Workbook

from excel_formatting import AMOUNT_FORMAT, polish_sheet, polish_workbook


def _sheet():
    wb = Workbook()
    ws = wb.active
    ws.append(["ID", "Beløp", "Tekst", "Antall"])
    ws.append(["A", 1234.5, "x", 3])
    ws.append(["B", "1 000", "y", True])
    return wb, ws


def test_polish_sheet_freezes_and_formats_numbers() -> None:
    _, ws = _sheet()
    polish_sheet(ws)

    assert ws.freeze_panes == "A2"
    assert ws["B2"].number_format == AMOUNT_FORMAT
    # tekst i beløpskolonnen røres ikke
    assert ws["B3"].number_format == "General"
    # numerisk verdi i kolonne uten beløpsnavn får også tallformat
    assert ws["D2"].number_format == AMOUNT_FORMAT
    # bool er ikke tall
    assert ws["D3"].number_format == "General"
    assert ws["C2"].number_format == "General"


def test_polish_sheet_column_width() -> None:
    _, ws = _sheet()
    polish_sheet(ws)
    assert ws.column_dimensions["A"].width == 10
    assert 10 <= ws.column_dimensions["B"].width <= 65


def test_polish_workbook_all_sheets() -> None:
    wb, _ = _sheet()
    ws2 = wb.create_sheet("Annet")
    ws2.append(["Sum"])
    ws2.append([5.0])
    polish_workbook(wb)
    assert ws2.freeze_panes == "A2"
    assert ws2["A2"].number_format == AMOUNT_FORMAT
