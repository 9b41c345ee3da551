from pathlib import Path

import pytest
from openpyxl import load_workbook

import excel_export
from errors import ExportError
from excel_export import (
    build_result_sheets,
    export_results_temp,
    export_results_to_excel,
    parameters_frame,
    summary_frame,
)


def test_build_result_sheets_names_and_content(sample_result) -> None:
    sheets = build_result_sheets(sample_result)

    assert list(sheets) == ["Oppsummering", "Nøkkelposter", "Utvalg", "Populasjon", "Utelatt", "Parametre"]
    assert list(sheets["Utvalg"]["ID"]) == ["A-3", "A-5"]
    assert list(sheets["Utelatt"]["ID"]) == ["A-2"]
    assert list(sheets["Utvalg"].columns) == ["ID", "Beløp"]


def test_optional_sheets_skipped_when_empty(sample_result) -> None:
    sample_result.targets = sample_result.targets.iloc[0:0]
    sample_result.excluded = sample_result.excluded.iloc[0:0]
    sheets = build_result_sheets(sample_result)
    assert "Nøkkelposter" not in sheets
    assert "Utelatt" not in sheets


def test_summary_and_parameters_frames(sample_result) -> None:
    s = summary_frame(sample_result)
    assert list(s.columns) == ["Nøkkel", "Beløp"]
    assert s.iloc[-1]["Nøkkel"] == "Total populasjon"
    assert s.iloc[-1]["Beløp"] == pytest.approx(60100.0)

    p = dict(parameters_frame(sample_result).values.tolist())
    assert p["Metode"] == "Beløpsvektet utvalg (MUS)"
    assert p["Utvalgsstørrelse"] == 2
    assert p["Antall utelatt"] == 1
    assert p["Minimumsverdi"] == 500


def test_export_results_to_excel_writes_workbook(sample_result, tmp_path) -> None:
    path = tmp_path / "utvalg.xlsx"
    out = export_results_to_excel(path, sample_result)

    assert out == str(path)
    wb = load_workbook(out)
    assert wb.sheetnames == ["Oppsummering", "Nøkkelposter", "Utvalg", "Populasjon", "Utelatt", "Parametre"]

    ws = wb["Utvalg"]
    assert [c.value for c in ws[1]] == ["ID", "Beløp"]
    assert [c.value for c in ws[2]] == ["A-3", "2 000"]
    assert ws.freeze_panes == "A2"

    summary = wb["Oppsummering"]
    assert summary.cell(row=2, column=2).value == pytest.approx(50000.0)


def test_export_failure_raises_export_error(sample_result, tmp_path) -> None:
    missing_dir = tmp_path / "finnes_ikke" / "utvalg.xlsx"
    with pytest.raises(ExportError):
        export_results_to_excel(missing_dir, sample_result)


def test_export_results_temp_open_flag(sample_result, tmp_path, monkeypatch) -> None:
    opened = []
    monkeypatch.setattr(excel_export, "open_with_system", lambda p: opened.append(p))

    out = export_results_temp(sample_result, directory=tmp_path, open_file=False)
    assert Path(out).exists()
    assert Path(out).name.startswith("Utvalg_")
    assert opened == []

    out2 = export_results_temp(sample_result, prefix="Test_", directory=tmp_path / "sub")
    assert Path(out2).exists()
    assert opened == [out2]


def test_open_with_system_passes_path_as_single_argument(monkeypatch, tmp_path) -> None:
    calls = []
    monkeypatch.setattr(excel_export.sys, "platform", "linux")
    monkeypatch.setattr(excel_export.subprocess, "Popen", lambda args, **kw: calls.append(args))

    path = tmp_path / "Kunde's utvalg.xlsx"
    excel_export.open_with_system(path)

    assert calls == [["xdg-open", str(path)]]


def test_open_with_system_failure_is_logged_not_raised(monkeypatch, caplog) -> None:
    def _missing(args, **kw):
        raise FileNotFoundError("xdg-open")

    monkeypatch.setattr(excel_export.sys, "platform", "linux")
    monkeypatch.setattr(excel_export.subprocess, "Popen", _missing)

    excel_export.open_with_system("utvalg.xlsx")
    assert "Kunne ikke åpne" in caplog.text
