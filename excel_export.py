"""
excel_export.py

Eksport av et ferdig utvalg (SamplingResult) til Excel for arbeidspapirer.

Ark:
  - Oppsummering  (summer)
  - Nøkkelposter  (100 % testet, bare hvis det finnes)
  - Utvalg        (trukne poster)
  - Populasjon    (filtrert populasjon trekket er gjort fra)
  - Utelatt       (under minimumsverdi, bare hvis det finnes)
  - Parametre     (valg brukt i kjøringen)

Cellene skrives slik de ble limt inn; vi regner ikke om tall her.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional
import datetime
import logging
import os
import re
import subprocess
import sys
import tempfile

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils.dataframe import dataframe_to_rows

from errors import ExportError
from excel_formatting import polish_sheet
from models import METHOD_LABELS, SamplingResult

logger = logging.getLogger(__name__)


def _sheet(name: str) -> str:
    """Excel-kompatibelt arknavn (maks 31 tegn, uten : \\ / ? * [ ])."""
    name = re.sub(r"[:\\/\?\*\[\]]", "_", str(name)).strip() or "Ark"
    return name[:31]


def summary_frame(result: SamplingResult) -> pd.DataFrame:
    rows = [{"Nøkkel": label, "Beløp": value} for label, value in result.summary.as_rows()]
    return pd.DataFrame(rows, columns=["Nøkkel", "Beløp"])


def parameters_frame(result: SamplingResult) -> pd.DataFrame:
    meta = result.meta or {}
    rows = [
        ("Metode", METHOD_LABELS.get(result.method, result.method)),
        ("Utvalgsstørrelse", result.sample_size),
        ("Antall nøkkelposter", int(len(result.targets))),
        ("Antall i populasjon", int(len(result.population))),
        ("Antall utelatt", int(len(result.excluded))),
        ("Beløpskolonne", meta.get("amount_column")),
        ("ID-kolonne", meta.get("id_column")),
        ("Terskel nøkkelposter", meta.get("target_value")),
        ("Spesifikke ID-er", ", ".join(meta.get("target_ids") or [])),
        ("Minimumsverdi", meta.get("min_value")),
    ]
    return pd.DataFrame(rows, columns=["Parameter", "Verdi"])


def build_result_sheets(result: SamplingResult) -> Dict[str, pd.DataFrame]:
    """Bygg {arknavn -> DataFrame}. Tomme valgfrie ark utelates."""

    def _with_headers(df: pd.DataFrame) -> pd.DataFrame:
        out = df.reset_index(drop=True).copy()
        out.columns = list(result.headers)[: out.shape[1]]
        return out

    sheets: Dict[str, pd.DataFrame] = {"Oppsummering": summary_frame(result)}
    if result.has_targets:
        sheets["Nøkkelposter"] = _with_headers(result.targets)
    sheets["Utvalg"] = _with_headers(result.sample)
    sheets["Populasjon"] = _with_headers(result.population)
    if not result.excluded.empty:
        sheets["Utelatt"] = _with_headers(result.excluded)
    sheets["Parametre"] = parameters_frame(result)
    return sheets


def _write_sheet(wb: Workbook, title: str, df: pd.DataFrame, first: bool):
    if first:
        ws = wb.active
        ws.title = _sheet(title)
    else:
        ws = wb.create_sheet(title=_sheet(title))
    for row in dataframe_to_rows(df, index=False, header=True):
        ws.append(row)
    return ws


def export_results_to_excel(path: str | Path, result: SamplingResult) -> str:
    """Skriv utvalget til angitt .xlsx. Returnerer filstien.

    Raises:
        ExportError: hvis filen ikke kan skrives.
    """
    sheets = build_result_sheets(result)
    wb = Workbook()
    first = True
    for name, df in sheets.items():
        ws = _write_sheet(wb, name, df, first)
        polish_sheet(ws)
        first = False

    try:
        wb.save(str(path))
    except OSError as exc:
        logger.error("Kunne ikke skrive Excel-fil %s: %s", path, exc)
        raise ExportError(f"Kunne ikke skrive Excel-fil: {exc}") from exc

    logger.info("Utvalg eksportert til %s (%d ark)", path, len(sheets))
    return str(path)


def open_with_system(path: str | Path) -> None:
    """Åpne filen i standard program (best effort)."""
    try:
        if sys.platform.startswith("win"):
            os.startfile(str(path))  # type: ignore[attr-defined]
        else:
            # stien sendes som eget argument, uten skall
            opener = "open" if sys.platform == "darwin" else "xdg-open"
            subprocess.Popen(
                [opener, str(path)],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
    except Exception as exc:
        # Åpning er "best effort" – selve eksporten er viktigst.
        logger.warning("Kunne ikke åpne %s: %s", path, exc)


def export_results_temp(
    result: SamplingResult,
    prefix: str = "Utvalg_",
    directory: Optional[str | Path] = None,
    open_file: bool = True,
) -> str:
    """Eksporter til en midlertidig .xlsx (og åpne den). Returnerer filstien."""
    tmpdir = Path(directory) if directory is not None else Path(tempfile.gettempdir()) / "Utvalg"
    tmpdir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    path = tmpdir / f"{prefix}{stamp}.xlsx"
    out = export_results_to_excel(path, result)
    if open_file:
        open_with_system(out)
    return out

