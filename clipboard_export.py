"""clipboard_export.py

"Kopier til Excel": bygger tekst for utklippstavlen fra et ferdig utvalg.

To varianter med samme innhold:
  - tab-separert tekst (limes rett inn i Excel)
  - HTML-tabeller (for mål som forstår text/html)

Seksjoner: Oppsummering, Nøkkelposter (hvis noen) og Utvalgte poster (hvis
noen). Beløp i oppsummeringen vises som valuta ("1 234,56 kr"); cellene i
radene skrives slik de ble limt inn.

Kopiering går via Tk sin utklippstavle (bare tekst); HTML-varianten
returneres til kalleren. Feiler kopieringen, kastes ExportError, men
resultatet er uendret og kan kopieres/eksporteres på nytt.
"""

from __future__ import annotations

import html
import logging
from typing import Any, List, NamedTuple, Optional, Sequence

from errors import ExportError
from formatting import format_currency
from models import SamplingResult

logger = logging.getLogger(__name__)

SUMMARY_TITLE = "Oppsummering"
TARGETS_TITLE = "Nøkkelposter"
SAMPLE_TITLE = "Utvalgte poster"

_TH_STYLE = "background-color: #f3f4f6; padding: 5px;"
_TD_STYLE = "padding: 5px;"


class ClipboardPayload(NamedTuple):
    """Samme innhold i to varianter: text/plain og text/html."""

    text: str
    html: str


def _summary_table(result: SamplingResult) -> tuple[List[str], List[str]]:
    rows = result.summary.as_rows()
    return [label for label, _ in rows], [format_currency(value) for _, value in rows]


def _sections(result: SamplingResult) -> List[tuple[str, List[str], List[List[str]]]]:
    out = []
    if result.has_targets:
        out.append((TARGETS_TITLE, list(result.headers), result.target_rows()))
    sample_rows = result.sample_rows()
    if sample_rows:
        out.append((SAMPLE_TITLE, list(result.headers), sample_rows))
    return out


def _tsv_block(title: str, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    lines = [title, "\t".join(headers)]
    lines.extend("\t".join(str(c) for c in row) for row in rows)
    return "\n".join(lines) + "\n\n"


def _html_block(title: str, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    parts = [f"<h3>{html.escape(title)}</h3>", '<table border="1" style="border-collapse: collapse;">']
    parts.append("<thead><tr>")
    parts.extend(f'<th style="{_TH_STYLE}">{html.escape(str(h))}</th>' for h in headers)
    parts.append("</tr></thead><tbody>")
    for row in rows:
        parts.append("<tr>")
        parts.extend(f'<td style="{_TD_STYLE}">{html.escape(str(c))}</td>' for c in row)
        parts.append("</tr>")
    parts.append("</tbody></table><br/>")
    return "".join(parts)


def results_to_tsv(result: SamplingResult) -> str:
    labels, values = _summary_table(result)
    text = _tsv_block(SUMMARY_TITLE, labels, [values])
    for title, headers, rows in _sections(result):
        text += _tsv_block(title, headers, rows)
    return text


def results_to_html(result: SamplingResult) -> str:
    labels, values = _summary_table(result)
    out = _html_block(SUMMARY_TITLE, labels, [values])
    for title, headers, rows in _sections(result):
        out += _html_block(title, headers, rows)
    return out


def copy_results_to_clipboard(result: SamplingResult, root: Optional[Any] = None) -> ClipboardPayload:
    """Legg tab-separert tekst på utklippstavlen.

    Tk sin utklippstavle tar bare ren tekst, så HTML-varianten returneres
    sammen med teksten for kallere med rikere utklippstavle (text/html).

    ``root`` er et Tk-vindu (eller noe med samme clipboard-API). Uten root
    opprettes et skjult Tk-vindu for anledningen.

    Raises:
        ExportError: hvis utklippstavlen ikke er tilgjengelig.
    """
    if result is None:
        raise ExportError("Ingen resultater å kopiere.")

    text = results_to_tsv(result)
    owns_root = root is None
    try:
        if owns_root:
            import tkinter as tk

            root = tk.Tk()
            root.withdraw()
        root.clipboard_clear()
        root.clipboard_append(text)
        root.update()
    except Exception as exc:
        logger.error("Kopiering til utklippstavle feilet: %s", exc)
        raise ExportError(
            "Kunne ikke kopiere til utklippstavlen. Resultatet er beholdt og kan kopieres på nytt."
        ) from exc
    finally:
        if owns_root and root is not None:
            try:
                root.destroy()
            except Exception as exc:
                logger.debug("Kunne ikke lukke Tk-vindu: %s", exc)

    logger.info("Kopierte %d tegn til utklippstavlen", len(text))
    return ClipboardPayload(text=text, html=results_to_html(result))
