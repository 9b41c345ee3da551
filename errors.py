"""errors.py

Feiltyper for utvalgsmotoren.

- ``SamplingInputError``: feil brukeren kan rette selv (tom input, feil
  kolonne, for stort utvalg ...). Stopper kjøringen før noe trekkes.
- ``ExportError``: kopiering/eksport feilet. Selve resultatet er fortsatt
  gyldig og kan eksporteres på nytt.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SamplingInputError(ValueError):
    """Brukerfeil i input. ``context`` har detaljer (kolonne, radlengde, antall)."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})


class ExportError(RuntimeError):
    """Kopiering til utklippstavle / eksport feilet."""
