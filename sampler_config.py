"""sampler_config.py

Parametre for én utvalgskjøring, samlet i ett uforanderlig objekt.

Skjemafeltene (tekst) tolkes én gang i ``SamplerConfig.from_form`` og
sendes deretter inn i ``pipeline.run_sampler``. Selve algoritmene leser
aldri skjema-/UI-tilstand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, FrozenSet, Optional

from errors import SamplingInputError
from models import METHOD_SRS, METHODS
from number_parsing import clean_number, looks_numeric
from paste_parser import DEFAULT_DELIMITER
from target_selection import parse_target_ids


def _form_int(value: Any) -> Optional[int]:
    """'12' -> 12, '' / 'abc' -> None. '0' -> 0."""
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if not looks_numeric(value):
        return None
    return int(clean_number(value))


def _form_float(value: Any) -> Optional[float]:
    """'5 000' -> 5000.0, '' -> None."""
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if not str(value).strip():
        return None
    return clean_number(value)


@dataclass(frozen=True)
class SamplerConfig:
    amount_column: Optional[int] = None      # 1-basert
    sample_size: Optional[int] = None
    id_column: int = 1                        # 1-basert
    has_headers: bool = True
    min_value: Optional[float] = None         # <= 0 / None: ingen minimumsfilter
    target_value: Optional[float] = None      # <= 0 / None: ingen terskel for nøkkelposter
    target_ids: str = ""                      # kommaseparert
    method: str = METHOD_SRS
    delimiter: str = DEFAULT_DELIMITER

    def __post_init__(self) -> None:
        method = (self.method or "").strip().lower()
        if method not in METHODS:
            raise SamplingInputError(
                f"Ukjent utvalgsmetode: {self.method!r}. Gyldige: {', '.join(METHODS)}.",
                {"method": self.method},
            )
        object.__setattr__(self, "method", method)

        if int(self.id_column) < 1:
            raise SamplingInputError(
                "ID-kolonnen må være 1 eller høyere.", {"column": self.id_column}
            )
        if self.sample_size is not None and int(self.sample_size) < 0:
            raise SamplingInputError(
                f"Utvalgsstørrelsen kan ikke være negativ ({self.sample_size}).",
                {"requested": self.sample_size},
            )
        if not self.delimiter:
            raise SamplingInputError("Skilletegn kan ikke være tomt.")

    @property
    def target_id_set(self) -> FrozenSet[str]:
        return parse_target_ids(self.target_ids)

    @property
    def is_complete(self) -> bool:
        """Beløpskolonne og utvalgsstørrelse er fylt ut."""
        return self.amount_column is not None and self.sample_size is not None

    @classmethod
    def from_form(
        cls,
        *,
        amount_column: Any = "",
        sample_size: Any = "",
        id_column: Any = "1",
        has_headers: bool = True,
        min_value: Any = "",
        target_value: Any = "",
        target_ids: Any = "",
        method: str = METHOD_SRS,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> "SamplerConfig":
        """Bygg konfigurasjon fra rå skjemaverdier.

        Tomme/ugyldige felt for beløpskolonne og utvalgsstørrelse blir None
        (meldes som manglende ved kjøring). Tom ID-kolonne gir 1.
        """
        id_col = _form_int(id_column)
        amount_col = _form_int(amount_column)
        return cls(
            amount_column=amount_col if amount_col else None,
            sample_size=_form_int(sample_size),
            id_column=id_col if id_col else 1,
            has_headers=bool(has_headers),
            min_value=_form_float(min_value),
            target_value=_form_float(target_value),
            target_ids="" if target_ids is None else str(target_ids),
            method=method,
            delimiter=delimiter,
        )
