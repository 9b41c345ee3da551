from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from formatting import exclusion_message

METHOD_SRS = "srs"   # tilfeldig utvalg (simple random sampling)
METHOD_MUS = "mus"   # beløpsvektet utvalg (monetary unit sampling)
METHODS = (METHOD_SRS, METHOD_MUS)

METHOD_LABELS = {
    METHOD_SRS: "Tilfeldig utvalg",
    METHOD_MUS: "Beløpsvektet utvalg (MUS)",
}


def default_column_label(position: int) -> str:
    """Kolonnenavn når data mangler header (1-basert)."""
    return f"Kolonne {position}"


@dataclass(frozen=True)
class ParsedTable:
    """Innlimt tabell: valgfri header + datarader (celler som tekst)."""

    headers: Optional[Tuple[str, ...]]
    rows: Tuple[Tuple[str, ...], ...]

    @property
    def width(self) -> int:
        widest = max((len(r) for r in self.rows), default=0)
        return max(widest, len(self.headers or ()))

    def column_labels(self, width: Optional[int] = None) -> List[str]:
        n = self.width if width is None else int(width)
        labels = list(self.headers or ())[:n]
        for pos in range(len(labels) + 1, n + 1):
            labels.append(default_column_label(pos))
        return labels

    def to_frame(self) -> pd.DataFrame:
        """Rektangulær DataFrame, indeks = radens posisjon i input (0-basert)."""
        n = self.width
        data = [list(r) + [""] * (n - len(r)) for r in self.rows]
        df = pd.DataFrame(data, columns=self.column_labels(n), dtype=object)
        df.index = pd.RangeIndex(len(data), name="rad")
        return df


@dataclass
class TargetSplit:
    """Resultat av nøkkelpost-klassifisering (100 % testes vs. resten)."""

    targets: pd.DataFrame
    remaining: pd.DataFrame

    @property
    def target_count(self) -> int:
        return int(len(self.targets))


@dataclass
class FilterResult:
    """Resultat av minimumsfilter på restpopulasjonen."""

    population: pd.DataFrame
    excluded: pd.DataFrame
    excluded_count: int
    original_count: int
    min_value: float = 0.0

    @property
    def filter_applied(self) -> bool:
        return self.min_value > 0


@dataclass(frozen=True)
class SampleSummary:
    """Summer (absoluttbeløp) som skal avstemmes mot hverandre."""

    target_total: float
    population_total: float
    sample_total: float
    excluded_total: float
    population_without_excluded: float
    grand_total: float

    def reconciles(self) -> bool:
        return (
            self.grand_total == self.target_total + self.population_total + self.excluded_total
            and self.population_without_excluded == self.target_total + self.population_total
        )

    def as_rows(self) -> List[Tuple[str, float]]:
        return [
            ("Sum nøkkelposter", self.target_total),
            ("Utvalgspopulasjon", self.population_total),
            ("Sum utvalgte poster", self.sample_total),
            ("Sum utelatte poster", self.excluded_total),
            ("Populasjon (ekskl. utelatte)", self.population_without_excluded),
            ("Total populasjon", self.grand_total),
        ]


@dataclass
class SamplingResult:
    """Alt en eksport trenger fra én kjøring. Tallene skal ikke beregnes på nytt."""

    headers: List[str]
    targets: pd.DataFrame
    population: pd.DataFrame
    excluded: pd.DataFrame
    sample: pd.DataFrame
    summary: SampleSummary
    method: str
    sample_size: int
    filter_result: Optional[FilterResult] = None
    meta: dict = field(default_factory=dict)

    @property
    def has_targets(self) -> bool:
        return not self.targets.empty

    @property
    def exclusion_message(self) -> str:
        if self.filter_result is None:
            return ""
        return exclusion_message(self.filter_result)

    def sample_rows(self) -> List[List[str]]:
        return _rows(self.sample)

    def target_rows(self) -> List[List[str]]:
        return _rows(self.targets)


def _rows(df: pd.DataFrame) -> List[List[str]]:
    return [[str(v) for v in row] for row in df.itertuples(index=False, name=None)]


def rows_as_tuples(rows: Sequence[Sequence[object]]) -> Tuple[Tuple[str, ...], ...]:
    return tuple(tuple(str(c) for c in r) for r in rows)
