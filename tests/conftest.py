"""Pytest configuration for this repo.

Modulene ligger flatt i prosjektroten, så vi sørger for at roten er
importerbar uansett hvilken cwd/rootdir testene kjøres fra.

Felles hjelpere:
  * ``ScriptedRandom`` – tilfeldighetskilde med forhåndsbestemte verdier,
    slik at testene kan låse nøyaktig hvilke rader som trekkes.
  * ``make_paste`` – bygger tab-separert tekst slik den limes inn fra Excel.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import pytest

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))


class ScriptedRandom:
    """Gir verdiene i rekkefølge; siste verdi gjentas når listen er brukt opp."""

    def __init__(self, randoms: Sequence[float] = (0.0,), integers: Optional[Sequence[int]] = None):
        self._randoms: List[float] = list(randoms)
        self._integers: Optional[List[int]] = list(integers) if integers is not None else None
        self.random_calls = 0
        self.integer_calls: List[tuple] = []

    def random(self) -> float:
        i = min(self.random_calls, len(self._randoms) - 1)
        self.random_calls += 1
        return self._randoms[i]

    def integers(self, low: int, high: int) -> int:
        self.integer_calls.append((low, high))
        if self._integers is None:
            return high - 1
        i = min(len(self.integer_calls) - 1, len(self._integers) - 1)
        return max(low, min(high - 1, self._integers[i]))


def make_paste(rows: Iterable[Sequence[object]], header: Optional[Sequence[str]] = ("ID", "Beløp")) -> str:
    lines = []
    if header is not None:
        lines.append("\t".join(header))
    lines.extend("\t".join(str(c) for c in r) for r in rows)
    return "\n".join(lines)


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def sample_result():
    """Et lite ferdig utvalg: én nøkkelpost, én utelatt, to trukket med MUS."""
    from pipeline import run_sampler
    from sampler_config import SamplerConfig

    rows = [
        ("A-1", "50 000"),
        ("A-2", "100"),
        ("A-3", "2 000"),
        ("A-4", "3 000"),
        ("A-5", "<b>5 000</b>"),
    ]
    cfg = SamplerConfig(amount_column=2, sample_size=2, target_value=10000, min_value=500, method="mus")
    # kumulativt i populasjonen: 2000, 5000, 10000 -> punkt 0 og 9000
    return run_sampler(make_paste(rows), cfg, rng=ScriptedRandom([0.0, 0.9]))
