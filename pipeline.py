"""pipeline.py

Hele utvalgsflyten i én ren funksjon:

    innlimt tekst -> tabell -> nøkkelposter -> minimumsfilter -> trekk -> summer

Alle inputfeil oppdages og meldes (``SamplingInputError``) før noe trekkes.
Ingen tilstand deles mellom kjøringer; hver kjøring lager nye DataFrames og
endrer aldri input.
"""

from __future__ import annotations

from typing import Optional

from errors import SamplingInputError
from logger import get_logger
from models import METHOD_MUS, METHOD_SRS, ParsedTable, SamplingResult
from paste_parser import parse_pasted_table
from population_filter import filter_by_minimum_value
from sampler_config import SamplerConfig
from sampling import RandomSource, draw_sample
from summary import summarize
from target_selection import identify_targets, validate_amount_column

# Minnebufferen (loggvisning) kobles på rot-loggeren ved import
logger = get_logger(__name__)


def run_sampler(text: str, config: SamplerConfig, rng: Optional[RandomSource] = None) -> SamplingResult:
    """Kjør parse -> klassifiser -> filtrer -> trekk -> oppsummer.

    Parametre
    ---------
    text : str
        Innlimte rader (typisk tab-separert fra Excel).
    config : SamplerConfig
        Alle valg for kjøringen.
    rng : RandomSource, optional
        Tilfeldighetskilde. None gir ``numpy.random.default_rng()``.
    """
    table = parse_pasted_table(text, has_headers=config.has_headers, delimiter=config.delimiter)
    return run_sampler_on_table(table, config, rng)


def run_sampler_on_table(
    table: ParsedTable,
    config: SamplerConfig,
    rng: Optional[RandomSource] = None,
) -> SamplingResult:
    if not config.is_complete:
        raise SamplingInputError(
            "Oppgi både beløpskolonne og utvalgsstørrelse.",
            {"amount_column": config.amount_column, "sample_size": config.sample_size},
        )

    amount_col = int(config.amount_column)  # type: ignore[arg-type]
    n = int(config.sample_size)  # type: ignore[arg-type]

    validate_amount_column(table, amount_col)

    df = table.to_frame()
    logger.info(
        "Starter utvalg: metode=%s, n=%d, %d datarader, beløpskolonne=%d",
        config.method, n, len(df), amount_col,
    )

    split = identify_targets(
        df,
        id_column=config.id_column,
        amount_column=amount_col,
        target_value=config.target_value,
        target_ids=config.target_ids,
    )
    filt = filter_by_minimum_value(split.remaining, amount_col, config.min_value)
    population = filt.population

    if population.empty:
        raise SamplingInputError(
            "Ingen poster igjen etter nøkkelposter og minimumsfilter.",
            {"targets": split.target_count, "excluded": filt.excluded_count},
        )

    if config.method == METHOD_SRS and n > len(population):
        raise SamplingInputError(
            f"Utvalgsstørrelsen ({n}) kan ikke være større enn filtrert populasjon ({len(population)}).",
            {"requested": n, "available": int(len(population))},
        )

    sample = draw_sample(config.method, population, amount_col, n, rng)
    summary = summarize(population, split.targets, filt.excluded, sample, amount_col)

    result = SamplingResult(
        headers=table.column_labels(df.shape[1]),
        targets=split.targets,
        population=population,
        excluded=filt.excluded,
        sample=sample,
        summary=summary,
        method=config.method,
        sample_size=n,
        filter_result=filt,
        meta={
            "amount_column": amount_col,
            "id_column": config.id_column,
            "target_value": config.target_value,
            "target_ids": sorted(config.target_id_set),
            "min_value": filt.min_value,
            "rows_total": int(len(df)),
        },
    )
    logger.info(
        "Utvalg ferdig: %d nøkkelposter, %d i populasjon, %d utelatt, %d trukket%s",
        split.target_count, len(population), filt.excluded_count, len(sample),
        " (MUS)" if config.method == METHOD_MUS else "",
    )
    return result
