import pytest

from models import ParsedTable, SampleSummary
from summary import summarize, total_amount


def _frame(amounts):
    rows = tuple((f"R{i}", a) for i, a in enumerate(amounts))
    return ParsedTable(headers=("ID", "Beløp"), rows=rows).to_frame()


def test_summarize_totals_and_reconciliation() -> None:
    targets = _frame(["60 000", "-55 000,50"])
    population = _frame(["7 000", "8 000", "-9 000", "10 000"])
    sample = population.iloc[[0, 2]]
    excluded = _frame(["100", "abc", "4 999"])

    s = summarize(population, targets, excluded, sample, amount_column=2)

    assert s.target_total == pytest.approx(115000.5)
    assert s.population_total == pytest.approx(34000.0)
    assert s.sample_total == pytest.approx(16000.0)
    assert s.excluded_total == pytest.approx(5099.0)
    assert s.population_without_excluded == s.target_total + s.population_total
    assert s.grand_total == s.target_total + s.population_total + s.excluded_total
    assert s.reconciles() is True


def test_summarize_empty_partitions() -> None:
    population = _frame(["1,5", "2,25"])
    s = summarize(population, None, population.iloc[0:0], population.iloc[0:0], amount_column=2)

    assert s.target_total == 0.0
    assert s.excluded_total == 0.0
    assert s.sample_total == 0.0
    assert s.population_total == pytest.approx(3.75)
    assert s.grand_total == s.population_total
    assert s.reconciles()


def test_summary_as_rows_six_fields_fixed_order() -> None:
    s = SampleSummary(1.0, 2.0, 0.5, 3.0, 3.0, 6.0)
    labels = [label for label, _ in s.as_rows()]
    assert labels == [
        "Sum nøkkelposter",
        "Utvalgspopulasjon",
        "Sum utvalgte poster",
        "Sum utelatte poster",
        "Populasjon (ekskl. utelatte)",
        "Total populasjon",
    ]
    assert [v for _, v in s.as_rows()] == [1.0, 2.0, 0.5, 3.0, 3.0, 6.0]


def test_reconciles_detects_mismatch() -> None:
    assert SampleSummary(1.0, 2.0, 0.0, 3.0, 3.0, 7.0).reconciles() is False


def test_total_amount_none_and_empty() -> None:
    assert total_amount(None, 2) == 0.0
    assert total_amount(_frame([]), 2) == 0.0
