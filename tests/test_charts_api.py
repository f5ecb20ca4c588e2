import pytest

from dashboard.api.charts_api import (
    ChartsAPI,
    build_amount_histogram,
    build_two_fa_chart,
    two_fa_proportions,
)
from fraudview.exceptions import UnknownCategoryError


def test_two_fa_proportions_sum_to_one_per_oauth_group(scored_dataset):
    proportions = two_fa_proportions(scored_dataset.frame)

    totals = proportions.groupby("oauth_valid")["proportion"].sum()
    assert totals.tolist() == pytest.approx([1.0] * len(totals))
    assert proportions["count"].sum() == scored_dataset.size


def test_two_fa_proportions_values(sample_frame):
    proportions = two_fa_proportions(sample_frame).set_index(
        ["oauth_valid", "two_fa_passed"]
    )

    # Four valid OAuth rows, one of which failed 2FA
    assert proportions.loc[(True, False), "proportion"] == pytest.approx(0.25)
    assert proportions.loc[(True, True), "proportion"] == pytest.approx(0.75)
    assert proportions.loc[(False, False), "proportion"] == pytest.approx(0.5)


def test_amount_histogram_traces_are_risk_bands(scored_dataset):
    figure = build_amount_histogram(scored_dataset.frame)

    names = {trace.name for trace in figure.data}
    assert names <= {"low", "medium", "high", "critical"}
    assert sum(len(trace.x) for trace in figure.data) == scored_dataset.size


def test_two_fa_chart_has_a_trace_per_outcome(scored_dataset):
    figure = build_two_fa_chart(scored_dataset.frame)

    assert {trace.name for trace in figure.data} == {"2FA passed", "2FA failed"}


def test_empty_selection_renders_placeholders(scored_dataset):
    empty = scored_dataset.frame.iloc[0:0]

    assert len(build_amount_histogram(empty).data) == 0
    assert len(build_two_fa_chart(empty).data) == 0
    assert two_fa_proportions(empty).empty


def test_charts_api_filters_by_region(scored_dataset):
    charts = ChartsAPI(scored_dataset).get_charts("LATAM")

    expected = int((scored_dataset.frame["region"] == "LATAM").sum())
    assert charts["region"] == "LATAM"
    assert charts["transaction_count"] == expected
    assert "data" in charts["amount_histogram"]
    assert "layout" in charts["two_fa_chart"]


def test_charts_api_rejects_unknown_region(scored_dataset):
    with pytest.raises(UnknownCategoryError):
        ChartsAPI(scored_dataset).get_charts("MARS")
