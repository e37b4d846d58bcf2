"""
Tests of `vaxmap.map_mode`
"""

import math
import re

import pytest

from vaxmap.aggregation import NO_DATA, aggregate
from vaxmap.exceptions import UnrecognisedValueError
from vaxmap.map_mode import (
    CHANGE_IN_DOSES,
    DOSES_ALL_TIME,
    DOSES_LAST_WEEK,
    OVERALL_PERCENT,
    ByAge,
    current_value,
    lower_bound,
    map_mode_label,
    normalized_opacity,
    parse_map_mode,
    upper_bound,
)
from vaxmap.testing import make_region, make_series

ALL_MODES = pytest.mark.parametrize(
    "mode",
    (
        pytest.param(DOSES_ALL_TIME, id="doses-all-time"),
        pytest.param(DOSES_LAST_WEEK, id="doses-last-week"),
        pytest.param(OVERALL_PERCENT, id="overall-percent"),
        pytest.param(CHANGE_IN_DOSES, id="change-in-doses"),
        pytest.param(ByAge("80+"), id="by-age"),
    ),
)


@pytest.fixture
def weekly(three_week_series):
    return aggregate(three_week_series)


@pytest.mark.parametrize(
    "mode, exp",
    (
        pytest.param(DOSES_ALL_TIME, 1300.0, id="doses-all-time"),
        pytest.param(DOSES_LAST_WEEK, 300.0, id="doses-last-week"),
        pytest.param(OVERALL_PERCENT, 60.0, id="overall-percent"),
        pytest.param(CHANGE_IN_DOSES, 5.0, id="change-in-doses"),
        pytest.param(ByAge("80+"), 90.0, id="by-age"),
        pytest.param(ByAge("60-64"), 30.0, id="by-age-other-band"),
        pytest.param(ByAge("16-59"), 0.0, id="by-age-unreported-band"),
    ),
)
def test_current_value(weekly, mode, exp):
    assert current_value(weekly.regions["A"], mode) == pytest.approx(exp)


def test_current_value_overall_percent_capped():
    region = aggregate(
        make_series(
            (
                "2021-03-01",
                {"A": make_region("A", population={"80+": 10}, first_dose={"80+": 20})},
            )
        )
    ).regions["A"]

    assert current_value(region, OVERALL_PERCENT) == 100.0


def test_current_value_overall_percent_nothing_reported():
    region = aggregate(make_series(("2021-03-01", {"A": make_region("A")}))).regions[
        "A"
    ]

    assert current_value(region, OVERALL_PERCENT) == 0.0


@pytest.mark.parametrize(
    "mode, exp_lower, exp_upper",
    (
        pytest.param(DOSES_ALL_TIME, 850.0, 1300.0, id="doses-all-time"),
        pytest.param(DOSES_LAST_WEEK, 250.0, 300.0, id="doses-last-week"),
        pytest.param(CHANGE_IN_DOSES, 5.0, 350 / 600 * 100, id="change-in-doses"),
        pytest.param(OVERALL_PERCENT, 0.0, 100.0, id="overall-percent"),
        pytest.param(ByAge("80+"), 0.0, 100.0, id="by-age"),
    ),
)
def test_bounds(weekly, mode, exp_lower, exp_upper):
    assert lower_bound(weekly, mode) == pytest.approx(exp_lower)
    assert upper_bound(weekly, mode) == pytest.approx(exp_upper)


@pytest.mark.parametrize(
    "region_id, mode, exp",
    (
        pytest.param("A", DOSES_ALL_TIME, 1.0, id="largest"),
        pytest.param("B", DOSES_ALL_TIME, 0.0, id="smallest"),
        pytest.param("A", OVERALL_PERCENT, 0.6, id="percent"),
        pytest.param("B", ByAge("70-74"), 0.5, id="by-age"),
        # Absolute value of the change is used
        pytest.param("B", CHANGE_IN_DOSES, 1.0, id="negative-change"),
        pytest.param("A", CHANGE_IN_DOSES, 0.0, id="positive-change"),
    ),
)
def test_normalized_opacity(weekly, region_id, mode, exp):
    res = normalized_opacity(weekly.regions[region_id], weekly, mode)

    assert res == pytest.approx(exp)


@ALL_MODES
def test_normalized_opacity_in_unit_interval(weekly, mode):
    for region in weekly.regions.values():
        res = normalized_opacity(region, weekly, mode)
        assert 0.0 <= res <= 1.0


@pytest.mark.parametrize(
    "mode",
    (
        pytest.param(DOSES_ALL_TIME, id="doses-all-time"),
        pytest.param(DOSES_LAST_WEEK, id="doses-last-week"),
        pytest.param(CHANGE_IN_DOSES, id="change-in-doses"),
    ),
)
def test_normalized_opacity_degenerate_range(mode):
    series = make_series(
        (
            "2021-03-01",
            {"A": make_region("A", population={"80+": 10}, first_dose={"80+": 5})},
        )
    )
    weekly = aggregate(series)

    assert lower_bound(weekly, mode) == upper_bound(weekly, mode)

    res = normalized_opacity(weekly.regions["A"], weekly, mode)

    assert res == 0.0
    assert not math.isnan(res)


@ALL_MODES
def test_no_data_is_neutral(weekly, mode):
    region = weekly.regions["A"]

    assert normalized_opacity(region, NO_DATA, mode) == 0.0
    assert normalized_opacity(None, weekly, mode) == 0.0
    assert current_value(None, mode) == 0.0
    if mode in (OVERALL_PERCENT, ByAge("80+")):
        assert (lower_bound(NO_DATA, mode), upper_bound(NO_DATA, mode)) == (0.0, 100.0)
    else:
        assert (lower_bound(NO_DATA, mode), upper_bound(NO_DATA, mode)) == (0.0, 0.0)


@pytest.mark.parametrize(
    "key, exp",
    (
        pytest.param("dosesAllTime", DOSES_ALL_TIME, id="doses-all-time"),
        pytest.param("dosesLastWeek", DOSES_LAST_WEEK, id="doses-last-week"),
        pytest.param("overallPercent", OVERALL_PERCENT, id="overall-percent"),
        pytest.param("changeInDoses", CHANGE_IN_DOSES, id="change-in-doses"),
        pytest.param("80+", ByAge("80+"), id="by-age"),
        pytest.param(
            "a band we have never seen",
            ByAge("a band we have never seen"),
            id="by-age-new-band",
        ),
    ),
)
def test_parse_map_mode(key, exp):
    assert parse_map_mode(key) == exp


def test_parse_map_mode_empty():
    with pytest.raises(
        UnrecognisedValueError, match=re.escape("key='' is not recognised")
    ):
        parse_map_mode("")


@ALL_MODES
def test_map_mode_label(mode):
    assert map_mode_label(mode)


def test_map_mode_label_by_age():
    assert map_mode_label(ByAge("75-79")) == (
        "Percentage of 75-79 year olds with a first dose"
    )


@pytest.mark.parametrize(
    "mode",
    (
        pytest.param(DOSES_ALL_TIME, id="doses-all-time"),
        pytest.param(DOSES_LAST_WEEK, id="doses-last-week"),
        pytest.param(CHANGE_IN_DOSES, id="change-in-doses"),
    ),
)
def test_normalized_opacity_all_regions_identical(mode):
    statistics = {
        region_id: make_region(
            region_id,
            population={"80+": 100},
            first_dose={"80+": 40},
            second_dose={"80+": 10},
        )
        for region_id in ("A", "B", "C")
    }
    prior_statistics = {
        region_id: make_region(
            region_id, population={"80+": 100}, first_dose={"80+": 20}
        )
        for region_id in ("A", "B", "C")
    }
    weekly = aggregate(
        make_series(("2021-03-08", statistics), ("2021-03-01", prior_statistics))
    )

    assert lower_bound(weekly, mode) == upper_bound(weekly, mode)
    for region in weekly.regions.values():
        res = normalized_opacity(region, weekly, mode)

        assert res == 0.0
        assert not math.isnan(res)


def test_by_age_band_without_population_is_full_colour():
    weekly = aggregate(
        make_series(
            (
                "2021-03-01",
                {
                    "A": make_region(
                        "A",
                        population={"80+": 100},
                        first_dose={"80+": 10, "75-79": 5},
                    )
                },
            )
        )
    )

    assert normalized_opacity(weekly.regions["A"], weekly, ByAge("75-79")) == 1.0
    assert normalized_opacity(weekly.regions["A"], weekly, ByAge("80+")) == 0.1
