"""
Tabular views of an aggregate, for the detail table shown next to the map
"""

from __future__ import annotations

import pandas as pd

from vaxmap.age_bands import sort_bands
from vaxmap.aggregation import NoData, WeeklyAggregate
from vaxmap.exceptions import UnrecognisedValueError
from vaxmap.map_mode import OVERALL_PERCENT, current_value

REGION_COLUMNS: tuple[str, ...] = (
    "name",
    "population",
    "first_doses",
    "second_doses",
    "first_doses_this_week",
    "second_doses_this_week",
    "change_in_doses",
    "overall_percent_first_doses",
)
"""
Columns of [regions_to_frame][(m).]'s output
"""


def regions_to_frame(aggregate: WeeklyAggregate | NoData) -> pd.DataFrame:
    """
    Get one row per region with the region's headline figures

    Parameters
    ----------
    aggregate
        Aggregate to tabulate

    Returns
    -------
    :
        Table indexed by region ID, sorted by region name.
        Empty (but with the expected columns) for
        [NO_DATA][vaxmap.aggregation.NO_DATA].
    """
    index_name = "region_id"
    if not isinstance(aggregate, WeeklyAggregate):
        return pd.DataFrame(
            columns=list(REGION_COLUMNS), index=pd.Index([], name=index_name)
        )

    rows = {
        region_id: (
            region.name,
            region.total_population,
            region.total_first_doses,
            region.total_second_doses,
            region.first_doses_this_week,
            region.second_doses_this_week,
            region.change_in_doses,
            current_value(region, OVERALL_PERCENT),
        )
        for region_id, region in aggregate.regions.items()
    }
    res = pd.DataFrame.from_dict(rows, orient="index", columns=list(REGION_COLUMNS))
    res.index.name = index_name

    return res.sort_values("name", kind="stable")


def percent_by_age_frame(
    aggregate: WeeklyAggregate | NoData, dose: str = "first"
) -> pd.DataFrame:
    """
    Get one row per region and one column per age band

    Parameters
    ----------
    aggregate
        Aggregate to tabulate

    dose
        Dose to tabulate, `"first"` or `"second"`

    Returns
    -------
    :
        Doses as a percentage of population,
        indexed by region ID with age bands ordered youngest first.
        Bands a region did not report are NaN.

    Raises
    ------
    UnrecognisedValueError
        `dose` is not `"first"` or `"second"`
    """
    known_doses = ("first", "second")
    if dose not in known_doses:
        raise UnrecognisedValueError(
            unrecognised_value=dose, name="dose", known_values=known_doses
        )

    if not isinstance(aggregate, WeeklyAggregate):
        return pd.DataFrame(index=pd.Index([], name="region_id"), dtype=float)

    attribute = f"percent_{dose}_doses"
    res = pd.DataFrame.from_dict(
        {
            region_id: getattr(region, attribute)
            for region_id, region in aggregate.regions.items()
        },
        orient="index",
        dtype=float,
    )
    res = res.reindex(columns=sort_bands(res.columns)).sort_index()
    res.index.name = "region_id"
    res.columns.name = "age_band"

    return res
