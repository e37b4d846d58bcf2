"""
Weekly snapshots of regional vaccination statistics

The published document is a list of snapshots, newest first:

```python
[
    {
        "date": "2021-03-01",
        "statistics": {
            "E40000003": {
                "name": "London",
                "population": {"16-59": 5200000, "80+": 250000},
                "firstDose": {"16-59": 600000, "80+": 230000},
                "secondDose": {"16-59": 20000, "80+": 9000},
            },
        },
    },
    ...
]
```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import pandas as pd
from attrs import define, field

from vaxmap.exceptions import SeriesOrderError
from vaxmap.typing import AgeBand, AgeBucketed


def _to_bucket(value: AgeBucketed | None) -> dict[AgeBand, float]:
    if value is None:
        return {}

    return {band: float(count) for band, count in value.items()}


@define(frozen=True)
class RawRegionSnapshot:
    """
    One region's statistics as of one week, as reported
    """

    name: str
    """
    Human-readable name of the region
    """

    population: dict[AgeBand, float] = field(factory=dict, converter=_to_bucket)
    """
    Population by age band
    """

    first_dose: dict[AgeBand, float] = field(factory=dict, converter=_to_bucket)
    """
    Cumulative first doses by age band
    """

    second_dose: dict[AgeBand, float] = field(factory=dict, converter=_to_bucket)
    """
    Cumulative second doses by age band
    """

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> RawRegionSnapshot:
        """
        Initialise from the published (camelCase) representation

        Parameters
        ----------
        document
            Region entry of a snapshot's `statistics`

        Returns
        -------
        :
            Initialised region snapshot
        """
        return cls(
            name=document["name"],
            population=document.get("population"),
            first_dose=document.get("firstDose"),
            second_dose=document.get("secondDose"),
        )


@define(frozen=True)
class WeeklySnapshot:
    """
    Statistics for every region as of one week
    """

    date: pd.Timestamp = field(converter=pd.Timestamp)
    """
    Date of the snapshot
    """

    statistics: dict[str, RawRegionSnapshot] = field(factory=dict, converter=dict)
    """
    Statistics for each region, keyed by region ID
    """

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> WeeklySnapshot:
        """
        Initialise from the published representation

        Parameters
        ----------
        document
            One element of the published list of snapshots

        Returns
        -------
        :
            Initialised snapshot
        """
        return cls(
            date=document["date"],
            statistics={
                region_id: RawRegionSnapshot.from_document(region)
                for region_id, region in document["statistics"].items()
            },
        )


def assert_series_is_descending(series: Sequence[WeeklySnapshot]) -> None:
    """
    Assert that snapshots are ordered newest first, with no repeated dates

    Parameters
    ----------
    series
        Snapshots to check

    Raises
    ------
    SeriesOrderError
        The snapshots' dates are not strictly descending
    """
    dates = [snapshot.date for snapshot in series]
    if any(newer <= older for newer, older in zip(dates, dates[1:])):
        raise SeriesOrderError(dates=[str(d.date()) for d in dates])


def parse_snapshot_series(
    document: Iterable[Mapping[str, Any]], run_checks: bool = True
) -> tuple[WeeklySnapshot, ...]:
    """
    Parse the published document into snapshots

    The document is assumed to have the right shape already,
    validating that is the job of whatever fetched it.

    Parameters
    ----------
    document
        Published list of snapshots, newest first

    run_checks
        If `True`, check that the snapshots are ordered newest first

    Returns
    -------
    :
        Parsed snapshots, in the same order as `document`

    Raises
    ------
    SeriesOrderError
        `run_checks` is `True` and the snapshots are not ordered newest first
    """
    series = tuple(WeeklySnapshot.from_document(d) for d in document)
    if run_checks:
        assert_series_is_descending(series)

    return series
