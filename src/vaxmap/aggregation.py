"""
Aggregation of the newest snapshot into per-region metrics and global ranges

The ranges are what the map uses to scale each region's value
onto its colour scale.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

import attr
import pandas as pd
from attrs import define, evolve, field
from loguru import logger

from vaxmap.constants import N_WEEKS_CONSULTED
from vaxmap.region import RegionMetrics, transform_region
from vaxmap.snapshots import WeeklySnapshot


@define(frozen=True)
class MinMax:
    """
    Range of a metric over all regions
    """

    min: float = math.inf
    """
    Smallest value seen (`inf` if nothing has been seen)
    """

    max: float = 0.0
    """
    Largest value seen
    """

    def include(self, value: float) -> MinMax:
        """
        Get the range widened to include `value`

        Parameters
        ----------
        value
            Value to include

        Returns
        -------
        :
            New range
        """
        return evolve(self, min=min(self.min, value), max=max(self.max, value))

    @property
    def is_empty(self) -> bool:
        """
        Whether no value has been included yet
        """
        return math.isinf(self.min)


class NoData:
    """
    Result of aggregating a series with no snapshots

    Use the [NO_DATA][(m).] instance rather than creating new ones.
    """

    def __repr__(self) -> str:
        return "NO_DATA"

    def __bool__(self) -> bool:
        return False


NO_DATA = NoData()
"""
Sentinel returned in place of a [WeeklyAggregate][(m).] when there is no data
"""


@define(frozen=True)
class WeeklyAggregate:
    """
    Metrics for every region in the newest snapshot, plus their ranges
    """

    last_updated: pd.Timestamp
    """
    Date of the newest snapshot
    """

    first_doses: MinMax
    """
    Range of total first doses
    """

    second_doses: MinMax
    """
    Range of total second doses
    """

    overall_doses: MinMax
    """
    Range of total first plus second doses
    """

    doses_last_week: MinMax
    """
    Range of first plus second doses given since the previous snapshot
    """

    change_in_doses: MinMax
    """
    Range of the absolute change in doses
    """

    regions: dict[str, RegionMetrics]
    """
    Metrics for each region, keyed by region ID
    """


@define
class WeeklyAggregator:
    """
    Aggregator of a series of weekly snapshots

    Only the newest few snapshots are used,
    see [n_weeks][(c).].
    """

    cap_percentages: bool = True
    """
    If `True`, cap percentages of population at 100

    Dose counts sometimes exceed the reported population.
    With capping, the denominator is the larger of the two
    (see [vaxmap.age_bands.capped_percent][]).
    Set to `False` to report the raw ratios.
    """

    n_weeks: int = field(default=N_WEEKS_CONSULTED)
    """
    Number of snapshots, newest first, to consult

    Three are needed to compute the change in doses.
    Fewer means earlier weeks are treated as zero.
    """

    @n_weeks.validator
    def validate_n_weeks(self, attribute: attr.Attribute[Any], value: int) -> None:
        """
        Validate the number of weeks

        Raises
        ------
        ValueError
            `value` is less than one
        """
        if value < 1:
            msg = f"{attribute.name} must be at least 1, received {value}"
            raise ValueError(msg)

    def __call__(self, series: Sequence[WeeklySnapshot]) -> WeeklyAggregate | NoData:
        """
        Aggregate

        Parameters
        ----------
        series
            Snapshots, newest first

        Returns
        -------
        :
            Aggregate of the newest snapshot,
            or [NO_DATA][(m).] if `series` is empty
        """
        if not series:
            logger.debug("No snapshots to aggregate")
            return NO_DATA

        weeks = list(series[: self.n_weeks])
        # Missing earlier weeks become empty baselines
        weeks.extend(None for _ in range(N_WEEKS_CONSULTED - len(weeks)))
        newest, prior, two_prior = weeks[:N_WEEKS_CONSULTED]

        first_doses = MinMax()
        second_doses = MinMax()
        overall_doses = MinMax()
        doses_last_week = MinMax()
        change_in_doses = MinMax()
        regions: dict[str, RegionMetrics] = {}
        for region_id, current in newest.statistics.items():
            prior_region = None if prior is None else prior.statistics.get(region_id)
            two_prior_region = (
                None if two_prior is None else two_prior.statistics.get(region_id)
            )
            if prior is not None and prior_region is None:
                logger.debug(
                    "Region {} not in snapshot of {}, using zero baseline",
                    region_id,
                    prior.date,
                )

            region = transform_region(
                current,
                prior=prior_region,
                two_prior=two_prior_region,
                cap_percentages=self.cap_percentages,
            )

            first_doses = first_doses.include(region.total_first_doses)
            second_doses = second_doses.include(region.total_second_doses)
            overall_doses = overall_doses.include(region.total_doses)
            doses_last_week = doses_last_week.include(region.doses_this_week)
            change_in_doses = change_in_doses.include(abs(region.change_in_doses))
            regions[region_id] = region

        logger.debug(
            "Aggregated {} regions from {} snapshot(s), newest {}",
            len(regions),
            len(series[: self.n_weeks]),
            newest.date,
        )

        return WeeklyAggregate(
            last_updated=newest.date,
            first_doses=first_doses,
            second_doses=second_doses,
            overall_doses=overall_doses,
            doses_last_week=doses_last_week,
            change_in_doses=change_in_doses,
            regions=regions,
        )


def aggregate(series: Sequence[WeeklySnapshot]) -> WeeklyAggregate | NoData:
    """
    Aggregate a series of snapshots with the default settings

    Parameters
    ----------
    series
        Snapshots, newest first

    Returns
    -------
    :
        Aggregate of the newest snapshot,
        or [NO_DATA][(m).] if `series` is empty
    """
    return WeeklyAggregator()(series)
