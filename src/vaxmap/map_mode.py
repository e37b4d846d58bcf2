"""
Extraction of the value to plot on the map for a given display mode

The selected mode and hovered region belong to whatever renders the map.
They are passed in on every call, nothing here holds state.
"""

from __future__ import annotations

import math
from typing import Union

from attrs import define
from loguru import logger
from typing_extensions import TypeAlias

from vaxmap.aggregation import NoData, WeeklyAggregate
from vaxmap.constants import PERCENT_BOUNDS
from vaxmap.exceptions import UnrecognisedValueError
from vaxmap.region import RegionMetrics
from vaxmap.typing import AgeBand


@define(frozen=True)
class DosesAllTime:
    """
    Total first and second doses
    """


@define(frozen=True)
class DosesLastWeek:
    """
    First and second doses given since the previous snapshot
    """


@define(frozen=True)
class OverallPercent:
    """
    First doses as a percentage of population, over all age bands
    """


@define(frozen=True)
class ChangeInDoses:
    """
    Change in the weekly number of doses
    """


@define(frozen=True)
class ByAge:
    """
    First doses as a percentage of population, for one age band
    """

    band: AgeBand
    """
    Age band to show
    """


MapMode: TypeAlias = Union[
    DosesAllTime, DosesLastWeek, OverallPercent, ChangeInDoses, ByAge
]
"""
What the map is currently showing
"""

DOSES_ALL_TIME = DosesAllTime()
DOSES_LAST_WEEK = DosesLastWeek()
OVERALL_PERCENT = OverallPercent()
CHANGE_IN_DOSES = ChangeInDoses()

MAP_MODE_KEYS: dict[str, MapMode] = {
    "dosesAllTime": DOSES_ALL_TIME,
    "dosesLastWeek": DOSES_LAST_WEEK,
    "overallPercent": OVERALL_PERCENT,
    "changeInDoses": CHANGE_IN_DOSES,
}
"""
Keys used by the mode selector for the modes which aren't age bands
"""


def parse_map_mode(key: str) -> MapMode:
    """
    Get the mode for a value of the mode selector

    Parameters
    ----------
    key
        Selector value.
        Either one of the keys of [MAP_MODE_KEYS][(m).]
        or an age band (e.g. `"80+"`).

    Returns
    -------
    :
        Map mode

    Raises
    ------
    UnrecognisedValueError
        `key` is empty

    Examples
    --------
    >>> parse_map_mode("dosesLastWeek")
    DosesLastWeek()
    >>> parse_map_mode("80+")
    ByAge(band='80+')
    """
    if key in MAP_MODE_KEYS:
        return MAP_MODE_KEYS[key]

    if not key.strip():
        raise UnrecognisedValueError(
            unrecognised_value=key,
            name="key",
            known_values=[*MAP_MODE_KEYS, "<age band>"],
        )

    return ByAge(band=key)


def map_mode_label(mode: MapMode) -> str:
    """
    Get the legend text for a mode

    Parameters
    ----------
    mode
        Map mode

    Returns
    -------
    :
        Human-readable description of what is being shown
    """
    if isinstance(mode, DosesAllTime):
        return "Total doses given"

    if isinstance(mode, DosesLastWeek):
        return "Doses given in the last week"

    if isinstance(mode, OverallPercent):
        return "Percentage of population with a first dose"

    if isinstance(mode, ChangeInDoses):
        return "Change in doses given compared with the week before"

    if isinstance(mode, ByAge):
        return f"Percentage of {mode.band} year olds with a first dose"

    raise NotImplementedError(mode)


def current_value(region: RegionMetrics | None, mode: MapMode) -> float:
    """
    Get the value to plot for a region

    Parameters
    ----------
    region
        Region's metrics.
        `None` (e.g. nothing hovered) gives `0`.

    mode
        Map mode

    Returns
    -------
    :
        Value to plot
    """
    if region is None:
        return 0.0

    if isinstance(mode, DosesAllTime):
        return region.total_doses

    if isinstance(mode, DosesLastWeek):
        return region.doses_this_week

    if isinstance(mode, OverallPercent):
        first_doses = region.total_first_doses
        denominator = max(first_doses, region.total_population)
        if denominator == 0:
            return 0.0

        return first_doses * 100 / denominator

    if isinstance(mode, ChangeInDoses):
        return region.change_in_doses

    if isinstance(mode, ByAge):
        return region.percent_first_doses.get(mode.band, 0.0)

    raise NotImplementedError(mode)


def lower_bound(aggregate: WeeklyAggregate | NoData, mode: MapMode) -> float:
    """
    Get the lowest value on the colour scale

    Parameters
    ----------
    aggregate
        Aggregate the plotted regions come from

    mode
        Map mode

    Returns
    -------
    :
        Lower bound (`0` for [NO_DATA][vaxmap.aggregation.NO_DATA])
    """
    if isinstance(mode, (OverallPercent, ByAge)):
        return PERCENT_BOUNDS[0]

    if not isinstance(aggregate, WeeklyAggregate):
        return 0.0

    if isinstance(mode, DosesAllTime):
        return aggregate.overall_doses.min

    if isinstance(mode, DosesLastWeek):
        return aggregate.doses_last_week.min

    if isinstance(mode, ChangeInDoses):
        return aggregate.change_in_doses.min

    raise NotImplementedError(mode)


def upper_bound(aggregate: WeeklyAggregate | NoData, mode: MapMode) -> float:
    """
    Get the highest value on the colour scale

    Parameters
    ----------
    aggregate
        Aggregate the plotted regions come from

    mode
        Map mode

    Returns
    -------
    :
        Upper bound (`0` for [NO_DATA][vaxmap.aggregation.NO_DATA])
    """
    if isinstance(mode, (OverallPercent, ByAge)):
        return PERCENT_BOUNDS[1]

    if not isinstance(aggregate, WeeklyAggregate):
        return 0.0

    if isinstance(mode, DosesAllTime):
        return aggregate.overall_doses.max

    if isinstance(mode, DosesLastWeek):
        return aggregate.doses_last_week.max

    if isinstance(mode, ChangeInDoses):
        return aggregate.change_in_doses.max

    raise NotImplementedError(mode)


def normalized_opacity(
    region: RegionMetrics | None,
    aggregate: WeeklyAggregate | NoData,
    mode: MapMode,
) -> float:
    """
    Get a region's position on the colour scale

    Parameters
    ----------
    region
        Region's metrics

    aggregate
        Aggregate the region comes from

    mode
        Map mode

    Returns
    -------
    :
        Value between 0 and 1.

        `0` if there is no region or no data,
        or if the scale has no width
        (e.g. a single region, or all regions reporting the same value).
    """
    if region is None or not isinstance(aggregate, WeeklyAggregate):
        return 0.0

    lower = lower_bound(aggregate, mode)
    upper = upper_bound(aggregate, mode)
    if upper == lower or not (math.isfinite(lower) and math.isfinite(upper)):
        logger.debug("Scale for {} has no width ({}), using 0", mode, lower)
        return 0.0

    opacity = (abs(current_value(region, mode)) - lower) / (upper - lower)

    return min(max(opacity, 0.0), 1.0)
