"""
Headline figures derived from national daily totals
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import pandas as pd
from attrs import define, field

from vaxmap.constants import (
    FIRST_FOUR_PRIORITY_GROUPS_SIZE,
    FIRST_SIX_PRIORITY_GROUPS_SIZE,
    UK_POPULATION,
)
from vaxmap.exceptions import UnrecognisedValueError

DOSE_NAMES: dict[str, str] = {
    "first_dose": "First",
    "second_dose": "Second",
}
"""
Display names of each dose
"""


@define(frozen=True)
class DoseTotal:
    """
    Count of first and second doses
    """

    first_dose: float = 0.0
    """
    First doses
    """

    second_dose: float = 0.0
    """
    Second doses
    """


@define(frozen=True)
class DailyTotal:
    """
    Doses given on one day and cumulatively up to that day
    """

    date: pd.Timestamp = field(converter=pd.Timestamp)
    """
    Day the figures are for
    """

    today: DoseTotal
    """
    Doses given on `date`
    """

    total: DoseTotal
    """
    Doses given up to and including `date`
    """


@define(frozen=True)
class Differences:
    """
    Difference between one day's doses and the day before's
    """

    value: float
    """
    Absolute difference
    """

    percent: int
    """
    Absolute difference as a (rounded) percentage of the day before
    """

    symbol: str
    """
    Arrow showing the direction of the change
    """

    class_name: str
    """
    CSS class used to colour the change
    """


def dose_name(dose: str) -> str:
    """
    Get the display name of a dose

    Parameters
    ----------
    dose
        Dose, `"first_dose"` or `"second_dose"`

    Returns
    -------
    :
        Display name

    Raises
    ------
    UnrecognisedValueError
        `dose` is not a known dose
    """
    try:
        return DOSE_NAMES[dose]
    except KeyError as exc:
        raise UnrecognisedValueError(
            unrecognised_value=dose, name="dose", known_values=DOSE_NAMES
        ) from exc


def daily_difference(statistics: Sequence[DailyTotal], dose: str) -> Differences:
    """
    Compare the newest day's doses with the day before

    Parameters
    ----------
    statistics
        Daily totals, newest first.
        Missing days count as zero doses.

    dose
        Dose to compare, `"first_dose"` or `"second_dose"`

    Returns
    -------
    :
        Differences.
        The percentage is `0` if no doses were given the day before.

    Raises
    ------
    UnrecognisedValueError
        `dose` is not a known dose
    """
    if dose not in DOSE_NAMES:
        raise UnrecognisedValueError(
            unrecognised_value=dose, name="dose", known_values=DOSE_NAMES
        )

    today = getattr(statistics[0].today, dose) if len(statistics) > 0 else 0.0
    yesterday = getattr(statistics[1].today, dose) if len(statistics) > 1 else 0.0
    difference = today - yesterday

    percent = 0 if yesterday == 0 else abs(round(difference / yesterday * 100))

    return Differences(
        value=abs(difference),
        percent=percent,
        symbol="▲" if difference > 0 else "▼",
        class_name="text-success" if difference > 0 else "text-danger",
    )


@define(frozen=True)
class Projection:
    """
    Projected dates by which priority groups will all have had a first dose
    """

    first_four: pd.Timestamp | None
    """
    Date for the first four priority groups

    `None` if no first doses were given on the latest day,
    so no date can be projected.
    """

    all_six: pd.Timestamp | None
    """
    Date for the first six priority groups

    `None` if no date can be projected.
    """


@define(frozen=True)
class Totals:
    """
    National totals of first doses
    """

    cumulative: float
    """
    Number of people who have had at least one dose
    """

    percent: int
    """
    Percentage of the population who have had at least one dose (rounded)
    """

    ratio: int
    """
    The X in "1 in X people have had at least one dose" (rounded)

    `0` if nobody has had a dose.
    """


def _days_until(target: float, cumulative: float, per_day: float) -> int:
    # Already reached means no days to go
    return max(math.ceil((target - cumulative) / per_day), 0)


def project_completion(
    statistics: Sequence[DailyTotal],
    reference_date: pd.Timestamp | str,
    first_four_size: float = FIRST_FOUR_PRIORITY_GROUPS_SIZE,
    all_six_size: float = FIRST_SIX_PRIORITY_GROUPS_SIZE,
) -> Projection:
    """
    Project when the priority groups will all have had a first dose

    This extrapolates from the latest day's first doses,
    assuming the same number are given every day from `reference_date`.

    Parameters
    ----------
    statistics
        Daily totals, newest first

    reference_date
        Date to project from (normally today)

    first_four_size
        Number of people in the first four priority groups

    all_six_size
        Number of people in the first six priority groups

    Returns
    -------
    :
        Projected dates.
        Both are `None` if `statistics` is empty
        or no first doses were given on the latest day.

    Examples
    --------
    >>> latest = DailyTotal(
    ...     date="2021-02-01",
    ...     today=DoseTotal(first_dose=400_000),
    ...     total=DoseTotal(first_dose=13_000_000),
    ... )
    >>> project_completion([latest], reference_date="2021-02-01")
    Projection(first_four=Timestamp('2021-02-05 00:00:00'), all_six=Timestamp('2021-03-20 00:00:00'))
    """
    if not statistics or statistics[0].today.first_dose == 0:
        return Projection(first_four=None, all_six=None)

    latest = statistics[0]
    reference_date = pd.Timestamp(reference_date)
    per_day = latest.today.first_dose
    cumulative = latest.total.first_dose

    return Projection(
        first_four=reference_date
        + pd.Timedelta(days=_days_until(first_four_size, cumulative, per_day)),
        all_six=reference_date
        + pd.Timedelta(days=_days_until(all_six_size, cumulative, per_day)),
    )


def calculate_totals(
    statistics: Sequence[DailyTotal], population: float = UK_POPULATION
) -> Totals:
    """
    Calculate national totals of first doses

    Parameters
    ----------
    statistics
        Daily totals, newest first

    population
        Population to compare against

    Returns
    -------
    :
        Totals, all zero if `statistics` is empty

    Examples
    --------
    >>> latest = DailyTotal(
    ...     date="2021-02-01",
    ...     today=DoseTotal(first_dose=400_000),
    ...     total=DoseTotal(first_dose=13_600_000),
    ... )
    >>> calculate_totals([latest])
    Totals(cumulative=13600000, percent=20, ratio=5)
    """
    cumulative = statistics[0].total.first_dose if statistics else 0.0
    if cumulative == 0 or population == 0:
        return Totals(cumulative=cumulative, percent=0, ratio=0)

    percent_vaccinated = cumulative * 100 / population

    return Totals(
        cumulative=cumulative,
        percent=round(percent_vaccinated),
        ratio=round(population / cumulative),
    )
