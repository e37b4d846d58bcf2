"""
Derivation of one region's metrics from its weekly snapshots
"""

from __future__ import annotations

from attrs import define

from vaxmap.age_bands import percent_by_band, total
from vaxmap.snapshots import RawRegionSnapshot
from vaxmap.typing import AgeBand


@define(frozen=True)
class RegionMetrics:
    """
    Metrics derived for one region in the newest snapshot
    """

    name: str
    """
    Human-readable name of the region
    """

    population: dict[AgeBand, float]
    """
    Population by age band, as reported
    """

    first_doses: dict[AgeBand, float]
    """
    Cumulative first doses by age band, as reported
    """

    second_doses: dict[AgeBand, float]
    """
    Cumulative second doses by age band, as reported
    """

    percent_first_doses: dict[AgeBand, float]
    """
    First doses as a percentage of population, by age band

    Covers every band reported for either doses or population.
    A band with doses but no reported population reads as 100%
    (0% if percentages are not capped).
    """

    percent_second_doses: dict[AgeBand, float]
    """
    Second doses as a percentage of population, by age band
    """

    first_doses_this_week: float
    """
    First doses given since the previous snapshot
    """

    second_doses_this_week: float
    """
    Second doses given since the previous snapshot
    """

    change_in_doses: float
    """
    Change in the weekly number of doses, as a percentage of last week's total

    Positive when vaccination is accelerating,
    negative when it is slowing down.
    """

    @property
    def total_population(self) -> float:
        """
        Total population over all age bands
        """
        return total(self.population)

    @property
    def total_first_doses(self) -> float:
        """
        Total first doses over all age bands
        """
        return total(self.first_doses)

    @property
    def total_second_doses(self) -> float:
        """
        Total second doses over all age bands
        """
        return total(self.second_doses)

    @property
    def total_doses(self) -> float:
        """
        Total first and second doses
        """
        return self.total_first_doses + self.total_second_doses

    @property
    def doses_this_week(self) -> float:
        """
        First and second doses given since the previous snapshot
        """
        return self.first_doses_this_week + self.second_doses_this_week


def _total_doses(snapshot: RawRegionSnapshot | None) -> tuple[float, float]:
    if snapshot is None:
        return 0.0, 0.0

    return total(snapshot.first_dose), total(snapshot.second_dose)


def get_change_in_doses(
    this_week: float, last_week: float, two_weeks_ago: float
) -> float:
    """
    Get the change in the pace of vaccination

    Parameters
    ----------
    this_week
        Cumulative doses (first plus second) in the newest snapshot

    last_week
        Cumulative doses in the snapshot before that

    two_weeks_ago
        Cumulative doses in the snapshot before that

    Returns
    -------
    :
        Difference between this week's and last week's new doses,
        as a percentage of `last_week`.
        `0` if `last_week` is zero.

    Examples
    --------
    >>> get_change_in_doses(300.0, 200.0, 150.0)
    25.0
    """
    if last_week == 0:
        return 0.0

    delta_this_week = this_week - last_week
    delta_last_week = last_week - two_weeks_ago

    return (delta_this_week - delta_last_week) * 100 / last_week


def transform_region(
    current: RawRegionSnapshot,
    prior: RawRegionSnapshot | None = None,
    two_prior: RawRegionSnapshot | None = None,
    cap_percentages: bool = True,
) -> RegionMetrics:
    """
    Derive a region's metrics

    Missing earlier weeks are treated as all-zero baselines.

    Parameters
    ----------
    current
        The region in the newest snapshot

    prior
        The region in the snapshot before `current`, if reported

    two_prior
        The region in the snapshot before `prior`, if reported

    cap_percentages
        Should percentages of population be capped at 100?

        See [vaxmap.age_bands.capped_percent][].

    Returns
    -------
    :
        Derived metrics for the region
    """
    first_now, second_now = _total_doses(current)
    first_prior, second_prior = _total_doses(prior)
    first_two_prior, second_two_prior = _total_doses(two_prior)

    return RegionMetrics(
        name=current.name,
        population=dict(current.population),
        first_doses=dict(current.first_dose),
        second_doses=dict(current.second_dose),
        percent_first_doses=percent_by_band(
            current.first_dose, current.population, cap=cap_percentages
        ),
        percent_second_doses=percent_by_band(
            current.second_dose, current.population, cap=cap_percentages
        ),
        first_doses_this_week=first_now - first_prior,
        second_doses_this_week=second_now - second_prior,
        change_in_doses=get_change_in_doses(
            this_week=first_now + second_now,
            last_week=first_prior + second_prior,
            two_weeks_ago=first_two_prior + second_two_prior,
        ),
    )
