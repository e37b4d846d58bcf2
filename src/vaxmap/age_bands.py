"""
Arithmetic on counts broken down by age band

The bands reported vary between snapshots and between regions,
so nothing here assumes a fixed set of keys.
Operations iterate over whatever keys are present
and treat a missing band as zero.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Callable

from vaxmap.typing import NUMERIC_DATA, AgeBand, AgeBucketed

BAND_LOWER_BOUND_RE = re.compile(r"^\s*(\d+)")


def total(bucket: AgeBucketed) -> float:
    """
    Get the total over all reported age bands

    Parameters
    ----------
    bucket
        Counts by age band

    Returns
    -------
    :
        Sum of the counts, `0` if no bands are reported

    Examples
    --------
    >>> total({})
    0.0
    >>> total({"16-69": 3, "80+": 5})
    8.0
    """
    return float(sum(bucket.values()))


def common_bands(a: AgeBucketed, b: AgeBucketed) -> set[AgeBand]:
    """
    Get the bands to iterate over when combining two buckets

    This is the union of the keys, not the intersection,
    so that a band reported on only one side is not dropped.

    Parameters
    ----------
    a
        First bucket

    b
        Second bucket

    Returns
    -------
    :
        All bands present in either `a` or `b`
    """
    return set(a).union(b)


def combine_by_band(
    a: AgeBucketed,
    b: AgeBucketed,
    f: Callable[[NUMERIC_DATA, NUMERIC_DATA], float],
) -> dict[AgeBand, float]:
    """
    Combine two buckets band by band

    Parameters
    ----------
    a
        First bucket

    b
        Second bucket

    f
        Function to apply to the values of each band.

        It receives the value from `a` then the value from `b`,
        with zero standing in for a band that is not reported.

    Returns
    -------
    :
        Result of `f` for each band in [common_bands][(m).]

    Examples
    --------
    >>> combine_by_band({"80+": 5}, {"70-74": 2}, lambda x, y: x + y)
    {'70-74': 2, '80+': 5}
    """
    return {
        band: f(a.get(band, 0), b.get(band, 0))
        for band in sort_bands(common_bands(a, b))
    }


def capped_percent(dose: NUMERIC_DATA, population: NUMERIC_DATA) -> float:
    """
    Get doses as a percentage of population, capped at 100%

    The denominator is the larger of `dose` and `population`.
    Dose counts occasionally exceed the reported population,
    which is a data quality problem in the source.
    This caps the result at 100% rather than reporting it.

    Parameters
    ----------
    dose
        Number of doses

    population
        Population

    Returns
    -------
    :
        Percentage, `0` if both inputs are zero
    """
    denominator = max(dose, population)
    if denominator == 0:
        return 0.0

    return float(dose * 100 / denominator)


def raw_percent(dose: NUMERIC_DATA, population: NUMERIC_DATA) -> float:
    """
    Get doses as a percentage of population, without any capping

    Parameters
    ----------
    dose
        Number of doses

    population
        Population

    Returns
    -------
    :
        Percentage (can exceed 100), `0` if `population` is zero
    """
    if population == 0:
        return 0.0

    return float(dose * 100 / population)


def percent_by_band(
    doses: AgeBucketed, population: AgeBucketed, cap: bool = True
) -> dict[AgeBand, float]:
    """
    Get doses as a percentage of population for each band

    Parameters
    ----------
    doses
        Doses by age band

    population
        Population by age band

    cap
        Should percentages be capped at 100?

        See [capped_percent][(m).] and [raw_percent][(m).].

    Returns
    -------
    :
        Percentage for each band reported in either input
    """
    return combine_by_band(doses, population, capped_percent if cap else raw_percent)


def _band_sort_key(band: AgeBand) -> tuple[int, float, str]:
    match = BAND_LOWER_BOUND_RE.match(band)
    if match is None:
        if band.lower().startswith("under"):
            return (0, 0.0, band)

        return (2, 0.0, band)

    return (1, float(match.group(1)), band)


def sort_bands(bands: Iterable[AgeBand]) -> list[AgeBand]:
    """
    Sort age bands from youngest to oldest

    Bands are ordered by the number they start with.
    Bands like "Under 16" come first,
    bands we can't interpret come last (alphabetically).

    Parameters
    ----------
    bands
        Bands to sort

    Returns
    -------
    :
        Sorted bands

    Examples
    --------
    >>> sort_bands(["80+", "16-59", "60-64", "Under 16"])
    ['Under 16', '16-59', '60-64', '80+']
    """
    return sorted(bands, key=_band_sort_key)
