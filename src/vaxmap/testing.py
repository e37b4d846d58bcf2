"""
Code to support our tests

This is here, rather than in our `tests` directory
because of the issues that come
when you turn your tests into a package using `__init__.py` files
(for details, see https://docs.pytest.org/en/7.1.x/explanation/goodpractices.html#choosing-an-import-mode).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from vaxmap.snapshots import RawRegionSnapshot, WeeklySnapshot
from vaxmap.typing import AgeBucketed

RNG = np.random.default_rng()


def make_region(
    name: str,
    population: AgeBucketed | None = None,
    first_dose: AgeBucketed | None = None,
    second_dose: AgeBucketed | None = None,
) -> RawRegionSnapshot:
    """
    Make a region snapshot, with unreported buckets left empty
    """
    return RawRegionSnapshot(
        name=name,
        population=population,
        first_dose=first_dose,
        second_dose=second_dose,
    )


def make_series(
    *snapshots: tuple[str, Mapping[str, RawRegionSnapshot]],
) -> tuple[WeeklySnapshot, ...]:
    """
    Make a series from `(date, statistics)` pairs, given newest first
    """
    return tuple(
        WeeklySnapshot(date=date, statistics=statistics)
        for date, statistics in snapshots
    )


def get_random_document(
    n_weeks: int,
    n_regions: int,
    bands: tuple[str, ...] = ("16-59", "60-64", "65-69", "70-74", "75-79", "80+"),
    rng: np.random.Generator = RNG,
) -> list[dict[str, Any]]:
    """
    Get a published-style document with random, but plausible, numbers

    Doses only ever increase week on week
    and each region reports a random subset of `bands`.

    Parameters
    ----------
    n_weeks
        Number of snapshots

    n_regions
        Number of regions

    bands
        Age bands to draw from

    rng
        Random number generator

    Returns
    -------
    :
        Snapshots, newest first
    """
    dates = np.datetime64("2021-03-01") - np.arange(n_weeks) * np.timedelta64(7, "D")
    # Oldest first so cumulative sums build up
    weeks: list[dict[str, Any]] = [
        {"date": str(date), "statistics": {}} for date in dates[::-1]
    ]
    for i in range(n_regions):
        region_id = f"R{i:02d}"
        region_bands = [b for b in bands if rng.random() > 0.2] or list(bands[:1])
        population = {b: int(rng.integers(10_000, 500_000)) for b in region_bands}
        first = dict.fromkeys(region_bands, 0)
        second = dict.fromkeys(region_bands, 0)
        for week in weeks:
            for b in region_bands:
                first[b] += int(rng.integers(0, population[b] // 10))
                second[b] += int(rng.integers(0, population[b] // 50))

            week["statistics"][region_id] = {
                "name": f"Region {i}",
                "population": dict(population),
                "firstDose": dict(first),
                "secondDose": dict(second),
            }

    return weeks[::-1]
