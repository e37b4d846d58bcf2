# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.16.6
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # How to colour a map
#
# Here we demonstrate how to go from the published weekly snapshots
# to the opacity of each region on a choropleth map
# and the figures shown in the table next to it.

# %% [markdown]
# ## Imports

# %%
import numpy as np
from loguru import logger

from vaxmap.aggregation import WeeklyAggregator
from vaxmap.map_mode import (
    MAP_MODE_KEYS,
    map_mode_label,
    normalized_opacity,
    parse_map_mode,
)
from vaxmap.snapshots import parse_snapshot_series
from vaxmap.table import percent_by_age_frame, regions_to_frame
from vaxmap.testing import get_random_document

# %%
# See what the library is doing
logger.enable("vaxmap")

# %% [markdown]
# ## Starting point
#
# The starting point is the published document.
# This is a list of snapshots, newest first.
# Each snapshot holds, for each region, the population, first doses
# and second doses by age band.
# Here we make up some data.

# %%
document = get_random_document(
    n_weeks=4, n_regions=7, rng=np.random.default_rng(seed=2021)
)
document[0]["statistics"]["R00"]

# %%
series = parse_snapshot_series(document)
series[0].date

# %% [markdown]
# ## Aggregating
#
# Only the newest three snapshots are needed.
# Regions that are missing from earlier snapshots
# are compared against zero.

# %%
aggregator = WeeklyAggregator()
weekly = aggregator(series)
weekly.overall_doses

# %% [markdown]
# If the source data reports more doses than people,
# percentages are capped at 100 by default.
# To see the raw ratios, turn the capping off.

# %%
weekly_uncapped = WeeklyAggregator(cap_percentages=False)(series)
weekly_uncapped.regions["R00"].percent_first_doses

# %% [markdown]
# ## The detail table

# %%
regions_to_frame(weekly)

# %%
percent_by_age_frame(weekly)

# %% [markdown]
# ## Colouring the map
#
# The mode comes from the selector on the page.
# It is either one of a few fixed keys or an age band.

# %%
list(MAP_MODE_KEYS)

# %%
for key in [*MAP_MODE_KEYS, "80+"]:
    mode = parse_map_mode(key)
    print(map_mode_label(mode))
    for region in weekly.regions.values():
        print(f"    {region.name}: {normalized_opacity(region, weekly, mode):.2f}")
