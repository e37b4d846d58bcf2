"""
Constants used throughout
"""

from __future__ import annotations

PERCENT_BOUNDS: tuple[float, float] = (0.0, 100.0)
"""
Fixed lower and upper bounds for metrics which are already percentages
"""

N_WEEKS_CONSULTED: int = 3
"""
Number of snapshots (newest first) needed to compute every derived metric
"""

FIRST_FOUR_PRIORITY_GROUPS_SIZE: int = 14_600_000
"""
Number of people in the first four vaccination priority groups
"""

FIRST_SIX_PRIORITY_GROUPS_SIZE: int = 31_800_000
"""
Number of people in the first six vaccination priority groups
"""

UK_POPULATION: int = 68_000_000
"""
Rough UK population, used for national headline figures
"""
