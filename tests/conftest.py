"""
Re-useable fixtures etc. for tests

See https://docs.pytest.org/en/7.1.x/reference/fixtures.html#conftest-py-sharing-fixtures-across-multiple-files
"""

import pandas as pd
import pytest

from vaxmap.testing import make_region, make_series


@pytest.fixture(scope="session", autouse=True)
def pandas_terminal_width():
    # Set pandas terminal width so that doctests don't depend on terminal width.

    # We set the display width to 120 because examples should be short,
    # anything more than this is too wide to read in the source.
    pd.set_option("display.width", 120)

    # Display as many columns as you want (i.e. let the display width do the
    # truncation)
    pd.set_option("display.max_columns", 1000)


@pytest.fixture
def three_week_series():
    """
    Three weeks of data for two regions

    Region B is missing from the oldest week
    and reports an extra age band in the newest week.
    """
    return make_series(
        (
            "2021-03-15",
            {
                "A": make_region(
                    "Alpha",
                    population={"60-64": 1000, "80+": 1000},
                    first_dose={"60-64": 300, "80+": 900},
                    second_dose={"60-64": 0, "80+": 100},
                ),
                "B": make_region(
                    "Bravo",
                    population={"70-74": 400, "80+": 500, "75-79": 300},
                    first_dose={"70-74": 200, "80+": 450, "75-79": 150},
                    second_dose={"80+": 50},
                ),
            },
        ),
        (
            "2021-03-08",
            {
                "A": make_region(
                    "Alpha",
                    population={"60-64": 1000, "80+": 1000},
                    first_dose={"60-64": 100, "80+": 800},
                    second_dose={"80+": 100},
                ),
                "B": make_region(
                    "Bravo",
                    population={"70-74": 400, "80+": 500},
                    first_dose={"70-74": 150, "80+": 400},
                    second_dose={"80+": 50},
                ),
            },
        ),
        (
            "2021-03-01",
            {
                "A": make_region(
                    "Alpha",
                    population={"60-64": 1000, "80+": 1000},
                    first_dose={"80+": 700},
                    second_dose={"80+": 50},
                ),
            },
        ),
    )
