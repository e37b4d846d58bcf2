"""
Exceptions raised by vaxmap
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any


class UnrecognisedValueError(ValueError):
    """
    Raised when a value is not one of the values we know how to handle
    """

    def __init__(
        self, unrecognised_value: Any, name: str, known_values: Collection[Any]
    ) -> None:
        """
        Initialise the error

        Parameters
        ----------
        unrecognised_value
            The value we did not recognise

        name
            Name of the variable which had the unrecognised value

        known_values
            The values we do recognise
        """
        error_msg = (
            f"{name}={unrecognised_value!r} is not recognised. "
            f"Known values: {sorted(known_values)}"
        )
        super().__init__(error_msg)


class SeriesOrderError(ValueError):
    """
    Raised when snapshot dates are not strictly descending
    """

    def __init__(self, dates: Collection[Any]) -> None:
        error_msg = (
            "Snapshots must be ordered newest first "
            f"with no repeated dates. Received dates: {list(dates)}"
        )
        super().__init__(error_msg)
