"""
Type hints that are used throughout
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

import numpy as np
from typing_extensions import TypeAlias

NUMERIC_DATA: TypeAlias = Union[float, int, np.floating, np.integer]
"""
Type alias for a count or ratio held in an [AgeBucketed][(m).]
"""

AgeBand: TypeAlias = str
"""
Type alias for the label of an age band, e.g. `"80+"`

The set of bands has changed between releases of the source data,
so this is deliberately an open string rather than an enumeration.
"""

AgeBucketed: TypeAlias = Mapping[AgeBand, NUMERIC_DATA]
"""
Type alias for counts broken down by age band

Bands which are not present were not reported.
For summation they count as zero.

```python
{"16-59": 1200.0, "60-64": 310.0, "80+": 95.0}
```
"""
