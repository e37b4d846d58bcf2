"""
Derived metrics for choropleth maps of regional vaccination statistics
"""

import importlib.metadata

from loguru import logger

__version__ = importlib.metadata.version("vaxmap")

logger.disable("vaxmap")
