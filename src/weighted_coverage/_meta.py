from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("weighted-coverage")

logger = logging.getLogger("wcc")

__all__ = ["__version__", "logger"]
