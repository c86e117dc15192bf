"""Utility modules for marcado.

Provides:
- text: column arithmetic for tab-aware indentation
- logger: get_logger for logging
"""

from marcado.utils.logger import get_logger
from marcado.utils.text import column_width, strip_columns

__all__ = [
    "column_width",
    "get_logger",
    "strip_columns",
]
