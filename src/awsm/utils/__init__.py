"""Utility modules for awsm.

Provides:
- text: escape_html, escape_attr for markup-safe output
- logger: get_logger for logging
"""

from awsm.utils.logger import get_logger
from awsm.utils.text import escape_attr, escape_html

__all__ = [
    "escape_attr",
    "escape_html",
    "get_logger",
]
