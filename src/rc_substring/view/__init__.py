"""Substring views over shared text buffers."""

from .splitter import DelimitedViews, line_views, split_views
from .substring import SharedTextView
from .validation import InvalidRangeError, ensure_range

__all__ = [
    "DelimitedViews",
    "InvalidRangeError",
    "SharedTextView",
    "ensure_range",
    "line_views",
    "split_views",
]
