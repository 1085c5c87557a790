"""Reference-counted substring views over shared text."""

from .buffer import (
    Arc,
    CrossThreadShareError,
    HandleReleasedError,
    Rc,
    TextBuffer,
    TextSlice,
    as_text,
)
from .runtime import ValidationPolicy
from .view import (
    DelimitedViews,
    InvalidRangeError,
    SharedTextView,
    line_views,
    split_views,
)

__all__ = [
    "Arc",
    "CrossThreadShareError",
    "DelimitedViews",
    "HandleReleasedError",
    "InvalidRangeError",
    "Rc",
    "SharedTextView",
    "TextBuffer",
    "TextSlice",
    "ValidationPolicy",
    "as_text",
    "line_views",
    "split_views",
]

__version__ = "0.1.0"
