"""Text storage and the shared handles that keep it alive."""

from .handle import Arc, CrossThreadShareError, HandleReleasedError, Rc
from .protocols import TextLike, TextSlice, as_text
from .text import TextBuffer

__all__ = [
    "Arc",
    "CrossThreadShareError",
    "HandleReleasedError",
    "Rc",
    "TextBuffer",
    "TextLike",
    "TextSlice",
    "as_text",
]
