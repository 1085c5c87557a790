"""Range checks performed when a view is constructed."""

from __future__ import annotations

from rc_substring.runtime.telemetry import record_event


class InvalidRangeError(ValueError):
    """Raised by ``SharedTextView`` when its byte range does not fit the buffer."""

    def __init__(self, bound: str, *, start: int, end: int, length: int) -> None:
        super().__init__(
            f"SharedTextView: invalid range {start}..{end} ({bound} violated, "
            f"buffer length {length})"
        )
        self.bound = bound
        self.start = start
        self.end = end
        self.length = length


def ensure_range(start: int, end: int, length: int) -> None:
    """Check ``start <= end``, then ``start <= length``, then ``end <= length``."""

    if start > end:
        bound = "start <= end"
    elif start > length:
        bound = "start <= length"
    elif end > length:
        bound = "end <= length"
    elif start < 0:
        bound = "start >= 0"
    else:
        return
    record_event(
        "view::invalid_range",
        level="error",
        data={"bound": bound, "start": start, "end": end, "length": length},
    )
    raise InvalidRangeError(bound, start=start, end=end, length=length)
