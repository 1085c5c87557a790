"""Reference-counted substring views."""

from __future__ import annotations

import operator
from functools import total_ordering
from typing import Any, Iterator, Optional, Union

from rc_substring.buffer.handle import Rc
from rc_substring.buffer.protocols import TextLike, as_text
from rc_substring.buffer.text import ENCODING, TextBuffer
from rc_substring.runtime.config import ValidationPolicy, get_settings

from .validation import ensure_range


def _resolve(offset: Optional[int], default: int, length: int) -> int:
    if offset is None:
        return default
    offset = operator.index(offset)
    return offset + length if offset < 0 else offset


@total_ordering
class SharedTextView:
    """A window ``[start, end)`` into a shared ``TextBuffer``.

    The view holds its own share of the buffer handle, so it stays valid after
    the handle it was built from (and whatever produced that handle) is gone.
    Nothing is copied: every read slices the buffer again. Equality, hashing
    and ordering only look at the windowed text.

    Read-only ``str`` methods are forwarded to the window text, so
    ``view.upper()`` or ``view.split(",")`` behave as on a ``str``.
    """

    __slots__ = ("_handle", "_start", "_end")

    def __init__(
        self,
        handle: Rc[TextBuffer],
        start: Union[int, range],
        end: Optional[int] = None,
        *,
        policy: Optional[ValidationPolicy] = None,
    ) -> None:
        if isinstance(start, range):
            if end is not None:
                raise TypeError("pass either a range or start/end offsets, not both")
            if start.step != 1:
                raise ValueError("SharedTextView ranges must have step 1")
            start, end = start.start, start.stop
        elif end is None:
            raise TypeError("end offset is required unless a range is given")

        buffer = handle.get()
        if get_settings().should_validate(policy):
            ensure_range(start, end, len(buffer))
        self._adopt(handle.clone(), start, end)

    def _adopt(self, handle: Rc[TextBuffer], start: int, end: int) -> None:
        self._handle = handle
        self._start = start
        self._end = end

    @classmethod
    def from_text(
        cls,
        text: Union[str, TextBuffer],
        start: int = 0,
        end: Optional[int] = None,
        *,
        policy: Optional[ValidationPolicy] = None,
    ) -> "SharedTextView":
        """Build a view over fresh text; the view ends up as the only owner."""

        buffer = text if isinstance(text, TextBuffer) else TextBuffer.from_text(text)
        with Rc(buffer) as handle:
            return cls(handle, start, len(buffer) if end is None else end, policy=policy)

    @property
    def handle(self) -> Rc[TextBuffer]:
        return self._handle

    @property
    def buffer(self) -> TextBuffer:
        return self._handle.get()

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def range(self) -> range:
        return range(self._start, self._end)

    def clone(self) -> "SharedTextView":
        twin = SharedTextView.__new__(SharedTextView)
        twin._adopt(self._handle.clone(), self._start, self._end)
        return twin

    __copy__ = clone

    def __deepcopy__(self, memo: dict) -> "SharedTextView":
        return self.clone()

    def release(self) -> None:
        """Give back this view's share of the buffer."""

        self._handle.drop()

    def __enter__(self) -> "SharedTextView":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False

    def as_str(self) -> str:
        return self.buffer.read(self._start, self._end)

    def as_bytes(self) -> bytes:
        return self.buffer.read_bytes(self._start, self._end)

    def __len__(self) -> int:
        return self.buffer.check_range(self._start, self._end)

    def _window(self, lo: int, hi: int) -> tuple[int, int]:
        length = len(self)
        if not 0 <= lo <= hi <= length:
            raise IndexError(
                f"slice {lo}..{hi} out of range for view of length {length}"
            )
        return self._start + lo, self._start + hi

    def read(self, start: int, end: int) -> str:
        """Text between two offsets relative to the view's window."""

        return self.buffer.read(*self._window(start, end))

    def __getitem__(self, key: Union[int, slice]) -> Union[int, str]:
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise ValueError("SharedTextView slices do not support a step")
            length = len(self)
            lo = _resolve(key.start, 0, length)
            hi = _resolve(key.stop, length, length)
            return self.read(lo, hi)

        length = len(self)
        index = _resolve(key, 0, length)
        if not 0 <= index < length:
            raise IndexError("view index out of range")
        return self.buffer.data[self._start + index]

    def sub_view(
        self,
        start: int = 0,
        end: Optional[int] = None,
        *,
        policy: Optional[ValidationPolicy] = None,
    ) -> "SharedTextView":
        """A new view sharing this buffer, with offsets relative to this window."""

        length = self._end - self._start
        end = length if end is None else end
        if get_settings().should_validate(policy):
            ensure_range(start, end, length)
            lo, hi = self._start + start, self._start + end
        else:
            # Unvalidated children must still stay inside this window.
            lo, hi = self._window(start, end)
        return SharedTextView(self._handle, lo, hi, policy=policy)

    def __iter__(self) -> Iterator[str]:
        return iter(self.as_str())

    def iter_bytes(self) -> Iterator[int]:
        return iter(self.as_bytes())

    def __contains__(self, item: TextLike) -> bool:
        return as_text(item) in self.as_str()

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        attr = getattr(str, name, None)
        if attr is None:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )
        return getattr(self.as_str(), name)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SharedTextView):
            return self.as_bytes() == other.as_bytes()
        if isinstance(other, str):
            return self.as_bytes() == other.encode(ENCODING)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, SharedTextView):
            return self.as_str() < other.as_str()
        if isinstance(other, str):
            return self.as_str() < other
        return NotImplemented

    def __hash__(self) -> int:
        data = self.as_bytes()
        try:
            return hash(data.decode(ENCODING))
        except UnicodeDecodeError:
            # Never equal to a str, so only has to agree with other views.
            return hash(data)

    def __str__(self) -> str:
        return self.as_str()

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __format__(self, format_spec: str) -> str:
        return format(self.as_str(), format_spec)

    def _buffer_repr(self) -> str:
        if not self._handle.is_alive:
            return "<released>"
        return repr(self.buffer.text)

    def __repr__(self) -> str:
        return (
            f"SharedTextView(buffer={self._buffer_repr()}, "
            f"range={self._start}..{self._end})"
        )

    def pretty(self) -> str:
        """Multi-line form of ``repr`` for troubleshooting."""

        return (
            "SharedTextView(\n"
            f"    buffer={self._buffer_repr()},\n"
            f"    range={self._start}..{self._end},\n"
            ")"
        )


__all__ = ["SharedTextView"]
