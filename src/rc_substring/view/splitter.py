"""Producers that carve a shared buffer into views."""

from __future__ import annotations

from typing import Iterator, List, Union

from rc_substring.buffer.handle import Rc
from rc_substring.buffer.text import ENCODING, TextBuffer
from rc_substring.runtime.telemetry import span

from .substring import SharedTextView


class DelimitedViews(Iterator[SharedTextView]):
    """Yield one view per delimiter-terminated segment of a buffer.

    The producer owns a handle to the buffer; each yielded view holds its own
    share, so views keep working after ``close()`` or after the producer is
    garbage-collected.
    """

    def __init__(
        self,
        source: Union[str, TextBuffer, Rc[TextBuffer]],
        delimiter: str = " ",
        *,
        keep_trailing: bool = False,
    ) -> None:
        if not delimiter:
            raise ValueError("delimiter cannot be empty")
        if isinstance(source, Rc):
            self._handle: Rc[TextBuffer] = source.clone()
        else:
            buffer = source if isinstance(source, TextBuffer) else TextBuffer.from_text(source)
            self._handle = Rc(buffer)
        self._delimiter = delimiter
        self._step = len(delimiter.encode(ENCODING))
        self._keep_trailing = keep_trailing
        self._position = 0
        self._exhausted = False

    @property
    def position(self) -> int:
        return self._position

    def __iter__(self) -> "DelimitedViews":
        return self

    def __next__(self) -> SharedTextView:
        if self._exhausted:
            raise StopIteration
        buffer = self._handle.get()
        found = buffer.find(self._delimiter, self._position)
        if found < 0:
            self._exhausted = True
            if self._keep_trailing and self._position < len(buffer):
                return SharedTextView(self._handle, self._position, len(buffer))
            raise StopIteration
        view = SharedTextView(self._handle, self._position, found)
        self._position = found + self._step
        return view

    def close(self) -> None:
        """Release the producer's handle; views already yielded stay valid."""

        self._exhausted = True
        self._handle.drop()

    def __enter__(self) -> "DelimitedViews":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


def split_views(
    text: Union[str, TextBuffer, Rc[TextBuffer]],
    delimiter: str = " ",
) -> List[SharedTextView]:
    """Split ``text`` into views, keeping a final unterminated segment."""

    with span(
        "view::split",
        component="splitter",
        metadata={"delimiter": delimiter},
    ) as handle:
        with DelimitedViews(text, delimiter, keep_trailing=True) as views:
            result = list(views)
        handle.add_metadata("segments", len(result))
        return result


def line_views(text: Union[str, TextBuffer, Rc[TextBuffer]]) -> List[SharedTextView]:
    """One view per ``\\n``-separated line, without the newline."""

    return split_views(text, "\n")


__all__ = ["DelimitedViews", "line_views", "split_views"]
