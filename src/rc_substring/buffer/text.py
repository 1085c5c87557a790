"""Immutable byte-addressed text storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

ENCODING = "utf-8"


@dataclass(frozen=True, slots=True)
class TextBuffer:
    """UTF-8 text addressed by byte offset.

    The buffer never changes after construction; views re-read their window
    from it on every access instead of keeping a copy. ``read`` is strict
    about its bounds where plain ``bytes`` slicing would silently clamp.
    """

    data: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def from_text(cls, text: str) -> "TextBuffer":
        return cls(text.encode(ENCODING))

    @property
    def text(self) -> str:
        return self.data.decode(ENCODING)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[str]:
        return iter(self.text)

    def check_range(self, start: int, end: int) -> int:
        """Return ``end - start``, raising ``IndexError`` if it does not fit."""

        length = len(self.data)
        if start < 0 or end < start or end > length:
            raise IndexError(
                f"byte range {start}..{end} out of bounds for buffer of length {length}"
            )
        return end - start

    def read_bytes(self, start: int, end: int) -> bytes:
        self.check_range(start, end)
        return self.data[start:end]

    def read(self, start: int, end: int) -> str:
        """Decode ``data[start:end]``.

        Raises ``IndexError`` for out-of-range offsets and
        ``UnicodeDecodeError`` when an offset falls inside a multi-byte
        character.
        """

        return self.read_bytes(start, end).decode(ENCODING)

    def find(self, needle: str, start: int = 0) -> int:
        """Byte offset of ``needle`` at or after ``start``, or ``-1``."""

        return self.data.find(needle.encode(ENCODING), start)
