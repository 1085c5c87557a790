"""Structural capability shared by buffers and views."""

from __future__ import annotations

from typing import Iterator, Protocol, Union, runtime_checkable


@runtime_checkable
class TextSlice(Protocol):
    """Anything string-shaped: a length, byte-range reads, and iteration."""

    def __len__(self) -> int:
        ...

    def read(self, start: int, end: int) -> str:
        """Return the text between two byte offsets."""
        ...

    def __iter__(self) -> Iterator[str]:
        ...


TextLike = Union[str, TextSlice]


def as_text(value: TextLike) -> str:
    """Borrow ``value`` as a plain ``str`` for APIs that want one."""

    if isinstance(value, str):
        return value
    if isinstance(value, TextSlice):
        return value.read(0, len(value))
    raise TypeError(f"expected str or TextSlice, got {type(value).__name__}")


__all__ = ["TextLike", "TextSlice", "as_text"]
