"""Reference-counted shared handles.

``Rc`` mirrors a single-threaded reference-counted pointer: every handle
created through ``clone`` shares one box and bumps its strong count, and
the boxed value is released once the last share is dropped. A handle that
is garbage-collected without an explicit ``drop`` still gives its share
back, and dropping twice is a no-op, so repeated cloning can never
double-release the value.

``Arc`` is the cross-thread variant: count updates happen under a lock and
handles may be used from any thread.
"""

from __future__ import annotations

import threading
import weakref
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Callable, ContextManager, Generic, Optional, TypeVar

from rc_substring.runtime.telemetry import record_event

T = TypeVar("T")


class HandleReleasedError(RuntimeError):
    """Raised when a dropped handle is used again."""


class CrossThreadShareError(RuntimeError):
    """Raised when an ``Rc`` is touched outside its owner thread."""

    def __init__(self, operation: str, *, owner: int, caller: int) -> None:
        super().__init__(
            f"Rc.{operation} called from thread {caller} but the handle belongs "
            f"to thread {owner}; use Arc for cross-thread sharing"
        )
        self.operation = operation
        self.owner = owner
        self.caller = caller


class _SharedBox(Generic[T]):
    """Storage shared by every handle cloned from the same root."""

    __slots__ = ("value", "count", "_lock", "_kind")

    def __init__(self, value: T, lock: ContextManager[Any], kind: str) -> None:
        self.value: Optional[T] = value
        self.count = 0
        self._lock = lock
        self._kind = kind

    def acquire(self) -> None:
        with self._lock:
            self.count += 1

    def release(self) -> None:
        with self._lock:
            self.count -= 1
            remaining = self.count
            if remaining == 0:
                self.value = None
        if remaining == 0:
            record_event(
                "handle::released", level="debug", data={"kind": self._kind}
            )


class Rc(AbstractContextManager["Rc[T]"], Generic[T]):
    """Single-thread shared handle to an immutable value."""

    _thread_bound = True
    _lock_factory: Callable[[], ContextManager[Any]] = nullcontext

    def __init__(self, value: T) -> None:
        self._attach(_SharedBox(value, self._lock_factory(), type(self).__name__))

    def _attach(self, box: _SharedBox[T]) -> None:
        box.acquire()
        self._box = box
        self._owner = threading.get_ident()
        # Fires on drop() or on garbage collection, whichever comes first.
        self._finalizer = weakref.finalize(self, box.release)
        self._finalizer.atexit = False

    def _check_thread(self, operation: str) -> None:
        if not self._thread_bound:
            return
        caller = threading.get_ident()
        if caller != self._owner:
            record_event(
                "handle::cross_thread",
                level="warning",
                data={"operation": operation, "owner": self._owner, "caller": caller},
            )
            raise CrossThreadShareError(operation, owner=self._owner, caller=caller)

    def _live_box(self, operation: str) -> _SharedBox[T]:
        self._check_thread(operation)
        if not self._finalizer.alive:
            raise HandleReleasedError(
                f"{type(self).__name__}.{operation} on a dropped handle"
            )
        return self._box

    def clone(self) -> "Rc[T]":
        box = self._live_box("clone")
        twin = type(self).__new__(type(self))
        twin._attach(box)
        return twin

    def get(self) -> T:
        return self._live_box("get").value  # type: ignore[return-value]

    def drop(self) -> None:
        self._check_thread("drop")
        self._finalizer()

    @property
    def is_alive(self) -> bool:
        return self._finalizer.alive

    @property
    def strong_count(self) -> int:
        return self._box.count

    def ptr_eq(self, other: "Rc[Any]") -> bool:
        """True when both handles share the same box."""

        return self._box is other._box

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.drop()
        return False

    def __repr__(self) -> str:
        state = "alive" if self.is_alive else "dropped"
        return f"{type(self).__name__}({state}, strong_count={self.strong_count})"


class Arc(Rc[T]):
    """Lock-guarded variant of ``Rc`` for sharing across threads."""

    _thread_bound = False
    _lock_factory = threading.Lock


__all__ = ["Arc", "CrossThreadShareError", "HandleReleasedError", "Rc"]
