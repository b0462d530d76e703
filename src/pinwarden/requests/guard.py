from __future__ import annotations


class ResolutionGuard:
    """Single-assignment latch: the first ``try_acquire()`` wins, every later one loses.

    Deliberately synchronous. Callers run on one event loop, so as long as there is
    no ``await`` between the check and the set, concurrent listener callbacks cannot
    both see the latch open.
    """

    __slots__ = ("_closed", "_owner")

    def __init__(self) -> None:
        self._closed = False
        self._owner: str | None = None

    def try_acquire(self, owner: str | None = None) -> bool:
        if self._closed:
            return False
        self._closed = True
        self._owner = owner
        return True

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def owner(self) -> str | None:
        return self._owner

    def __repr__(self) -> str:
        return f"<ResolutionGuard closed={self._closed} owner={self._owner!r}>"
