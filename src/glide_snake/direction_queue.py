"""Buffered player input between simulation ticks."""

from __future__ import annotations

from collections import deque

from glide_snake.snake import Direction


class DirectionQueue:
    """Holds the active direction plus up to ``capacity`` pending turns.

    A player on a high refresh-rate display can press two turns between two
    ticks; both are honoured in order. Each candidate is validated against the
    last queued direction (or the active one when nothing is queued), so the
    buffer can never contain a reversal.
    """

    def __init__(self, initial: Direction = Direction.RIGHT, capacity: int = 2) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1.")
        self.current = initial
        self.capacity = capacity
        self._pending: deque[Direction] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def pending(self) -> tuple[Direction, ...]:
        return tuple(self._pending)

    @property
    def effective(self) -> Direction:
        """The direction new input is compared against."""
        return self._pending[-1] if self._pending else self.current

    def queue(self, direction: object) -> bool:
        """Buffer *direction*; returns whether it was accepted.

        Reversals, repeats of the effective direction, unknown values and
        input beyond capacity are ignored.
        """
        if not isinstance(direction, Direction):
            return False
        last = self.effective
        if last.reverses(direction) or last is direction:
            return False
        if len(self._pending) >= self.capacity:
            return False
        self._pending.append(direction)
        return True

    def consume(self) -> Direction:
        """Promote the oldest pending turn, if any, and return the active direction."""
        if self._pending:
            self.current = self._pending.popleft()
        return self.current

    def clear(self) -> None:
        self._pending.clear()
