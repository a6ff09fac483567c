"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable

Cell = tuple[int, int]


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values; y grows downward."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def reverses(self, other: Direction) -> bool:
        """True when *other* points exactly opposite to this direction."""
        return self.dx + other.dx == 0 and self.dy + other.dy == 0

    @classmethod
    def parse(cls, raw: object) -> Direction | None:
        """Map a name ("up"), an (dx, dy) pair or a Direction to a Direction.

        Anything unrecognized maps to ``None``. Pairs must hold plain ints;
        floats, bools and numeric strings are not coerced.
        """
        if isinstance(raw, Direction):
            return raw
        if isinstance(raw, str):
            return _NAMES.get(raw.strip().lower())
        if isinstance(raw, (tuple, list)) and len(raw) == 2:
            if not all(isinstance(v, int) and not isinstance(v, bool) for v in raw):
                return None
            try:
                return cls(tuple(raw))
            except ValueError:
                return None
        return None


_NAMES: dict[str, Direction] = {
    "up": Direction.UP,
    "w": Direction.UP,
    "down": Direction.DOWN,
    "s": Direction.DOWN,
    "left": Direction.LEFT,
    "a": Direction.LEFT,
    "right": Direction.RIGHT,
    "d": Direction.RIGHT,
}


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(self, cells: Iterable[Cell]) -> None:
        self.body: deque[Cell] = deque((int(x), int(y)) for x, y in cells)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        if len(set(self.body)) != len(self.body):
            raise ValueError("Snake cells must be distinct.")

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Cell:
        """Return the tail coordinate."""
        return self.body[-1]

    def next_head(self, direction: Direction) -> Cell:
        """Compute the cell the head would enter moving in *direction*."""
        x, y = self.head
        return x + direction.dx, y + direction.dy

    def push_head(self, cell: Cell) -> None:
        self.body.appendleft(cell)

    def pop_tail(self) -> Cell:
        """Remove and return the tail cell."""
        return self.body.pop()

    def shift(self, dx: int, dy: int) -> None:
        """Translate every segment by a constant offset."""
        self.body = deque((x + dx, y + dy) for x, y in self.body)

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "length": len(self.body),
        }
