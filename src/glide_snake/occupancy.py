"""Constant-time membership index over the cells covered by the snake."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np

from glide_snake.snake import Cell


class OccupancyIndex:
    """Hash-set mirror of the snake body.

    The engine keeps it in lockstep with the snake: the new head is added and
    the vacated tail discarded every tick. A full :meth:`rebuild` only happens
    at run start and after the grid grows and every coordinate shifts.
    """

    def __init__(self, cells: Iterable[Cell] = ()) -> None:
        self._cells: set[Cell] = set(cells)

    def __contains__(self, cell: object) -> bool:
        return cell in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OccupancyIndex):
            return self._cells == other._cells
        if isinstance(other, (set, frozenset)):
            return self._cells == other
        return NotImplemented

    __hash__ = None  # mutable

    def add(self, cell: Cell) -> None:
        self._cells.add(cell)

    def discard(self, cell: Cell) -> None:
        self._cells.discard(cell)

    def rebuild(self, cells: Iterable[Cell]) -> None:
        """Replace the index contents with *cells*."""
        self._cells = set(cells)

    def to_mask(self, grid_size: int) -> np.ndarray:
        """Boolean ``(grid_size, grid_size)`` mask indexed ``[y, x]``.

        Cells outside the board are left out.
        """
        mask = np.zeros((grid_size, grid_size), dtype=bool)
        for x, y in self._cells:
            if 0 <= x < grid_size and 0 <= y < grid_size:
                mask[y, x] = True
        return mask
