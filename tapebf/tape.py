from __future__ import annotations

from typing import List

CELL_MODULUS = 256


class Tape:
    """Growable run of unsigned 8-bit cells, indexed from 0.

    The tape starts empty and is extended with zero cells on the first
    ``read``/``write`` at or beyond its current length. Cells are never
    removed. ``peek`` is the non-extending lookahead used where an
    unreached cell should simply read as 0.
    """

    def __init__(self) -> None:
        self._cells: List[int] = []

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Tape(length={len(self._cells)})"

    def _ensure(self, pos: int) -> None:
        if pos < 0:
            raise IndexError(f"Tape position must be non-negative: {pos}")
        missing = pos + 1 - len(self._cells)
        if missing > 0:
            self._cells.extend([0] * missing)

    def read(self, pos: int) -> int:
        self._ensure(pos)
        return self._cells[pos]

    def write(self, pos: int, value: int) -> None:
        self._ensure(pos)
        self._cells[pos] = value % CELL_MODULUS

    def peek(self, pos: int) -> int:
        if pos < 0:
            raise IndexError(f"Tape position must be non-negative: {pos}")
        if pos >= len(self._cells):
            return 0
        return self._cells[pos]

    def window(self, start: int, end: int) -> List[int]:
        """Copy of cells ``start..end``; unreached positions read as 0."""
        start = max(0, start)
        view = self._cells[start:end].copy()
        if end > start:
            view.extend([0] * (end - start - len(view)))
        return view

    def cells(self) -> List[int]:
        return self._cells.copy()

    def clear(self) -> None:
        self._cells.clear()


__all__ = ["CELL_MODULUS", "Tape"]
