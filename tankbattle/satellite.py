"""A satellite view backed by an in-memory grid."""

from __future__ import annotations

from .common import SatelliteView

OUT_OF_BOUNDS = "&"


class GridSatelliteView(SatelliteView):
    """A mutable grid of cell symbols, indexed by column then row."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.initialize(width, height)

    def initialize(self, width: int, height: int) -> None:
        """Resize to ``width`` by ``height`` and clear every cell."""
        self.width = width
        self.height = height
        self._grid = [[" "] * height for _ in range(width)]

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_object_at(self, x: int, y: int) -> str:
        """Return the symbol at ``(x, y)``, or ``'&'`` outside the board."""
        if not self._inside(x, y):
            return OUT_OF_BOUNDS
        return self._grid[x][y]

    def set_object_at(self, x: int, y: int, symbol: str) -> None:
        """Place ``symbol`` at ``(x, y)``."""
        if not self._inside(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside a {self.width}x{self.height} board")
        self._grid[x][y] = symbol