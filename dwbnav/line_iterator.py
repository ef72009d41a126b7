"""Bresenham ray tracing over integer grid cells."""

from __future__ import annotations

from collections.abc import Iterator


class LineIterator:
    """Walks the grid cells of the line from (x0, y0) to (x1, y1), both ends included."""

    def __init__(self, x0: int, y0: int, x1: int, y1: int) -> None:
        self.x0, self.y0, self.x1, self.y1 = x0, y0, x1, y1
        self.x, self.y = x0, y0
        deltax = abs(x1 - x0)
        deltay = abs(y1 - y0)
        self._curpixel = 0

        xstep = 1 if x1 >= x0 else -1
        ystep = 1 if y1 >= y0 else -1

        if deltax >= deltay:
            # At least one x value for every y value.
            self._xinc1, self._xinc2 = 0, xstep
            self._yinc1, self._yinc2 = ystep, 0
            self._den = deltax
            self._num = deltax // 2
            self._numadd = deltay
            self._numpixels = deltax
        else:
            # At least one y value for every x value.
            self._xinc1, self._xinc2 = xstep, 0
            self._yinc1, self._yinc2 = 0, ystep
            self._den = deltay
            self._num = deltay // 2
            self._numadd = deltax
            self._numpixels = deltay

    def is_valid(self) -> bool:
        """True while the current cell still lies on the line."""
        return self._curpixel <= self._numpixels

    def advance(self) -> None:
        """Step to the next cell of the line."""
        self._num += self._numadd
        if self._num >= self._den:
            self._num -= self._den
            self.x += self._xinc1
            self.y += self._yinc1
        self.x += self._xinc2
        self.y += self._yinc2
        self._curpixel += 1

    def __iter__(self) -> Iterator[tuple[int, int]]:
        """Yield the remaining cells as (x, y) pairs."""
        while self.is_valid():
            yield self.x, self.y
            self.advance()