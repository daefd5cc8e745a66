"""Tile value type for the 2048 board."""

from __future__ import annotations

from dataclasses import dataclass


# Highest exponent reachable in normal play (65536).
MAX_EXPONENT = 15


@dataclass(frozen=True)
class Tile:
    """A single occupied cell.

    The tile stores its magnitude as a small exponent so that ``Tile(0)`` is
    displayed as ``2``, ``Tile(1)`` as ``4`` and so on up to ``Tile(15)``
    which is ``65536``.
    """

    exponent: int

    @property
    def value(self) -> int:
        """Return the number shown on screen for this tile."""

        return 2 << self.exponent

    def inc(self) -> "Tile":
        """Return the tile produced by merging two copies of this one."""

        return Tile(self.exponent + 1)

    @classmethod
    def from_value(cls, value: int) -> "Tile":
        """Build a tile from its displayed value.

        Raises:
            ValueError: If ``value`` is not a power of two of at least ``2``.
        """

        if value < 2 or value & (value - 1):
            raise ValueError(f"Not a tile value: {value}")
        return cls(value.bit_length() - 2)
