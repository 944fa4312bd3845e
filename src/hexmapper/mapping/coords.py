from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

GRID_COLUMNS = 30
GRID_ROWS = 21
GRID_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
MAP_COLUMNS = len(GRID_LETTERS) * GRID_COLUMNS
MAP_ROWS = len(GRID_LETTERS) * GRID_ROWS


class InvalidCoordinatesError(ValueError):
    pass


class Direction(str, Enum):
    """Hex edge direction for flat-topped hexes."""

    N = "N"
    NE = "NE"
    SE = "SE"
    S = "S"
    SW = "SW"
    NW = "NW"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.N: Direction.S,
    Direction.NE: Direction.SW,
    Direction.SE: Direction.NW,
    Direction.S: Direction.N,
    Direction.SW: Direction.NE,
    Direction.NW: Direction.SE,
}

# Keyed on the zero-based map column; local column 01 is map column 0.
EVEN_COLUMN_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, -1),
    Direction.NE: (1, -1),
    Direction.SE: (1, 0),
    Direction.S: (0, 1),
    Direction.SW: (-1, 0),
    Direction.NW: (-1, -1),
}

ODD_COLUMN_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, -1),
    Direction.NE: (1, 0),
    Direction.SE: (1, 1),
    Direction.S: (0, 1),
    Direction.SW: (-1, 1),
    Direction.NW: (-1, 0),
}


@dataclass(frozen=True)
class GridCoord:
    """Human-facing "AB 0102" location: grid row, grid column, local column, local row."""

    grid_row: int
    grid_column: int
    local_column: int
    local_row: int

    def __post_init__(self) -> None:
        if not 0 <= self.grid_row < len(GRID_LETTERS) or not 0 <= self.grid_column < len(GRID_LETTERS):
            raise InvalidCoordinatesError(f"grid out of range: ({self.grid_row}, {self.grid_column})")
        if not 1 <= self.local_column <= GRID_COLUMNS:
            raise InvalidCoordinatesError(f"local column out of range: {self.local_column}")
        if not 1 <= self.local_row <= GRID_ROWS:
            raise InvalidCoordinatesError(f"local row out of range: {self.local_row}")

    def __str__(self) -> str:
        return (
            f"{GRID_LETTERS[self.grid_row]}{GRID_LETTERS[self.grid_column]} "
            f"{self.local_column:02d}{self.local_row:02d}"
        )

    @classmethod
    def parse(cls, text: Any) -> "GridCoord":
        if not isinstance(text, str) or len(text) != 7 or text[2] != " ":
            raise InvalidCoordinatesError(f"invalid grid coordinates: {text!r}")
        grid, digits = text[:2], text[3:]
        if any(letter not in GRID_LETTERS for letter in grid):
            raise InvalidCoordinatesError(f"invalid grid coordinates: {text!r}")
        if not (digits.isascii() and digits.isdigit()):
            raise InvalidCoordinatesError(f"invalid grid coordinates: {text!r}")
        return cls(
            grid_row=GRID_LETTERS.index(grid[0]),
            grid_column=GRID_LETTERS.index(grid[1]),
            local_column=int(digits[:2]),
            local_row=int(digits[2:]),
        )

    def to_map(self) -> "MapCoord":
        return MapCoord(
            column=self.grid_column * GRID_COLUMNS + self.local_column - 1,
            row=self.grid_row * GRID_ROWS + self.local_row - 1,
        )


@dataclass(frozen=True, order=True)
class MapCoord:
    """Zero-based absolute map coordinate; columns increase east, rows south."""

    column: int
    row: int

    @classmethod
    def from_grid(cls, text: Any) -> "MapCoord":
        return GridCoord.parse(text).to_map()

    @property
    def is_on_map(self) -> bool:
        return 0 <= self.column < MAP_COLUMNS and 0 <= self.row < MAP_ROWS

    @property
    def local_column(self) -> int:
        return self.column % GRID_COLUMNS + 1

    @property
    def local_row(self) -> int:
        return self.row % GRID_ROWS + 1

    @property
    def grid_id(self) -> str:
        return self.to_grid()[:2]

    def to_grid_coord(self) -> GridCoord:
        if not self.is_on_map:
            raise InvalidCoordinatesError(f"map coordinate off the world map: ({self.column}, {self.row})")
        return GridCoord(
            grid_row=self.row // GRID_ROWS,
            grid_column=self.column // GRID_COLUMNS,
            local_column=self.local_column,
            local_row=self.local_row,
        )

    def to_grid(self) -> str:
        return str(self.to_grid_coord())

    def neighbor(self, direction: Direction) -> "MapCoord":
        vectors = ODD_COLUMN_VECTORS if self.column % 2 else EVEN_COLUMN_VECTORS
        dc, dr = vectors[Direction(direction)]
        return MapCoord(self.column + dc, self.row + dr)

    def move(self, *directions: Direction) -> "MapCoord":
        current = self
        for direction in directions:
            current = current.neighbor(direction)
        return current

    def to_cube(self) -> "CubeCoord":
        q = self.column
        r = self.row - (self.column - (self.column & 1)) // 2
        return CubeCoord(q=q, r=r, s=-q - r)

    def distance(self, other: "MapCoord") -> int:
        return self.to_cube().distance(other.to_cube())


_CUBE_DIRECTIONS: dict[Direction, tuple[int, int, int]] = {
    Direction.N: (0, -1, 1),
    Direction.NE: (1, -1, 0),
    Direction.SE: (1, 0, -1),
    Direction.S: (0, 1, -1),
    Direction.SW: (-1, 1, 0),
    Direction.NW: (-1, 0, 1),
}


@dataclass(frozen=True, order=True)
class CubeCoord:
    """Cube coordinate for the odd-q layout (odd map columns shoved down)."""

    q: int
    r: int
    s: int

    def __post_init__(self) -> None:
        if self.q + self.r + self.s != 0:
            raise ValueError("cube coordinates must satisfy q + r + s == 0")

    def neighbor(self, direction: Direction) -> "CubeCoord":
        dq, dr, ds = _CUBE_DIRECTIONS[Direction(direction)]
        return CubeCoord(self.q + dq, self.r + dr, self.s + ds)

    def distance(self, other: "CubeCoord") -> int:
        return max(abs(self.q - other.q), abs(self.r - other.r), abs(self.s - other.s))

    def to_map(self) -> MapCoord:
        return MapCoord(column=self.q, row=self.r + (self.q - (self.q & 1)) // 2)


def is_valid_grid(text: Any) -> bool:
    try:
        GridCoord.parse(text)
    except InvalidCoordinatesError:
        return False
    return True
