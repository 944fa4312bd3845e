from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from hexmapper.mapping.coords import Direction, MapCoord

logger = logging.getLogger(__name__)

MARGIN_COLUMNS = 4
MARGIN_ROWS = 4


@dataclass(frozen=True)
class MapBounds:
    upper_left: MapCoord
    lower_right: MapCoord
    offset: MapCoord

    @property
    def width(self) -> int:
        return self.lower_right.column - self.upper_left.column + 1

    @property
    def height(self) -> int:
        return self.lower_right.row - self.upper_left.row + 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "upperLeft": self.upper_left.to_grid(),
            "lowerRight": self.lower_right.to_grid(),
            "offset": {"column": self.offset.column, "row": self.offset.row},
        }


def align_render_corner(corner: MapCoord) -> MapCoord:
    """Move a corner so its local column and local row are both odd.

    The row is fixed first (step north), then the column (step northwest);
    in that order a single pass always lands on a valid hex.
    """
    aligned = corner
    if aligned.local_row % 2 == 0:
        aligned = aligned.neighbor(Direction.N)
    if aligned.local_column % 2 == 0:
        aligned = aligned.neighbor(Direction.NW)
    return aligned


def compute_bounds(locations: Iterable[MapCoord]) -> MapBounds:
    coords = list(locations)
    if not coords:
        raise ValueError("cannot compute bounds of an empty map")

    upper_left = MapCoord(
        column=min(coord.column for coord in coords),
        row=min(coord.row for coord in coords),
    )
    lower_right = MapCoord(
        column=max(coord.column for coord in coords),
        row=max(coord.row for coord in coords),
    )

    column = upper_left.column - MARGIN_COLUMNS if upper_left.column > MARGIN_COLUMNS else 0
    row = upper_left.row - MARGIN_ROWS if upper_left.row > MARGIN_ROWS else 0
    offset = align_render_corner(MapCoord(column=column, row=row))

    logger.debug(
        "bounds upper_left=%s lower_right=%s offset=%s",
        upper_left.to_grid(),
        lower_right.to_grid(),
        offset.to_grid(),
    )
    return MapBounds(upper_left=upper_left, lower_right=lower_right, offset=offset)
