from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from hexmapper.mapping.coords import Direction, MapCoord
from hexmapper.mapping.events import ObservationEvent
from hexmapper.mapping.model import CompassPoint, Edge, Encounter, Note, Settlement, SpecialHex

logger = logging.getLogger(__name__)

DIRECTION_ORDER: tuple[Direction, ...] = tuple(Direction)


@dataclass
class TileState:
    """Everything known about one hex after folding in the ordered events."""

    location: MapCoord
    terrain: str = ""
    edges: dict[Direction, Edge] = field(default_factory=dict)
    resources: tuple[str, ...] = ()
    settlements: tuple[Settlement, ...] = ()
    specials: tuple[SpecialHex, ...] = ()
    encounters: tuple[Encounter, ...] = ()
    compass_points: tuple[CompassPoint, ...] = ()
    was_visited: bool = False
    was_scouted: bool = False
    notes: list[Note] = field(default_factory=list)
    last_turn: str = ""

    def apply(self, event: ObservationEvent) -> None:
        observation = event.observation

        if observation.terrain:
            if self.terrain and self.terrain != observation.terrain:
                logger.debug(
                    "terrain %s: %s -> %s (turn=%s clan=%s unit=%s)",
                    self.location.to_grid(),
                    self.terrain,
                    observation.terrain,
                    event.turn,
                    event.clan,
                    event.unit,
                )
            self.terrain = observation.terrain

        self.was_visited = self.was_visited or event.was_visited
        self.was_scouted = self.was_scouted or event.was_scouted

        for edge in observation.edges:
            if edge.has_information:
                self.edges[edge.direction] = edge

        # None means the report was silent; an empty tuple clears.
        if observation.resources is not None:
            self.resources = observation.resources
        if observation.settlements is not None:
            self.settlements = observation.settlements
        if observation.encounters is not None:
            self.encounters = observation.encounters
        if observation.compass_points is not None:
            self.compass_points = observation.compass_points

        self.notes.extend(observation.notes)
        self.last_turn = event.turn

    def ordered_edges(self) -> list[Edge]:
        return [self.edges[direction] for direction in DIRECTION_ORDER if direction in self.edges]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"location": self.location.to_grid()}
        if self.terrain:
            data["terrain"] = self.terrain
        if self.edges:
            data["edges"] = [edge.to_dict() for edge in self.ordered_edges()]
        if self.resources:
            data["resources"] = list(self.resources)
        if self.settlements:
            data["settlements"] = [settlement.to_dict() for settlement in self.settlements]
        if self.specials:
            data["specialHexes"] = [special.to_dict() for special in self.specials]
        if self.encounters:
            data["encounters"] = [encounter.to_dict() for encounter in self.encounters]
        if self.compass_points:
            data["compassPoints"] = [point.to_dict() for point in self.compass_points]
        if self.was_visited:
            data["wasVisited"] = True
        if self.was_scouted:
            data["wasScouted"] = True
        if self.notes:
            data["notes"] = [note.to_dict() for note in self.notes]
        if self.last_turn:
            data["lastTurn"] = self.last_turn
        return data


def merge_tiles(events: Iterable[ObservationEvent]) -> dict[MapCoord, TileState]:
    """Fold already-sorted events into one TileState per location, strictly in order."""
    tiles: dict[MapCoord, TileState] = {}
    count = 0
    for event in events:
        tile = tiles.get(event.location)
        if tile is None:
            tile = TileState(location=event.location)
            tiles[event.location] = tile
        tile.apply(event)
        count += 1
    logger.debug("merge events=%d tiles=%d", count, len(tiles))
    return tiles


def dump_merged_tiles(tiles: dict[MapCoord, TileState]) -> list[dict[str, Any]]:
    return [tiles[location].to_dict() for location in sorted(tiles)]
