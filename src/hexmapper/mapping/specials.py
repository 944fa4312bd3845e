from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable, Iterator

from hexmapper.mapping.coords import MapCoord
from hexmapper.mapping.merge import TileState
from hexmapper.mapping.model import Document, SpecialHex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecialLocation:
    name: str
    turn: str = ""


class SpecialRegistry(Mapping[str, SpecialLocation]):
    """Read-only special-location lookup keyed by lower-cased name."""

    def __init__(self, locations: Iterable[SpecialLocation] = ()) -> None:
        self._locations: dict[str, SpecialLocation] = {}
        for location in locations:
            self._locations.setdefault(location.name.lower(), location)

    def __getitem__(self, name: str) -> SpecialLocation:
        return self._locations[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._locations

    def __iter__(self) -> Iterator[str]:
        return iter(self._locations)

    def __len__(self) -> int:
        return len(self._locations)


def collect_special_registry(documents: Iterable[Document]) -> SpecialRegistry:
    """Gather special hexes from every document, earliest turn first; the first spelling of a name wins."""
    registry = SpecialRegistry(
        SpecialLocation(name=special.name, turn=document.turn)
        for document in sorted(documents, key=lambda entry: (entry.turn, entry.clan))
        for special in document.special_hexes
    )
    logger.debug("special registry entries=%d", len(registry))
    return registry


def promote_special_hexes(tiles: dict[MapCoord, TileState], registry: SpecialRegistry) -> int:
    """Move settlements named in the registry into each tile's specials list.

    Specials take the registry's spelling and names differing only in case
    collapse to one entry. Returns the number of settlements promoted.
    """
    promoted = 0
    for tile in tiles.values():
        settlements = []
        specials = list(tile.specials)
        for settlement in tile.settlements:
            if settlement.name not in registry:
                settlements.append(settlement)
                continue
            promoted += 1
            location = registry[settlement.name]
            logger.debug(
                "promote %s: %r as special %r (listed turn=%s)",
                tile.location.to_grid(),
                settlement.name,
                location.name,
                location.turn,
            )
            if all(special.name.lower() != location.name.lower() for special in specials):
                specials.append(SpecialHex(name=location.name))
        tile.settlements = tuple(settlements)
        tile.specials = tuple(specials)
    logger.debug("promote specials=%d", promoted)
    return promoted
