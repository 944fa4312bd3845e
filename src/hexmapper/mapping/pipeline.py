from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from hexmapper.mapping.bounds import MapBounds, compute_bounds
from hexmapper.mapping.coords import MapCoord
from hexmapper.mapping.events import flatten_events, sort_events
from hexmapper.mapping.merge import TileState, merge_tiles
from hexmapper.mapping.model import Document
from hexmapper.mapping.render import RenderMap, build_render_map
from hexmapper.mapping.specials import SpecialRegistry, collect_special_registry, promote_special_hexes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    tiles: dict[MapCoord, TileState]
    bounds: MapBounds
    registry: SpecialRegistry
    render_map: RenderMap
    event_count: int


def filter_documents(documents: Iterable[Document], max_turn: str | None) -> list[Document]:
    kept = list(documents)
    if max_turn is None:
        return kept
    dropped = [document for document in kept if document.turn > max_turn]
    for document in dropped:
        logger.info("skipping turn=%s clan=%s after cutoff %s", document.turn, document.clan, max_turn)
    return [document for document in kept if document.turn <= max_turn]


def run_pipeline(documents: Iterable[Document], owning_clan: str, *, max_turn: str | None = None) -> RenderResult:
    """Flatten, sort, merge, bound, promote and adapt validated documents."""
    selected = filter_documents(documents, max_turn)

    events = sort_events(flatten_events(selected), owning_clan)
    tiles = merge_tiles(events)
    if not tiles:
        raise ValueError("no tiles to render")

    bounds = compute_bounds(tiles)
    registry = collect_special_registry(selected)
    promote_special_hexes(tiles, registry)

    last_turn = max(document.turn for document in selected)
    render_map = build_render_map(tiles, bounds, owning_clan, turn=last_turn)
    logger.info("pipeline documents=%d events=%d tiles=%d", len(selected), len(events), len(tiles))
    return RenderResult(
        tiles=tiles,
        bounds=bounds,
        registry=registry,
        render_map=render_map,
        event_count=len(events),
    )
