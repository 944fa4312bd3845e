from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from hexmapper.mapping.coords import MapCoord
from hexmapper.mapping.model import Document, MoveStep, Observation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObservationEvent:
    """One observation of one hex, lifted out of the document tree."""

    turn: str
    clan: str
    unit: str
    location: MapCoord
    observation: Observation
    was_visited: bool = False
    was_scouted: bool = False

    def sort_key(self, owning_clan: str) -> tuple[str, int, str, str]:
        rank = 1 if self.clan == owning_clan else 0
        return (self.turn, rank, self.clan, self.unit)


def _step_events(
    turn: str,
    clan: str,
    unit: str,
    steps: Iterable[MoveStep],
    *,
    scouting: bool,
) -> list[ObservationEvent]:
    events: list[ObservationEvent] = []
    for step in steps:
        observation = step.observation
        if observation is None:
            continue
        events.append(
            ObservationEvent(
                turn=turn,
                clan=clan,
                unit=unit,
                location=MapCoord.from_grid(observation.location),
                observation=observation,
                was_visited=observation.was_visited,
                was_scouted=scouting or observation.was_scouted,
            )
        )
    return events


def flatten_document(document: Document) -> list[ObservationEvent]:
    events: list[ObservationEvent] = []
    for clan in document.clans:
        for unit in clan.units:
            for moves in unit.moves:
                events.extend(_step_events(document.turn, clan.clan_id, unit.unit_id, moves.steps, scouting=False))
            for scout in unit.scouts:
                events.extend(_step_events(document.turn, clan.clan_id, scout.scout_id, scout.steps, scouting=True))
    return events


def flatten_events(documents: Iterable[Document]) -> list[ObservationEvent]:
    """Emit one event per step that carries an observation, in document order."""
    events: list[ObservationEvent] = []
    for document in documents:
        document_events = flatten_document(document)
        logger.debug("flatten turn=%s clan=%s events=%d", document.turn, document.clan, len(document_events))
        events.extend(document_events)
    logger.debug("flatten events=%d", len(events))
    return events


def sort_events(events: Iterable[ObservationEvent], owning_clan: str) -> list[ObservationEvent]:
    """Order events by turn, then other clans before the owning clan, then clan and unit id.

    The sort is stable, so events sharing a key keep their flatten order.
    """
    return sorted(events, key=lambda event: event.sort_key(owning_clan))
