from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, TypeVar

from hexmapper.mapping.coords import Direction

T = TypeVar("T")


class ReportState(str, Enum):
    """Whether an observation said anything about a list field."""

    NOT_REPORTED = "not_reported"
    EMPTY = "empty"
    VALUES = "values"


def report_state(values: tuple[Any, ...] | None) -> ReportState:
    if values is None:
        return ReportState.NOT_REPORTED
    if not values:
        return ReportState.EMPTY
    return ReportState.VALUES


def _reported_tuple(data: dict[str, Any], key: str, build: Callable[[Any], T]) -> tuple[T, ...] | None:
    raw = data.get(key)
    if raw is None:
        return None
    return tuple(build(item) for item in raw)


def _put_reported(data: dict[str, Any], key: str, values: tuple[Any, ...] | None, dump: Callable[[Any], Any]) -> None:
    if values is not None:
        data[key] = [dump(item) for item in values]


def _put_if(data: dict[str, Any], key: str, value: Any) -> None:
    if value:
        data[key] = value


def unit_clan(unit_id: str) -> str:
    """Clan id owning a unit: tribes 1987 -> 0987, elements/scouts 2987e1s3 -> 0987."""
    tribe = unit_id if len(unit_id) == 4 else unit_id[:4]
    return "0" + tribe[1:]


def unit_in_clan(unit_id: str, clan_id: str) -> bool:
    return len(unit_id) >= 4 and unit_clan(unit_id) == clan_id


@dataclass(frozen=True)
class Note:
    kind: str = ""
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        _put_if(data, "kind", self.kind)
        _put_if(data, "message", self.message)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Note":
        return cls(kind=str(data.get("kind") or ""), message=str(data.get("message") or ""))


@dataclass(frozen=True)
class Encounter:
    unit: str

    def to_dict(self) -> dict[str, Any]:
        return {"unit": self.unit}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Encounter":
        return cls(unit=str(data["unit"]))


@dataclass(frozen=True)
class Settlement:
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settlement":
        return cls(name=str(data["name"]))


@dataclass(frozen=True)
class SpecialHex:
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SpecialHex":
        return cls(name=str(data["name"]))


@dataclass(frozen=True)
class Edge:
    direction: Direction
    feature: str = ""
    neighbor_terrain: str = ""
    raw_edge: str = ""

    @property
    def has_information(self) -> bool:
        return bool(self.feature or self.neighbor_terrain or self.raw_edge)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"dir": self.direction.value}
        _put_if(data, "feature", self.feature)
        _put_if(data, "neighborTerrain", self.neighbor_terrain)
        _put_if(data, "rawEdge", self.raw_edge)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Edge":
        return cls(
            direction=Direction(data["dir"]),
            feature=str(data.get("feature") or ""),
            neighbor_terrain=str(data.get("neighborTerrain") or ""),
            raw_edge=str(data.get("rawEdge") or ""),
        )


@dataclass(frozen=True)
class CompassPoint:
    bearing: str
    location: str = ""
    feature: str = ""
    neighbor_terrain: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"bearing": self.bearing}
        _put_if(data, "location", self.location)
        _put_if(data, "feature", self.feature)
        _put_if(data, "neighborTerrain", self.neighbor_terrain)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompassPoint":
        return cls(
            bearing=str(data["bearing"]),
            location=str(data.get("location") or ""),
            feature=str(data.get("feature") or ""),
            neighbor_terrain=str(data.get("neighborTerrain") or ""),
        )


@dataclass(frozen=True)
class Observation:
    """Facts reported about one hex at the end of a movement step.

    ``resources``, ``settlements``, ``encounters`` and ``compass_points`` are
    ``None`` when the report did not mention them and a (possibly empty)
    tuple when it did. See :func:`report_state`.
    """

    location: str
    terrain: str = ""
    edges: tuple[Edge, ...] = ()
    resources: tuple[str, ...] | None = None
    settlements: tuple[Settlement, ...] | None = None
    encounters: tuple[Encounter, ...] | None = None
    compass_points: tuple[CompassPoint, ...] | None = None
    was_visited: bool = False
    was_scouted: bool = False
    notes: tuple[Note, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"location": self.location}
        _put_if(data, "terrain", self.terrain)
        _put_if(data, "edges", [edge.to_dict() for edge in self.edges])
        _put_reported(data, "encounters", self.encounters, Encounter.to_dict)
        _put_reported(data, "settlements", self.settlements, Settlement.to_dict)
        _put_reported(data, "resources", self.resources, str)
        _put_reported(data, "compassPoints", self.compass_points, CompassPoint.to_dict)
        _put_if(data, "wasVisited", self.was_visited)
        _put_if(data, "wasScouted", self.was_scouted)
        _put_if(data, "notes", [note.to_dict() for note in self.notes])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Observation":
        return cls(
            location=str(data.get("location") or ""),
            terrain=str(data.get("terrain") or ""),
            edges=tuple(Edge.from_dict(row) for row in data.get("edges") or ()),
            resources=_reported_tuple(data, "resources", str),
            settlements=_reported_tuple(data, "settlements", Settlement.from_dict),
            encounters=_reported_tuple(data, "encounters", Encounter.from_dict),
            compass_points=_reported_tuple(data, "compassPoints", CompassPoint.from_dict),
            was_visited=bool(data.get("wasVisited", False)),
            was_scouted=bool(data.get("wasScouted", False)),
            notes=tuple(Note.from_dict(row) for row in data.get("notes") or ()),
        )


@dataclass(frozen=True)
class MoveStep:
    ending_location: str = ""
    intent: str = ""
    advance: str = ""
    follows: str = ""
    goes_to: str = ""
    still: bool = False
    result: str = ""
    observation: Observation | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"intent": self.intent, "endingLocation": self.ending_location}
        _put_if(data, "advance", self.advance)
        _put_if(data, "follows", self.follows)
        _put_if(data, "goesTo", self.goes_to)
        _put_if(data, "still", self.still)
        _put_if(data, "result", self.result)
        if self.observation is not None:
            data["observation"] = self.observation.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MoveStep":
        observation = data.get("observation")
        return cls(
            ending_location=str(data.get("endingLocation") or ""),
            intent=str(data.get("intent") or ""),
            advance=str(data.get("advance") or ""),
            follows=str(data.get("follows") or ""),
            goes_to=str(data.get("goesTo") or ""),
            still=bool(data.get("still", False)),
            result=str(data.get("result") or ""),
            observation=Observation.from_dict(observation) if observation is not None else None,
        )


@dataclass(frozen=True)
class Moves:
    unit_id: str = ""
    follows: str = ""
    goes_to: str = ""
    steps: tuple[MoveStep, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.unit_id}
        _put_if(data, "follows", self.follows)
        _put_if(data, "goesTo", self.goes_to)
        _put_if(data, "steps", [step.to_dict() for step in self.steps])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Moves":
        return cls(
            unit_id=str(data.get("id") or ""),
            follows=str(data.get("follows") or ""),
            goes_to=str(data.get("goesTo") or ""),
            steps=tuple(MoveStep.from_dict(row) for row in data.get("steps") or ()),
        )


@dataclass(frozen=True)
class ScoutRun:
    """A scout's movement chain; it starts where the owning unit ended the turn."""

    scout_id: str = ""
    starting_location: str = ""
    steps: tuple[MoveStep, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.scout_id}
        _put_if(data, "startingLocation", self.starting_location)
        _put_if(data, "steps", [step.to_dict() for step in self.steps])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScoutRun":
        return cls(
            scout_id=str(data.get("id") or ""),
            starting_location=str(data.get("startingLocation") or ""),
            steps=tuple(MoveStep.from_dict(row) for row in data.get("steps") or ()),
        )


@dataclass(frozen=True)
class Unit:
    unit_id: str
    ending_location: str = ""
    moves: tuple[Moves, ...] = ()
    scouts: tuple[ScoutRun, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.unit_id, "endingLocation": self.ending_location}
        _put_if(data, "moves", [moves.to_dict() for moves in self.moves])
        _put_if(data, "scouts", [scout.to_dict() for scout in self.scouts])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Unit":
        return cls(
            unit_id=str(data["id"]),
            ending_location=str(data.get("endingLocation") or ""),
            moves=tuple(Moves.from_dict(row) for row in data.get("moves") or ()),
            scouts=tuple(ScoutRun.from_dict(row) for row in data.get("scouts") or ()),
        )


@dataclass(frozen=True)
class Clan:
    clan_id: str
    units: tuple[Unit, ...] = ()
    notes: tuple[Note, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.clan_id}
        _put_if(data, "units", [unit.to_dict() for unit in self.units])
        _put_if(data, "notes", [note.to_dict() for note in self.notes])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Clan":
        return cls(
            clan_id=str(data["id"]),
            units=tuple(Unit.from_dict(row) for row in data.get("units") or ()),
            notes=tuple(Note.from_dict(row) for row in data.get("notes") or ()),
        )


@dataclass(frozen=True)
class Document:
    """One turn of observations for one game, as produced by the report parser."""

    schema: str
    game: str
    turn: str
    clan: str
    clans: tuple[Clan, ...] = ()
    special_hexes: tuple[SpecialHex, ...] = ()
    notes: tuple[Note, ...] = ()
    source: str = ""
    created: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "schema": self.schema,
            "game": self.game,
            "turn": self.turn,
            "clan": self.clan,
        }
        _put_if(data, "source", self.source)
        _put_if(data, "created", self.created)
        _put_if(data, "notes", [note.to_dict() for note in self.notes])
        _put_if(data, "specialHexes", [special.to_dict() for special in self.special_hexes])
        _put_if(data, "clans", [clan.to_dict() for clan in self.clans])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        return cls(
            schema=str(data["schema"]),
            game=str(data["game"]),
            turn=str(data["turn"]),
            clan=str(data["clan"]),
            clans=tuple(Clan.from_dict(row) for row in data.get("clans") or ()),
            special_hexes=tuple(SpecialHex.from_dict(row) for row in data.get("specialHexes") or ()),
            notes=tuple(Note.from_dict(row) for row in data.get("notes") or ()),
            source=str(data.get("source") or ""),
            created=str(data.get("created") or ""),
        )


@dataclass(frozen=True)
class LoadedDocument:
    """A document plus the file name used in messages."""

    source: str
    document: Document
