from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Collection, Iterable

from hexmapper.content.codes import (
    BEARING_CODES,
    DIRECTION_CODES,
    EDGE_FEATURE_CODES,
    RESOURCE_CODES,
    SCHEMA_VERSION,
    TERRAIN_CODES,
)
from hexmapper.mapping.coords import InvalidCoordinatesError, MapCoord

TURN_ID_PATTERN = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])")


@dataclass(frozen=True)
class ValidationIssue:
    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


class DocumentValidationError(ValueError):
    """Raised once with every issue found across all input documents."""

    def __init__(self, issues: Iterable[ValidationIssue]) -> None:
        self.issues = tuple(issues)
        super().__init__(f"validation failed ({len(self.issues)} errors)")


def is_valid_turn_id(value: Any) -> bool:
    return isinstance(value, str) and TURN_ID_PATTERN.fullmatch(value) is not None


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _is_code(value: Any, codes: Collection[str]) -> bool:
    return isinstance(value, str) and value in codes


class _IssueCollector:
    def __init__(self, source: str) -> None:
        self.source = source
        self.issues: list[ValidationIssue] = []

    def add(self, prefix: str, message: str) -> None:
        text = f"{prefix}: {message}" if prefix else message
        self.issues.append(ValidationIssue(source=self.source, message=text))

    def check_location(self, prefix: str, field_name: str, value: Any, *, required: bool = False) -> None:
        if value is None or value == "":
            if required:
                self.add(prefix, f"{field_name} is required")
            return
        try:
            MapCoord.from_grid(value)
        except InvalidCoordinatesError as exc:
            self.add(prefix, f"{field_name} {value!r}: {exc}")

    def check_flag(self, prefix: str, container: dict[str, Any], key: str) -> None:
        value = container.get(key)
        if value is not None and not isinstance(value, bool):
            self.add(prefix, f"{key} {value!r}: must be true or false")

    def check_terrain(self, prefix: str, field_name: str, value: Any) -> None:
        if value is None or value == "":
            return
        if not _is_code(value, TERRAIN_CODES):
            self.add(prefix, f"{field_name}: unknown terrain {value!r}")

    def list_field(self, prefix: str, container: dict[str, Any], key: str) -> list[Any]:
        value = container.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            self.add(prefix, f"{key} must be a list")
            return []
        return value

    def object_rows(self, prefix: str, container: dict[str, Any], key: str) -> list[tuple[int, dict[str, Any]]]:
        rows: list[tuple[int, dict[str, Any]]] = []
        for index, row in enumerate(self.list_field(prefix, container, key)):
            if not isinstance(row, dict):
                self.add(prefix, f"{key}[{index}] must be an object")
                continue
            rows.append((index, row))
        return rows


def _validate_observation(collector: _IssueCollector, prefix: str, observation: Any) -> None:
    if not isinstance(observation, dict):
        collector.add(prefix, "must be an object")
        return

    collector.check_location(prefix, "location", observation.get("location"), required=True)
    collector.check_terrain(prefix, "terrain", observation.get("terrain"))
    collector.check_flag(prefix, observation, "wasVisited")
    collector.check_flag(prefix, observation, "wasScouted")

    for index, edge in collector.object_rows(prefix, observation, "edges"):
        direction = edge.get("dir")
        if not _is_code(direction, DIRECTION_CODES):
            collector.add(prefix, f"edges[{index}]: invalid direction {direction!r}")
        feature = edge.get("feature")
        if feature and not _is_code(feature, EDGE_FEATURE_CODES):
            collector.add(prefix, f"edges[{index}]: unknown edge feature {feature!r}")
        collector.check_terrain(prefix, f"edges[{index}].neighborTerrain", edge.get("neighborTerrain"))

    for index, point in collector.object_rows(prefix, observation, "compassPoints"):
        bearing = point.get("bearing")
        if not _is_code(bearing, BEARING_CODES):
            collector.add(prefix, f"compassPoints[{index}]: invalid bearing {bearing!r}")
        collector.check_location(prefix, f"compassPoints[{index}].location", point.get("location"))
        feature = point.get("feature")
        if feature and not _is_code(feature, EDGE_FEATURE_CODES):
            collector.add(prefix, f"compassPoints[{index}]: unknown edge feature {feature!r}")
        collector.check_terrain(prefix, f"compassPoints[{index}].neighborTerrain", point.get("neighborTerrain"))

    for index, resource in enumerate(collector.list_field(prefix, observation, "resources")):
        if not _is_code(resource, RESOURCE_CODES):
            collector.add(prefix, f"resources[{index}]: unknown resource {resource!r}")

    for index, settlement in collector.object_rows(prefix, observation, "settlements"):
        if not _is_non_empty_string(settlement.get("name")):
            collector.add(prefix, f"settlements[{index}]: name is required")

    for index, encounter in collector.object_rows(prefix, observation, "encounters"):
        if not _is_non_empty_string(encounter.get("unit")):
            collector.add(prefix, f"encounters[{index}]: unit is required")

    collector.object_rows(prefix, observation, "notes")


def _validate_steps(collector: _IssueCollector, chain_prefix: str, step_label: str, chain: dict[str, Any]) -> None:
    for index, step in collector.object_rows(chain_prefix, chain, "steps"):
        step_prefix = f"{step_label}step {index + 1}"
        collector.check_location(step_prefix, "endingLocation", step.get("endingLocation"))
        collector.check_flag(step_prefix, step, "still")
        if step.get("observation") is not None:
            _validate_observation(collector, f"{step_prefix}: observation", step["observation"])


def _validate_unit(collector: _IssueCollector, clan_index: int, unit_index: int, unit: dict[str, Any]) -> None:
    unit_id = unit.get("id")
    if _is_non_empty_string(unit_id):
        unit_prefix = f"unit {unit_id}"
    else:
        unit_prefix = f"clans[{clan_index}].units[{unit_index}]"
        collector.add(unit_prefix, "id is required")

    collector.check_location(unit_prefix, "endingLocation", unit.get("endingLocation"))

    move_chains = collector.object_rows(unit_prefix, unit, "moves")
    for moves_index, moves in move_chains:
        step_label = f"{unit_prefix}: moves[{moves_index}]." if len(move_chains) > 1 else f"{unit_prefix}: "
        _validate_steps(collector, unit_prefix, step_label, moves)

    for scout_index, scout in collector.object_rows(unit_prefix, unit, "scouts"):
        scout_id = scout.get("id")
        if _is_non_empty_string(scout_id):
            chain_prefix = f"{unit_prefix}: scout {scout_id}"
            step_label = f"{chain_prefix}: "
        else:
            chain_prefix = f"{unit_prefix}: scouts[{scout_index}]"
            step_label = f"{chain_prefix}."
        collector.check_location(chain_prefix, "startingLocation", scout.get("startingLocation"))
        _validate_steps(collector, chain_prefix, step_label, scout)


def validate_document_payload(payload: Any, *, source: str) -> list[ValidationIssue]:
    collector = _IssueCollector(source)
    if not isinstance(payload, dict):
        collector.add("", "document payload must be an object")
        return collector.issues

    schema_version = payload.get("schema")
    if schema_version != SCHEMA_VERSION:
        collector.add("", f"schema: got {schema_version!r}, want {SCHEMA_VERSION!r}")

    for key in ("game", "clan"):
        if not _is_non_empty_string(payload.get(key)):
            collector.add("", f"{key} is required")

    turn = payload.get("turn")
    if not _is_non_empty_string(turn):
        collector.add("", "turn is required")
    elif not is_valid_turn_id(turn):
        collector.add("", f"turn {turn!r}: must be YYYY-MM format")

    for index, special in collector.object_rows("", payload, "specialHexes"):
        if not _is_non_empty_string(special.get("name")):
            collector.add("", f"specialHexes[{index}]: name is required")

    collector.object_rows("", payload, "notes")

    for clan_index, clan in collector.object_rows("", payload, "clans"):
        if not _is_non_empty_string(clan.get("id")):
            collector.add(f"clans[{clan_index}]", "id is required")
        for unit_index, unit in collector.object_rows(f"clans[{clan_index}]", clan, "units"):
            _validate_unit(collector, clan_index, unit_index, unit)

    return collector.issues


def validate_documents(payloads: list[tuple[str, Any]]) -> list[ValidationIssue]:
    """Validate every (source, payload) pair and check they all belong to one game."""
    issues: list[ValidationIssue] = []
    for source, payload in payloads:
        issues.extend(validate_document_payload(payload, source=source))

    games = [
        (source, payload.get("game"))
        for source, payload in payloads
        if isinstance(payload, dict) and _is_non_empty_string(payload.get("game"))
    ]
    if games:
        first_source, first_game = games[0]
        for source, game in games[1:]:
            if game != first_game:
                issues.append(
                    ValidationIssue(
                        source=source,
                        message=f"game {game!r} does not match {first_source} game {first_game!r}",
                    )
                )
    return issues
