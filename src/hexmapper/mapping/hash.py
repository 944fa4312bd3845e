from __future__ import annotations

import hashlib
import json
from typing import Any

from hexmapper.mapping.coords import MapCoord
from hexmapper.mapping.merge import TileState, dump_merged_tiles


def payload_hash(payload: Any) -> str:
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def merged_state_hash(tiles: dict[MapCoord, TileState]) -> str:
    return payload_hash(dump_merged_tiles(tiles))
