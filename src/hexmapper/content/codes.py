from __future__ import annotations

from enum import Enum

from hexmapper.mapping.coords import Direction

SCHEMA_VERSION = "tn-map.v0"

DIRECTION_CODES = frozenset(direction.value for direction in Direction)


class Bearing(str, Enum):
    """Compass point used for far-horizon sightings."""

    N = "N"
    NNE = "NNE"
    NE = "NE"
    E = "E"
    SE = "SE"
    SSE = "SSE"
    S = "S"
    SSW = "SSW"
    SW = "SW"
    W = "W"
    NW = "NW"
    NNW = "NNW"


BEARING_CODES = frozenset(bearing.value for bearing in Bearing)

# Report terrain code -> renderer tile name.
TERRAIN_TILE_NAMES: dict[str, str] = {
    "ALPS": "Mountains",
    "AH": "Hills",
    "AR": "Flat Moss",
    "BF": "Flat Shrubland",
    "BH": "Hills Shrubland",
    "CH": "Hills Forest Evergreen",
    "D": "Flat Forest Deciduous Heavy",
    "DH": "Hills Forest Deciduous",
    "DE": "Flat Desert Sandy",
    "GH": "Hills Grassland",
    "GHP": "Hills Grassy",
    "HSM": "Mountain Snowcapped",
    "JG": "Flat Forest Jungle Heavy",
    "JH": "Hills Forest Jungle",
    "L": "Water Shoals",
    "LAM": "Mountains Dead Forest",
    "LCM": "Mountains Forest Evergreen",
    "LJM": "Mountain Forest Jungle",
    "LSM": "Mountains Snowcapped",
    "LVM": "Mountain Volcano Dormant",
    "O": "Water Sea",
    "PI": "Mountains Glacier",
    "PPR": "Flat Grassland",
    "PR": "Flat Grazing Land",
    "RH": "Underdark Broken Lands",
    "SH": "Flat Snowfields",
    "SW": "Flat Swamp",
    "TU": "Flat Steppe",
    "UJS": "Flat Forest Wetlands",
    "UL": "Flat Moss",
    "UM": "Mountain Forest Mixed",
    "UW": "Water Reefs",
}
TERRAIN_CODES = frozenset(TERRAIN_TILE_NAMES)
WATER_TERRAIN_CODES = frozenset({"L", "O", "UW"})
MOUNTAIN_TERRAIN_CODES = frozenset({"ALPS", "HSM", "LAM", "LCM", "LJM", "LSM", "LVM", "PI", "UM"})
HILL_TERRAIN_CODES = frozenset({"AH", "BH", "CH", "DH", "GH", "GHP", "JH", "RH", "SH"})

RESOURCE_CODES = frozenset(
    {
        "Coal",
        "Copper Ore",
        "Diamond",
        "Frankincense",
        "Gold",
        "Iron Ore",
        "Jade",
        "Kaolin",
        "Lead Ore",
        "Limestone",
        "Nickel Ore",
        "Pearls",
        "Pyrite",
        "Rubies",
        "Salt",
        "Silver",
        "Sulphur",
        "Tin Ore",
        "Vanadium Ore",
        "Zinc Ore",
    }
)

EDGE_FEATURE_CODES: tuple[str, ...] = ("Canal", "Ford", "Pass", "River", "Stone Road")
