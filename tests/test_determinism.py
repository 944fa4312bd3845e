import itertools

from hexmapper.mapping.hash import merged_state_hash, payload_hash
from hexmapper.mapping.model import Document
from hexmapper.mapping.pipeline import run_pipeline


def _step(location: str, **observation: object) -> dict:
    return {"intent": "advance", "endingLocation": location, "observation": {"location": location, **observation}}


def _document(turn: str, clan: str, units: dict[str, list[dict]]) -> Document:
    return Document.from_dict(
        {
            "schema": "tn-map.v0",
            "game": "0300",
            "turn": turn,
            "clan": clan,
            "specialHexes": [{"name": "Old Fort"}],
            "clans": [
                {
                    "id": clan,
                    "units": [
                        {"id": unit, "moves": [{"id": unit, "steps": steps}]} for unit, steps in units.items()
                    ],
                }
            ],
        }
    )


def _documents() -> list[Document]:
    return [
        _document(
            "0901-01",
            "0249",
            {
                "0249": [_step("AC 0505", terrain="PR", settlements=[{"name": "Old Fort"}])],
                "1249e1": [_step("AC 0506", terrain="DH", resources=["Coal"])],
            },
        ),
        _document(
            "0901-01",
            "0331",
            {
                "0331": [_step("AC 0505", terrain="SW", settlements=[{"name": "Mudhole"}])],
                "2331e2": [_step("AC 0506", terrain="O", resources=[])],
            },
        ),
        _document(
            "0902-01",
            "0331",
            {"2331e2": [_step("AC 0505", encounters=[{"unit": "0249"}], notes=[{"message": "tracks"}])]},
        ),
        _document(
            "0902-01",
            "0249",
            {"0249": [_step("AC 0606", terrain="ALPS", edges=[{"dir": "SW", "feature": "Pass"}])]},
        ),
    ]


def test_file_order_does_not_change_merged_state() -> None:
    documents = _documents()
    expected = run_pipeline(documents, "0249")

    for ordering in itertools.permutations(documents):
        result = run_pipeline(list(ordering), "0249")
        assert merged_state_hash(result.tiles) == merged_state_hash(expected.tiles)
        assert payload_hash(result.render_map.to_dict()) == payload_hash(expected.render_map.to_dict())


def test_owning_clan_wins_within_a_turn() -> None:
    result = run_pipeline(_documents(), "0249")
    tiles = {tile.location.to_grid(): tile for tile in result.tiles.values()}

    assert tiles["AC 0505"].terrain == "PR"
    assert [special.name for special in tiles["AC 0505"].specials] == ["Old Fort"]
    assert tiles["AC 0505"].settlements == ()
    assert tiles["AC 0506"].terrain == "DH"
    assert tiles["AC 0506"].resources == ("Coal",)


def test_other_clan_wins_when_it_owns_the_run() -> None:
    result = run_pipeline(_documents(), "0331")
    tiles = {tile.location.to_grid(): tile for tile in result.tiles.values()}

    assert tiles["AC 0505"].terrain == "SW"
    assert [settlement.name for settlement in tiles["AC 0505"].settlements] == ["Mudhole"]
    assert tiles["AC 0505"].specials == ()
    assert tiles["AC 0506"].resources == ()


def test_later_turns_override_earlier_ones() -> None:
    result = run_pipeline(_documents(), "0249")
    tile = next(tile for tile in result.tiles.values() if tile.location.to_grid() == "AC 0505")

    assert [encounter.unit for encounter in tile.encounters] == ["0249"]
    assert [note.message for note in tile.notes] == ["tracks"]
    assert tile.last_turn == "0902-01"
    assert result.event_count == 6
    assert result.render_map.turn == "0902-01"


def test_max_turn_cuts_off_later_documents() -> None:
    result = run_pipeline(_documents(), "0249", max_turn="0901-01")

    assert sorted(tile.location.to_grid() for tile in result.tiles.values()) == ["AC 0505", "AC 0506"]
    assert result.event_count == 4
