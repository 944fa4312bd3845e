import copy

from hexmapper.content.schema import (
    DocumentValidationError,
    ValidationIssue,
    is_valid_turn_id,
    validate_document_payload,
    validate_documents,
)


def _valid_payload() -> dict:
    return {
        "schema": "tn-map.v0",
        "game": "0300",
        "turn": "0901-02",
        "clan": "0987",
        "clans": [
            {
                "id": "0987",
                "units": [
                    {
                        "id": "0987",
                        "endingLocation": "AB 0102",
                        "moves": [
                            {
                                "id": "0987",
                                "steps": [
                                    {
                                        "intent": "advance",
                                        "endingLocation": "AB 0102",
                                        "observation": {
                                            "location": "AB 0102",
                                            "terrain": "PR",
                                            "edges": [{"dir": "N", "feature": "River"}],
                                            "resources": ["Coal"],
                                            "compassPoints": [{"bearing": "NNE", "location": "AA 0201"}],
                                        },
                                    },
                                    {"intent": "still", "still": True, "endingLocation": "AB 0102"},
                                ],
                            }
                        ],
                        "scouts": [
                            {
                                "id": "0987s1",
                                "startingLocation": "AB 0102",
                                "steps": [
                                    {
                                        "intent": "advance",
                                        "endingLocation": "AB 0202",
                                        "observation": {"location": "AB 0202", "terrain": "SW"},
                                    }
                                ],
                            }
                        ],
                    }
                ],
            }
        ],
    }


def _messages(issues: list[ValidationIssue]) -> list[str]:
    return [issue.message for issue in issues]


def test_valid_payload_has_no_issues() -> None:
    assert validate_document_payload(_valid_payload(), source="a.json") == []


def test_non_object_payload_is_reported() -> None:
    issues = validate_document_payload(["not", "a", "document"], source="a.json")

    assert _messages(issues) == ["document payload must be an object"]
    assert str(issues[0]) == "a.json: document payload must be an object"


def test_header_issues_are_all_collected() -> None:
    payload = _valid_payload()
    payload["schema"] = "tn-map.v9"
    del payload["game"]
    payload["turn"] = "0901-13"

    messages = _messages(validate_document_payload(payload, source="a.json"))

    assert "schema: got 'tn-map.v9', want 'tn-map.v0'" in messages
    assert "game is required" in messages
    assert "turn '0901-13': must be YYYY-MM format" in messages


def test_turn_id_format() -> None:
    assert is_valid_turn_id("0901-01") is True
    assert is_valid_turn_id("0899-12") is True
    assert is_valid_turn_id("0901-00") is False
    assert is_valid_turn_id("901-01") is False
    assert is_valid_turn_id("0901/01") is False
    assert is_valid_turn_id("0901-01\n") is False
    assert is_valid_turn_id("\u0660\u0669\u0660\u0661-01") is False
    assert is_valid_turn_id(None) is False


def test_step_issues_name_the_unit_and_step() -> None:
    payload = _valid_payload()
    steps = payload["clans"][0]["units"][0]["moves"][0]["steps"]
    steps[1]["endingLocation"] = "AB 9902"
    steps[0]["observation"]["edges"].append({"dir": "E"})
    steps[0]["observation"]["compassPoints"][0]["bearing"] = "ENE"

    messages = _messages(validate_document_payload(payload, source="a.json"))

    assert any(message.startswith("unit 0987: step 2: endingLocation 'AB 9902'") for message in messages)
    assert "unit 0987: step 1: observation: edges[1]: invalid direction 'E'" in messages
    assert "unit 0987: step 1: observation: compassPoints[0]: invalid bearing 'ENE'" in messages


def test_multiple_move_chains_are_indexed() -> None:
    payload = _valid_payload()
    unit = payload["clans"][0]["units"][0]
    second = copy.deepcopy(unit["moves"][0])
    second["steps"][0]["endingLocation"] = "nowhere"
    unit["moves"].append(second)

    messages = _messages(validate_document_payload(payload, source="a.json"))

    assert any(message.startswith("unit 0987: moves[1].step 1: endingLocation 'nowhere'") for message in messages)


def test_scout_issues_name_the_scout() -> None:
    payload = _valid_payload()
    scout = payload["clans"][0]["units"][0]["scouts"][0]
    scout["steps"][0]["observation"]["terrain"] = "LAVA"
    del scout["steps"][0]["observation"]["location"]

    messages = _messages(validate_document_payload(payload, source="a.json"))

    assert "unit 0987: scout 0987s1: step 1: observation: terrain: unknown terrain 'LAVA'" in messages
    assert "unit 0987: scout 0987s1: step 1: observation: location is required" in messages


def test_missing_ids_are_reported() -> None:
    payload = _valid_payload()
    del payload["clans"][0]["units"][0]["id"]
    payload["clans"].append({"units": []})

    messages = _messages(validate_document_payload(payload, source="a.json"))

    assert "clans[0].units[0]: id is required" in messages
    assert "clans[1]: id is required" in messages


def test_unknown_codes_and_wrong_types_are_reported() -> None:
    payload = _valid_payload()
    observation = payload["clans"][0]["units"][0]["moves"][0]["steps"][0]["observation"]
    observation["resources"] = ["Mithril"]
    observation["edges"][0]["feature"] = "Bridge"
    observation["edges"][0]["neighborTerrain"] = "XX"
    observation["settlements"] = {"name": "Foo"}

    messages = _messages(validate_document_payload(payload, source="a.json"))

    prefix = "unit 0987: step 1: observation: "
    assert prefix + "resources[0]: unknown resource 'Mithril'" in messages
    assert prefix + "edges[0]: unknown edge feature 'Bridge'" in messages
    assert prefix + "edges[0].neighborTerrain: unknown terrain 'XX'" in messages
    assert prefix + "settlements must be a list" in messages


def test_game_mismatch_across_documents_is_reported() -> None:
    first = _valid_payload()
    second = _valid_payload()
    second["game"] = "0301"

    issues = validate_documents([("a.json", first), ("b.json", second)])

    assert issues == [ValidationIssue(source="b.json", message="game '0301' does not match a.json game '0300'")]


def test_validation_error_carries_every_issue() -> None:
    issues = [ValidationIssue("a.json", "game is required"), ValidationIssue("b.json", "turn is required")]
    error = DocumentValidationError(issues)

    assert isinstance(error, ValueError)
    assert error.issues == tuple(issues)
    assert str(error) == "validation failed (2 errors)"


def test_non_string_codes_are_reported() -> None:
    payload = _valid_payload()
    observation = payload["clans"][0]["units"][0]["moves"][0]["steps"][0]["observation"]
    observation["terrain"] = ["PR"]
    observation["edges"][0]["dir"] = ["N"]
    observation["compassPoints"][0]["bearing"] = {"NNE": True}
    observation["resources"] = [{"name": "Coal"}]

    messages = _messages(validate_document_payload(payload, source="a.json"))

    prefix = "unit 0987: step 1: observation: "
    assert prefix + "terrain: unknown terrain ['PR']" in messages
    assert prefix + "edges[0]: invalid direction ['N']" in messages
    assert prefix + "compassPoints[0]: invalid bearing {'NNE': True}" in messages
    assert prefix + "resources[0]: unknown resource {'name': 'Coal'}" in messages


def test_non_boolean_flags_are_reported() -> None:
    payload = _valid_payload()
    steps = payload["clans"][0]["units"][0]["moves"][0]["steps"]
    steps[0]["observation"]["wasVisited"] = "false"
    steps[0]["observation"]["wasScouted"] = 1
    steps[1]["still"] = "yes"

    messages = _messages(validate_document_payload(payload, source="a.json"))

    assert "unit 0987: step 1: observation: wasVisited 'false': must be true or false" in messages
    assert "unit 0987: step 1: observation: wasScouted 1: must be true or false" in messages
    assert "unit 0987: step 2: still 'yes': must be true or false" in messages


def test_turn_with_trailing_newline_is_reported() -> None:
    payload = _valid_payload()
    payload["turn"] = "0901-02\n"

    messages = _messages(validate_document_payload(payload, source="a.json"))

    assert "turn '0901-02\\n': must be YYYY-MM format" in messages
