import pytest

from hexmapper.mapping.coords import (
    GRID_LETTERS,
    CubeCoord,
    Direction,
    GridCoord,
    InvalidCoordinatesError,
    MapCoord,
    is_valid_grid,
)


def test_grid_notation_converts_to_zero_based_map_coordinates() -> None:
    assert MapCoord.from_grid("AA 0101") == MapCoord(column=0, row=0)
    assert MapCoord.from_grid("AB 0102") == MapCoord(column=30, row=1)
    assert MapCoord.from_grid("BA 0101") == MapCoord(column=0, row=21)
    assert MapCoord.from_grid("ZZ 3021") == MapCoord(column=779, row=545)


def test_grid_round_trip_is_exact() -> None:
    for grid_row in "ACMZ":
        for grid_column in "ABQZ":
            for local_column in (1, 2, 15, 29, 30):
                for local_row in (1, 2, 11, 20, 21):
                    text = f"{grid_row}{grid_column} {local_column:02d}{local_row:02d}"
                    assert MapCoord.from_grid(text).to_grid() == text


def test_map_coordinates_round_trip_through_grid_notation() -> None:
    for column in (0, 1, 29, 30, 31, 450, 779):
        for row in (0, 1, 20, 21, 22, 300, 545):
            coord = MapCoord(column=column, row=row)
            assert MapCoord.from_grid(coord.to_grid()) == coord


@pytest.mark.parametrize(
    "text",
    ["aa 0101", "AA 0001", "AA 3101", "AA 0100", "AA 0122", "## 0101", "N/A", "AA0101", "AA 01O1", "", None, 101],
)
def test_invalid_grid_notation_is_rejected(text: object) -> None:
    with pytest.raises(InvalidCoordinatesError):
        MapCoord.from_grid(text)
    assert is_valid_grid(text) is False


def test_invalid_coordinates_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        GridCoord.parse("AA 9999")


def test_local_fields_and_grid_id() -> None:
    coord = MapCoord.from_grid("CB 0705")

    assert coord.local_column == 7
    assert coord.local_row == 5
    assert coord.grid_id == "CB"
    assert str(coord.to_grid_coord()) == "CB 0705"


def test_off_map_coordinates_cannot_be_written_as_grid_notation() -> None:
    assert MapCoord(column=-1, row=0).is_on_map is False
    with pytest.raises(InvalidCoordinatesError):
        MapCoord(column=-1, row=0).to_grid()
    with pytest.raises(InvalidCoordinatesError):
        MapCoord(column=0, row=546).to_grid()


def test_neighbor_vectors_depend_on_map_column_parity() -> None:
    even = MapCoord(column=4, row=4)
    odd = MapCoord(column=5, row=4)

    assert even.neighbor(Direction.NE) == MapCoord(column=5, row=3)
    assert even.neighbor(Direction.SW) == MapCoord(column=3, row=4)
    assert odd.neighbor(Direction.NE) == MapCoord(column=6, row=4)
    assert odd.neighbor(Direction.SW) == MapCoord(column=4, row=5)
    assert even.neighbor(Direction.N) == MapCoord(column=4, row=3)
    assert odd.neighbor(Direction.S) == MapCoord(column=5, row=5)


def test_neighbor_accepts_direction_codes() -> None:
    assert MapCoord(column=5, row=4).neighbor("NW") == MapCoord(column=4, row=4)


def test_neighbors_are_symmetric() -> None:
    for column in range(1, 9):
        for row in range(1, 7):
            coord = MapCoord(column=column, row=row)
            for direction in Direction:
                neighbor = coord.neighbor(direction)
                assert neighbor.neighbor(direction.opposite) == coord


def test_cube_neighbors_agree_with_vector_tables() -> None:
    for column in range(0, 8):
        for row in range(0, 6):
            coord = MapCoord(column=column, row=row)
            cube = coord.to_cube()
            assert cube.to_map() == coord
            for direction in Direction:
                assert cube.neighbor(direction).to_map() == coord.neighbor(direction)
                assert coord.distance(coord.neighbor(direction)) == 1


def test_cube_coordinates_enforce_constraint() -> None:
    with pytest.raises(ValueError):
        CubeCoord(q=1, r=1, s=1)


def test_distance_counts_hex_steps() -> None:
    origin = MapCoord(column=0, row=0)

    assert origin.distance(origin) == 0
    assert origin.distance(MapCoord(column=2, row=0)) == 2
    assert origin.distance(origin.move(Direction.S, Direction.S, Direction.SE)) == 3


def test_move_applies_directions_in_order() -> None:
    start = MapCoord.from_grid("AA 0202")

    assert start.move(Direction.N, Direction.NW).to_grid() == "AA 0101"
    assert start.move() == start


def test_grid_letters_cover_twenty_six_grids() -> None:
    assert len(GRID_LETTERS) == 26
    assert MapCoord.from_grid("ZA 0101") == MapCoord(column=0, row=525)
