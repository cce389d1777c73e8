"""Tests for room inventory extraction."""

from hotel_parser.extraction.rooms import (
    extract_rooms,
    is_room_description,
    room_type_name,
    rooms_from_catalogue,
    rooms_from_delimited_rows,
    rooms_from_rows,
)
from hotel_parser.extraction.tables import TableRow, parse_table_rows
from hotel_parser.text.normalizer import normalize


class TestRoomDescriptions:
    """Tests for telling rooms from services."""

    def test_room_words(self) -> None:
        assert is_room_description("Deluxe Room")
        assert is_room_description("Premium Suites")

    def test_service_words_are_excluded(self) -> None:
        assert not is_room_description("Banquet Hall")
        assert not is_room_description("Meeting Room")
        assert not is_room_description("Room Service")

    def test_meal_plan_keeps_row_a_room(self) -> None:
        assert is_room_description("Deluxe Room with Breakfast")
        assert is_room_description("Premium Suite incl. dinner")

    def test_amenity_first_is_not_a_room(self) -> None:
        assert not is_room_description("Breakfast per room")

    def test_room_type_name_drops_meal_plan(self) -> None:
        assert room_type_name("deluxe room with breakfast") == "Deluxe Room"
        assert room_type_name("Premium Suite incl. dinner") == "Premium Suite"
        assert room_type_name("Garden Villa") == "Garden Villa"


class TestRoomsFromRows:
    """Tests for reading rooms from table rows."""

    def test_reads_quantity_and_rate(self) -> None:
        rows = [TableRow("deluxe room", [30, 12000, 360000])]
        rooms = rooms_from_rows(rows)
        assert len(rooms) == 1
        assert rooms[0].room_type == "Deluxe Room"
        assert rooms[0].quantity == 30
        assert rooms[0].rate == 12000

    def test_row_with_meal_plan(self) -> None:
        rows = [TableRow("Deluxe Room with Breakfast", [30, 12000, 360000])]
        rooms = rooms_from_rows(rows)
        assert [(r.room_type, r.quantity, r.rate) for r in rooms] == [("Deluxe Room", 30, 12000)]

    def test_skips_service_rows(self) -> None:
        rows = [TableRow("Banquet Hall", [1, 150000]), TableRow("Villa", [4, 40000])]
        rooms = rooms_from_rows(rows)
        assert [room.room_type for room in rooms] == ["Villa"]


class TestRoomsFromCatalogue:
    """Tests for catalogue-driven room detection."""

    def test_reads_details_after_mention(self) -> None:
        text = (
            "Deluxe Rooms - Rate: 12,000 per night, 30 rooms, Floor: 3, Wing: East.\n\n"
            "Premium Suite ₹25,000 x 10 units"
        )
        rooms = rooms_from_catalogue(text)
        assert [room.room_type for room in rooms] == ["Deluxe Room", "Premium Suite"]
        deluxe, suite = rooms
        assert (deluxe.rate, deluxe.quantity) == (12000, 30)
        assert deluxe.floor == "3"
        assert deluxe.wing == "East"
        assert (suite.rate, suite.quantity) == (25000, 10)

    def test_longer_name_claims_shorter(self) -> None:
        rooms = rooms_from_catalogue("Pool Villa at ₹40,000")
        assert [room.room_type for room in rooms] == ["Pool Villa"]

    def test_mention_without_details(self) -> None:
        rooms = rooms_from_catalogue("All guests stay in a Cottage.")
        assert rooms[0].rate == 0
        assert rooms[0].quantity == 1


class TestRoomsFromDelimitedRows:
    """Tests for generic delimited rows."""

    def test_pipe_delimited(self) -> None:
        rooms = rooms_from_delimited_rows("Glamping Tent | 8,500 | 6")
        assert len(rooms) == 1
        assert (rooms[0].room_type, rooms[0].rate, rooms[0].quantity) == (
            "Glamping Tent",
            8500,
            6,
        )


class TestExtractRooms:
    """Tests for the room cascade."""

    def test_clean_contract_row(self, clean_contract_text: str) -> None:
        text = normalize(clean_contract_text)
        rooms = extract_rooms(text, parse_table_rows(text))
        assert len(rooms) == 1
        assert rooms[0].room_type == "Deluxe Room"
        assert rooms[0].quantity == 30
        assert rooms[0].rate == 12000

    def test_falls_back_to_delimited_rows(self) -> None:
        rooms = extract_rooms("Glamping Tent | 8,500 | 6", [])
        assert [room.room_type for room in rooms] == ["Glamping Tent"]

    def test_duplicates_are_merged(self) -> None:
        rows = [TableRow("Deluxe Room", [30, 12000]), TableRow("DELUXE ROOM", [5, 12000])]
        rooms = extract_rooms("", rows)
        assert len(rooms) == 1
        assert rooms[0].quantity == 30

    def test_no_rooms(self) -> None:
        assert extract_rooms("Nothing contracted yet", []) == []
