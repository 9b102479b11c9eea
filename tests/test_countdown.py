"""Tests for Countdown and CountdownList."""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from uika.colors import Rgb
from uika.countdown import Countdown, CountdownList
from uika.errors import ParseError

LAUNCH_ROW = ["Launch", "FF0000", "FFFFFF", "2030-01-01T00:00:00+00:00"]


class TestCountdown:
    def test_remaining_seconds_future(self) -> None:
        now = datetime.now(timezone.utc)
        countdown = Countdown("Soon", now + timedelta(seconds=10))
        assert 9 <= countdown.remaining_seconds() <= 10

    def test_remaining_seconds_expired(self, launch: Countdown) -> None:
        later = launch.target_time + timedelta(seconds=5)
        assert launch.remaining_seconds(later) == -5
        assert launch.is_expired(later)

    def test_remaining_seconds_across_offsets(self, launch: Countdown) -> None:
        now = datetime(2030, 1, 1, 0, 59, 0, tzinfo=timezone(timedelta(hours=1)))
        assert launch.remaining_seconds(now) == 60

    def test_rejects_empty_name(self) -> None:
        with pytest.raises(ValueError):
            Countdown("  ", datetime(2030, 1, 1, tzinfo=timezone.utc))

    def test_rejects_naive_time(self) -> None:
        with pytest.raises(ValueError):
            Countdown("Naive", datetime(2030, 1, 1))


class TestLoad:
    def test_single_row(self) -> None:
        countdowns = CountdownList.load([["0"], LAUNCH_ROW])
        assert len(countdowns) == 1
        assert countdowns.selected_index == 0
        entry = countdowns.selected()
        assert entry is not None
        assert entry.name == "Launch"
        assert entry.background_color == Rgb(255, 0, 0)
        assert entry.foreground_color == Rgb(255, 255, 255)
        assert entry.target_time == datetime(2030, 1, 1, tzinfo=timezone.utc)

    def test_no_records_is_empty(self) -> None:
        countdowns = CountdownList.load([])
        assert countdowns.is_empty
        assert countdowns.selected() is None

    def test_header_only_is_empty(self) -> None:
        assert CountdownList.load([["3", "name"]]).is_empty

    @pytest.mark.parametrize("header", [[], [""], ["abc"], ["-2"]])
    def test_bad_header_defaults_to_zero(self, header) -> None:
        countdowns = CountdownList.load([header, LAUNCH_ROW, LAUNCH_ROW])
        assert countdowns.selected_index == 0

    def test_header_index_is_clamped(self) -> None:
        countdowns = CountdownList.load([["7"], LAUNCH_ROW, ["Other", "", "", "2031-01-01T00:00:00Z"]])
        assert countdowns.selected_index == 1

    def test_header_selects_row(self) -> None:
        countdowns = CountdownList.load([["1"], LAUNCH_ROW, ["Other", "", "", "2031-01-01T00:00:00Z"]])
        entry = countdowns.selected()
        assert entry is not None and entry.name == "Other"

    def test_empty_colors_are_default(self) -> None:
        countdowns = CountdownList.load([["0"], ["Plain", "", "", "2030-01-01T00:00:00+00:00"]])
        entry = countdowns.entries[0]
        assert entry.background_color is None
        assert entry.foreground_color is None

    def test_blank_rows_skipped(self) -> None:
        countdowns = CountdownList.load([["0"], [], LAUNCH_ROW, ["", "", "", ""]])
        assert len(countdowns) == 1

    def test_invalid_color(self) -> None:
        with pytest.raises(ParseError) as info:
            CountdownList.load([["0"], LAUNCH_ROW, ["Bad", "ZZZZZZ", "FFFFFF", "2030-01-01T00:00:00+00:00"]])
        assert info.value.row == 3
        assert info.value.field == "background_color"
        assert "row 3" in str(info.value)

    def test_invalid_foreground(self) -> None:
        with pytest.raises(ParseError) as info:
            CountdownList.load([["0"], ["Bad", "FF0000", "nope", "2030-01-01T00:00:00+00:00"]])
        assert info.value.field == "foreground_color"

    def test_invalid_timestamp(self) -> None:
        with pytest.raises(ParseError) as info:
            CountdownList.load([["0"], ["Bad", "FF0000", "FFFFFF", "someday"]])
        assert info.value.field == "datetime"

    def test_wrong_field_count(self) -> None:
        with pytest.raises(ParseError) as info:
            CountdownList.load([["0"], ["Launch", "FF0000", "2030-01-01T00:00:00+00:00"]])
        assert info.value.row == 2
        assert info.value.field is None

    def test_empty_name(self) -> None:
        with pytest.raises(ParseError) as info:
            CountdownList.load([["0"], [" ", "FF0000", "FFFFFF", "2030-01-01T00:00:00+00:00"]])
        assert info.value.field == "name"


class TestRecords:
    def test_round_trip(self, three: CountdownList) -> None:
        three.selected_index = 2
        assert CountdownList.load(three.to_records()) == three

    def test_round_trip_empty(self) -> None:
        assert CountdownList.load(CountdownList().to_records()) == CountdownList()

    def test_header_layout(self, three: CountdownList) -> None:
        records = three.to_records()
        assert records[0] == ["0", "name", "background_color", "foreground_color", "datetime"]
        assert records[1] == LAUNCH_ROW


class TestSelection:
    def test_wraps_backwards(self, three: CountdownList) -> None:
        three.select_previous()
        assert three.selected_index == 2
        three.select_next()
        assert three.selected_index == 0

    def test_wraps_forwards(self, three: CountdownList) -> None:
        for expected in (1, 2, 0):
            three.select_next()
            assert three.selected_index == expected

    def test_inverse_from_every_index(self, three: CountdownList) -> None:
        for start in range(len(three)):
            three.selected_index = start
            three.select_next()
            three.select_previous()
            assert three.selected_index == start
            three.select_previous()
            three.select_next()
            assert three.selected_index == start

    def test_stays_in_bounds(self, three: CountdownList) -> None:
        moves = [three.select_next, three.select_previous]
        for sequence in itertools.product(moves, repeat=6):
            for move in sequence:
                move()
                assert 0 <= three.selected_index < len(three)

    def test_empty_is_noop(self) -> None:
        countdowns = CountdownList()
        countdowns.select_next()
        countdowns.select_previous()
        assert countdowns.selected_index == 0
        assert countdowns.selected() is None
        assert countdowns.remaining_seconds() is None

    def test_constructor_clamps(self, launch: Countdown) -> None:
        assert CountdownList([launch], selected_index=4).selected_index == 0
        assert CountdownList([], selected_index=4).selected_index == 0

    @pytest.mark.parametrize("index", [5, -1])
    def test_out_of_range_index_is_clamped(self, three: CountdownList, index: int) -> None:
        three.selected_index = index
        entry = three.selected()
        assert entry is not None
        assert 0 <= three.selected_index < len(three)
        assert entry is three.entries[three.selected_index]

    def test_out_of_range_index_round_trips(self, three: CountdownList) -> None:
        three.selected_index = 9
        records = three.to_records()
        assert records[0][0] == "2"
        assert CountdownList.load(records) == three

    def test_append_selects(self, three: CountdownList, launch: Countdown) -> None:
        three.append(launch)
        assert three.selected_index == 3
        three.append(launch, select=False)
        assert three.selected_index == 3

    def test_remaining_of_selected(self, three: CountdownList, now: datetime) -> None:
        assert three.remaining_seconds(now) == 60
