"""Countdown entries and the selectable list the app shows as tabs.

Record layout (one record per CSV row):
    header: selected index in field 0, remaining fields are column names
    data:   name, background_color, foreground_color, datetime
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator, List, Optional, Sequence

from .colors import Rgb, format_optional_color, parse_optional_color
from .errors import ParseError
from .timecalc import format_timestamp, now_local, parse_timestamp, seconds_between

FIELDS = ("name", "background_color", "foreground_color", "datetime")


@dataclass(frozen=True)
class Countdown:
    name: str
    target_time: datetime
    background_color: Optional[Rgb] = None
    foreground_color: Optional[Rgb] = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must not be empty")
        if self.target_time.tzinfo is None:
            raise ValueError("target_time must be timezone-aware")

    def remaining_seconds(self, now: Optional[datetime] = None) -> int:
        if now is None:
            now = now_local()
        return seconds_between(now, self.target_time)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.remaining_seconds(now) <= 0

    def to_record(self) -> List[str]:
        return [
            self.name,
            format_optional_color(self.background_color),
            format_optional_color(self.foreground_color),
            format_timestamp(self.target_time),
        ]

    @classmethod
    def from_record(cls, record: Sequence[str], row: int) -> "Countdown":
        if len(record) != len(FIELDS):
            raise ParseError(row, None, f"expected {len(FIELDS)} fields, got {len(record)}")
        name, background, foreground, when = record
        if not name.strip():
            raise ParseError(row, "name", "name is empty")
        try:
            background_color = parse_optional_color(background)
        except ValueError as exc:
            raise ParseError(row, "background_color", str(exc)) from exc
        try:
            foreground_color = parse_optional_color(foreground)
        except ValueError as exc:
            raise ParseError(row, "foreground_color", str(exc)) from exc
        try:
            target_time = parse_timestamp(when)
        except ValueError as exc:
            raise ParseError(row, "datetime", f"invalid timestamp {when!r}: {exc}") from exc
        return cls(
            name=name,
            target_time=target_time,
            background_color=background_color,
            foreground_color=foreground_color,
        )


def _parse_selected(header: Sequence[str]) -> int:
    if not header:
        return 0
    try:
        index = int(header[0].strip())
    except ValueError:
        return 0
    return max(0, index)


@dataclass
class CountdownList:
    entries: List[Countdown] = field(default_factory=list)
    selected_index: int = 0

    def __post_init__(self) -> None:
        self._clamp()

    @classmethod
    def load(cls, records: Iterable[Sequence[str]]) -> "CountdownList":
        """Build a list from raw records, the first being the header.

        Raises ParseError on the first malformed data row; no list is
        produced in that case.
        """
        header: Optional[Sequence[str]] = None
        entries: List[Countdown] = []
        for row, record in enumerate(records, start=1):
            if header is None:
                header = record
                continue
            if not record or all(not value.strip() for value in record):
                continue
            entries.append(Countdown.from_record(record, row))
        selected = _parse_selected(header) if header is not None else 0
        return cls(entries=entries, selected_index=selected)

    def to_records(self) -> List[List[str]]:
        self._clamp()
        records = [[str(self.selected_index), *FIELDS]]
        records.extend(entry.to_record() for entry in self.entries)
        return records

    def _clamp(self) -> None:
        if not self.entries:
            self.selected_index = 0
        else:
            self.selected_index = max(0, min(self.selected_index, len(self.entries) - 1))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Countdown]:
        return iter(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def select_next(self) -> None:
        if not self.entries:
            return
        self.selected_index = (self.selected_index + 1) % len(self.entries)

    def select_previous(self) -> None:
        if not self.entries:
            return
        self.selected_index = (self.selected_index - 1) % len(self.entries)

    def selected(self) -> Optional[Countdown]:
        if not self.entries:
            return None
        # selected_index is a public field and may have been set out of range
        self._clamp()
        return self.entries[self.selected_index]

    def append(self, countdown: Countdown, select: bool = True) -> None:
        self.entries.append(countdown)
        if select:
            self.selected_index = len(self.entries) - 1

    def remaining_seconds(self, now: Optional[datetime] = None) -> Optional[int]:
        current = self.selected()
        if current is None:
            return None
        return current.remaining_seconds(now)
