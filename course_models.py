# course_models.py
# Course catalog building blocks: weekly meeting times, sections and courses.

from dataclasses import dataclass
from datetime import time
from enum import IntEnum
from typing import Any, FrozenSet, Iterable, List, Optional, Tuple

from planner_errors import ConflictingMeetingTime, InvalidInterval

__all__ = ["Day", "MeetingTime", "Section", "Course"]


def _text(value: Any) -> str:
    # Identifiers are free text; a missing value becomes an empty string.
    return "" if value is None else str(value)


def _clock_value(t: time) -> int:
    # Whole-second time of day as an HHMMSS integer, e.g. 09:05:30 -> 90530.
    return t.hour * 10000 + t.minute * 100 + t.second


def _twelve_hour(t: time) -> str:
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{t.hour % 12 or 12}:{t.minute:02d} {suffix}"


class Day(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def coerce(cls, value: Any) -> "Day":
        # Accepts a Day, its weekday() integer, or its (case-insensitive) name.
        if isinstance(value, cls):
            return value
        # bool is an int subclass; True must not pass for TUESDAY.
        if isinstance(value, bool):
            raise InvalidInterval(f"Unknown day of the week: {value!r}")
        try:
            if isinstance(value, str):
                return cls[value.strip().upper()]
            return cls(value)
        except (KeyError, ValueError):
            raise InvalidInterval(f"Unknown day of the week: {value!r}") from None


@dataclass(frozen=True)
class MeetingTime:
    # A recurring weekly time window, active on one or more days. Second precision;
    # end is strictly after start and both bounds count when testing overlaps.

    start: time
    end: time
    days: FrozenSet[Day]
    location: str = ""

    def __post_init__(self) -> None:
        if self.end is None:
            raise InvalidInterval("End time cannot be empty!")
        if self.start is None:
            raise InvalidInterval("Start time cannot be empty!")
        if not isinstance(self.start, time) or not isinstance(self.end, time):
            raise InvalidInterval(
                f"Start and end must be times of day, got {self.start!r} and {self.end!r}"
            )

        days = [self.days] if isinstance(self.days, (str, int)) else list(self.days or ())
        if not days:
            raise InvalidInterval("Must select at least one day of the week!")

        start = self.start.replace(microsecond=0, tzinfo=None)
        end = self.end.replace(microsecond=0, tzinfo=None)
        if end < start:
            raise InvalidInterval(
                f"End time cannot be before start time! Start Time: {start} End Time: {end}"
            )
        if end == start:
            raise InvalidInterval(
                f"Start and end time cannot be the same! Start Time: {start} End Time: {end}"
            )

        # Frozen dataclass: normalised values go in through object.__setattr__.
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)
        object.__setattr__(self, "days", frozenset(Day.coerce(d) for d in days))
        object.__setattr__(self, "location", _text(self.location))

    def overlaps(self, other: "MeetingTime") -> bool:
        # Shared day and intersecting closed intervals; touching endpoints count.
        if self.days.isdisjoint(other.days):
            return False
        return (
            _clock_value(self.start) <= _clock_value(other.end)
            and _clock_value(other.start) <= _clock_value(self.end)
        )

    def sort_key(self) -> Tuple:
        return (self.start, self.end, tuple(sorted(self.days)), self.location)

    def __str__(self) -> str:
        return f"{_twelve_hour(self.start)} - {_twelve_hour(self.end)}"


class Section:
    # One concrete offering of a course: who teaches it and when it meets.

    def __init__(
        self,
        section_number: Optional[str] = "",
        crn: Optional[str] = "",
        teacher: Optional[str] = "",
        meeting_times: Iterable[MeetingTime] = (),
    ):
        self._section_number = _text(section_number)
        self._crn = _text(crn)
        self._teacher = _text(teacher)
        self._meeting_times: List[MeetingTime] = []
        for meeting_time in meeting_times:
            self.add_meeting_time(meeting_time)

    @property
    def section_number(self) -> str:
        return self._section_number

    @property
    def crn(self) -> str:
        return self._crn

    @property
    def teacher(self) -> str:
        return self._teacher

    @property
    def meeting_times(self) -> Tuple[MeetingTime, ...]:
        return tuple(self._meeting_times)

    def add_meeting_time(self, meeting_time: MeetingTime) -> None:
        # Reject the new interval if it collides with one this section already meets at.
        for existing in self._meeting_times:
            if existing.overlaps(meeting_time):
                raise ConflictingMeetingTime(meeting_time, existing)
        self._meeting_times.append(meeting_time)

    def remove_meeting_time(self, meeting_time: MeetingTime) -> None:
        if meeting_time in self._meeting_times:
            self._meeting_times.remove(meeting_time)

    def conflicts_with(self, other: "Section") -> bool:
        # True if the two sections cannot both be attended.
        return any(
            mine.overlaps(theirs)
            for mine in self._meeting_times
            for theirs in other._meeting_times
        )

    def sort_key(self) -> Tuple:
        return (
            self._section_number,
            self._crn,
            self._teacher,
            tuple(mt.sort_key() for mt in self._meeting_times),
        )

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Section):
            return NotImplemented
        return (
            self._crn == other._crn
            and self._teacher == other._teacher
            and self._meeting_times == other._meeting_times
            and self._section_number == other._section_number
        )

    def __hash__(self) -> int:
        return hash((self._crn, self._teacher, tuple(self._meeting_times), self._section_number))

    def __str__(self) -> str:
        label = " ".join(part for part in (self._section_number, self._teacher) if part)
        return label or self._crn or "section"

    def __repr__(self) -> str:
        return (
            f"Section(section_number={self._section_number!r}, crn={self._crn!r}, "
            f"teacher={self._teacher!r}, meeting_times={self._meeting_times!r})"
        )


class Course:
    # Sections keep insertion order but behave like a set. optional marks a course that
    # does not have to appear in every generated schedule.

    def __init__(
        self,
        name: Optional[str] = "",
        subject: Optional[str] = "",
        course_number: Optional[str] = "",
        optional: bool = False,
        sections: Iterable[Section] = (),
    ):
        self.name = name
        self.subject = subject
        self.course_number = course_number
        self.optional = optional
        self._sections: List[Section] = []
        for section in sections:
            self.add_section(section)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = _text(value)

    @property
    def subject(self) -> str:
        return self._subject

    @subject.setter
    def subject(self, value: Optional[str]) -> None:
        self._subject = _text(value)

    @property
    def course_number(self) -> str:
        return self._course_number

    @course_number.setter
    def course_number(self, value: Optional[str]) -> None:
        self._course_number = _text(value)

    @property
    def optional(self) -> bool:
        return self._optional

    @optional.setter
    def optional(self, value: bool) -> None:
        self._optional = bool(value)

    @property
    def sections(self) -> Tuple[Section, ...]:
        return tuple(self._sections)

    def add_section(self, section: Section) -> None:
        if section not in self._sections:
            self._sections.append(section)

    def remove_section(self, section: Section) -> None:
        if section in self._sections:
            self._sections.remove(section)

    def has_section(self, section: Section) -> bool:
        return section in self._sections

    def sort_key(self) -> Tuple:
        return (
            self._subject,
            self._course_number,
            self._name,
            self._optional,
            tuple(s.sort_key() for s in self._sections),
        )

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Course):
            return NotImplemented
        return (
            self._name == other._name
            and self._subject == other._subject
            and self._course_number == other._course_number
            and self._optional == other._optional
            and self._sections == other._sections
        )

    def __hash__(self) -> int:
        return hash(
            (self._name, self._subject, self._course_number, self._optional, tuple(self._sections))
        )

    def __str__(self) -> str:
        code = self._subject.strip() + self._course_number.strip()
        return code + (f" - {self._name.strip()}" if self._name else "")

    def __repr__(self) -> str:
        return (
            f"Course(name={self._name!r}, subject={self._subject!r}, "
            f"course_number={self._course_number!r}, optional={self._optional!r}, "
            f"sections={self._sections!r})"
        )
