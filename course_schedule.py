# course_schedule.py
# A schedule is a set of (course, section) selections; cheap to copy for search branches.

from datetime import time
from functools import total_ordering
from typing import FrozenSet, Iterable, Iterator, NamedTuple, Optional, Set, Tuple

from course_models import Course, MeetingTime, Section
from planner_errors import SectionNotInCourse

__all__ = ["Selection", "Schedule"]


class Selection(NamedTuple):
    course: Course
    section: Section

    def sort_key(self) -> Tuple:
        return (self.course.sort_key(), self.section.sort_key())


@total_ordering
class Schedule:
    # One selection per course. Only section membership is enforced here; keeping meeting
    # times conflict-free is up to whoever fills it (see fits).

    def __init__(self, selections: Iterable[Selection] = ()):
        self._selections: Set[Selection] = set(selections)

    @property
    def selections(self) -> FrozenSet[Selection]:
        return frozenset(self._selections)

    @property
    def courses(self) -> Tuple[Course, ...]:
        return tuple(s.course for s in self)

    def add_course(self, course: Course, section: Section) -> None:
        if not course.has_section(section):
            raise SectionNotInCourse(course, section)
        # One selection per course: choosing another section replaces the old one.
        self._selections = {s for s in self._selections if s.course != course}
        self._selections.add(Selection(course, section))

    def fits(self, section: Section) -> bool:
        # Every already-chosen meeting time is checked, not just the latest selection.
        return not any(
            candidate.overlaps(chosen)
            for chosen in self._meeting_times()
            for candidate in section.meeting_times
        )

    def duplicate(self) -> "Schedule":
        # Selections are immutable pairs, so a shallow copy of the set is enough.
        return Schedule(self._selections)

    @property
    def earliest(self) -> Optional[time]:
        return min((mt.start for mt in self._meeting_times()), default=None)

    @property
    def latest(self) -> Optional[time]:
        return max((mt.end for mt in self._meeting_times()), default=None)

    def _meeting_times(self) -> Iterator[MeetingTime]:
        for selection in self._selections:
            yield from selection.section.meeting_times

    def sort_key(self) -> Tuple:
        return tuple(sorted(s.sort_key() for s in self._selections))

    def __iter__(self) -> Iterator[Selection]:
        return iter(sorted(self._selections, key=Selection.sort_key))

    def __len__(self) -> int:
        return len(self._selections)

    def __bool__(self) -> bool:
        return bool(self._selections)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Schedule):
            return NotImplemented
        return self._selections == other._selections

    def __lt__(self, other: "Schedule") -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(frozenset(self._selections))

    def __repr__(self) -> str:
        picks = ", ".join(f"{s.course} [{s.section}]" for s in self)
        return f"Schedule({picks})"
