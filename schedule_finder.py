# schedule_finder.py
# Exhaustively enumerates all conflict-free course schedules using a backtracking DFS.

import logging
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Set, Tuple

import catalog_io
from course_models import Course
from course_schedule import Schedule
from planner_errors import SearchBudgetExceeded

__all__ = [
    "SearchMode",
    "SearchBudget",
    "search",
    "merge_optional_schedules",
    "find_unresolvable_pairs",
    "Generator",
]

logger = logging.getLogger(__name__)


class SearchMode(Enum):
    # STRICT: every course with sections must be placed, a section that does not fit kills the branch.
    # RELAXED: a section that does not fit spawns a branch where the course is dropped instead.
    STRICT = "strict"
    RELAXED = "relaxed"


class SearchBudget:
    # Counts visited search nodes and stops the search once max_nodes is passed.

    def __init__(self, max_nodes: Optional[int] = None):
        self.max_nodes = max_nodes
        self.visited = 0

    def visit(self) -> None:
        self.visited += 1
        if self.max_nodes is not None and self.visited > self.max_nodes:
            raise SearchBudgetExceeded(self.max_nodes)


def search(
    courses: Sequence[Course],
    schedule: Schedule,
    mode: SearchMode,
    budget: Optional[SearchBudget] = None,
) -> Set[Schedule]:
    # Return every schedule reachable from `schedule` by choosing sections for `courses` in order.
    if budget is not None:
        budget.visit()

    # Base case: all courses handled. An empty schedule is never a result.
    if not courses:
        return {schedule} if schedule else set()

    course, rest = courses[0], courses[1:]

    # A course with no sections can neither block nor extend a schedule.
    if not course.sections:
        logger.debug("Skipping %s: no sections", course)
        return search(rest, schedule, mode, budget)

    schedules: Set[Schedule] = set()
    for section in course.sections:
        if schedule.fits(section):
            branch = schedule.duplicate()
            branch.add_course(course, section)
            schedules |= search(rest, branch, mode, budget)
        elif mode is SearchMode.RELAXED:
            schedules |= search(rest, schedule.duplicate(), mode, budget)
        # STRICT and not fitting: this section contributes no branch.

    logger.debug(
        "%s: %d sections, %d courses left, %d schedules",
        course, len(course.sections), len(rest), len(schedules),
    )
    return schedules


def merge_optional_schedules(
    mandatory: Iterable[Schedule],
    optional: Sequence[Course],
    budget: Optional[SearchBudget] = None,
) -> Set[Schedule]:
    # Run the relaxed search over the optional courses from each mandatory schedule, so fit is
    # always judged against the mandatory selections. The bare mandatory schedule is kept too.
    merged: Set[Schedule] = set()
    for base in mandatory:
        merged.add(base)
        merged |= search(optional, base.duplicate(), SearchMode.RELAXED, budget)
    return merged


def find_unresolvable_pairs(courses: Iterable[Course]) -> List[Tuple[Course, Course]]:
    # Identifies pairs of mandatory courses for which no non-conflicting section combination exists.
    relevant = [c for c in courses if not c.optional and c.sections]
    bad_pairs = []

    for i in range(len(relevant)):
        for j in range(i + 1, len(relevant)):
            a, b = relevant[i], relevant[j]
            # If all combinations of sections for courses a and b conflict, they are unresolvable.
            if not any(
                not sa.conflicts_with(sb)
                for sa in a.sections
                for sb in b.sections
            ):
                bad_pairs.append((a, b))
    return bad_pairs


class Generator:
    # Owns a course catalog (an insertion-ordered set of structurally distinct courses) and
    # generates every conflict-free schedule for it.

    def __init__(
        self,
        courses: Iterable[Course] = (),
        max_nodes: Optional[int] = None,
        merge_optional: bool = True,
    ):
        self._courses: List[Course] = []
        self.max_nodes = max_nodes
        self.merge_optional = merge_optional
        for course in courses:
            self.add_course(course)

    @property
    def courses(self) -> Tuple[Course, ...]:
        return tuple(self._courses)

    def add_course(self, course: Course) -> None:
        if course not in self._courses:
            self._courses.append(course)

    def remove_course(self, course: Course) -> None:
        if course in self._courses:
            self._courses.remove(course)

    def partition(self) -> Tuple[List[Course], List[Course]]:
        mandatory = [c for c in self._courses if not c.optional]
        optional = [c for c in self._courses if c.optional]
        return mandatory, optional

    def mandatory_schedules(self) -> Set[Schedule]:
        mandatory, _ = self.partition()
        return search(mandatory, Schedule(), SearchMode.STRICT, SearchBudget(self.max_nodes))

    def optional_schedules(self) -> Set[Schedule]:
        _, optional = self.partition()
        return search(optional, Schedule(), SearchMode.RELAXED, SearchBudget(self.max_nodes))

    def generate(self, merge_optional: Optional[bool] = None) -> Set[Schedule]:
        # Mandatory schedules, each also extended with the optional courses that still fit it.
        # With no placeable mandatory course, the relaxed optional search stands alone.
        if merge_optional is None:
            merge_optional = self.merge_optional

        mandatory, optional = self.partition()
        logger.info("Generating schedules: %d mandatory, %d optional", len(mandatory), len(optional))

        budget = SearchBudget(self.max_nodes)
        schedules = search(mandatory, Schedule(), SearchMode.STRICT, budget)

        if merge_optional and optional:
            if any(c.sections for c in mandatory):
                schedules = merge_optional_schedules(schedules, optional, budget)
            else:
                schedules = search(optional, Schedule(), SearchMode.RELAXED, budget)

        logger.info("Generated %d schedules (%d search nodes)", len(schedules), budget.visited)
        return schedules

    def export_courses(self, path: str) -> None:
        catalog_io.export_courses(self._courses, path)

    def import_courses(self, path: str) -> int:
        # Additive: imported courses join the catalog. Returns how many were new.
        imported = catalog_io.import_courses(path)
        before = len(self._courses)
        for course in imported:
            self.add_course(course)
        return len(self._courses) - before
