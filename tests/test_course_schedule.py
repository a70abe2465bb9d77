from datetime import time

import pytest

from conftest import course, meeting, section
from course_models import Day
from course_schedule import Schedule, Selection
from planner_errors import SectionNotInCourse


@pytest.fixture
def gui():
    return course(
        "GUI",
        section("800", meeting("09:00", "10:15", Day.MONDAY, Day.WEDNESDAY)),
        section("801", meeting("13:00", "14:15", Day.TUESDAY, Day.THURSDAY)),
        number="420",
    )


@pytest.fixture
def os_course():
    return course(
        "Operating Systems",
        section("001", meeting("11:00", "12:00", Day.MONDAY), meeting("15:00", "16:00", Day.FRIDAY)),
        number="360",
    )


def test_add_course_rejects_foreign_section(gui, os_course):
    schedule = Schedule()
    with pytest.raises(SectionNotInCourse):
        schedule.add_course(gui, os_course.sections[0])
    assert len(schedule) == 0


def test_add_course_records_selection(gui):
    schedule = Schedule()
    schedule.add_course(gui, gui.sections[0])
    assert schedule.selections == {Selection(gui, gui.sections[0])}
    assert schedule.courses == (gui,)


def test_choosing_another_section_replaces_the_first(gui):
    schedule = Schedule()
    schedule.add_course(gui, gui.sections[0])
    schedule.add_course(gui, gui.sections[1])
    assert list(schedule) == [Selection(gui, gui.sections[1])]


def test_fits_empty_schedule(gui):
    assert Schedule().fits(gui.sections[0])


def test_fits_checks_every_selection(gui, os_course):
    schedule = Schedule()
    schedule.add_course(gui, gui.sections[0])
    schedule.add_course(os_course, os_course.sections[0])

    # Clashes with the first selection only.
    clash_with_first = section("X", meeting("10:00", "10:30", Day.WEDNESDAY))
    assert not schedule.fits(clash_with_first)

    # Clashes with the Friday meeting of the second selection only.
    clash_with_second = section("Y", meeting("15:30", "17:00", Day.FRIDAY))
    assert not schedule.fits(clash_with_second)

    assert schedule.fits(section("Z", meeting("10:16", "10:59", Day.MONDAY)))


def test_fits_treats_touching_endpoints_as_conflict(gui):
    schedule = Schedule()
    schedule.add_course(gui, gui.sections[0])
    assert not schedule.fits(section("T", meeting("10:15", "11:00", Day.MONDAY)))


def test_duplicate_is_equal_and_independent(gui, os_course):
    original = Schedule()
    original.add_course(gui, gui.sections[0])

    copy = original.duplicate()
    assert copy == original
    assert hash(copy) == hash(original)

    copy.add_course(os_course, os_course.sections[0])
    assert len(copy) == 2
    assert len(original) == 1
    assert copy != original


def test_earliest_and_latest(gui, os_course):
    schedule = Schedule()
    assert schedule.earliest is None
    assert schedule.latest is None

    schedule.add_course(gui, gui.sections[0])
    schedule.add_course(os_course, os_course.sections[0])
    assert schedule.earliest == time(9, 0)
    assert schedule.latest == time(16, 0)


def test_structurally_equal_schedules_collapse_in_a_set(gui):
    a, b = Schedule(), Schedule()
    a.add_course(gui, gui.sections[1])
    b.add_course(gui, gui.sections[1])
    assert len({a, b}) == 1


def test_schedules_sort_deterministically(gui, os_course):
    first, second = Schedule(), Schedule()
    first.add_course(gui, gui.sections[0])
    second.add_course(gui, gui.sections[1])
    assert sorted([second, first]) == [first, second]
    assert first < second and not second < first
