# catalog_io.py
# JSON import/export of the course catalog, plus the JSON shape of a generated schedule.

import json
import logging
import os
import stat
import tempfile
from datetime import time
from typing import Any, Dict, Iterable, List

from course_models import Course, Day, MeetingTime, Section
from course_schedule import Schedule
from planner_errors import CatalogError, ConflictingMeetingTime, InvalidInterval

__all__ = [
    "courses_to_document",
    "courses_from_document",
    "schedule_to_document",
    "course_summary",
    "export_courses",
    "import_courses",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------- encoding

def _time_text(t: time) -> str:
    return t.isoformat(timespec="seconds")


def meeting_time_to_dict(mt: MeetingTime) -> Dict[str, Any]:
    return {
        "start": _time_text(mt.start),
        "end": _time_text(mt.end),
        "days": [d.name for d in sorted(mt.days)],
        "location": mt.location,
    }


def section_to_dict(section: Section) -> Dict[str, Any]:
    return {
        "sectionNumber": section.section_number,
        "crn": section.crn,
        "teacher": section.teacher,
        "meetingTimes": [meeting_time_to_dict(mt) for mt in section.meeting_times],
    }


def course_summary(course: Course) -> Dict[str, Any]:
    # A course without its sections; used when the section is listed separately.
    return {
        "name": course.name,
        "subject": course.subject,
        "courseNumber": course.course_number,
        "isOptional": course.optional,
    }


def course_to_dict(course: Course) -> Dict[str, Any]:
    return dict(course_summary(course), sections=[section_to_dict(s) for s in course.sections])


def courses_to_document(courses: Iterable[Course]) -> List[Dict[str, Any]]:
    return [course_to_dict(c) for c in courses]


def schedule_to_document(schedule: Schedule) -> Dict[str, Any]:
    earliest, latest = schedule.earliest, schedule.latest
    return {
        "earliest": _time_text(earliest) if earliest is not None else None,
        "latest": _time_text(latest) if latest is not None else None,
        "selections": [
            {"course": course_summary(sel.course), "section": section_to_dict(sel.section)}
            for sel in schedule
        ],
    }


# ---------------------------------------------------------------- decoding

def _expect(value: Any, kind: type, where: str) -> Any:
    if not isinstance(value, kind):
        raise CatalogError(f"{where}: expected {kind.__name__}, got {type(value).__name__}")
    return value


def _parse_time(value: Any, where: str) -> time:
    _expect(value, str, where)
    try:
        return time.fromisoformat(value)
    except ValueError:
        raise CatalogError(f"{where}: invalid time of day {value!r}") from None


def meeting_time_from_dict(data: Dict[str, Any], where: str = "meetingTime") -> MeetingTime:
    _expect(data, dict, where)
    for key in ("start", "end", "days"):
        if key not in data:
            raise CatalogError(f"{where}: missing '{key}'")
    days = _expect(data["days"], list, f"{where}.days")
    return MeetingTime(
        start=_parse_time(data["start"], f"{where}.start"),
        end=_parse_time(data["end"], f"{where}.end"),
        days=[Day.coerce(d) for d in days],
        location=data.get("location"),
    )


def section_from_dict(data: Dict[str, Any], where: str = "section") -> Section:
    _expect(data, dict, where)
    times = _expect(data.get("meetingTimes", []), list, f"{where}.meetingTimes")
    return Section(
        section_number=data.get("sectionNumber"),
        crn=data.get("crn"),
        teacher=data.get("teacher"),
        meeting_times=[
            meeting_time_from_dict(mt, f"{where}.meetingTimes[{i}]") for i, mt in enumerate(times)
        ],
    )


def course_from_dict(data: Dict[str, Any], where: str = "course") -> Course:
    _expect(data, dict, where)
    sections = _expect(data.get("sections", []), list, f"{where}.sections")
    return Course(
        name=data.get("name"),
        subject=data.get("subject"),
        course_number=data.get("courseNumber"),
        optional=_expect(data.get("isOptional", False), bool, f"{where}.isOptional"),
        sections=[section_from_dict(s, f"{where}.sections[{i}]") for i, s in enumerate(sections)],
    )


def courses_from_document(document: Any) -> List[Course]:
    # Decode the whole document up front; nothing is returned unless every course is valid.
    _expect(document, list, "catalog")
    courses = []
    for i, data in enumerate(document):
        where = f"catalog[{i}]"
        try:
            courses.append(course_from_dict(data, where))
        except (InvalidInterval, ConflictingMeetingTime) as e:
            raise CatalogError(f"{where}: {e.message}", details=e.details) from e
    return courses


# ---------------------------------------------------------------- files

def _target_mode(path: str) -> int:
    # Mode of the existing file, or what a plain open() would give a new one under the umask.
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def export_courses(courses: Iterable[Course], path: str) -> None:
    # Write to a sibling temp file and swap it in, so a failure never leaves a half-written catalog.
    document = courses_to_document(courses)
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=directory, prefix=".catalog-", suffix=".json", delete=False
        ) as f:
            tmp_path = f.name
            json.dump(document, f, indent=2)
        # NamedTemporaryFile creates the file 0600; keep the catalog readable the way it was.
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise CatalogError(f"Cannot write catalog to {path}: {e}") from e
    logger.info("Exported %d courses to %s", len(document), path)


def import_courses(path: str) -> List[Course]:
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog from {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {path} is not valid JSON: {e}") from e

    courses = courses_from_document(document)
    logger.info("Imported %d courses from %s", len(courses), path)
    return courses
