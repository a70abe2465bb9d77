import json
from datetime import time
from pathlib import Path

import pytest

from course_models import Course, Day, MeetingTime, Section

SAMPLE_CATALOG = Path(__file__).resolve().parents[1] / "courses.json"


def hm(text):
    # "13:05" -> time(13, 5)
    return time.fromisoformat(text)


def meeting(start, end, *days, location=""):
    return MeetingTime(hm(start), hm(end), days or (Day.MONDAY,), location)


def section(number, *meeting_times, crn="", teacher=""):
    return Section(number, crn or f"crn-{number}", teacher, meeting_times)


def course(name, *sections, optional=False, subject="CSC", number=""):
    return Course(name, subject, number, optional, sections)


@pytest.fixture
def sample_document():
    with open(SAMPLE_CATALOG, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def client(monkeypatch):
    import app as planner_app
    from schedule_finder import Generator

    # Each test gets its own empty catalog instead of whatever was loaded at import.
    monkeypatch.setattr(planner_app, "GENERATOR", Generator())
    planner_app.app.config.update(TESTING=True)

    with planner_app.app.test_client() as test_client:
        yield test_client
