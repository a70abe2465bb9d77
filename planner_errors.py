# planner_errors.py
# Exception hierarchy shared by the models, the search and the catalog codec.

from typing import Any, Dict, Optional

__all__ = [
    "PlannerError",
    "InvalidInterval",
    "ConflictingMeetingTime",
    "SectionNotInCourse",
    "CatalogError",
    "SearchBudgetExceeded",
]


class PlannerError(Exception):
    # Base class for all schedule planner errors.

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInterval(PlannerError, ValueError):
    # Missing bound, no days, or end <= start.
    pass


class ConflictingMeetingTime(PlannerError, ValueError):
    # The new meeting time overlaps one the section already holds.

    def __init__(self, candidate, existing):
        self.candidate = candidate
        self.existing = existing
        super().__init__(
            f"Meeting time '{candidate}' conflicts with the existing meeting time '{existing}'",
            details={"candidate": str(candidate), "existing": str(existing)},
        )


class SectionNotInCourse(PlannerError, ValueError):
    # The section is not one of the course's sections.

    def __init__(self, course, section):
        self.course = course
        self.section = section
        super().__init__(
            f"Section '{section}' is not a section of course '{course}'",
            details={"course": str(course), "section": str(section)},
        )


class CatalogError(PlannerError):
    # The catalog document cannot be read, written or decoded.
    pass


class SearchBudgetExceeded(PlannerError):
    # The search visited more nodes than its budget allows.

    def __init__(self, max_nodes: int):
        self.max_nodes = max_nodes
        super().__init__(
            f"Schedule search exceeded its budget of {max_nodes} nodes",
            details={"maxNodes": max_nodes},
        )
