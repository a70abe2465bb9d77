# app.py
# Provides a minimal Flask-based web surface for the Schedule-Planner: static assets plus a JSON API.

import logging
import os

from flask import Flask, jsonify, redirect, request

from catalog_io import courses_from_document, courses_to_document, course_summary, schedule_to_document
from planner_config import get_settings
from planner_errors import PlannerError, SearchBudgetExceeded
from planner_logging import setup_logging
from schedule_finder import Generator, find_unresolvable_pairs

settings = get_settings()
logger = logging.getLogger(__name__)

# Static assets are served from the site root, e.g. /index.html.
app = Flask(__name__, static_folder=settings.static_folder, static_url_path="")

# The loaded course catalog; filled by load_courses() at startup.
GENERATOR = Generator(max_nodes=settings.search_max_nodes, merge_optional=settings.merge_optional)


@app.get("/")
def root():
    # The root path only points at the index document of the single-page frontend.
    return redirect(settings.index_document)


@app.get("/api/courses")
def api_courses():
    # Returns the complete course catalog as a catalog document.
    return jsonify(courses_to_document(GENERATOR.courses))


@app.post("/api/courses")
def api_import_courses():
    # Adds the posted catalog document to the loaded catalog.
    courses = courses_from_document(request.get_json(silent=True))
    before = len(GENERATOR.courses)
    for course in courses:
        GENERATOR.add_course(course)
    return jsonify({"added": len(GENERATOR.courses) - before}), 201


@app.post("/api/schedules")
def api_schedules():
    # Generates schedules for the posted courses, or for the loaded catalog if none are posted.
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400

    generator = GENERATOR
    if "courses" in body:
        generator = Generator(
            courses_from_document(body["courses"]),
            max_nodes=settings.search_max_nodes,
            merge_optional=settings.merge_optional,
        )

    merge = body.get("mergeOptional")
    if merge is not None and not isinstance(merge, bool):
        return jsonify({"error": "mergeOptional must be a boolean"}), 400

    schedules = sorted(generator.generate(merge_optional=merge))
    if schedules:
        return jsonify([schedule_to_document(s) for s in schedules])

    # If no schedules are possible, identify pairs of courses that are inherently in conflict.
    return jsonify({
        "error": "No valid schedules found",
        "unresolvablePairs": [
            [course_summary(a), course_summary(b)]
            for a, b in find_unresolvable_pairs(generator.courses)
        ],
    })


@app.after_request
def log_request(response):
    logger.info("%s %s -> %s", request.method, request.path, response.status_code)
    return response


@app.errorhandler(SearchBudgetExceeded)
def handle_budget(e: SearchBudgetExceeded):
    logger.warning("%s", e.message)
    return jsonify({"error": e.message, "details": e.details}), 422


@app.errorhandler(PlannerError)
def handle_planner_error(e: PlannerError):
    return jsonify({"error": e.message, "details": e.details}), 400


def load_courses(path: str = None) -> int:
    # Loads the course catalog file into the shared generator, if the file exists.
    path = path or settings.catalog_file
    if not os.path.exists(path):
        logger.warning("No course catalog at %s; starting with an empty catalog", path)
        return 0
    added = GENERATOR.import_courses(path)
    logger.info("Loaded %d courses from %s", added, path)
    return added


if __name__ == "__main__":
    # Load course data into memory and start the development server.
    setup_logging()
    load_courses()
    app.run(debug=settings.debug)
