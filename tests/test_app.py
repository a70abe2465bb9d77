import app as planner_app
from catalog_io import courses_from_document
from schedule_finder import Generator


def test_root_redirects_to_index(client):
    response = client.get("/")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("index.html")


def test_index_document_is_served(client):
    response = client.get("/index.html")
    assert response.status_code == 200
    assert b"Schedule Planner" in response.data


def test_courses_starts_empty(client):
    response = client.get("/api/courses")
    assert response.status_code == 200
    assert response.get_json() == []


def test_import_courses_is_additive(client, sample_document):
    response = client.post("/api/courses", json=sample_document)
    assert response.status_code == 201
    assert response.get_json() == {"added": 3}

    response = client.post("/api/courses", json=sample_document)
    assert response.get_json() == {"added": 0}

    assert client.get("/api/courses").get_json() == sample_document


def test_import_rejects_malformed_document(client):
    response = client.post("/api/courses", json={"name": "not a list"})
    assert response.status_code == 400
    assert "error" in response.get_json()
    assert client.get("/api/courses").get_json() == []


def test_schedules_for_posted_courses(client, sample_document):
    response = client.post("/api/schedules", json={"courses": sample_document})
    assert response.status_code == 200

    schedules = response.get_json()
    assert len(schedules) == 2
    assert sorted(len(s["selections"]) for s in schedules) == [2, 3]
    assert all(s["earliest"] == "10:00:00" for s in schedules)


def test_schedules_without_optional_merge(client, sample_document):
    response = client.post("/api/schedules", json={"courses": sample_document, "mergeOptional": False})
    schedules = response.get_json()
    assert len(schedules) == 1
    assert schedules[0]["latest"] == "16:50:00"


def test_schedules_for_loaded_catalog(client, sample_document, monkeypatch):
    monkeypatch.setattr(planner_app, "GENERATOR", Generator(courses_from_document(sample_document)))
    response = client.post("/api/schedules", json={})
    assert len(response.get_json()) == 2


def test_no_schedules_reports_unresolvable_pairs(client):
    document = [
        {"name": "Algebra", "sections": [{"meetingTimes": [{"start": "09:00", "end": "10:00", "days": ["MONDAY"]}]}]},
        {"name": "Biology", "sections": [{"meetingTimes": [{"start": "09:30", "end": "11:00", "days": ["MONDAY"]}]}]},
    ]
    response = client.post("/api/schedules", json={"courses": document})

    body = response.get_json()
    assert body["error"] == "No valid schedules found"
    assert [[c["name"] for c in pair] for pair in body["unresolvablePairs"]] == [["Algebra", "Biology"]]


def test_schedules_rejects_bad_input(client):
    assert client.post("/api/schedules", json=[1, 2]).status_code == 400
    assert client.post("/api/schedules", json={"mergeOptional": "yes"}).status_code == 400
    assert client.post("/api/schedules", json={"courses": "CSC420"}).status_code == 400


def test_search_budget_maps_to_422(client, sample_document, monkeypatch):
    generator = Generator(courses_from_document(sample_document), max_nodes=1)
    monkeypatch.setattr(planner_app, "GENERATOR", generator)

    response = client.post("/api/schedules", json={})
    assert response.status_code == 422
    assert response.get_json()["details"] == {"maxNodes": 1}


def test_load_courses(tmp_path, sample_document, monkeypatch):
    monkeypatch.setattr(planner_app, "GENERATOR", Generator())
    assert planner_app.load_courses(str(tmp_path / "missing.json")) == 0

    path = tmp_path / "courses.json"
    Generator(courses_from_document(sample_document)).export_courses(str(path))
    assert planner_app.load_courses(str(path)) == 3
    assert len(planner_app.GENERATOR.courses) == 3
