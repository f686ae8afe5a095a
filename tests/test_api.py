"""API-level tests for the Flask app."""

import pytest

from app import app

COFFEE = {"time": "08:00", "caffeine_mg": 95, "duration_min": 15, "label": "Drip Coffee - 8oz"}


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.get_json() == {"ok": True}


def test_sensitivity_levels(client):
    res = client.get("/api/sensitivity")
    assert res.status_code == 200
    data = res.get_json()
    assert [lvl["half_life_hrs"] for lvl in data["levels"]] == [3.0, 4.0, 5.0, 6.0, 7.0]
    assert data["levels"][0]["label"] == "Very Tolerant"
    assert data["default"] == 3


def test_curve_single_coffee(client):
    res = client.post("/api/curve", json={"drinks": [COFFEE], "weight_lbs": 155, "sensitivity": 3})
    assert res.status_code == 200
    data = res.get_json()
    assert data["drink_count"] == 1
    assert data["half_life_hrs"] == 5.0
    assert data["sensitivity"] == 3
    assert data["curve"][0] == {"t": 7.5, "mg": 0.0}
    assert data["peak_time"] == 8.5
    assert data["safe_time"] == pytest.approx(16.75)
    assert data["safe_time_label"] == "4:45 PM"
    assert data["sleep_advice"]["status"] == "ok"


def test_curve_empty(client):
    res = client.post("/api/curve", json={"drinks": []})
    assert res.status_code == 200
    data = res.get_json()
    assert data["curve"] == []
    assert data["safe_time"] is None
    assert data["safe_time_label"] is None
    assert data["sleep_advice"]["status"] == "no_drinks"


def test_curve_clamps_profile(client):
    res = client.post("/api/curve", json={"drinks": [COFFEE], "weight_lbs": "999", "sensitivity": 9})
    assert res.status_code == 200
    data = res.get_json()
    assert data["weight_lbs"] == 300.0
    assert data["half_life_hrs"] == 7.0


def test_curve_explicit_half_life(client):
    res = client.post("/api/curve", json={"drinks": [COFFEE], "half_life_hrs": 3.5})
    assert res.status_code == 200
    assert res.get_json()["half_life_hrs"] == 3.5
    assert res.get_json()["sensitivity"] == 2

    off_scale = client.post("/api/curve", json={"drinks": [COFFEE], "half_life_hrs": 10})
    assert off_scale.status_code == 200
    assert off_scale.get_json()["sensitivity"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {"drinks": [{**COFFEE, "caffeine_mg": 0}]},
        {"drinks": [{**COFFEE, "duration_min": 0}]},
        {"drinks": [{**COFFEE, "time": "8:75"}]},
        {"drinks": [{"time": "08:00", "caffeine_mg": 95}]},
        {"drinks": ["coffee"]},
        {"drinks": "coffee"},
        {"drinks": [COFFEE], "half_life_hrs": 0},
        {"drinks": [COFFEE], "half_life_hrs": "slow"},
        {"drinks": [COFFEE] * 51},
    ],
)
def test_curve_rejects_invalid_input(client, payload):
    res = client.post("/api/curve", json=payload)
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_curve_that_never_settles_is_server_error(client):
    huge = {**COFFEE, "caffeine_mg": 1_000_000}
    res = client.post("/api/curve", json={"drinks": [huge], "sensitivity": 5})
    assert res.status_code == 500
    assert "error" in res.get_json()


def test_concentration(client):
    before = client.post("/api/concentration", json={"time": "08:00", "drinks": [COFFEE]})
    assert before.status_code == 200
    assert before.get_json()["total_mg"] == 0.0

    later = client.post("/api/concentration", json={"time": "10:00", "drinks": [COFFEE], "weight_lbs": 155})
    assert later.status_code == 200
    data = later.get_json()
    assert data["time"] == "10:00"
    assert 70 < data["total_mg"] < 95


def test_concentration_requires_valid_time(client):
    missing = client.post("/api/concentration", json={"drinks": [COFFEE]})
    assert missing.status_code == 400

    bad = client.post("/api/concentration", json={"time": "10:60", "drinks": [COFFEE]})
    assert bad.status_code == 400
    assert "HH:mm" in bad.get_json()["error"]


@pytest.mark.parametrize("path", ["/api/curve", "/api/concentration"])
@pytest.mark.parametrize("body", [[1], "coffee", 95])
def test_non_object_body_rejected(client, path, body):
    res = client.post(path, json=body)
    assert res.status_code == 400
    assert res.get_json()["error"] == "Request body must be a JSON object"
