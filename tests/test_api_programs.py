"""
Programs API Tests
==================
End-to-end tests of the programs blueprint through the Flask test client.
"""

import pytest

from app.schemas import ErrorResponse, SuccessResponse


def _create(client, **overrides):
    payload = {
        "name": "Morning Show",
        "days": ["monday", "wednesday"],
        "start_time": "09:00",
        "end_time": "10:00",
        "station_id": "station-1",
    }
    payload.update(overrides)
    return client.post("/api/v1/programs", json=payload)


def _ok(response, status=200):
    assert response.status_code == status, response.get_json()
    body = SuccessResponse[dict].model_validate(response.get_json())
    return body.data


def _error(response, status):
    assert response.status_code == status, response.get_json()
    return ErrorResponse.model_validate(response.get_json()).error


class TestProgramWrites:
    def test_create(self, client):
        data = _ok(_create(client), 201)
        assert data["slug"].startswith("morning-show-station-1-")
        assert data["days"] == [1, 3]
        assert data["duration"] == 60
        assert data["formatted_duration"] == "1 hr"

    def test_create_ignores_duration(self, client):
        data = _ok(_create(client, duration=5), 201)
        assert data["duration"] == 60

    def test_create_invalid_time(self, client):
        error = _error(_create(client, start_time="25:00"), 400)
        assert "HH:MM" in error["message"]

    @pytest.mark.parametrize("days", [1.5, {"monday": True}, None])
    def test_create_malformed_days(self, client, days):
        error = _error(_create(client, days=days), 400)
        assert "days" in error["message"]

    def test_create_conflict(self, client):
        _ok(_create(client, name="A"), 201)
        error = _error(_create(client, name="B", start_time="09:30", end_time="10:30"), 409)
        assert error["conflicts"][0]["name"] == "A"

    def test_create_same_name_other_station(self, client):
        first = _ok(_create(client), 201)
        second = _ok(_create(client, station_id="station-2"), 201)
        assert first["slug"] != second["slug"]

    def test_create_duplicate_slug(self, client):
        _ok(_create(client, slug="morning-show"), 201)
        error = _error(_create(client, slug="morning-show", station_id="station-2"), 409)
        assert error["slug"] == "morning-show"

    def test_update(self, client):
        program_id = _ok(_create(client), 201)["program_id"]
        data = _ok(client.patch(f"/api/v1/programs/{program_id}", json={"end_time": "11:00"}))
        assert data["duration"] == 120

    def test_update_missing(self, client):
        _error(client.patch("/api/v1/programs/999", json={"name": "Ghost"}), 404)

    def test_toggle(self, client):
        program_id = _ok(_create(client), 201)["program_id"]
        assert _ok(client.post(f"/api/v1/programs/{program_id}/toggle"))["is_active"] is False
        assert _ok(client.post(f"/api/v1/programs/{program_id}/toggle"))["is_active"] is True

    def test_delete(self, client):
        program_id = _ok(_create(client), 201)["program_id"]
        response = client.delete(f"/api/v1/programs/{program_id}", headers={"X-Actor": "editor"})
        assert _ok(response)["program_id"] == program_id
        assert response.get_json()["message"] == "Program deleted"
        _error(client.get(f"/api/v1/programs/{program_id}"), 404)

    def test_delete_missing(self, client):
        _error(client.delete("/api/v1/programs/999"), 404)


class TestProgramReads:
    def test_list_with_filters(self, client):
        _create(client, name="Zeta")
        _create(client, name="Alpha", days=["sunday"], is_active=False)
        _create(client, name="Beta", station_id="station-2", description="Jazz")

        data = _ok(client.get("/api/v1/programs"))
        assert [p["name"] for p in data["programs"]] == ["Alpha", "Beta", "Zeta"]
        data = _ok(client.get("/api/v1/programs?is_active=false"))
        assert [p["name"] for p in data["programs"]] == ["Alpha"]
        data = _ok(client.get("/api/v1/programs?station_id=station-2&search=jazz"))
        assert [p["name"] for p in data["programs"]] == ["Beta"]
        data = _ok(client.get("/api/v1/programs?day=monday"))
        assert data["count"] == 2

    @pytest.mark.parametrize("query", ["is_active=maybe", "day=funday"])
    def test_list_bad_filter(self, client, query):
        _error(client.get(f"/api/v1/programs?{query}"), 400)

    def test_get_by_id_and_slug(self, client):
        created = _ok(_create(client), 201)
        program_id = created["program_id"]
        assert _ok(client.get(f"/api/v1/programs/{program_id}"))["name"] == "Morning Show"
        assert _ok(client.get(f"/api/v1/programs/slug/{created['slug']}"))["program_id"] == program_id

    def test_get_missing(self, client):
        _error(client.get("/api/v1/programs/404"), 404)

    def test_search(self, client):
        _create(client, description="Coffee and news")
        data = _ok(client.get("/api/v1/programs/search?q=coffee"))
        assert data["count"] == 1

    def test_blank_search(self, client):
        _error(client.get("/api/v1/programs/search?q="), 400)

    def test_by_time(self, client):
        _create(client)
        data = _ok(client.get("/api/v1/programs/by-time?start=09:30&end=09:45"))
        assert data["count"] == 1

    def test_stats(self, client):
        _create(client)
        _create(client, name="Long", days=[0], start_time="10:00", end_time="13:00")
        assert _ok(client.get("/api/v1/programs/stats")) == {"total_programs": 2, "avg_duration": 120.0}


class TestScheduleViews:
    @pytest.mark.parametrize("day", ["monday", "1", "Monday"])
    def test_day_schedule(self, client, day):
        _create(client)
        data = _ok(client.get(f"/api/v1/schedule/day/{day}"))
        assert data["day"] == 1
        assert [p["name"] for p in data["programs"]] == ["Morning Show"]

    def test_invalid_day(self, client):
        error = _error(client.get("/api/v1/schedule/day/funday"), 400)
        assert "Invalid day name" in error["message"]

    def test_now_with_at(self, client):
        _create(client)
        # 2024-01-01 was a Monday
        data = _ok(client.get("/api/v1/schedule/now?at=2024-01-01T10:00:00"))
        assert [p["name"] for p in data["programs"]] == ["Morning Show"]
        data = _ok(client.get("/api/v1/schedule/now?at=2024-01-01T10:01:00"))
        assert data["count"] == 0

    def test_now_invalid_at(self, client):
        _error(client.get("/api/v1/schedule/now?at=yesterday"), 400)

    def test_weekly_grouped(self, client):
        _create(client)
        data = _ok(client.get("/api/v1/schedule/weekly?grouped=true"))
        assert sorted(data) == [str(day) for day in range(7)]
        assert [p["name"] for p in data["1"]] == ["Morning Show"]
        assert data["2"] == []

    def test_weekly_flat(self, client):
        _create(client)
        assert _ok(client.get("/api/v1/schedule/weekly"))["count"] == 1

    def test_station_schedule(self, client):
        _create(client, station_id="kxyz")
        data = _ok(client.get("/api/v1/stations/kxyz/schedule"))
        assert data["count"] == 1

    def test_conflicts_empty(self, client):
        _create(client)
        assert _ok(client.get("/api/v1/schedule/conflicts")) == {"conflicts": [], "count": 0}

    def test_unknown_route(self, client):
        _error(client.get("/api/v1/nothing-here"), 404)
