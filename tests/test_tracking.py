"""
Baby-scoped tracking routes: feeding, growth, milestones, stool and reminders.

Ownership is granted by answering the `user_baby` lookup; leaving it
unanswered makes the caller a non-owner.
"""

from datetime import datetime, timezone

import pytest

from reminders.service import format_time

OWNS_BABY = "FROM user_baby WHERE baby_id = $1 AND user_id = $2"


@pytest.fixture
def owner(fake_db, signed_in):
    headers = signed_in(user_id=1)
    fake_db.when(OWNS_BABY, {"baby_id": 1})
    return headers


class TestIdValidationComesFirst:
    """A malformed id is a 400 before the token or any row is looked at."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/v1/baby/abc/getFeedingSchedules"),
            ("GET", "/v1/baby/0/growth"),
            ("GET", "/v1/baby/-3/stool"),
            ("DELETE", "/v1/baby/1/deleteFeedingSchedule/x"),
        ],
    )
    async def test_no_database_call(self, client, fake_db, signed_in, method, path):
        response = await client.request(method, path, headers=signed_in())
        assert response.status_code == 400
        assert response.json()["status"] == "error"
        assert fake_db.calls == []

    async def test_message_names_the_parameter(self, client, signed_in):
        response = await client.get("/v1/baby/abc/getFeedingSchedules", headers=signed_in())
        assert response.json()["error"]["message"] == "Invalid baby ID format"


class TestBodyValidationComesFirst:
    """A body missing required fields is a 400 before the caller is looked up."""

    @pytest.mark.parametrize(
        "method,path,message",
        [
            ("POST", "/v1/baby/1/reminders", "Missing required reminder data (title, time, date)"),
            ("DELETE", "/v1/baby/1/reminders", "Please provide either reminderId or reminderIds array"),
            ("POST", "/v1/baby/1/stool", "Missing required stool data (color, consistency)"),
            ("POST", "/v1/baby/1/addFeedingSchedule", "Missing required parameters: meal, time, type, amount"),
            ("POST", "/v1/baby/1/growth", "Missing required parameters: height, weight"),
            ("POST", "/v1/baby/1/milestones", "Missing required parameters: title"),
        ],
    )
    async def test_no_database_call(self, client, fake_db, signed_in, method, path, message):
        response = await client.request(method, path, headers=signed_in(), json={})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == message
        assert fake_db.calls == []

    async def test_path_id_is_still_checked_first(self, client, fake_db, signed_in):
        response = await client.post("/v1/baby/abc/stool", headers=signed_in(), json={})
        assert response.json()["error"]["message"] == "Invalid babyId format"
        assert fake_db.calls == []


class TestNonOwner:
    async def test_feeding_create_is_forbidden(self, client, fake_db, signed_in):
        response = await client.post(
            "/v1/baby/2/addFeedingSchedule",
            headers=signed_in(user_id=1),
            json={"meal": "Lunch", "time": "12:30", "type": "Formula", "amount": 120},
        )
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Access denied: Baby does not belong to current user"
        assert fake_db.queries("INSERT INTO feedingschedule") == []

    async def test_growth_delete_is_forbidden(self, client, fake_db, signed_in):
        response = await client.delete("/v1/baby/2/growth/5", headers=signed_in(user_id=1))
        assert response.status_code == 403
        assert fake_db.queries("DELETE FROM growth") == []


class TestFeeding:
    async def test_missing_fields(self, client, owner, fake_db):
        response = await client.post(
            "/v1/baby/1/addFeedingSchedule", headers=owner, json={"meal": "Lunch"}
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Missing required parameters: time, type, amount"
        assert fake_db.queries("INSERT INTO feedingschedule") == []

    async def test_create(self, client, owner, fake_db):
        row = {
            "feeding_schedule_id": 9,
            "baby_id": 1,
            "meal": "Lunch",
            "date": "2025-03-01",
            "time": "12:30:00",
            "type": "Formula",
            "amount": 120,
            "issues": None,
            "notes": None,
        }
        fake_db.when("INSERT INTO feedingschedule", row)
        response = await client.post(
            "/v1/baby/1/addFeedingSchedule",
            headers=owner,
            json={"meal": "Lunch", "time": "12:30", "type": "Formula", "amount": 120},
        )
        assert response.status_code == 201
        assert response.json() == {"status": "ok", "data": row}

    async def test_empty_list_is_404(self, client, owner):
        response = await client.get("/v1/baby/1/getFeedingSchedules", headers=owner)
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "No feeding schedules found"

    async def test_repeat_delete_is_404(self, client, owner, fake_db):
        fake_db.when("DELETE FROM feedingschedule", {"feeding_schedule_id": 3}, None)
        first = await client.delete("/v1/baby/1/deleteFeedingSchedule/3", headers=owner)
        second = await client.delete("/v1/baby/1/deleteFeedingSchedule/3", headers=owner)
        assert first.status_code == 200
        assert first.json()["message"] == "Feeding schedule deleted successfully"
        assert second.status_code == 404
        assert second.json()["error"]["message"] == "Feeding schedule not found"


class TestGrowth:
    async def test_empty_list_names_the_baby(self, client, owner):
        response = await client.get("/v1/baby/1/growth", headers=owner)
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "No growth records found for [babyId] 1"

    async def test_create_requires_measurements(self, client, owner):
        response = await client.post("/v1/baby/1/growth", headers=owner, json={"height": 60})
        assert response.status_code == 400
        assert "weight" in response.json()["error"]["message"]


class TestMilestones:
    async def test_create_requires_title(self, client, owner):
        response = await client.post("/v1/baby/1/milestones", headers=owner, json={"details": "x"})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Missing required parameters: title"

    async def test_user_milestones_empty_is_ok(self, client, signed_in):
        response = await client.get("/v1/milestones", headers=signed_in())
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "data": []}

    async def test_today_filter(self, client, fake_db, signed_in):
        await client.get("/v1/milestones?today=true", headers=signed_in())
        sql = fake_db.queries("FROM milestones m")[0][1]
        assert "m.date = CURRENT_DATE" in sql


class TestStool:
    async def test_rows_newest_first(self, client, owner, fake_db):
        newer = {
            "stool_id": 2,
            "baby_id": 1,
            "color": "Yellow",
            "consistency": "Soft",
            "notes": None,
            "timestamp": datetime(2025, 3, 2, 8, 0, tzinfo=timezone.utc),
        }
        older = {**newer, "stool_id": 1, "timestamp": datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)}
        fake_db.when("FROM stool_entries", [newer, older])

        response = await client.get("/v1/baby/1/stool", headers=owner)

        assert response.status_code == 200
        assert [row["stool_id"] for row in response.json()["data"]] == [2, 1]
        assert "ORDER BY timestamp DESC" in fake_db.queries("FROM stool_entries")[0][1]

    async def test_create_requires_color_and_consistency(self, client, owner):
        response = await client.post("/v1/baby/1/stool", headers=owner, json={"color": "Green"})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Missing required stool data (color, consistency)"


class TestReminders:
    async def test_delete_reports_only_existing_ids(self, client, owner, fake_db):
        fake_db.when("DELETE FROM reminders", [{"reminder_id": 10}])
        response = await client.request(
            "DELETE", "/v1/baby/1/reminders", headers=owner, json={"reminderIds": ["10", "11"]}
        )
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "message": "Reminder deleted successfully",
            "deletedIds": [10],
        }
        assert fake_db.queries("DELETE FROM reminders")[0][2] == ([10, 11], 1)

    async def test_delete_rejects_bad_ids(self, client, owner, fake_db):
        response = await client.request(
            "DELETE", "/v1/baby/1/reminders", headers=owner, json={"reminderIds": ["10", "x"]}
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "One or more invalid reminder ID formats"
        assert fake_db.queries("DELETE FROM reminders") == []

    async def test_delete_nothing_matched(self, client, owner):
        response = await client.request(
            "DELETE", "/v1/baby/1/reminders", headers=owner, json={"reminderId": 99}
        )
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "No matching reminders found"

    async def test_upcoming_uses_limited_query(self, client, owner, fake_db):
        response = await client.get("/v1/baby/1/reminders?upcoming=true", headers=owner)
        assert response.status_code == 200
        assert fake_db.queries("date >= CURRENT_DATE")

    def test_format_time(self):
        assert format_time("08:30", "am") == "08:30 AM"
        assert format_time("08:30 PM", "AM") == "08:30 PM"
        assert format_time("08:30", None) == "08:30"
