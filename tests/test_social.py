"""
Forum and journal route tests.

The journal routes use the bare error shape `{"error": {"message": ...}}` and
report create-validation problems as `{"errors": [...]}`.
"""

from datetime import datetime

import pytest

from core.errors import ValidationError
from journal.service import validate_draft

POST_EXISTS = "SELECT post_id FROM forumpost WHERE post_id = $1"
POST_OWNED = "WHERE post_id = $1 AND user_id = $2"


class TestForumPosts:
    async def test_create_without_category_stores_null(self, client, fake_db, signed_in):
        fake_db.when(
            "INSERT INTO forumpost",
            {"post_id": 3, "user_id": 1, "title": "Sleep", "content": "Tips?", "category": None},
        )
        response = await client.post(
            "/v1/forum/posts/add", headers=signed_in(), json={"title": "Sleep", "content": "Tips?"}
        )
        assert response.status_code == 201
        assert response.json()["status"] == "ok"
        assert fake_db.queries("INSERT INTO forumpost")[0][2] == (1, "Sleep", "Tips?", None)

    async def test_unknown_category(self, client, fake_db, signed_in):
        response = await client.post(
            "/v1/forum/posts/add",
            headers=signed_in(),
            json={"title": "Sleep", "content": "Tips?", "category": "spam"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid category"
        assert fake_db.queries("INSERT INTO forumpost") == []

    async def test_missing_content(self, client, fake_db, signed_in):
        response = await client.post("/v1/forum/posts/add", headers=signed_in(), json={"title": "Sleep"})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Title and content are required"
        assert fake_db.calls == []

    async def test_update_missing_post(self, client, signed_in):
        response = await client.put(
            "/v1/forum/posts/8", headers=signed_in(), json={"title": "a", "content": "b"}
        )
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Post not found"

    async def test_update_someone_elses_post(self, client, fake_db, signed_in):
        headers = signed_in(user_id=2)
        fake_db.when(POST_OWNED, None)
        fake_db.when(POST_EXISTS, {"post_id": 8})
        response = await client.put(
            "/v1/forum/posts/8", headers=headers, json={"title": "a", "content": "b"}
        )
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Not authorized to modify this post"
        assert fake_db.queries("UPDATE forumpost") == []

    async def test_delete_removes_replies_first(self, client, fake_db, signed_in):
        headers = signed_in()
        fake_db.when(POST_EXISTS, {"post_id": 8})
        fake_db.when("DELETE FROM forumreply", [{"reply_id": 1}, {"reply_id": 2}])
        response = await client.delete("/v1/forum/posts/8", headers=headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Post deleted successfully"
        statements = [sql for _, sql, _ in fake_db.calls if sql.startswith("DELETE")]
        assert statements[0].startswith("DELETE FROM forumreply")
        assert statements[1].startswith("DELETE FROM forumpost")

    async def test_reply_requires_content(self, client, fake_db, signed_in):
        response = await client.post("/v1/forum/posts/8/reply", headers=signed_in(), json={})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Reply content is required"
        assert fake_db.calls == []


class TestJournalValidation:
    def test_collects_every_problem(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_draft(None, "", "not-a-date", '["a"]')
        assert exc_info.value.body == {
            "errors": ["Title is required", "Text content is required", "Invalid date format"]
        }

    def test_malformed_tags_are_reported_alone(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_draft(None, None, None, "{not json")
        assert exc_info.value.body == {"errors": ["Invalid tags format"]}

    def test_too_many_tags(self):
        tags = "[" + ",".join(f'"t{i}"' for i in range(11)) + "]"
        with pytest.raises(ValidationError) as exc_info:
            validate_draft("Day one", "Slept well", "2025-03-01", tags)
        assert exc_info.value.body == {"errors": ["Maximum 10 tags allowed"]}

    def test_valid_draft(self):
        draft = validate_draft(" Day one ", "Slept well", "2025-03-01", '["sleep"]')
        assert draft.tags == ["sleep"]
        assert draft.date == datetime(2025, 3, 1)


class TestJournalRoutes:
    async def test_validation_runs_before_auth(self, client, fake_db):
        response = await client.post("/v1/journal", data={"text": "hello"})
        assert response.status_code == 400
        assert response.json() == {"errors": ["Title is required", "Date is required"]}
        assert fake_db.calls == []

    async def test_create_returns_bare_row(self, client, fake_db, signed_in):
        row = {"entry_id": 5, "user_id": 1, "title": "Day one", "text": "Slept well", "tags": ["sleep"]}
        fake_db.when("INSERT INTO journalentry", row)
        response = await client.post(
            "/v1/journal",
            headers=signed_in(),
            data={"title": "Day one", "text": "Slept well", "date": "2025-03-01", "tags": '["sleep"]'},
        )
        assert response.status_code == 201
        assert response.json() == row

    async def test_errors_use_bare_shape(self, client, signed_in):
        response = await client.get("/v1/journal", headers=signed_in())
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "No journal entries found. Try to create one"}}

    async def test_invalid_entry_id(self, client, fake_db, signed_in):
        response = await client.get("/v1/journal/abc", headers=signed_in())
        assert response.status_code == 400
        assert response.json() == {"error": {"message": "Invalid entry ID provided"}}

    async def test_delete_someone_elses_entry(self, client, fake_db, signed_in):
        headers = signed_in(user_id=1)
        fake_db.when("SELECT user_id FROM journalentry", {"user_id": 2})
        response = await client.delete("/v1/journal/5", headers=headers)
        assert response.status_code == 403
        assert response.json() == {"error": {"message": "You can only delete your own journal entries"}}
        assert fake_db.queries("DELETE FROM journalentry") == []

    async def test_get_one_adds_status(self, client, fake_db, signed_in):
        headers = signed_in()
        fake_db.when("FROM journalentry WHERE entry_id = $1 AND user_id = $2", {"entry_id": 5, "title": "x"})
        response = await client.get("/v1/journal/5", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"entry_id": 5, "title": "x", "status": "ok"}
