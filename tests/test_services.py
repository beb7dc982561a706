"""
Lookups, doctor/parent links, shared documents and childcare favorites.
"""

from datetime import date

import asyncpg
import pytest

from documents.service import content_disposition
from lookups.service import age_in_months
from medical.service import group_babies_by_parent

OWNS_BABY = "FROM user_baby WHERE baby_id = $1 AND user_id = $2"
DOCTOR_HAS_BABY = "FROM doctor_baby WHERE baby_id = $1 AND doctor_id = $2"


class TestLookups:
    async def test_coupons_are_public(self, client, fake_db):
        fake_db.when("FROM coupons", [{"coupon_id": 1}])
        response = await client.get("/v1/coupons")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "data": [{"coupon_id": 1}]}

    async def test_no_coupons(self, client):
        response = await client.get("/v1/coupons")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "No coupons found"

    @pytest.mark.parametrize("query,expected", [("", None), ("?category=ALL", None), ("?category=Sleep", "Sleep")])
    async def test_quiz_category_filter(self, client, fake_db, query, expected):
        fake_db.when("FROM quizquestions", [{"question_id": 1}])
        response = await client.get(f"/v1/quiz{query}")
        assert response.json() == {"status": "ok", "dataQuiz": [{"question_id": 1}]}
        assert fake_db.queries("FROM quizquestions")[0][2][0] == expected

    def test_age_in_months(self):
        assert age_in_months(date(2025, 1, 15), date(2025, 3, 14)) == 1
        assert age_in_months(date(2025, 1, 15), date(2025, 3, 15)) == 2

    async def test_tips_fall_back_to_catalogue(self, client, fake_db, signed_in):
        headers = signed_in()
        fake_db.when("JOIN user_baby ub", [{"baby_id": 1, "gender": "Girl", "birthdate": "2025-01-10"}])
        fake_db.when("FROM tipsnotificationsettings", {"user_id": 1, "notification_frequency": "Daily", "opt_in": True})
        fake_db.when("WHERE $1 BETWEEN min_age AND max_age", [{"tip_id": 4}])
        fake_db.when("FROM curatedtips ORDER BY tip_id", [{"tip_id": 1}, {"tip_id": 2}, {"tip_id": 3}, {"tip_id": 4}])
        response = await client.get("/v1/tips/notification", headers=headers)
        assert response.status_code == 200
        assert [tip["tip_id"] for tip in response.json()["babiesTips"]] == [1, 2, 3, 4]

    async def test_tips_unknown_user_is_401(self, client, make_token):
        response = await client.get(
            "/v1/tips/notification", headers={"Authorization": f"Bearer {make_token()}"}
        )
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid user ID"

    async def test_settings_need_opt_in(self, client, fake_db, signed_in):
        response = await client.put(
            "/v1/tips/notification", headers=signed_in(), json={"notification_frequency": "Weekly"}
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "opt_in is required"
        assert fake_db.calls == []

    async def test_voice_command(self, client):
        response = await client.post("/v1/voiceCommand", json={"text": "  Feeding Schedule "})
        assert response.json() == {"status": "ok", "message": "feeding schedule"}
        missing = await client.post("/v1/voiceCommand", json={"text": "dance"})
        assert missing.status_code == 404


class TestMedical:
    def test_group_babies_by_parent(self):
        row = {
            "parent_id": 5,
            "parent_first_name": "Pat",
            "parent_last_name": "Lee",
            "baby_first_name": "Mia",
            "baby_last_name": "Lee",
            "gender": "Girl",
            "weight": 3.4,
            "height": 50,
            "birthdate": "2025-01-10",
        }
        grouped = group_babies_by_parent([{**row, "baby_id": 1}, {**row, "baby_id": 2}])
        assert len(grouped) == 1
        assert grouped[0]["parent_name"] == "Pat Lee"
        assert [baby["baby_id"] for baby in grouped[0]["babies"]] == [1, 2]

    async def test_connect_requires_owned_baby(self, client, fake_db, signed_in):
        response = await client.post(
            "/v1/medical-professional/9/connect", headers=signed_in(), json={"baby_id": 3}
        )
        assert response.status_code == 403
        assert fake_db.queries("INSERT INTO doctor_baby") == []

    async def test_connect_unknown_doctor(self, client, fake_db, signed_in):
        headers = signed_in()
        fake_db.when(OWNS_BABY, {"baby_id": 3})
        response = await client.post("/v1/medical-professional/9/connect", headers=headers, json={"baby_id": 3})
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Medical professional not found"

    async def test_connect_twice(self, client, fake_db, signed_in):
        headers = signed_in()
        fake_db.when(OWNS_BABY, {"baby_id": 3})
        fake_db.when("AND role = $2", {"user_id": 9})
        fake_db.when("INSERT INTO doctor_baby", asyncpg.UniqueViolationError("duplicate key"))
        response = await client.post("/v1/medical-professional/9/connect", headers=headers, json={"baby_id": 3})
        assert response.status_code == 409

    async def test_missing_baby_id(self, client, fake_db, signed_in):
        response = await client.post("/v1/medical-professional/9/connect", headers=signed_in(), json={})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Missing doctor_id or baby_id"
        assert fake_db.calls == []

    async def test_doctor_views_are_self_only(self, client, signed_in):
        response = await client.get("/v1/doctor/9/healthRecords", headers=signed_in(user_id=1))
        assert response.status_code == 403

    async def test_health_records_without_patients(self, client, signed_in):
        response = await client.get("/v1/doctor/9/healthRecords", headers=signed_in(user_id=9))
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "No babies assigned to this doctor"


class TestDocuments:
    def test_content_disposition_escapes_filename(self):
        assert content_disposition("report (1).pdf") == 'attachment; filename="report (1).pdf"'
        assert content_disposition('a"b.pdf') == 'attachment; filename="a%22b.pdf"'

    async def test_upload_without_document_is_rejected_first(self, client, fake_db, signed_in):
        response = await client.post(
            "/v1/parent/5/babies/1/doctors/9/uploadFile",
            headers=signed_in(user_id=5),
            files={"file": ("scan.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "No file uploaded"
        assert fake_db.calls == []

    async def test_doctor_upload(self, client, fake_db, signed_in):
        headers = signed_in(user_id=9)
        fake_db.when(OWNS_BABY, {"baby_id": 1})
        fake_db.when(DOCTOR_HAS_BABY, {"baby_id": 1})
        fake_db.when("INSERT INTO sharing_health_documents_baby_doctor", {"document_id": 13, "filename": "plan.pdf"})
        response = await client.post(
            "/v1/doctor/9/babies/1/parent/5/uploadFile",
            headers=headers,
            files={"document": ("plan.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 200
        args = fake_db.queries("INSERT INTO sharing_health_documents_baby_doctor")[0][2]
        assert args == ("plan.pdf", b"%PDF", "application/pdf", 1, 9, 5, True)

    async def test_parent_upload_needs_doctor_link(self, client, fake_db, signed_in):
        headers = signed_in(user_id=5)
        fake_db.when(OWNS_BABY, {"baby_id": 1})
        response = await client.post(
            "/v1/parent/5/babies/1/doctors/9/uploadFile",
            headers=headers,
            files={"document": ("scan.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Access denied: Baby is not assigned to this doctor"

    async def test_parent_upload(self, client, fake_db, signed_in):
        headers = signed_in(user_id=5)
        fake_db.when(OWNS_BABY, {"baby_id": 1})
        fake_db.when(DOCTOR_HAS_BABY, {"baby_id": 1})
        fake_db.when("INSERT INTO sharing_health_documents_baby_doctor", {"document_id": 12, "filename": "scan.pdf"})
        response = await client.post(
            "/v1/parent/5/babies/1/doctors/9/uploadFile",
            headers=headers,
            files={"document": ("scan.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 200
        args = fake_db.queries("INSERT INTO sharing_health_documents_baby_doctor")[0][2]
        assert args == ("scan.pdf", b"%PDF", "application/pdf", 1, 5, 9, False)

    async def test_parent_files_filtered_by_doctor_and_baby(self, client, fake_db, signed_in):
        response = await client.get("/v1/parent/5/doctors/9/babies/1/getFiles", headers=signed_in(user_id=5))
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Files not found in database"
        assert fake_db.queries("FROM sharing_health_documents_baby_doctor")[0][2] == (True, 9, 5, 1)

    async def test_download_by_stranger(self, client, fake_db, signed_in):
        headers = signed_in(user_id=3)
        fake_db.when(
            "FROM sharing_health_documents_baby_doctor",
            {"document_id": 12, "filename": "scan.pdf", "mimetype": "application/pdf",
             "file_data": b"%PDF", "uploaded_by": 5, "shared_with": 9},
        )
        response = await client.get("/v1/documents/12/download", headers=headers)
        assert response.status_code == 403

    async def test_download_by_recipient(self, client, fake_db, signed_in):
        headers = signed_in(user_id=9)
        fake_db.when(
            "FROM sharing_health_documents_baby_doctor",
            {"document_id": 12, "filename": "scan.pdf", "mimetype": "application/pdf",
             "file_data": b"%PDF", "uploaded_by": 5, "shared_with": 9},
        )
        response = await client.get("/v1/documents/12/download", headers=headers)
        assert response.status_code == 200
        assert response.content == b"%PDF"
        assert response.headers["content-disposition"] == 'attachment; filename="scan.pdf"'


class TestCareServices:
    async def test_anonymous_favorites_are_empty(self, client, fake_db):
        response = await client.get("/v1/careServices/favorites")
        assert response.json() == {"status": "ok", "favorites": []}
        assert fake_db.calls == []

    async def test_favorites_list(self, client, fake_db, signed_in):
        headers = signed_in()
        fake_db.when("FROM user_favorite_providers", [{"provider_id": 2}, {"provider_id": 7}])
        response = await client.get("/v1/careServices/favorites", headers=headers)
        assert response.json() == {"status": "ok", "favorites": [2, 7]}

    async def test_toggle_requires_provider(self, client, fake_db, signed_in):
        response = await client.post("/v1/careServices/favorites", headers=signed_in(), json={"isFavorite": True})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Provider ID is required"
        assert fake_db.calls == []

    async def test_toggle_unknown_provider(self, client, signed_in):
        response = await client.post(
            "/v1/careServices/favorites", headers=signed_in(), json={"providerId": 4, "isFavorite": True}
        )
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Provider not found"

    async def test_add_favorite(self, client, fake_db, childcare_db, signed_in):
        headers = signed_in()
        childcare_db.when("FROM child_providers WHERE id = $1", {"id": 4})
        response = await client.post(
            "/v1/careServices/favorites", headers=headers, json={"providerId": "4", "isFavorite": True}
        )
        assert response.json() == {"status": "ok", "message": "Provider added to favorites"}
        assert fake_db.queries("INSERT INTO childcare_providers")[0][2] == (4, "Provider 4")
        assert fake_db.queries("INSERT INTO user_favorite_providers")[0][2] == (1, 4)

    async def test_provider_listing_uses_childcare_db(self, client, fake_db, childcare_db, signed_in):
        headers = signed_in()
        childcare_db.when("FROM child_providers", [{"id": 1, "name": "Ann"}])
        response = await client.get("/v1/careServices", headers=headers)
        assert response.json() == {"status": "ok", "providers": [{"id": 1, "name": "Ann"}]}
        assert fake_db.queries("FROM child_providers") == []
