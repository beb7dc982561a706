"""
App-level behaviour: root and health endpoints, unknown routes, unexpected errors.
"""


async def test_root_reports_build_info(client):
    response = await client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["githubUrl"].startswith("https://github.com/")
    assert response.headers["cache-control"] == "no-cache"


async def test_health(client):
    response = await client.get("/health")
    assert response.json() == {"status": "ok"}


async def test_unknown_route(client):
    response = await client.get("/v1/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"status": "error", "error": {"message": "not found", "code": 404}}


async def test_unexpected_error_is_generic_500(client, fake_db, signed_in):
    headers = signed_in()
    fake_db.when("JOIN user_baby ub", RuntimeError("relation does not exist"))
    response = await client.get("/v1/babies", headers=headers)
    assert response.status_code == 500
    assert response.json() == {
        "status": "error",
        "error": {"code": 500, "message": "Internal server error"},
    }
