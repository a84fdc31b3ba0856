"""Health probes — liveness always up, readiness tied to the database."""

from namebind.main import app


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy"}


async def test_readiness_without_database(client):
    app.state.db = None
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"
