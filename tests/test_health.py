def test_health_pings_database(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert res.json()["database"] == "ok"


def test_unknown_route_uses_error_shape(client):
    res = client.get("/api/nothing-here")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Not Found"}


def test_malformed_json_is_validation_error(client, db):
    res = client.post(
        "/api/orders",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["success"] is False
