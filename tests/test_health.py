from tests.helpers import API


def test_health(client):
    r = client.get(f"{API}/health")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Server is running"


def test_unknown_route_returns_envelope(client):
    r = client.get(f"{API}/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Route not found"}


def test_categories(client):
    r = client.get(f"{API}/categories")
    assert r.status_code == 200
    names = [c["name"] for c in r.json()["data"]]
    assert names == ["Technology", "Arts", "Sports", "Academic", "Social"]
