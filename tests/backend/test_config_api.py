def test_server_config(test_app_client):
    resp = test_app_client.get("/api/v1/config")

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["ok"] is True
    assert data["connection"] == {"host": "cache.example.com", "port": 6380, "tls": True}
    assert data["memory"]["maxmemory_policy"] == "allkeys-lru"
    assert data["keyspace"] == {"databases": 2}
    assert "note" in data


def test_server_config_unreachable(test_app_client, unreachable):
    resp = test_app_client.get("/api/v1/config")

    assert resp.status_code == 500
    assert resp.json()["kind"] == "connectivity"


def test_effective_settings_masked(test_app_client):
    resp = test_app_client.get("/api/v1/config/get")

    assert resp.status_code == 200
    config = resp.json()["config"]
    assert config["REDIS_URL"] == "rediss://:***@cache.example.com:6380/0"
    assert config["DRUPAL_SCAN_LIMIT"] == "100"
    assert "secret" not in resp.text
