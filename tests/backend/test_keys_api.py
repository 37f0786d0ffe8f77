PREFIX = "pantheon-redis-json"


def test_search_cid_requires_cid(test_app_client, fake_redis):
    resp = test_app_client.get("/api/v1/search-cid")

    assert resp.status_code == 400
    assert resp.json() == {"ok": False, "error": "Missing 'cid' parameter", "kind": "validation"}
    assert fake_redis.calls == []


def test_search_cid(test_app_client, fake_redis):
    fake_redis.add(f"{PREFIX}:render:node_1[route]=x]", ttl=-1, size=64)
    fake_redis.add(f"{PREFIX}:render:node_10", ttl=30, size=64)
    fake_redis.add(f"{PREFIX}:page:node_1", ttl=30, size=32)

    resp = test_app_client.get("/api/v1/search-cid", params={"cid": "node_1", "bin": "render"})

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["bin"] == "render"
    assert data["pattern"] == f"{PREFIX}:render:node_1*"
    assert data["count"] == 1
    assert data["keys"] == [
        {
            "key": f"{PREFIX}:render:node_1[route]=x]",
            "bin": "render",
            "cid": "node_1",
            "ttl": "PERSIST",
            "type": "string",
            "size": 64,
        }
    ]


def test_search_cid_limit(test_app_client, fake_redis):
    fake_redis.add(f"{PREFIX}:render:node_1")
    fake_redis.add(f"{PREFIX}:page:node_1")

    resp = test_app_client.get("/api/v1/search-cid", params={"cid": "node_1", "limit": 1})

    assert resp.status_code == 200
    assert resp.json()["count"] == 1
    assert resp.json()["bin"] == "all"


def test_search_cid_invalid_limit(test_app_client):
    resp = test_app_client.get("/api/v1/search-cid", params={"cid": "node_1", "limit": 0})
    assert resp.status_code == 422


def test_search_cid_unreachable(test_app_client, unreachable):
    resp = test_app_client.get("/api/v1/search-cid", params={"cid": "node_1"})

    assert resp.status_code == 500
    assert resp.json()["kind"] == "connectivity"


def test_inspect_key_requires_key(test_app_client):
    resp = test_app_client.get("/api/v1/inspect-key")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Missing key parameter"


def test_inspect_key(test_app_client, fake_redis):
    fake_redis.add("members", {"b", "a"}, key_type="set")

    resp = test_app_client.get("/api/v1/inspect-key", params={"key": "members"})

    assert resp.status_code == 200
    assert resp.json() == {"key": "members", "type": "set", "value": ["a", "b"]}


def test_inspect_missing_key(test_app_client):
    resp = test_app_client.get("/api/v1/inspect-key", params={"key": "missing"})

    assert resp.status_code == 200
    assert resp.json() == {"key": "missing", "type": "none", "value": None}


def test_inspect_key_store_error(test_app_client, fake_redis):
    fake_redis.fail("TYPE")

    resp = test_app_client.get("/api/v1/inspect-key", params={"key": "anything"})

    assert resp.status_code == 500
    assert resp.json()["ok"] is False
