"""Smoke tests for middleware, static files and ancillary endpoints."""


def test_health_endpoint(client):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "version" in data


def test_home_page_serves_frontend(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "text/html" in r.headers["content-type"]
    assert "Commons Image Search" in r.text


def test_static_asset(client):
    r = client.get("/app.js")
    assert r.status_code == 200
    assert "/api/search" in r.text


def test_request_id_header(client):
    r = client.get("/health")
    assert r.headers.get("x-request-id")

    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


def test_security_headers(client):
    r = client.get("/api/search", params={"q": "zebra"})
    assert r.headers["x-content-type-options"] == "nosniff"
    assert r.headers["x-frame-options"] == "SAMEORIGIN"
    assert r.headers["referrer-policy"] == "no-referrer"


def test_cors_allows_any_origin_by_default(client):
    r = client.get("/api/search", params={"q": "zebra"}, headers={"Origin": "https://elsewhere.example"})
    assert r.headers["access-control-allow-origin"] == "*"


def test_cors_allow_list_echoes_listed_origin(make_client):
    client = make_client(allowed_origins="https://app.example, https://admin.example")

    allowed = client.get("/api/search", params={"q": "zebra"}, headers={"Origin": "https://app.example"})
    assert allowed.headers["access-control-allow-origin"] == "https://app.example"


def test_cors_denied_origin_is_served_without_allow_origin_header(make_client):
    client = make_client(allowed_origins="https://app.example, https://admin.example")

    denied = client.get("/api/search", params={"q": "zebra"}, headers={"Origin": "https://evil.example"})
    assert denied.status_code == 200
    assert "access-control-allow-origin" not in denied.headers


def test_rate_limit_per_client(make_client, upstream):
    client = make_client(rate_limit_max=2)

    assert client.get("/api/search", params={"q": "zebra"}).status_code == 200
    assert client.get("/api/search", params={"q": "zebra"}).status_code == 200

    r = client.get("/api/search", params={"q": "zebra"})
    assert r.status_code == 429
    assert "error" in r.json()
    assert len(upstream.requests) == 2


def test_rate_limit_covers_validation_failures(make_client):
    client = make_client(rate_limit_max=1)

    assert client.get("/api/search").status_code == 400
    assert client.get("/api/search").status_code == 429


def test_health_is_not_rate_limited(make_client):
    client = make_client(rate_limit_max=1)

    client.get("/api/search", params={"q": "zebra"})
    assert client.get("/api/search", params={"q": "zebra"}).status_code == 429
    assert client.get("/health").status_code == 200
