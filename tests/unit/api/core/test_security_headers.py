# tests/unit/api/core/test_security_headers.py


def test_basic_security_headers(client):
    """Test that basic security headers are set"""
    response = client.get("/")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"


def test_content_security_policy(client):
    """Test Content Security Policy header"""
    csp = client.get("/").headers["Content-Security-Policy"]

    assert "default-src 'none'" in csp
    assert "frame-ancestors 'none'" in csp


def test_json_responses_are_not_cached(client):
    assert client.get("/").headers["Cache-Control"] == "no-store"


def test_hsts_not_in_testing(client):
    """Test HSTS header not present outside production"""
    response = client.get("/")

    assert "Strict-Transport-Security" not in response.headers


def test_hsts_in_production(app, client):
    """Test HSTS header in production environment"""
    app.testing = False
    app.debug = False

    hsts = client.get("/").headers["Strict-Transport-Security"]

    assert "max-age=31536000" in hsts
    assert "includeSubDomains" in hsts


def test_error_responses_have_headers(client):
    """Test that error responses also have security headers"""
    response = client.get("/api/laboratories")

    assert response.status_code == 401
    assert "X-Frame-Options" in response.headers
    assert "Content-Security-Policy" in response.headers
