# tests/unit/api/dashboard/test_routes.py


def test_empty_stats(client, auth_headers):
    response = client.get("/api/dashboard/stats", headers=auth_headers)

    assert response.status_code == 200
    assert response.json["data"] == {"totalLabs": 0, "activeLabs": 0, "totalUsers": 0}


def test_stats(client, auth_headers, profiles):
    response = client.get("/api/dashboard/stats", headers=auth_headers)

    assert response.json["data"] == {"totalLabs": 2, "activeLabs": 1, "totalUsers": 3}


def test_stats_require_dashboard_admin(client, non_admin_headers):
    assert client.get("/api/dashboard/stats", headers=non_admin_headers).status_code == 403
