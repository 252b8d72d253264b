from sqlalchemy import text

from conftest import PRINCIPAL


def test_list_interests_sorted_by_name(client, seeded):
    res = client.get("/api/interests")

    assert res.status_code == 200
    body = res.json()
    assert [row["name"] for row in body] == ["Art", "Coding", "Music", "Yoga"]
    assert sorted(row["id"] for row in body) == sorted(row["id"] for row in seeded)


def test_list_interests_empty_catalog(client):
    res = client.get("/api/interests")

    assert res.status_code == 200
    assert res.json() == []


def test_list_interests_passes_extra_columns_through(client, engine):
    with engine.begin() as conn:
        conn.execute(text("ALTER TABLE interests ADD COLUMN emoji TEXT"))
        conn.execute(text("INSERT INTO interests (id, name, emoji) VALUES ('int_tea', 'Tea', 'cup')"))

    res = client.get("/api/interests")

    assert res.status_code == 200
    assert res.json() == [{"id": "int_tea", "name": "Tea", "emoji": "cup"}]


def test_list_interests_needs_no_auth(client, seeded):
    res = client.get("/api/interests", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 200


def test_list_interests_database_failure_is_500(client, engine, caplog):
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE user_interests"))
        conn.execute(text("DROP TABLE interests"))

    res = client.get("/api/interests")

    assert res.status_code == 500
    assert res.json() == {"detail": "Internal Server Error"}
    assert "Error fetching interests" in caplog.text


def test_my_interests_lists_linked_interests(client, seeded, auth_headers):
    client.post("/api/users/onboard", json={"interestIds": ["int_yoga", "int_art"]}, headers=auth_headers)

    res = client.get("/api/users/me/interests", headers=auth_headers)

    assert res.status_code == 200
    assert [row["name"] for row in res.json()] == ["Art", "Yoga"]


def test_my_interests_unknown_user_is_404(client, seeded, auth_headers):
    res = client.get("/api/users/me/interests", headers=auth_headers)

    assert res.status_code == 404
    assert PRINCIPAL in res.json()["detail"]


def test_my_interests_requires_auth(client, seeded):
    res = client.get("/api/users/me/interests")
    assert res.status_code == 401
