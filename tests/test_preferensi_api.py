"""
API tests for the preferensi routes.
"""

from datetime import timedelta

from sqlalchemy.exc import OperationalError

from preferensi_api.core.auth import create_access_token


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


PREF_A = {"name": "Kopi Senja", "ambience": "cozy", "utils": ["wifi"], "view": "city"}
PREF_B = {"name": "Pantai", "ambience": "open", "utils": ["parking"], "view": "sea"}


class TestCreatePreferensi:
    def test_requires_token(self, client):
        r = client.post("/preferensi", json=PREF_A)
        assert r.status_code == 401

    def test_create(self, client, register_user):
        _, user = register_user()
        r = client.post("/preferensi", json=PREF_A, headers=_auth(user["token"]))
        assert r.status_code == 200

        body = r.json()
        assert body["success"] is True
        assert body["message"] == "Berhasil menambahkan preferensi"
        result = body["preferensiResult"]
        assert result["preferensiId"]
        assert result["userId"] == user["id"]
        for key, value in PREF_A.items():
            assert result[key] == value

    def test_omitted_attributes_are_left_out(self, client, register_user):
        _, user = register_user()
        r = client.post(
            "/preferensi", json={"name": "Kopi Senja"}, headers=_auth(user["token"])
        )
        result = r.json()["preferensiResult"]
        assert set(result) == {"preferensiId", "name", "userId"}

        stored = client.get("/preferensi", headers=_auth(user["token"])).json()[0]
        assert set(stored) == {"id", "name", "userId"}

    def test_form_body(self, client, register_user):
        _, user = register_user()
        r = client.post(
            "/preferensi",
            data={"name": "Kopi Senja", "ambience": "cozy", "utils": ["wifi", "parking"]},
            headers=_auth(user["token"]),
        )
        assert r.status_code == 200
        result = r.json()["preferensiResult"]
        assert result["ambience"] == "cozy"
        assert result["utils"] == ["wifi", "parking"]

    def test_missing_token_checked_before_body(self, client):
        r = client.post(
            "/preferensi",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert r.status_code == 401

    def test_matching_user_id_in_body_is_accepted(self, client, register_user):
        _, user = register_user()
        r = client.post(
            "/preferensi",
            json={**PREF_A, "userId": user["id"]},
            headers=_auth(user["token"]),
        )
        assert r.status_code == 200

    def test_other_user_id_in_body_is_rejected(self, client, register_user):
        _, alice = register_user(email="alice@example.com")
        _, bob = register_user(email="bob@example.com")
        r = client.post(
            "/preferensi",
            json={**PREF_A, "userId": bob["id"]},
            headers=_auth(alice["token"]),
        )
        assert r.status_code == 403

        listed = client.get("/preferensi", headers=_auth(bob["token"]))
        assert listed.json() == []

    def test_store_failure(self, client, app, register_user, monkeypatch):
        _, user = register_user()

        def boom(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk full"))

        monkeypatch.setattr(app.state.preferensi_service.repo, "create_for_user", boom)
        r = client.post("/preferensi", json=PREF_A, headers=_auth(user["token"]))
        assert r.status_code == 500
        assert r.json() == {"error": "Gagal menambahkan preferensi"}


class TestListPreferensi:
    def test_requires_token(self, client):
        assert client.get("/preferensi").status_code == 401

    def test_empty(self, client, register_user):
        _, user = register_user()
        r = client.get("/preferensi", headers=_auth(user["token"]))
        assert r.status_code == 200
        assert r.json() == []

    def test_two_preferences(self, client, register_user):
        _, user = register_user()
        created = [
            client.post("/preferensi", json=p, headers=_auth(user["token"])).json()
            for p in (PREF_A, PREF_B)
        ]

        r = client.get("/preferensi", headers=_auth(user["token"]))
        items = r.json()
        assert len(items) == 2
        assert len({item["id"] for item in items}) == 2
        assert {item["id"] for item in items} == {
            c["preferensiResult"]["preferensiId"] for c in created
        }
        assert all(item["userId"] == user["id"] for item in items)
        assert {item["view"] for item in items} == {"city", "sea"}

    def test_lists_only_own_preferences(self, client, register_user):
        _, alice = register_user(email="alice@example.com")
        _, bob = register_user(email="bob@example.com")
        client.post("/preferensi", json=PREF_A, headers=_auth(alice["token"]))
        client.post("/preferensi", json=PREF_B, headers=_auth(bob["token"]))

        items = client.get("/preferensi", headers=_auth(alice["token"])).json()
        assert [item["name"] for item in items] == ["Kopi Senja"]

    def test_user_id_in_body(self, client, register_user):
        _, alice = register_user(email="alice@example.com")
        _, bob = register_user(email="bob@example.com")
        client.post("/preferensi", json=PREF_A, headers=_auth(alice["token"]))

        own = client.request(
            "GET", "/preferensi", json={"userId": alice["id"]}, headers=_auth(alice["token"])
        )
        assert own.status_code == 200
        assert len(own.json()) == 1

        other = client.request(
            "GET", "/preferensi", json={"userId": alice["id"]}, headers=_auth(bob["token"])
        )
        assert other.status_code == 403

    def test_token_from_query(self, client, register_user):
        _, user = register_user()
        client.post("/preferensi", json=PREF_A, params={"token": user["token"]})
        r = client.get("/preferensi", params={"token": user["token"]})
        assert r.status_code == 200
        assert len(r.json()) == 1

    def test_deleting_user_removes_preferences(self, client, register_user):
        _, user = register_user()
        client.post("/preferensi", json=PREF_A, headers=_auth(user["token"]))
        client.delete(f"/users/{user['id']}")

        # The token outlives the user; the listing is simply empty.
        assert client.get("/preferensi", headers=_auth(user["token"])).json() == []

    def test_expired_token(self, client, register_user, settings):
        _, user = register_user()
        token = create_access_token(
            settings, user["id"], "budi@example.com", expires_delta=timedelta(seconds=-5)
        )
        r = client.get("/preferensi", headers=_auth(token))
        assert r.status_code == 401
