"""Tests for saved vehicles."""
from vininfo.domain.models.reminder import Reminder
from tests.helpers import create_reminder, create_vehicle, register


class TestSaveVehicle:

    def test_save(self, client):
        register(client)
        vehicle = create_vehicle(client, vin="tmbjj7ne8j0123456", title="  Služební  ", snapshot={"Barva": "Šedá"})
        assert vehicle["vin"] == "TMBJJ7NE8J0123456"
        assert vehicle["title"] == "Služební"
        assert vehicle["snapshot"] == {"Barva": "Šedá"}
        assert client.get("/api/client/vehicles").json()["vehicles"][0]["id"] == vehicle["id"]

    def test_blank_title_stored_as_null(self, client):
        register(client)
        assert create_vehicle(client, title="   ")["title"] is None

    def test_long_title_truncated(self, client):
        register(client)
        assert create_vehicle(client, title="A" * 80)["title"] == "A" * 60

    def test_identifier_required(self, client):
        register(client)
        resp = client.post("/api/client/vehicles", json={"brand": "ŠKODA"})
        assert resp.status_code == 400

    def test_tp_only(self, client):
        register(client)
        vehicle = create_vehicle(client, vin=None, tp="UD123456")
        assert vehicle["vin"] is None
        assert vehicle["tp"] == "UD123456"

    def test_duplicate_vin_conflict(self, client):
        register(client)
        create_vehicle(client)
        resp = client.post("/api/client/vehicles", json={"vin": "TMBJJ7NE8J0123456"})
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "ConflictError"

    def test_same_vin_for_other_user(self, client):
        register(client, "alice@example.cz")
        create_vehicle(client)
        register(client, "bob@example.cz")
        create_vehicle(client)
        assert len(client.get("/api/client/vehicles").json()["vehicles"]) == 1

    def test_requires_session(self, client):
        assert client.get("/api/client/vehicles").status_code == 401


class TestRenameVehicle:

    def test_rename(self, client):
        register(client)
        vehicle = create_vehicle(client)
        resp = client.patch(f"/api/client/vehicles/{vehicle['id']}", json={"title": "Rodinné kombi"})
        assert resp.status_code == 200
        assert resp.json()["vehicle"]["title"] == "Rodinné kombi"

    def test_title_too_long(self, client):
        register(client)
        vehicle = create_vehicle(client)
        resp = client.patch(f"/api/client/vehicles/{vehicle['id']}", json={"title": "A" * 61})
        assert resp.status_code == 400

    def test_foreign_vehicle(self, client):
        register(client, "alice@example.cz")
        vehicle = create_vehicle(client)
        register(client, "bob@example.cz")
        resp = client.patch(f"/api/client/vehicles/{vehicle['id']}", json={"title": "Moje"})
        assert resp.status_code == 404


class TestDeleteVehicle:

    def test_delete_cascades_reminders(self, client, db):
        register(client)
        vehicle = create_vehicle(client)
        create_reminder(client, vehicle["id"])

        resp = client.delete(f"/api/client/vehicles/{vehicle['id']}")

        assert resp.json() == {"success": True}
        assert client.get("/api/client/vehicles").json()["vehicles"] == []
        assert db.query(Reminder).count() == 0

    def test_delete_unknown(self, client):
        register(client)
        assert client.delete("/api/client/vehicles/does-not-exist").status_code == 404
