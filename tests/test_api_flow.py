"""End-to-end tests of the JSON API over an in-memory database and a temporary blob store."""

import re
import tempfile
import unittest

from fastapi.testclient import TestClient

from _support import make_session_factory

from app.api.v1.deps import get_blob_store
from app.core.database import get_db
from app.main import app
from app.services import accounts, catalog
from app.services.identity import LocalIdentityProvider
from app.storage.local import LocalBlobStore

API = "/api/v1"


class ApiTestCase(unittest.TestCase):
    """Wires the app to a fresh SQLite database and a LocalBlobStore in a temp dir."""

    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()
        self._tmp = tempfile.TemporaryDirectory()
        self.blob_store = LocalBlobStore(self._tmp.name, "/files")

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_blob_store] = lambda: self.blob_store

        with self.SessionLocal() as db:
            self.pan_id = catalog.create_service(
                db, "PAN Card", "Apply for new PAN or update existing", "Aadhaar, Photo"
            ).id

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self._tmp.cleanup()

    def client(self) -> TestClient:
        return TestClient(app)

    def register(self, client: TestClient, name: str, email: str, password: str = "secret1"):
        return client.post(
            f"{API}/auth/register",
            json={"name": name, "email": email, "phone": "9876543210", "password": password},
        )

    def make_admin(self, email: str, password: str = "admin-pass") -> TestClient:
        with self.SessionLocal() as db:
            session = accounts.register(db, LocalIdentityProvider(db), "Meera", email, None, password)
            accounts.set_user_role(db, session.user.id, "admin")
        client = self.client()
        resp = client.post(f"{API}/auth/login", json={"email": email, "password": password})
        self.assertEqual(resp.status_code, 200)
        return client

    def submit(self, client: TestClient, service_id: int, labels: list[str]):
        files = {label: (f"{label.lower()}.jpg", b"\xff\xd8image", "image/jpeg") for label in labels}
        return client.post(f"{API}/applications", data={"service_id": str(service_id)}, files=files)


class TestAuthApi(ApiTestCase):
    def test_register_sets_cookies_and_returns_customer(self) -> None:
        client = self.client()
        resp = self.register(client, "Asha", "asha@example.com")
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["user"]["role"], "customer")
        self.assertEqual(body["redirect_to"], "/dashboard")
        self.assertIn("session", resp.cookies)
        self.assertEqual(resp.cookies.get("role"), "customer")

        me = client.get(f"{API}/auth/me")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["email"], "asha@example.com")

    def test_duplicate_registration_is_conflict(self) -> None:
        self.register(self.client(), "Asha", "asha@example.com")
        resp = self.register(self.client(), "Asha", "asha@example.com")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(
            resp.json()["detail"], "This email is already registered. Please log in instead."
        )

    def test_bad_login_is_unauthorized(self) -> None:
        self.register(self.client(), "Asha", "asha@example.com")
        resp = self.client().post(
            f"{API}/auth/login", json={"email": "asha@example.com", "password": "not-it"}
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["detail"], "Invalid email or password.")

    def test_bearer_token_works_without_cookies(self) -> None:
        token = self.register(self.client(), "Asha", "asha@example.com").json()["access_token"]
        resp = self.client().get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)

    def test_logout_clears_session(self) -> None:
        client = self.client()
        self.register(client, "Asha", "asha@example.com")
        self.assertEqual(client.post(f"{API}/auth/logout").status_code, 204)
        self.assertEqual(client.get(f"{API}/auth/me").status_code, 401)

    def test_profile_update(self) -> None:
        client = self.client()
        self.register(client, "Asha", "asha@example.com")
        resp = client.patch(f"{API}/profile", json={"name": "Asha R", "phone": "9000000000"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(client.get(f"{API}/profile").json()["name"], "Asha R")


class TestApplicationLifecycle(ApiTestCase):
    def test_apply_track_review_and_read_back(self) -> None:
        asha = self.client()
        self.register(asha, "Asha", "asha@example.com")

        resp = self.submit(asha, self.pan_id, ["Aadhaar", "Photo"])
        self.assertEqual(resp.status_code, 201, resp.text)
        created = resp.json()
        self.assertRegex(created["tracking_code"], re.compile(r"^DSC-\d{6}$"))
        self.assertEqual(created["status"], "pending")
        self.assertEqual([d["label"] for d in created["documents"]], ["Aadhaar", "Photo"])
        self.assertTrue(created["documents"][0]["file_url"].startswith("/files/"))

        listed = asha.get(f"{API}/applications").json()["applications"]
        self.assertEqual([a["id"] for a in listed], [created["id"]])

        tracked = self.client().get(f"{API}/track/{created['tracking_code']}")
        self.assertEqual(tracked.status_code, 200)
        self.assertEqual(tracked.json()["service_name"], "PAN Card")
        self.assertNotIn("user", tracked.json())

        admin = self.make_admin("meera@example.com")
        overview = admin.get(f"{API}/admin/applications").json()
        self.assertEqual(overview["stats"]["total"], 1)
        self.assertEqual(overview["stats"]["pending"], 1)
        self.assertEqual(overview["applications"][0]["user"]["name"], "Asha")

        updated = admin.patch(
            f"{API}/admin/applications/{created['id']}",
            json={"status": "completed", "remarks": "Done"},
        )
        self.assertEqual(updated.status_code, 200)

        mine = asha.get(f"{API}/applications/{created['id']}").json()
        self.assertEqual(mine["status"], "completed")
        self.assertEqual(mine["remarks"], "Done")

    def test_missing_document_is_rejected_with_labels(self) -> None:
        asha = self.client()
        self.register(asha, "Asha", "asha@example.com")
        resp = self.submit(asha, self.pan_id, ["Aadhaar"])
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["detail"]["missing"], ["Photo"])
        self.assertEqual(asha.get(f"{API}/applications").json()["applications"], [])

    def test_submit_requires_multipart(self) -> None:
        asha = self.client()
        self.register(asha, "Asha", "asha@example.com")
        resp = asha.post(f"{API}/applications", json={"service_id": self.pan_id})
        self.assertEqual(resp.status_code, 415)

    def test_submit_requires_session(self) -> None:
        self.assertEqual(self.submit(self.client(), self.pan_id, ["Aadhaar", "Photo"]).status_code, 401)

    def test_delete_needs_confirmation(self) -> None:
        asha = self.client()
        self.register(asha, "Asha", "asha@example.com")
        app_id = self.submit(asha, self.pan_id, ["Aadhaar", "Photo"]).json()["id"]
        self.assertEqual(asha.delete(f"{API}/applications/{app_id}").status_code, 422)
        self.assertEqual(
            asha.delete(f"{API}/applications/{app_id}", params={"confirm": "true"}).status_code, 204
        )
        self.assertEqual(asha.get(f"{API}/applications/{app_id}").status_code, 404)

    def test_other_customer_cannot_see_application(self) -> None:
        asha = self.client()
        self.register(asha, "Asha", "asha@example.com")
        app_id = self.submit(asha, self.pan_id, ["Aadhaar", "Photo"]).json()["id"]
        ravi = self.client()
        self.register(ravi, "Ravi", "ravi@example.com")
        self.assertEqual(ravi.get(f"{API}/applications/{app_id}").status_code, 404)

    def test_unknown_tracking_code(self) -> None:
        resp = self.client().get(f"{API}/track/DSC-000000")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Application not found. Please check the ID.")


class TestAdminApi(ApiTestCase):
    def test_customer_is_forbidden(self) -> None:
        asha = self.client()
        self.register(asha, "Asha", "asha@example.com")
        self.assertEqual(asha.get(f"{API}/admin/applications").status_code, 403)
        self.assertEqual(
            asha.post(f"{API}/services", json={"name": "X", "documents": "A"}).status_code, 403
        )

    def test_forged_role_cookie_does_not_grant_admin(self) -> None:
        asha = self.client()
        self.register(asha, "Asha", "asha@example.com")
        asha.cookies.set("role", "admin")
        self.assertEqual(asha.get(f"{API}/admin/users").status_code, 403)

    def test_service_crud(self) -> None:
        admin = self.make_admin("meera@example.com")
        created = admin.post(
            f"{API}/services",
            json={"name": "Income Certificate", "description": "", "documents": "Aadhaar, Ration Card"},
        )
        self.assertEqual(created.status_code, 201)
        service_id = created.json()["id"]
        self.assertEqual(created.json()["required_documents"], ["Aadhaar", "Ration Card"])

        names = [s["name"] for s in self.client().get(f"{API}/services").json()["services"]]
        self.assertEqual(names[0], "Income Certificate")

        self.assertEqual(admin.delete(f"{API}/services/{service_id}").status_code, 422)
        self.assertEqual(
            admin.delete(f"{API}/services/{service_id}", params={"confirm": "true"}).status_code, 204
        )
        self.assertEqual(self.client().get(f"{API}/services/{service_id}").status_code, 404)

    def test_users_search_and_role_change(self) -> None:
        asha = self.client()
        user_id = self.register(asha, "Asha", "asha@example.com").json()["user"]["id"]
        admin = self.make_admin("meera@example.com")

        found = admin.get(f"{API}/admin/users", params={"search": "asha"}).json()["users"]
        self.assertEqual([u["id"] for u in found], [user_id])

        resp = admin.patch(f"{API}/admin/users/{user_id}/role", json={"role": "admin"})
        self.assertEqual(resp.status_code, 200)
        # Server-side checks read the column, so the promotion applies immediately.
        self.assertEqual(asha.get(f"{API}/admin/applications").status_code, 200)


if __name__ == "__main__":
    unittest.main()
