"""
Tests for the onboarding HTTP endpoint via the Flask test client.
"""

from unittest.mock import MagicMock

import pytest

from database.exceptions import StoreUnavailableError
from services.onboarding_reconciliation_service import OnboardingReconciliationService
from web.app import create_app

API_KEY = "secret-key"
ORIGIN = "https://dashboard.example.com"


@pytest.fixture
def service():
    return MagicMock(spec=OnboardingReconciliationService)


@pytest.fixture
def client(service, store):
    app = create_app(service, store, api_key=API_KEY, allowed_origin=ORIGIN)
    app.testing = True
    return app.test_client()


@pytest.fixture
def seeded(store):
    store.upsert_person("u1", "User One", ["June 2024", "May 2024"])
    store.upsert_person("u2", "User Two")
    return store


class TestAuthGate:
    """Tests for the referer / shared-secret check."""

    def test_rejects_anonymous_request(self, client, service, seeded):
        response = client.get("/api/prime-data?month=June")

        assert response.status_code == 403
        assert response.get_json() == {"error": "Unauthorized access"}
        service.reconcile.assert_not_called()

    def test_rejects_wrong_key(self, client, service, seeded):
        response = client.get("/api/prime-data?month=June", headers={"X-API-Key": "nope"})

        assert response.status_code == 403
        service.reconcile.assert_not_called()

    def test_rejects_foreign_referer(self, client, seeded):
        response = client.get("/api/prime-data", headers={"Referer": "https://evil.example.com/"})

        assert response.status_code == 403

    def test_accepts_dashboard_referer(self, client, seeded):
        response = client.get("/api/prime-data", headers={"Referer": f"{ORIGIN}/cohorts"})

        assert response.status_code == 200

    def test_accepts_api_key(self, client, seeded):
        response = client.get("/api/prime-data", headers={"X-API-Key": API_KEY})

        assert response.status_code == 200


class TestPrimeData:
    """Tests for reconciliation triggering and the response shape."""

    headers = {"X-API-Key": API_KEY}

    def test_returns_all_records(self, client, seeded):
        response = client.get("/api/prime-data", headers=self.headers)

        assert response.get_json() == [
            {"id": "u1", "name": "User One", "joiningDate": ["June 2024", "May 2024"]},
            {"id": "u2", "name": "User Two", "joiningDate": []},
        ]

    def test_without_month_skips_reconciliation(self, client, service, seeded):
        client.get("/api/prime-data", headers=self.headers)

        service.reconcile.assert_not_called()

    def test_empty_month_skips_reconciliation(self, client, service, seeded):
        client.get("/api/prime-data?month=", headers=self.headers)

        service.reconcile.assert_not_called()

    def test_month_triggers_reconciliation(self, client, service, seeded):
        response = client.get("/api/prime-data?month=June&mtop_sec_key=abc", headers=self.headers)

        assert response.status_code == 200
        service.reconcile.assert_called_once_with("June", "abc")

    def test_reconciliation_failure_is_invisible(self, client, service, seeded):
        service.reconcile.side_effect = RuntimeError("upstream exploded")

        response = client.get("/api/prime-data?month=June", headers=self.headers)

        assert response.status_code == 200
        assert len(response.get_json()) == 2

    def test_empty_store_is_404(self, client, store):
        response = client.get("/api/prime-data", headers=self.headers)

        assert response.status_code == 404
        assert response.get_json() == {"message": "No data found in the database"}

    def test_store_failure_is_500(self, client, store, monkeypatch):
        monkeypatch.setattr(store, "find_all_persons", MagicMock(side_effect=StoreUnavailableError("down")))

        response = client.get("/api/prime-data", headers=self.headers)

        assert response.status_code == 500
        assert response.get_json() == {"error": "Failed to fetch data"}

    def test_repeated_parameter_is_rejected(self, client, service, seeded):
        response = client.get("/api/prime-data?month=June&month=July", headers=self.headers)

        assert response.status_code == 400
        assert response.get_json()["errors"][0]["param"] == "month"
        service.reconcile.assert_not_called()


class TestHealth:
    def test_health_needs_no_auth(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}


class TestEndToEnd:
    """Full stack: HTTP request, real service and facade, mocked platform session."""

    def test_new_community_is_reconciled(self, store):
        from tcsion.facade.tcsion_facade import TCSionFacade

        def platform(url, params=None, headers=None, timeout=None):
            response = MagicMock()
            response.status_code = 200
            if url.endswith("enroll_community_course.json"):
                response.json.return_value = [
                    {"slug": "g1", "member_count": 5, "name": "Prime - June 2024 Cohort"}
                ]
            else:
                response.json.return_value = [{"usrloginid": "u1"}] if params["page"] == 1 else []
            return response

        session = MagicMock()
        session.get.side_effect = platform
        facade = TCSionFacade(
            "key123",
            "sid=abc",
            base_url="https://platform.example.com",
            community_session=session,
            member_session=session,
        )
        service = OnboardingReconciliationService(facade, store)
        store.upsert_person("u1", "User One")

        client = create_app(service, store, api_key=API_KEY, allowed_origin=ORIGIN).test_client()
        response = client.get("/api/prime-data?month=June", headers={"Referer": ORIGIN})

        assert response.status_code == 200
        assert response.get_json() == [{"id": "u1", "name": "User One", "joiningDate": ["June 2024"]}]
        assert store.find_group_snapshot("g1").member_count == 5
        # one list call, two member pages
        assert session.get.call_count == 3
