"""
CRUD endpoint tests for the seven tracked resources.

Covers the request lifecycle: authentication, validation, defaults,
date handling, ordering, full-replace updates and deletes.

Run: pytest holdings_api/test_resources_api.py -v
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import update
from sqlalchemy.exc import OperationalError

from holdings_api import tables
from holdings_api.auth_context import create_access_token
from holdings_api.repository import ResourceRepository
from holdings_api.sample_bodies import RESOURCE_PATHS, USER_A, VALID_BODIES


class TestAuthentication:
    """Every resource endpoint rejects unauthenticated callers with 401."""

    @pytest.mark.parametrize("path", RESOURCE_PATHS)
    def test_list_without_token_is_401(self, client, path):
        response = client.get(path)
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    @pytest.mark.parametrize("path", RESOURCE_PATHS)
    def test_create_without_token_is_401_even_with_bad_body(self, client, path):
        # Authentication is checked before the body is parsed or validated
        response = client.post(path, content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 401

    def test_update_and_delete_without_token_are_401(self, client):
        assert client.put("/api/land", params={"id": "x"}, json=VALID_BODIES["/api/land"]).status_code == 401
        assert client.delete("/api/land", params={"id": "x"}).status_code == 401

    def test_garbage_token_is_401(self, client):
        response = client.get("/api/land", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_expired_token_is_401(self, client):
        token = create_access_token({"sub": USER_A}, expires_delta=timedelta(seconds=-5))
        response = client.get("/api/land", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Token expired"

    def test_token_without_subject_is_401(self, client):
        token = create_access_token({"email": "nobody@example.com"})
        response = client.get("/api/land", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_non_bearer_scheme_is_401(self, client):
        response = client.get("/api/land", headers={"Authorization": "Basic dXNlcjpwYXNz"})
        assert response.status_code == 401


class TestCreate:
    @pytest.mark.parametrize("path", RESOURCE_PATHS)
    def test_create_returns_201_with_server_fields(self, client, auth_headers, path):
        response = client.post(path, json=VALID_BODIES[path], headers=auth_headers())

        assert response.status_code == 201
        row = response.json()
        assert len(row["id"]) == 32
        assert row["ownerId"] == USER_A
        assert row["createdAt"].endswith("Z")
        assert row["createdAt"] == row["updatedAt"]

    def test_land_defaults_applied(self, client, auth_headers):
        row = client.post("/api/land", json=VALID_BODIES["/api/land"], headers=auth_headers()).json()

        assert row["status"] == "active"
        assert row["areaUnit"] == "acres"
        assert row["description"] is None
        assert row["acquisitionDate"] == "2024-01-15T00:00:00Z"

    def test_content_defaults_applied(self, client, auth_headers):
        row = client.post("/api/content", json=VALID_BODIES["/api/content"], headers=auth_headers()).json()

        assert row["isRepeatable"] is True
        assert row["distributionChannels"] == ""
        assert row["status"] == "published"
        assert row["viewCount"] == 0
        assert row["publicationDate"] == "2024-04-01T10:00:00Z"

    def test_technology_defaults_and_ai_flag_alias(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/technology"], isAIPowered=True, automationLevel="partial")
        row = client.post("/api/technology", json=body, headers=auth_headers()).json()

        assert row["isAIPowered"] is True
        assert row["automationLevel"] == "partial"
        assert row["status"] == "operational"
        assert row["maintenanceCost"] == 0

    def test_capital_optional_maturity_date(self, client, auth_headers):
        row = client.post("/api/capital", json=VALID_BODIES["/api/capital"], headers=auth_headers()).json()
        assert row["maturityDate"] is None
        assert row["currency"] == "USD"

        body = dict(VALID_BODIES["/api/capital"], maturityDate="2030-06-30")
        row = client.post("/api/capital", json=body, headers=auth_headers()).json()
        assert row["maturityDate"] == "2030-06-30T00:00:00Z"

    def test_offset_datetimes_are_stored_as_utc(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/content"], publicationDate="2024-04-01T12:00:00+02:00")
        row = client.post("/api/content", json=body, headers=auth_headers()).json()
        assert row["publicationDate"] == "2024-04-01T10:00:00Z"

    def test_strings_are_trimmed(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/land"], name="  South Field  ")
        row = client.post("/api/land", json=body, headers=auth_headers()).json()
        assert row["name"] == "South Field"

    def test_unknown_fields_are_ignored(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/land"], favouriteColour="green")
        response = client.post("/api/land", json=body, headers=auth_headers())

        assert response.status_code == 201
        assert "favouriteColour" not in response.json()


class TestValidation:
    def test_missing_required_fields_are_all_reported(self, client, auth_headers):
        response = client.post("/api/land", json={}, headers=auth_headers())

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["detail"]}
        assert fields == {"name", "location", "area", "value", "acquisitionDate"}

    def test_error_entries_carry_field_and_message(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/land"], area="120")
        response = client.post("/api/land", json=body, headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["detail"] == [{"field": "area", "message": "Expected number"}]

    def test_huge_numbers_are_400_not_500(self, client, auth_headers):
        land = dict(VALID_BODIES["/api/land"], area=10**400)
        response = client.post("/api/land", json=land, headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["detail"] == [{"field": "area", "message": "Expected a finite number"}]

        labour = dict(VALID_BODIES["/api/labour"], teamSize=10**30)
        response = client.post("/api/labour", json=labour, headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["detail"] == [{"field": "teamSize", "message": "Integer out of range"}]

        assert client.get("/api/labour", headers=auth_headers()).json() == []

    def test_blank_required_string_is_rejected(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/labour"], employeeName="   ")
        response = client.post("/api/labour", json=body, headers=auth_headers())

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["detail"]] == ["employeeName"]

    def test_non_positive_value_is_rejected(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/land"], value=0)
        response = client.post("/api/land", json=body, headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["detail"][0]["field"] == "value"

    def test_unknown_enum_value_is_rejected(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/land"], areaUnit="furlongs")
        response = client.post("/api/land", json=body, headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["detail"][0]["field"] == "areaUnit"

    def test_invalid_date_is_rejected(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/land"], acquisitionDate="15/01/2024")
        response = client.post("/api/land", json=body, headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["detail"][0]["field"] == "acquisitionDate"

    def test_publication_date_requires_time(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/content"], publicationDate="2024-04-01")
        response = client.post("/api/content", json=body, headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["detail"][0]["field"] == "publicationDate"

    def test_ownership_percentage_bounds(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/businesses"], ownershipPercentage=101)
        response = client.post("/api/businesses", json=body, headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["detail"][0]["field"] == "ownershipPercentage"

    def test_malformed_json_is_400(self, client, auth_headers):
        headers = dict(auth_headers(), **{"Content-Type": "application/json"})
        response = client.post("/api/land", content=b"{not json", headers=headers)

        assert response.status_code == 400
        assert response.json()["detail"] == [{"field": "body", "message": "Malformed JSON"}]

    def test_non_object_body_is_400(self, client, auth_headers):
        response = client.post("/api/land", json=[1, 2, 3], headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["detail"][0]["field"] == "body"

    def test_nothing_is_persisted_on_validation_failure(self, client, auth_headers):
        client.post("/api/land", json={"name": "incomplete"}, headers=auth_headers())
        assert client.get("/api/land", headers=auth_headers()).json() == []


class TestList:
    def test_empty_list(self, client, auth_headers):
        response = client.get("/api/businesses", headers=auth_headers())
        assert response.status_code == 200
        assert response.json() == []

    def test_newest_first(self, client, auth_headers, database):
        ids = []
        for name in ("first", "second", "third"):
            body = dict(VALID_BODIES["/api/land"], name=name)
            ids.append(client.post("/api/land", json=body, headers=auth_headers()).json()["id"])

        # Spread creation times so ordering does not depend on clock resolution
        base = datetime(2024, 1, 1, 12, 0, 0)
        with database.transaction() as conn:
            for offset, row_id in enumerate(ids):
                conn.execute(
                    update(tables.lands)
                    .where(tables.lands.c.id == row_id)
                    .values(created_at=base + timedelta(days=offset))
                )

        names = [row["name"] for row in client.get("/api/land", headers=auth_headers()).json()]
        assert names == ["third", "second", "first"]


class TestUpdate:
    def test_update_replaces_validated_fields(self, client, auth_headers):
        body = dict(VALID_BODIES["/api/land"], description="riverside", status="leased")
        created = client.post("/api/land", json=body, headers=auth_headers()).json()

        replacement = dict(VALID_BODIES["/api/land"], name="North Farm (renamed)", value=125000)
        response = client.put("/api/land", params={"id": created["id"]}, json=replacement, headers=auth_headers())

        assert response.status_code == 200
        updated = response.json()
        assert updated["id"] == created["id"]
        assert updated["name"] == "North Farm (renamed)"
        assert updated["value"] == 125000
        # Omitted fields fall back to their defaults
        assert updated["description"] is None
        assert updated["status"] == "active"
        assert updated["createdAt"] == created["createdAt"]

    def test_update_without_id_is_400(self, client, auth_headers):
        response = client.put("/api/land", json=VALID_BODIES["/api/land"], headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["detail"] == "ID required"

    def test_update_unknown_id_is_404(self, client, auth_headers):
        response = client.put(
            "/api/land", params={"id": "missing"}, json=VALID_BODIES["/api/land"], headers=auth_headers()
        )
        assert response.status_code == 404

    def test_update_with_invalid_body_is_400_and_row_unchanged(self, client, auth_headers):
        created = client.post("/api/land", json=VALID_BODIES["/api/land"], headers=auth_headers()).json()

        response = client.put("/api/land", params={"id": created["id"]}, json={"name": ""}, headers=auth_headers())

        assert response.status_code == 400
        assert client.get("/api/land", headers=auth_headers()).json() == [created]


class TestDelete:
    @pytest.mark.parametrize("path", RESOURCE_PATHS)
    def test_delete_removes_row(self, client, auth_headers, path):
        created = client.post(path, json=VALID_BODIES[path], headers=auth_headers()).json()

        response = client.delete(path, params={"id": created["id"]}, headers=auth_headers())

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(path, headers=auth_headers()).json() == []

    def test_delete_without_id_is_400(self, client, auth_headers):
        response = client.delete("/api/land", headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["detail"] == "ID required"

    def test_delete_twice_is_404(self, client, auth_headers):
        created = client.post("/api/land", json=VALID_BODIES["/api/land"], headers=auth_headers()).json()

        assert client.delete("/api/land", params={"id": created["id"]}, headers=auth_headers()).status_code == 200
        assert client.delete("/api/land", params={"id": created["id"]}, headers=auth_headers()).status_code == 404


class TestDatabaseErrors:
    def test_store_failure_is_500_without_details(self, client, auth_headers, monkeypatch):
        def broken(self, conn, owner_id):
            raise OperationalError("SELECT * FROM lands", {}, Exception("disk I/O error at /var/secret"))

        monkeypatch.setattr(ResourceRepository, "list_for_owner", broken)

        response = client.get("/api/land", headers=auth_headers())

        assert response.status_code == 500
        assert response.json() == {"detail": "Database error"}
