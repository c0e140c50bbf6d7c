"""
Tests for the E-Filing API endpoints.
"""

import pytest
from httpx import AsyncClient

from courtfile.core.config import Settings
from courtfile.main import app
from courtfile.routers.efiling import get_filing_assistant
from courtfile.services.filing import FilingAssistant


# ============================================================================
# PORTAL ENDPOINTS
# ============================================================================

class TestPortalEndpoints:
    """Portal listing and details."""

    @pytest.mark.asyncio
    async def test_list_portals(self, client: AsyncClient):
        response = await client.get("/api/efiling/portals")
        assert response.status_code == 200
        portals = response.json()
        assert len(portals) == 5
        for portal in portals:
            for field in ["id", "state", "portal_name", "status", "document_type_count"]:
                assert field in portal, f"Portal missing {field}"

    @pytest.mark.asyncio
    async def test_filter_by_status(self, client: AsyncClient):
        response = await client.get("/api/efiling/portals", params={"status": "planned"})
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient):
        response = await client.get("/api/efiling/portals", params={"status": "bogus"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_filter_by_feature(self, client: AsyncClient):
        response = await client.get("/api/efiling/portals", params={"feature": "service tracking"})
        assert [p["state"] for p in response.json()] == ["NY"]

    @pytest.mark.asyncio
    async def test_portal_details(self, client: AsyncClient):
        response = await client.get("/api/efiling/portals/ca")
        assert response.status_code == 200
        portal = response.json()
        assert portal["portal_name"] == "File & Serve"
        assert portal["fees"]["base_filing_fee"] == 435
        assert "ca-family-motion" in [d["id"] for d in portal["document_types"]]

    @pytest.mark.asyncio
    async def test_unknown_portal(self, client: AsyncClient):
        response = await client.get("/api/efiling/portals/ZZ")
        assert response.status_code == 404
        assert "ZZ" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/api/efiling/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["portals"] == 5
        assert body["document_types"] == 7


# ============================================================================
# DOCUMENT TYPE ENDPOINTS
# ============================================================================

class TestDocumentTypeEndpoints:
    """Checklists and suggestions."""

    @pytest.mark.asyncio
    async def test_checklist(self, client: AsyncClient):
        response = await client.get("/api/efiling/document-types/ny-family-petition/checklist")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Family Court Petition"
        assert body["checklist"][0] == "☐ Petitioner Name"
        assert body["checklist"][1] == "☐ Attach Supporting Affidavits (PDF; max 25MB)"
        assert len(body["checklist"]) == 7

    @pytest.mark.asyncio
    async def test_checklist_unknown_type(self, client: AsyncClient):
        response = await client.get("/api/efiling/document-types/nope/checklist")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_suggest(self, client: AsyncClient):
        response = await client.post(
            "/api/efiling/suggest",
            json={"description": "family law divorce", "state": "CA"},
        )
        assert response.status_code == 200
        matches = response.json()
        assert matches[0]["id"] == "ca-divorce-petition"
        assert matches[0]["score"] == pytest.approx(0.6)
        scores = [m["score"] for m in matches]
        assert scores == sorted(scores, reverse=True)
        assert all(score > 0.3 for score in scores)

    @pytest.mark.asyncio
    async def test_suggest_all_states(self, client: AsyncClient):
        response = await client.post("/api/efiling/suggest", json={"description": "family court petition"})
        assert response.json()[0]["id"] == "ny-family-petition"

    @pytest.mark.asyncio
    async def test_suggest_unknown_state(self, client: AsyncClient):
        response = await client.post("/api/efiling/suggest", json={"description": "motion", "state": "ZZ"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_suggest_requires_description(self, client: AsyncClient):
        response = await client.post("/api/efiling/suggest", json={"description": ""})
        assert response.status_code == 422


# ============================================================================
# VALIDATION ENDPOINTS
# ============================================================================

class TestValidationEndpoints:
    """Validate and assemble."""

    @pytest.mark.asyncio
    async def test_validate(self, client: AsyncClient):
        response = await client.post("/api/efiling/validate", json={
            "doc_type_id": "il-family-motion",
            "data": {"caseNumber": "FL-200001"},
        })
        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is False
        assert body["error_count"] == 1
        relief = next(r for r in body["results"] if r["field"] == "reliefSought")
        assert relief["message"] == "Relief sought is required"
        assert relief["severity"] == "error"

    @pytest.mark.asyncio
    async def test_validate_unknown_type(self, client: AsyncClient):
        response = await client.post("/api/efiling/validate", json={"doc_type_id": "nope", "data": {}})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_assemble_uses_portal_restrictions(self, client: AsyncClient):
        response = await client.post("/api/efiling/assemble", json={
            "doc_type_id": "ny-family-petition",
            "data": {
                "petitionerName": "Jane Doe",
                "attachment_Supporting Affidavits": {"filename": "affidavit.pdf"},
            },
        })
        assert response.status_code == 200
        report = response.json()
        assert report["is_ready"] is True
        assert report["portal"]["portal_name"] == "NYSCEF"
        assert len(report["warnings"]) == 1
        assert "Pro se litigants must complete training" in report["warnings"][0]["recommendation"]
        assert report["next_steps"][0] != "Fix all validation errors above"

    @pytest.mark.asyncio
    async def test_assemble_with_errors(self, client: AsyncClient):
        response = await client.post("/api/efiling/assemble", json={
            "doc_type_id": "ca-family-motion",
            "data": {"caseNumber": "bad"},
        })
        report = response.json()
        assert report["is_ready"] is False
        assert report["next_steps"][0] == "Fix all validation errors above"
        assert report["document_type"]["code"] == "FL-MOT"
        assert any(s["type"] == "fee" for s in report["suggestions"])

    @pytest.mark.asyncio
    async def test_size_enforcement_via_settings(self, client: AsyncClient):
        app.dependency_overrides[get_filing_assistant] = lambda: FilingAssistant.from_settings(
            Settings(enforce_attachment_size=True)
        )
        try:
            response = await client.post("/api/efiling/validate", json={
                "doc_type_id": "ny-family-petition",
                "data": {
                    "petitionerName": "Jane Doe",
                    "attachment_Supporting Affidavits": {"filename": "a.pdf", "size": 30 * 1024 * 1024},
                },
            })
        finally:
            app.dependency_overrides.clear()
        body = response.json()
        assert body["is_valid"] is False
        assert body["results"][-1]["message"] == "Supporting Affidavits exceeds the maximum size of 25MB"


# ============================================================================
# REGISTRATION GUIDE ENDPOINTS
# ============================================================================

class TestRegistrationGuideEndpoints:
    """Portal sign-up instructions."""

    @pytest.mark.asyncio
    async def test_registration_guide(self, client: AsyncClient):
        response = await client.get("/api/efiling/portals/ny/registration-guide")
        assert response.status_code == 200
        guide = response.json()
        assert guide["state"] == "NY"
        assert guide["portal"]["portal_name"] == "NYSCEF"
        assert [s["order"] for s in guide["steps"]] == [1, 2, 3, 4, 5]
        assert guide["steps"][0]["title"] == "Complete NYSCEF Training"
        assert guide["support_contacts"][0]["phone"] == "(855) 268-7861"

    @pytest.mark.asyncio
    async def test_portal_without_guide(self, client: AsyncClient):
        response = await client.get("/api/efiling/portals/TX/registration-guide")
        assert response.status_code == 404
        assert "TX" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_unknown_portal_guide(self, client: AsyncClient):
        response = await client.get("/api/efiling/portals/ZZ/registration-guide")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_registration_guides(self, client: AsyncClient):
        response = await client.get("/api/efiling/registration-guides")
        assert response.status_code == 200
        guides = response.json()
        assert [g["state"] for g in guides] == ["CA", "NY", "FL", "IL"]
        assert guides[0]["step_count"] == 6
        assert guides[0]["cost"] == 25
