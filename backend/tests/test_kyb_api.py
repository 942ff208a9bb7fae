"""Company (KYB) wizard endpoint tests."""

import pytest
from httpx import AsyncClient


@pytest.mark.api
@pytest.mark.asyncio
class TestKybWizard:

    async def test_requires_auth(self, client: AsyncClient):
        resp = await client.get("/api/kyb/")
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "NOT_AUTHENTICATED"
        assert resp.headers["www-authenticate"] == "Bearer"

    async def test_initial_progress(self, client: AsyncClient, auth_headers):
        resp = await client.get("/api/kyb/", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["variant"] == "kyb"
        assert data["current_step"] == 1
        assert data["completed_steps"] == []
        assert data["is_complete"] is False
        assert len(data["steps"]) == 4

    async def test_step_one_saves_and_advances(self, client: AsyncClient, auth_headers, kyb_payloads):
        resp = await client.patch("/api/kyb/step/1", headers=auth_headers, json=kyb_payloads[1])
        assert resp.status_code == 200
        data = resp.json()
        assert data["completed_steps"] == [1]
        assert data["current_step"] == 2
        details = data["sections"]["company_details"]
        assert details["company_name"] == "Acme Trading Ltd"
        assert details["company_registration_date"] == "2020-05-01"

        resp = await client.get("/api/kyb/", headers=auth_headers)
        assert resp.json()["current_step"] == 2

    async def test_cannot_skip_ahead(self, client: AsyncClient, auth_headers, kyb_payloads):
        await client.patch("/api/kyb/step/1", headers=auth_headers, json=kyb_payloads[1])

        resp = await client.patch("/api/kyb/step/3", headers=auth_headers, json=kyb_payloads[3])
        assert resp.status_code == 422
        error = resp.json()["error"]
        assert error["message"] == "Complete these first: Step 2 (Industry & Business Type)"

    async def test_going_back_keeps_later_flags(self, client: AsyncClient, auth_headers, kyb_payloads):
        await client.patch("/api/kyb/step/1", headers=auth_headers, json=kyb_payloads[1])
        await client.patch("/api/kyb/step/2", headers=auth_headers, json=kyb_payloads[2])

        edited = {**kyb_payloads[1], "companyName": "Acme Holdings Ltd"}
        resp = await client.patch("/api/kyb/step/1", headers=auth_headers, json=edited)
        assert resp.status_code == 200
        data = resp.json()
        assert data["completed_steps"] == [1, 2]
        assert data["current_step"] == 3
        assert data["sections"]["company_details"]["company_name"] == "Acme Holdings Ltd"
        assert data["sections"]["industry_info"]["industry"] == "Technology"

    async def test_invalid_step_data(self, client: AsyncClient, auth_headers, kyb_payloads):
        payload = {**kyb_payloads[1], "entityType": "cooperative"}
        resp = await client.patch("/api/kyb/step/1", headers=auth_headers, json=payload)
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

        resp = await client.get("/api/kyb/", headers=auth_headers)
        assert resp.json()["completed_steps"] == []

    async def test_sub_industry_must_match_industry(self, client: AsyncClient, auth_headers, kyb_payloads):
        await client.patch("/api/kyb/step/1", headers=auth_headers, json=kyb_payloads[1])
        payload = {**kyb_payloads[2], "subIndustry": "Banking"}
        resp = await client.patch("/api/kyb/step/2", headers=auth_headers, json=payload)
        assert resp.status_code == 422

    async def test_full_flow_then_verified(self, client: AsyncClient, auth_headers, kyb_payloads):
        for step in range(1, 5):
            resp = await client.patch(f"/api/kyb/step/{step}", headers=auth_headers, json=kyb_payloads[step])
            assert resp.status_code == 200, resp.text

        data = resp.json()
        assert data["is_complete"] is True
        assert data["current_step"] is None
        assert data["completed_steps"] == [1, 2, 3, 4]

        resp = await client.get("/api/verify/abc123")
        assert resp.status_code == 200
        assert resp.json()["verified"] is True

    async def test_completed_wizard_is_closed(self, client: AsyncClient, auth_headers, kyb_payloads):
        for step in range(1, 5):
            await client.patch(f"/api/kyb/step/{step}", headers=auth_headers, json=kyb_payloads[step])

        resp = await client.patch("/api/kyb/step/1", headers=auth_headers, json=kyb_payloads[1])
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "WIZARD_COMPLETED"

    async def test_users_do_not_share_progress(self, client: AsyncClient, make_headers, kyb_payloads):
        await client.patch("/api/kyb/step/1", headers=make_headers("alice"), json=kyb_payloads[1])

        resp = await client.get("/api/kyb/", headers=make_headers("bob"))
        assert resp.json()["completed_steps"] == []
