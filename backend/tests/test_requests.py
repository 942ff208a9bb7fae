"""Verification request workflow tests."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.middleware.exceptions import ValidationError
from snapaml.models.risk_profile import CompanyRiskProfile
from snapaml.models.verification_request import ApprovedRelationship, VerificationRequest
from snapaml.services.requests import create_request, list_outgoing_requests


@pytest.mark.asyncio
class TestCreateRequestService:

    async def test_blank_fields_rejected(self, db_session: AsyncSession):
        with pytest.raises(ValidationError):
            await create_request(db_session, "", "", "ABC123")
        with pytest.raises(ValidationError):
            await create_request(db_session, "user-1", "a@example.com", "   ")

    async def test_valid_request_is_pending_and_outgoing(self, db_session: AsyncSession):
        request = await create_request(db_session, "user-1", " a@example.com ", " ABC123 ")

        assert request.status == "pending"
        assert request.company_registration_number == "ABC123"
        assert request.requester_email == "a@example.com"

        outgoing = await list_outgoing_requests(db_session, "user-1")
        assert [r.id for r in outgoing] == [request.id]


@pytest.mark.api
@pytest.mark.asyncio
class TestRequestWorkflow:

    async def _send_request(self, client, headers, number="ABC123"):
        return await client.post(
            "/api/requests",
            headers=headers,
            json={"company_registration_number": number},
        )

    async def test_create_and_list_outgoing(self, client: AsyncClient, make_headers):
        headers = make_headers("requester", "req@bank.example")
        resp = await self._send_request(client, headers)
        assert resp.status_code == 201
        data = resp.json()
        assert data["status"] == "pending"
        assert data["requester_email"] == "req@bank.example"

        resp = await client.get("/api/requests/outgoing", headers=headers)
        assert [r["id"] for r in resp.json()] == [data["id"]]

    async def test_duplicate_pending_request(self, client: AsyncClient, make_headers):
        headers = make_headers("requester")
        await self._send_request(client, headers)
        resp = await self._send_request(client, headers)
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "DUPLICATE_REQUEST"

    async def test_blank_registration_number(self, client: AsyncClient, make_headers):
        resp = await self._send_request(client, make_headers("requester"), number="  ")
        assert resp.status_code == 422

    async def test_incoming_for_company_owner(self, client: AsyncClient, make_headers, completed_company):
        await self._send_request(client, make_headers("requester"))
        await self._send_request(client, make_headers("someone-else"), number="XYZ999")

        resp = await client.get("/api/requests/incoming", headers=make_headers("company-owner"))
        incoming = resp.json()
        assert [r["requester_user_id"] for r in incoming] == ["requester"]

    async def test_incoming_without_submission_is_empty(self, client: AsyncClient, make_headers):
        await self._send_request(client, make_headers("requester"))
        resp = await client.get("/api/requests/incoming", headers=make_headers("nobody"))
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_approve_creates_one_relationship(
        self, client: AsyncClient, make_headers, completed_company, session_factory
    ):
        requester = make_headers("requester")
        owner = make_headers("company-owner")
        request_id = (await self._send_request(client, requester)).json()["id"]

        resp = await client.post(f"/api/requests/{request_id}/approve", headers=owner)
        assert resp.status_code == 200
        relationship = resp.json()
        assert relationship["user_id"] == "requester"
        assert relationship["requested_user_id"] == "company-owner"

        # Re-approving is a no-op
        resp = await client.post(f"/api/requests/{request_id}/approve", headers=owner)
        assert resp.status_code == 200
        assert resp.json()["id"] == relationship["id"]

        async with session_factory() as session:
            request = (
                await session.execute(select(VerificationRequest).where(VerificationRequest.id == request_id))
            ).scalar_one()
            assert request.status == "approved"
            assert request.requested_user_id == "company-owner"

            count = (await session.execute(select(func.count()).select_from(ApprovedRelationship))).scalar()
            assert count == 1

        resp = await client.get("/api/requests/incoming", headers=owner)
        assert resp.json() == []
        resp = await client.get("/api/requests/outgoing", headers=requester)
        assert resp.json() == []

    async def test_only_owner_can_approve(self, client: AsyncClient, make_headers, completed_company):
        request_id = (await self._send_request(client, make_headers("requester"))).json()["id"]

        resp = await client.post(f"/api/requests/{request_id}/approve", headers=make_headers("intruder"))
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "PERMISSION_DENIED"

    async def test_approve_unknown_request(self, client: AsyncClient, make_headers, completed_company):
        resp = await client.post("/api/requests/missing-id/approve", headers=make_headers("company-owner"))
        assert resp.status_code == 404

    async def test_approved_counterparties_with_risk_profile(
        self, client: AsyncClient, make_headers, completed_company, db_session: AsyncSession
    ):
        db_session.add(CompanyRiskProfile(
            submission_id=completed_company.id,
            registration_number="ABC123",
            risk_level="low",
            overall_risk_level="medium",
            is_sanctioned=False,
        ))
        await db_session.commit()

        requester = make_headers("requester")
        request_id = (await self._send_request(client, requester)).json()["id"]
        await client.post(f"/api/requests/{request_id}/approve", headers=make_headers("company-owner"))

        resp = await client.get("/api/requests/approved", headers=requester)
        assert resp.status_code == 200
        approved = resp.json()
        assert len(approved) == 1
        assert approved[0]["submission"]["company_name"] == "Acme Trading Ltd"
        assert approved[0]["risk_profile"]["display_risk_level"] == "MEDIUM"

    async def test_approved_counterparty_without_risk_profile(
        self, client: AsyncClient, make_headers, completed_company
    ):
        requester = make_headers("requester")
        request_id = (await self._send_request(client, requester)).json()["id"]
        await client.post(f"/api/requests/{request_id}/approve", headers=make_headers("company-owner"))

        resp = await client.get("/api/requests/approved", headers=requester)
        approved = resp.json()
        assert approved[0]["risk_profile"] is None

        resp = await client.get("/api/requests/approved", headers=make_headers("stranger"))
        assert resp.json() == []
