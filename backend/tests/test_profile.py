"""Profile page and field editor tests."""

import pytest
from httpx import AsyncClient


def _field(fields: list[dict], name: str) -> dict:
    return next(f for f in fields if f["name"] == name)


@pytest.mark.api
@pytest.mark.asyncio
class TestProfile:

    @pytest.fixture
    def owner(self, make_headers) -> dict:
        return make_headers("company-owner", "owner@acme.example")

    async def test_no_submission(self, client: AsyncClient, auth_headers):
        resp = await client.get("/api/profile", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"

    async def test_own_submission(self, client: AsyncClient, owner, completed_company):
        resp = await client.get("/api/profile", headers=owner)
        assert resp.status_code == 200
        data = resp.json()
        assert data["company_name"] == "Acme Trading Ltd"
        assert data["status"] == "completed"
        assert data["step_4_completed"] is True

    async def test_field_table(self, client: AsyncClient, owner, completed_company):
        resp = await client.get("/api/profile/fields", headers=owner)
        assert resp.status_code == 200
        fields = resp.json()

        company_name = _field(fields, "company_name")
        assert company_name["kind"] == "readonly"
        assert company_name["label"] == "Company Name"

        sub_industry = _field(fields, "sub_industry")
        assert sub_industry["kind"] == "select"
        assert sub_industry["value"] == "Software development"
        assert {o["value"] for o in sub_industry["options"]} == {
            "IT services",
            "Software development",
            "Telecommunications",
        }

    async def test_edit_text_field(self, client: AsyncClient, owner, completed_company):
        resp = await client.patch(
            "/api/profile/fields/trading_name", headers=owner, json={"value": "Acme Online"}
        )
        assert resp.status_code == 200
        assert _field(resp.json(), "trading_name")["value"] == "Acme Online"

        resp = await client.get("/api/profile", headers=owner)
        assert resp.json()["trading_name"] == "Acme Online"

    async def test_readonly_field_rejected(self, client: AsyncClient, owner, completed_company):
        resp = await client.patch(
            "/api/profile/fields/company_registration_number", headers=owner, json={"value": "NEW1"}
        )
        assert resp.status_code == 422

    async def test_unknown_field(self, client: AsyncClient, owner, completed_company):
        resp = await client.patch("/api/profile/fields/iban", headers=owner, json={"value": "x"})
        assert resp.status_code == 404

    async def test_changing_industry_clears_sub_industry(self, client: AsyncClient, owner, completed_company):
        resp = await client.patch(
            "/api/profile/fields/industry", headers=owner, json={"value": "Healthcare"}
        )
        assert resp.status_code == 200
        fields = resp.json()
        assert _field(fields, "industry")["value"] == "Healthcare"
        sub_industry = _field(fields, "sub_industry")
        assert sub_industry["value"] is None
        assert "Hospitals" in {o["value"] for o in sub_industry["options"]}

    async def test_select_value_must_be_an_option(self, client: AsyncClient, owner, completed_company):
        resp = await client.patch(
            "/api/profile/fields/sub_industry", headers=owner, json={"value": "Banking"}
        )
        assert resp.status_code == 422

        resp = await client.patch(
            "/api/profile/fields/goods_or_services", headers=owner, json={"value": "mixed"}
        )
        assert resp.status_code == 200

    async def test_applicant_email_validated(self, client: AsyncClient, owner, completed_company):
        resp = await client.patch(
            "/api/profile/fields/applicant_email", headers=owner, json={"value": "not-an-email"}
        )
        assert resp.status_code == 422
