"""Verification request schemas: create / read / approved counterparties."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field


class RequestCreate(BaseModel):
    company_registration_number: str = Field(max_length=100)
    # Defaults to the e-mail claim of the caller's token
    requester_email: str | None = Field(default=None, max_length=255)


class RequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    requester_user_id: str
    requester_email: str
    company_registration_number: str
    requested_user_id: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime | None = None


class ApprovedRelationshipOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    requested_user_id: str
    company_registration_number: str | None = None
    created_at: datetime


class RiskProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    submission_id: str
    registration_number: str
    company_name: str | None = None
    legal_form: str | None = None
    address: str | None = None
    city: str | None = None
    region: str | None = None
    registration_date: str | None = None
    is_active: bool | None = None
    closed_status: str | None = None
    terminated_date: str | None = None
    risk_level: str | None = None
    overall_risk_level: str | None = None
    is_sanctioned: bool | None = None
    sanctions_match: bool | None = None
    sanction_details: dict | None = None
    sanction_sources: list | None = None
    is_pep: bool | None = None
    pep_details: dict | None = None
    has_insolvency: bool | None = None
    has_insolvency_history: bool | None = None
    insolvency_type: str | None = None
    insolvency_details: str | None = None
    insolvency_started_date: str | None = None
    insolvency_ended_date: str | None = None
    adverse_media_mentions: int | None = None
    adverse_media_risk_score: float | None = None
    adverse_media_summary: str | None = None
    adverse_media_links: list | None = None
    tax_rating: str | None = None
    tax_status_explanation: str | None = None
    vies_valid: bool | None = None
    vies_address: str | None = None
    checked_at: datetime | None = None

    @computed_field
    @property
    def display_risk_level(self) -> str | None:
        level = self.overall_risk_level or self.risk_level
        return level.upper() if level else None


class SubmissionOut(BaseModel):
    """A company's KYB submission as shown on profiles and to counterparties."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    company_name: str | None = None
    trades_under_different_name: bool | None = None
    trading_name: str | None = None
    company_registration_number: str | None = None
    company_registration_date: str | None = None
    entity_type: str | None = None
    website_or_business_channel: str | None = None
    country_of_registration: str | None = None
    industry: str | None = None
    sub_industry: str | None = None
    goods_or_services: str | None = None
    incoming_payments_monthly_euro: str | None = None
    incoming_payment_countries: str | None = None
    incoming_transaction_amount: str | None = None
    outgoing_payments_monthly_euro: str | None = None
    outgoing_payment_countries: str | None = None
    outgoing_transaction_amount: str | None = None
    applicant_first_name: str | None = None
    applicant_last_name: str | None = None
    applicant_email: str | None = None
    step_1_completed: bool = False
    step_2_completed: bool = False
    step_3_completed: bool = False
    step_4_completed: bool = False
    status: str
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None


class ApprovedCounterparty(BaseModel):
    submission: SubmissionOut
    risk_profile: RiskProfileOut | None = None
