"""Pydantic schemas for the 4-step company (KYB) wizard.

Field names are snake_case; the web client's camelCase names
(`companyName`, `subIndustry`, ...) are accepted as aliases.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from snapaml.data.industries import INDUSTRIES
from snapaml.data.options import ENTITY_TYPES, GOODS_OR_SERVICES, values
from snapaml.schemas.validators import coerce_date, validate_choice, validate_email


class StepSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# ── Step 1: Company details ─────────────────────────────────

class CompanyDetails(StepSchema):
    company_name: str = Field(min_length=1, max_length=255)
    trades_under_different_name: bool = False
    trading_name: str | None = Field(default=None, max_length=255)
    company_registration_number: str = Field(min_length=1, max_length=100)
    company_registration_date: date
    entity_type: str
    website_or_business_channel: str = Field(min_length=1)
    country_of_registration: str | None = Field(default=None, max_length=100)

    @field_validator("company_registration_date", mode="before")
    @classmethod
    def _lenient_date(cls, v):
        return coerce_date(v)

    @field_validator("entity_type")
    @classmethod
    def _known_entity_type(cls, v: str) -> str:
        return validate_choice(v, values(ENTITY_TYPES), "Entity type")

    @model_validator(mode="after")
    def _trading_name_when_different(self):
        if self.trades_under_different_name and not self.trading_name:
            raise ValueError("Trading name is required when trading under a different name")
        return self


# ── Step 2: Industry & business type ────────────────────────

class IndustryInfo(StepSchema):
    industry: str = Field(min_length=1)
    sub_industry: str = Field(min_length=1)
    goods_or_services: str

    @field_validator("industry")
    @classmethod
    def _known_industry(cls, v: str) -> str:
        return validate_choice(v, list(INDUSTRIES), "Industry")

    @field_validator("goods_or_services")
    @classmethod
    def _known_goods(cls, v: str) -> str:
        return validate_choice(v, values(GOODS_OR_SERVICES), "Goods or services")

    @model_validator(mode="after")
    def _sub_industry_belongs(self):
        if self.sub_industry not in INDUSTRIES[self.industry]:
            raise ValueError(f"'{self.sub_industry}' is not a sub-industry of '{self.industry}'")
        return self


# ── Step 3: Transaction information ─────────────────────────

class TransactionInfo(StepSchema):
    incoming_payments_monthly_euro: str = Field(min_length=1, max_length=50)
    incoming_payment_countries: str = Field(min_length=1)
    incoming_transaction_amount: str = Field(min_length=1, max_length=50)
    outgoing_payments_monthly_euro: str = Field(min_length=1, max_length=50)
    outgoing_payment_countries: str = Field(min_length=1)
    outgoing_transaction_amount: str = Field(min_length=1, max_length=50)


# ── Step 4: Applicant details ───────────────────────────────

class ApplicantDetails(StepSchema):
    applicant_first_name: str = Field(min_length=1, max_length=100)
    applicant_last_name: str = Field(min_length=1, max_length=100)
    applicant_email: str

    @field_validator("applicant_email")
    @classmethod
    def _valid_email(cls, v: str) -> str:
        return validate_email(v)
