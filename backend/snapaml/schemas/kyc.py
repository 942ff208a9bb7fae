"""Pydantic schemas for the 4-step individual (KYC) wizard."""

from datetime import date

from pydantic import Field, field_validator

from snapaml.data.options import ANNUAL_INCOME_RANGES, DOCUMENT_TYPES, values
from snapaml.schemas.kyb import StepSchema
from snapaml.schemas.validators import coerce_date, validate_choice, validate_email


class PersonalInfo(StepSchema):
    full_name: str = Field(min_length=2, max_length=100)
    date_of_birth: date
    place_of_birth: str = Field(min_length=2, max_length=100)
    nationality: str = Field(min_length=2)
    additional_citizenships: str = ""
    residential_address: str = Field(min_length=10, max_length=200)
    length_of_residence: str = Field(min_length=1)
    contact_email: str
    contact_phone: str = Field(min_length=10, max_length=20)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _lenient_date(cls, v):
        return coerce_date(v)

    @field_validator("contact_email")
    @classmethod
    def _valid_email(cls, v: str) -> str:
        return validate_email(v)

    @field_validator("date_of_birth")
    @classmethod
    def _not_in_future(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("Date of birth cannot be in the future")
        return v


class Identification(StepSchema):
    document_type: str
    document_number: str = Field(min_length=5, max_length=50)
    issuing_country: str = Field(min_length=2)
    expiry_date: date
    # Reference returned by POST /api/kyc/documents
    document_reference: str = Field(min_length=1, max_length=255)

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _lenient_date(cls, v):
        return coerce_date(v)

    @field_validator("document_type")
    @classmethod
    def _known_document_type(cls, v: str) -> str:
        return validate_choice(v, values(DOCUMENT_TYPES), "Document type")


class TaxInfo(StepSchema):
    is_us_person: bool = Field(alias="isUSPerson")
    tax_residency_countries: str = Field(min_length=2, max_length=200)
    tax_identification_numbers: str = Field(min_length=5, max_length=100)


class EmploymentInfo(StepSchema):
    occupation: str = Field(min_length=2, max_length=100)
    employer: str = Field(min_length=2, max_length=100)
    annual_income: str
    source_of_funds: str = Field(min_length=10, max_length=500)
    source_of_wealth: str = Field(min_length=10, max_length=500)

    @field_validator("annual_income")
    @classmethod
    def _known_income_range(cls, v: str) -> str:
        return validate_choice(v, values(ANNUAL_INCOME_RANGES), "Annual income")
