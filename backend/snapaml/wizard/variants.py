"""Step tables for the two onboarding wizards.

Each step names its draft section, its validation schema, and the mapping
from section field names to the flat columns of the submission table.
The gateway writes exactly these columns (plus the step's completion
flag), so a step submit can never touch another step's data.
"""

from dataclasses import dataclass

from pydantic import BaseModel

from snapaml.middleware.exceptions import ValidationError
from snapaml.models.kyb_submission import KybSubmission
from snapaml.models.kyc_submission import KycSubmission
from snapaml.schemas.kyb import ApplicantDetails, CompanyDetails, IndustryInfo, TransactionInfo
from snapaml.schemas.kyc import EmploymentInfo, Identification, PersonalInfo, TaxInfo


@dataclass(frozen=True)
class StepDefinition:
    number: int
    section: str
    title: str
    description: str
    schema: type[BaseModel]
    field_map: dict[str, str]

    @property
    def completion_flag(self) -> str:
        return f"step_{self.number}_completed"


@dataclass(frozen=True)
class WizardVariant:
    name: str
    model: type
    steps: tuple[StepDefinition, ...]
    # Resumable wizards hydrate from the persisted row and gate step order
    resumable: bool = False

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def step(self, number: int) -> StepDefinition:
        if not 1 <= number <= self.total_steps:
            raise ValidationError(f"Step must be between 1 and {self.total_steps}, got {number}")
        return self.steps[number - 1]

    def section(self, name: str) -> StepDefinition:
        for step in self.steps:
            if step.section == name:
                return step
        raise ValidationError(f"Unknown section: {name}")

    def completion_flags(self, submission) -> list[bool]:
        if submission is None:
            return [False] * self.total_steps
        return [bool(getattr(submission, step.completion_flag)) for step in self.steps]

    def section_values(self, step: StepDefinition, submission) -> dict:
        """Read a step's section back out of the flat submission row."""
        return {
            field: getattr(submission, column)
            for field, column in step.field_map.items()
        }


def _columns(schema: type[BaseModel], **renames: str) -> dict[str, str]:
    """Map every schema field to a same-named column unless renamed."""
    return {field: renames.get(field, field) for field in schema.model_fields}


KYB = WizardVariant(
    name="kyb",
    model=KybSubmission,
    resumable=True,
    steps=(
        StepDefinition(
            number=1,
            section="company_details",
            title="Company Details",
            description="Basic company information",
            schema=CompanyDetails,
            field_map=_columns(CompanyDetails),
        ),
        StepDefinition(
            number=2,
            section="industry_info",
            title="Industry & Business Type",
            description="What does your company do?",
            schema=IndustryInfo,
            field_map=_columns(IndustryInfo),
        ),
        StepDefinition(
            number=3,
            section="transaction_info",
            title="Transaction Information",
            description="Payment flow details",
            schema=TransactionInfo,
            field_map=_columns(TransactionInfo),
        ),
        StepDefinition(
            number=4,
            section="applicant_details",
            title="Applicant Details",
            description="Who is submitting this application?",
            schema=ApplicantDetails,
            field_map=_columns(ApplicantDetails),
        ),
    ),
)

KYC = WizardVariant(
    name="kyc",
    model=KycSubmission,
    steps=(
        StepDefinition(
            number=1,
            section="personal_info",
            title="Personal Information",
            description="Tell us about yourself",
            schema=PersonalInfo,
            field_map=_columns(PersonalInfo),
        ),
        StepDefinition(
            number=2,
            section="identification",
            title="Identification",
            description="Your identity document",
            schema=Identification,
            field_map=_columns(Identification, expiry_date="document_expiry_date"),
        ),
        StepDefinition(
            number=3,
            section="tax_info",
            title="Tax Information",
            description="Tax residency and identification numbers",
            schema=TaxInfo,
            field_map=_columns(TaxInfo),
        ),
        StepDefinition(
            number=4,
            section="employment_info",
            title="Employment & Source of Funds",
            description="Occupation, income and origin of funds",
            schema=EmploymentInfo,
            field_map=_columns(EmploymentInfo),
        ),
    ),
)
