"""Profile field editor for a user's own KYB submission.

The editable surface is a declarative table rather than per-field code:
each descriptor names the column, its label, its kind and (for selects)
where its options come from. Registry facts (name, registration number,
date, entity type) are read-only once submitted.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.data.industries import INDUSTRIES, sub_industries
from snapaml.data.options import GOODS_OR_SERVICES
from snapaml.middleware.exceptions import ResourceNotFoundError, ValidationError
from snapaml.models.kyb_submission import KybSubmission
from snapaml.schemas.profile import FieldOption, ProfileField
from snapaml.schemas.validators import validate_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    label: str
    kind: str  # text | select | readonly
    section: str
    # Options may depend on the current submission (sub-industry → industry)
    options: Callable[[KybSubmission], list[tuple[str, str]]] | None = None


def _industry_options(_submission: KybSubmission) -> list[tuple[str, str]]:
    return [(name, name) for name in INDUSTRIES]


def _sub_industry_options(submission: KybSubmission) -> list[tuple[str, str]]:
    return [(name, name) for name in sub_industries(submission.industry)]


def _goods_options(_submission: KybSubmission) -> list[tuple[str, str]]:
    return GOODS_OR_SERVICES


FIELD_DESCRIPTORS: dict[str, FieldDescriptor] = {
    d.name: d
    for d in [
        # Company details
        FieldDescriptor("company_name", "Company Name", "readonly", "company_details"),
        FieldDescriptor("trading_name", "Trading Name", "text", "company_details"),
        FieldDescriptor("company_registration_number", "Registration Number", "readonly", "company_details"),
        FieldDescriptor("company_registration_date", "Registration Date", "readonly", "company_details"),
        FieldDescriptor("entity_type", "Entity Type", "readonly", "company_details"),
        FieldDescriptor("country_of_registration", "Country of Registration", "text", "company_details"),
        FieldDescriptor("website_or_business_channel", "Website/Business Channel", "text", "company_details"),
        # Industry
        FieldDescriptor("industry", "Industry", "select", "industry_info", _industry_options),
        FieldDescriptor("sub_industry", "Sub-Industry", "select", "industry_info", _sub_industry_options),
        FieldDescriptor("goods_or_services", "Goods or Services", "select", "industry_info", _goods_options),
        # Transactions
        FieldDescriptor("incoming_payments_monthly_euro", "Incoming Payments Monthly (EUR)", "text", "transaction_info"),
        FieldDescriptor("incoming_payment_countries", "Incoming Payment Countries", "text", "transaction_info"),
        FieldDescriptor("incoming_transaction_amount", "Incoming Transaction Amount", "text", "transaction_info"),
        FieldDescriptor("outgoing_payments_monthly_euro", "Outgoing Payments Monthly (EUR)", "text", "transaction_info"),
        FieldDescriptor("outgoing_payment_countries", "Outgoing Payment Countries", "text", "transaction_info"),
        FieldDescriptor("outgoing_transaction_amount", "Outgoing Transaction Amount", "text", "transaction_info"),
        # Applicant
        FieldDescriptor("applicant_first_name", "First Name", "text", "applicant_details"),
        FieldDescriptor("applicant_last_name", "Last Name", "text", "applicant_details"),
        FieldDescriptor("applicant_email", "Email", "text", "applicant_details"),
    ]
}


def describe_fields(submission: KybSubmission) -> list[ProfileField]:
    fields = []
    for descriptor in FIELD_DESCRIPTORS.values():
        options = descriptor.options(submission) if descriptor.options else []
        fields.append(ProfileField(
            name=descriptor.name,
            label=descriptor.label,
            kind=descriptor.kind,
            section=descriptor.section,
            value=getattr(submission, descriptor.name),
            options=[FieldOption(value=v, label=l) for v, l in options],
        ))
    return fields


async def update_field(
    db: AsyncSession,
    submission: KybSubmission,
    name: str,
    value: str,
) -> KybSubmission:
    """Write one editable field of the caller's submission.

    Raises:
        ResourceNotFoundError: unknown field name
        ValidationError: read-only field, blank text, or a value outside
            the field's options
    """
    descriptor = FIELD_DESCRIPTORS.get(name)
    if descriptor is None:
        raise ResourceNotFoundError("Profile field", name)
    if descriptor.kind == "readonly":
        raise ValidationError(f"{descriptor.label} cannot be changed")

    value = value.strip()
    if not value:
        raise ValidationError(f"{descriptor.label} cannot be empty")

    if descriptor.kind == "select":
        allowed = [v for v, _ in descriptor.options(submission)]
        if value not in allowed:
            raise ValidationError(
                f"{descriptor.label} must be one of the offered options",
                details={"allowed": allowed},
            )

    if name == "applicant_email":
        try:
            value = validate_email(value)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    if name == "industry" and value != submission.industry:
        submission.sub_industry = None
    setattr(submission, name, value)

    await db.flush()
    logger.info("Profile field %s updated for user %s", name, submission.user_id)
    return submission


def require_submission(submission: KybSubmission | None) -> KybSubmission:
    if submission is None:
        raise ResourceNotFoundError("Submission", "current user")
    return submission
