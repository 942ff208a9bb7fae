"""Aggregate model imports for Alembic auto-detection."""

from snapaml.models.kyb_submission import KybSubmission  # noqa: F401
from snapaml.models.kyc_submission import KycSubmission  # noqa: F401
from snapaml.models.risk_profile import CompanyRiskProfile  # noqa: F401
from snapaml.models.verification_request import (  # noqa: F401
    ApprovedRelationship,
    RequestStatus,
    VerificationRequest,
)
