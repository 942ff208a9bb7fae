"""Public verification lookup.

Answers "does this registration number belong to a company that finished
onboarding?" without revealing anything else about the submission:

  - match is exact but case-insensitive, after trimming the input
  - only submissions with `completed_at` set count
  - a failed lookup is reported as LOOKUP_FAILED, never as "not verified",
    so callers can tell an outage from a negative answer
"""

import enum
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.middleware.exceptions import ValidationError
from snapaml.models.kyb_submission import KybSubmission

logger = logging.getLogger(__name__)


class VerificationResult(str, enum.Enum):
    VERIFIED = "verified"
    NOT_VERIFIED = "not_verified"
    LOOKUP_FAILED = "lookup_failed"


async def verify(db: AsyncSession, registration_number: str) -> VerificationResult:
    needle = (registration_number or "").strip()
    if not needle:
        raise ValidationError("Registration number is required")

    try:
        result = await db.execute(
            select(KybSubmission.id)
            .where(
                func.lower(KybSubmission.company_registration_number) == needle.lower(),
                KybSubmission.completed_at.is_not(None),
            )
            .limit(1)
        )
        found = result.scalar_one_or_none()
    except SQLAlchemyError:
        logger.warning("Verification lookup failed for %r", needle, exc_info=True)
        return VerificationResult.LOOKUP_FAILED

    return VerificationResult.VERIFIED if found else VerificationResult.NOT_VERIFIED
