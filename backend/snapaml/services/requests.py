"""Verification request workflow.

  - create_request: a user asks to see a company's verification, by
    registration number
  - list_incoming_requests / list_outgoing_requests: pending requests
    targeting the caller's company / sent by the caller, newest first
  - approve_request: the holder of the matching completed submission
    grants access; the status flip and the relationship insert run in the
    caller's transaction and re-approving is a no-op
  - list_approved_counterparties: submissions (plus risk profile) of every
    company that approved the caller
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.auth.deps import CurrentUser
from snapaml.database import utcnow
from snapaml.middleware.exceptions import (
    ConflictError,
    PermissionDeniedError,
    ResourceNotFoundError,
    ValidationError,
)
from snapaml.models.kyb_submission import KybSubmission
from snapaml.models.risk_profile import CompanyRiskProfile
from snapaml.models.verification_request import (
    ApprovedRelationship,
    RequestStatus,
    VerificationRequest,
)

logger = logging.getLogger(__name__)


async def get_own_submission(db: AsyncSession, user_id: str) -> KybSubmission | None:
    result = await db.execute(
        select(KybSubmission).where(KybSubmission.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_request(
    db: AsyncSession,
    requester_id: str,
    requester_email: str | None,
    registration_number: str | None,
) -> VerificationRequest:
    """Insert a pending request.

    Raises:
        ValidationError: blank e-mail or registration number
        ConflictError: the same requester already has a pending request
            for this registration number
    """
    registration_number = (registration_number or "").strip()
    requester_email = (requester_email or "").strip()
    if not registration_number:
        raise ValidationError("Please enter a company registration number")
    if not requester_email:
        raise ValidationError("User email not available. Please try logging in again.")

    existing = (
        await db.execute(
            select(VerificationRequest.id).where(
                VerificationRequest.requester_user_id == requester_id,
                VerificationRequest.company_registration_number == registration_number,
                VerificationRequest.status == RequestStatus.PENDING.value,
            )
        )
    ).first()
    if existing:
        raise ConflictError(
            f"A pending request for {registration_number} already exists",
            error_code="DUPLICATE_REQUEST",
        )

    request = VerificationRequest(
        requester_user_id=requester_id,
        requester_email=requester_email,
        company_registration_number=registration_number,
        status=RequestStatus.PENDING.value,
    )
    db.add(request)
    await db.flush()
    await db.refresh(request)

    logger.info("Request %s created by %s for %s", request.id, requester_id, registration_number)
    return request


async def list_incoming_requests(
    db: AsyncSession,
    own_registration_number: str | None,
) -> list[VerificationRequest]:
    if not own_registration_number:
        return []
    result = await db.execute(
        select(VerificationRequest)
        .where(
            VerificationRequest.company_registration_number == own_registration_number,
            VerificationRequest.status == RequestStatus.PENDING.value,
        )
        .order_by(VerificationRequest.created_at.desc())
    )
    return list(result.scalars().all())


async def list_outgoing_requests(db: AsyncSession, requester_id: str) -> list[VerificationRequest]:
    result = await db.execute(
        select(VerificationRequest)
        .where(
            VerificationRequest.requester_user_id == requester_id,
            VerificationRequest.status == RequestStatus.PENDING.value,
        )
        .order_by(VerificationRequest.created_at.desc())
    )
    return list(result.scalars().all())


async def approve_request(
    db: AsyncSession,
    request_id: str,
    approver: CurrentUser,
) -> ApprovedRelationship:
    """Approve a request addressed to the approver's company.

    Returns the (new or existing) approved relationship.

    Raises:
        ResourceNotFoundError: unknown request id
        PermissionDeniedError: the approver has no completed submission
            with the request's registration number
    """
    request = (
        await db.execute(
            select(VerificationRequest).where(VerificationRequest.id == request_id)
        )
    ).scalar_one_or_none()
    if not request:
        raise ResourceNotFoundError("Request", request_id)

    submission = await get_own_submission(db, approver.id)
    if (
        submission is None
        or submission.completed_at is None
        or submission.company_registration_number != request.company_registration_number
    ):
        raise PermissionDeniedError("You can only approve requests for your own company")

    # Conditional flip: a request that is already approved is left alone
    await db.execute(
        update(VerificationRequest)
        .where(
            VerificationRequest.id == request_id,
            VerificationRequest.status == RequestStatus.PENDING.value,
        )
        .values(
            status=RequestStatus.APPROVED.value,
            requested_user_id=approver.id,
            updated_at=utcnow(),
        )
    )

    relationship = (
        await db.execute(
            select(ApprovedRelationship).where(
                ApprovedRelationship.user_id == request.requester_user_id,
                ApprovedRelationship.requested_user_id == approver.id,
                ApprovedRelationship.company_registration_number
                == request.company_registration_number,
            )
        )
    ).scalar_one_or_none()
    if relationship:
        return relationship

    relationship = ApprovedRelationship(
        user_id=request.requester_user_id,
        requested_user_id=approver.id,
        company_registration_number=request.company_registration_number,
    )
    db.add(relationship)
    await db.flush()

    logger.info(
        "Request %s approved by %s for requester %s",
        request_id, approver.id, request.requester_user_id,
    )
    return relationship


async def list_approved_counterparties(
    db: AsyncSession,
    owner_id: str,
) -> list[tuple[KybSubmission, CompanyRiskProfile | None]]:
    """Submissions of every approver that granted `owner_id` access."""
    approver_ids = select(ApprovedRelationship.requested_user_id).where(
        ApprovedRelationship.user_id == owner_id
    )
    result = await db.execute(
        select(KybSubmission, CompanyRiskProfile)
        .outerjoin(CompanyRiskProfile, CompanyRiskProfile.submission_id == KybSubmission.id)
        .where(KybSubmission.user_id.in_(approver_ids))
        .order_by(KybSubmission.company_name)
    )
    return [(submission, profile) for submission, profile in result.all()]
