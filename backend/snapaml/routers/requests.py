"""Verification request router.

Endpoints:
  POST /api/requests                → ask for a company's verification
  GET  /api/requests/incoming       → pending requests for my company
  GET  /api/requests/outgoing       → my pending requests
  POST /api/requests/{id}/approve   → approve a request for my company
  GET  /api/requests/approved       → companies that approved me
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.auth.deps import CurrentUser, get_current_user
from snapaml.database import get_db
from snapaml.schemas.requests import (
    ApprovedCounterparty,
    ApprovedRelationshipOut,
    RequestCreate,
    RequestOut,
    RiskProfileOut,
    SubmissionOut,
)
from snapaml.services import requests as request_service

router = APIRouter()


@router.post("", response_model=RequestOut, status_code=status.HTTP_201_CREATED)
async def create_request(
    body: RequestCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return await request_service.create_request(
        db,
        requester_id=user.id,
        requester_email=body.requester_email or user.email,
        registration_number=body.company_registration_number,
    )


@router.get("/incoming", response_model=list[RequestOut])
async def list_incoming(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    submission = await request_service.get_own_submission(db, user.id)
    own_number = submission.company_registration_number if submission else None
    return await request_service.list_incoming_requests(db, own_number)


@router.get("/outgoing", response_model=list[RequestOut])
async def list_outgoing(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return await request_service.list_outgoing_requests(db, user.id)


@router.post("/{request_id}/approve", response_model=ApprovedRelationshipOut)
async def approve_request(
    request_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return await request_service.approve_request(db, request_id, user)


@router.get("/approved", response_model=list[ApprovedCounterparty])
async def list_approved(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    rows = await request_service.list_approved_counterparties(db, user.id)
    return [
        ApprovedCounterparty(
            submission=SubmissionOut.model_validate(submission),
            risk_profile=RiskProfileOut.model_validate(profile) if profile else None,
        )
        for submission, profile in rows
    ]
