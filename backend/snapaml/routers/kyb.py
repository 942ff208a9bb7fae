"""Company (KYB) onboarding wizard: 4 steps with save/resume.

Endpoints:
  GET   /api/kyb/         → progress + completed sections
  PATCH /api/kyb/step/{n} → validate and persist step n, return progress

Design:
  - Every request hydrates a fresh WizardSession from the caller's row, so
    the resume step is always computed from persisted completion flags.
  - Step n requires steps 1..n-1 (earlier steps may be resubmitted).
  - A fully completed wizard is closed: further submits answer 409.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.auth.deps import CurrentUser, get_current_user
from snapaml.database import get_db
from snapaml.schemas.kyb import ApplicantDetails, CompanyDetails, IndustryInfo, TransactionInfo
from snapaml.schemas.wizard import WizardProgress
from snapaml.wizard.engine import WizardSession, build_progress
from snapaml.wizard.gateway import SubmissionGateway
from snapaml.wizard.variants import KYB

router = APIRouter()


async def _save_step(
    db: AsyncSession,
    user: CurrentUser,
    step: int,
    body: BaseModel,
) -> WizardProgress:
    gateway = SubmissionGateway(db, user, KYB)
    session = WizardSession(KYB, gateway)
    session.hydrate(await gateway.load())
    session.ensure_reachable(step)

    await session.complete_step(step, body)
    return build_progress(KYB, await gateway.load())


# ── GET /api/kyb/ ───────────────────────────────────────────

@router.get("/", response_model=WizardProgress)
async def get_progress(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    gateway = SubmissionGateway(db, user, KYB)
    return build_progress(KYB, await gateway.load())


# ── Per-step PATCH endpoints ────────────────────────────────

@router.patch("/step/1", response_model=WizardProgress)
async def save_step_1(
    body: CompanyDetails,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Company details."""
    return await _save_step(db, user, 1, body)


@router.patch("/step/2", response_model=WizardProgress)
async def save_step_2(
    body: IndustryInfo,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Industry and business type."""
    return await _save_step(db, user, 2, body)


@router.patch("/step/3", response_model=WizardProgress)
async def save_step_3(
    body: TransactionInfo,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Incoming and outgoing payment profile."""
    return await _save_step(db, user, 3, body)


@router.patch("/step/4", response_model=WizardProgress)
async def save_step_4(
    body: ApplicantDetails,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Applicant details. Completes the wizard."""
    return await _save_step(db, user, 4, body)
