"""Individual (KYC) onboarding wizard.

Endpoints:
  GET   /api/kyc/           → progress + completed sections
  PATCH /api/kyc/step/{n}   → validate and persist step n, return progress
  POST  /api/kyc/documents  → upload an identity document, returns the
                              reference to send as `documentReference`

Unlike the company wizard this one is not resumable: steps carry no
prerequisites and any of them can be (re)submitted in any order. Progress
is still derived from the persisted completion flags.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.auth.deps import CurrentUser, get_current_user
from snapaml.database import get_db
from snapaml.schemas.kyc import EmploymentInfo, Identification, PersonalInfo, TaxInfo
from snapaml.schemas.wizard import DocumentUploadResponse, WizardProgress
from snapaml.services.storage import DocumentStorage, get_document_storage
from snapaml.wizard.engine import WizardSession, build_progress
from snapaml.wizard.gateway import SubmissionGateway
from snapaml.wizard.variants import KYC

router = APIRouter()


async def _save_step(
    db: AsyncSession,
    user: CurrentUser,
    step: int,
    body: BaseModel,
) -> WizardProgress:
    gateway = SubmissionGateway(db, user, KYC)
    session = WizardSession(KYC, gateway)
    session.set_current_step(step)

    await session.complete_step(step, body)
    return build_progress(KYC, await gateway.load())


# ── GET /api/kyc/ ───────────────────────────────────────────

@router.get("/", response_model=WizardProgress)
async def get_progress(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    gateway = SubmissionGateway(db, user, KYC)
    return build_progress(KYC, await gateway.load())


# ── Per-step PATCH endpoints ────────────────────────────────

@router.patch("/step/1", response_model=WizardProgress)
async def save_step_1(
    body: PersonalInfo,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Personal information."""
    return await _save_step(db, user, 1, body)


@router.patch("/step/2", response_model=WizardProgress)
async def save_step_2(
    body: Identification,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """Identity document details; the reference must be the caller's own upload."""
    await storage.require_owned(user.id, body.document_reference)
    return await _save_step(db, user, 2, body)


@router.patch("/step/3", response_model=WizardProgress)
async def save_step_3(
    body: TaxInfo,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Tax residency."""
    return await _save_step(db, user, 3, body)


@router.patch("/step/4", response_model=WizardProgress)
async def save_step_4(
    body: EmploymentInfo,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Employment and source of funds."""
    return await _save_step(db, user, 4, body)


# ── POST /api/kyc/documents ─────────────────────────────────

@router.post(
    "/documents",
    response_model=DocumentUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    file: UploadFile = File(...),
    user: CurrentUser = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_document_storage),
):
    content = await file.read()
    reference = await storage.save(user.id, file.filename, file.content_type, content)
    return DocumentUploadResponse(
        document_reference=reference,
        filename=file.filename or "",
        content_type=file.content_type or "",
        size=len(content),
    )
