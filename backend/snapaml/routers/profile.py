"""Profile router: the caller's own KYB submission and its field editor."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.auth.deps import CurrentUser, get_current_user
from snapaml.database import get_db
from snapaml.schemas.profile import FieldUpdate, ProfileField
from snapaml.schemas.requests import SubmissionOut
from snapaml.services.profile import describe_fields, require_submission, update_field
from snapaml.services.requests import get_own_submission

router = APIRouter()


@router.get("", response_model=SubmissionOut)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return require_submission(await get_own_submission(db, user.id))


@router.get("/fields", response_model=list[ProfileField])
async def list_fields(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    submission = require_submission(await get_own_submission(db, user.id))
    return describe_fields(submission)


@router.patch("/fields/{name}", response_model=list[ProfileField])
async def edit_field(
    name: str,
    body: FieldUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Update one editable field; returns the refreshed field table."""
    submission = require_submission(await get_own_submission(db, user.id))
    submission = await update_field(db, submission, name, body.value)
    return describe_fields(submission)
