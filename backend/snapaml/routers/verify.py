"""Public verification badge lookup (no authentication)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.database import get_db
from snapaml.schemas.verify import VerificationResponse
from snapaml.services.verification import VerificationResult, verify

router = APIRouter()


@router.get("/{registration_number}", response_model=VerificationResponse)
async def verify_company(
    registration_number: str,
    db: AsyncSession = Depends(get_db),
):
    result = await verify(db, registration_number)
    return VerificationResponse(
        registration_number=registration_number.strip(),
        result=result,
        verified=result is VerificationResult.VERIFIED,
    )
