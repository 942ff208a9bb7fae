from pydantic import BaseModel

from snapaml.services.verification import VerificationResult


class VerificationResponse(BaseModel):
    registration_number: str
    result: VerificationResult
    # Kept for clients that only read the badge flag
    verified: bool
