"""Response schemas shared by the KYB and KYC wizards."""

from pydantic import BaseModel


class StepInfo(BaseModel):
    number: int
    section: str
    title: str
    description: str


class WizardProgress(BaseModel):
    variant: str
    # None once every step is completed
    current_step: int | None
    total_steps: int
    completed_steps: list[int]
    is_complete: bool
    sections: dict[str, dict] = {}
    steps: list[StepInfo] = []


class DocumentUploadResponse(BaseModel):
    document_reference: str
    filename: str
    content_type: str
    size: int
