"""Individual (KYC) onboarding submission.

Same lifecycle as the company variant: one row per user, four step
groups, each trusted only once its completion flag is set.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snapaml.database import Base, utcnow


class KycSubmission(Base):
    __tablename__ = "kyc_submissions"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, index=True)

    # Step 1: personal information
    full_name: Mapped[str | None] = mapped_column(String(100))
    date_of_birth: Mapped[str | None] = mapped_column(String(10))  # YYYY-MM-DD
    place_of_birth: Mapped[str | None] = mapped_column(String(100))
    nationality: Mapped[str | None] = mapped_column(String(100))
    additional_citizenships: Mapped[str | None] = mapped_column(String(255))
    residential_address: Mapped[str | None] = mapped_column(String(200))
    length_of_residence: Mapped[str | None] = mapped_column(String(50))
    contact_email: Mapped[str | None] = mapped_column(String(255))
    contact_phone: Mapped[str | None] = mapped_column(String(20))

    # Step 2: identification document
    document_type: Mapped[str | None] = mapped_column(String(50))
    document_number: Mapped[str | None] = mapped_column(String(50))
    issuing_country: Mapped[str | None] = mapped_column(String(100))
    document_expiry_date: Mapped[str | None] = mapped_column(String(10))  # YYYY-MM-DD
    document_reference: Mapped[str | None] = mapped_column(String(255))

    # Step 3: tax residency
    is_us_person: Mapped[bool | None] = mapped_column(Boolean)
    tax_residency_countries: Mapped[str | None] = mapped_column(String(200))
    tax_identification_numbers: Mapped[str | None] = mapped_column(String(100))

    # Step 4: employment and source of funds
    occupation: Mapped[str | None] = mapped_column(String(100))
    employer: Mapped[str | None] = mapped_column(String(100))
    annual_income: Mapped[str | None] = mapped_column(String(20))
    source_of_funds: Mapped[str | None] = mapped_column(Text)
    source_of_wealth: Mapped[str | None] = mapped_column(Text)

    step_1_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    step_2_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    step_3_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    step_4_completed: Mapped[bool] = mapped_column(Boolean, default=False)

    status: Mapped[str] = mapped_column(String(20), default="in_progress")
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
