"""Company (KYB) onboarding submission.

One row per user, upserted step by step by the wizard. A step's columns
are authoritative only once its `step_N_completed` flag is true; the row
may stay partially filled indefinitely. `completed_at` is stamped once all
four flags are true and is what the public verification lookup keys on.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snapaml.database import Base, utcnow


class KybSubmission(Base):
    __tablename__ = "kyb_submissions"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, index=True)

    # Step 1: company details
    company_name: Mapped[str | None] = mapped_column(String(255))
    trades_under_different_name: Mapped[bool | None] = mapped_column(Boolean)
    trading_name: Mapped[str | None] = mapped_column(String(255))
    company_registration_number: Mapped[str | None] = mapped_column(String(100), index=True)
    company_registration_date: Mapped[str | None] = mapped_column(String(10))  # YYYY-MM-DD
    entity_type: Mapped[str | None] = mapped_column(String(50))
    website_or_business_channel: Mapped[str | None] = mapped_column(Text)
    country_of_registration: Mapped[str | None] = mapped_column(String(100))

    # Step 2: industry
    industry: Mapped[str | None] = mapped_column(String(255))
    sub_industry: Mapped[str | None] = mapped_column(String(255))
    goods_or_services: Mapped[str | None] = mapped_column(String(50))

    # Step 3: transaction profile
    incoming_payments_monthly_euro: Mapped[str | None] = mapped_column(String(50))
    incoming_payment_countries: Mapped[str | None] = mapped_column(Text)
    incoming_transaction_amount: Mapped[str | None] = mapped_column(String(50))
    outgoing_payments_monthly_euro: Mapped[str | None] = mapped_column(String(50))
    outgoing_payment_countries: Mapped[str | None] = mapped_column(Text)
    outgoing_transaction_amount: Mapped[str | None] = mapped_column(String(50))

    # Step 4: applicant
    applicant_first_name: Mapped[str | None] = mapped_column(String(100))
    applicant_last_name: Mapped[str | None] = mapped_column(String(100))
    applicant_email: Mapped[str | None] = mapped_column(String(255))

    step_1_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    step_2_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    step_3_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    step_4_completed: Mapped[bool] = mapped_column(Boolean, default=False)

    status: Mapped[str] = mapped_column(String(20), default="in_progress")
    # Screening results written back by the external risk pipeline
    results: Mapped[dict | None] = mapped_column(JSON, default=None)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
