"""Company risk profile produced by the external screening pipeline.

Read-only to this service: rows are written by the screening job and
surfaced to approved counterparties next to the company's submission.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snapaml.database import Base


class CompanyRiskProfile(Base):
    __tablename__ = "company_risk_profiles"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    submission_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("kyb_submissions.id"), nullable=False, index=True
    )
    registration_number: Mapped[str] = mapped_column(String(100), nullable=False)

    # Registry data
    company_name: Mapped[str | None] = mapped_column(String(255))
    legal_form: Mapped[str | None] = mapped_column(String(100))
    address: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    region: Mapped[str | None] = mapped_column(String(100))
    registration_date: Mapped[str | None] = mapped_column(String(10))
    is_active: Mapped[bool | None] = mapped_column(Boolean)
    closed_status: Mapped[str | None] = mapped_column(String(100))
    terminated_date: Mapped[str | None] = mapped_column(String(10))

    # Risk scoring
    risk_level: Mapped[str | None] = mapped_column(String(20))
    overall_risk_level: Mapped[str | None] = mapped_column(String(20))

    # Sanctions / PEP
    is_sanctioned: Mapped[bool | None] = mapped_column(Boolean)
    sanctions_match: Mapped[bool | None] = mapped_column(Boolean)
    sanction_details: Mapped[dict | None] = mapped_column(JSON)
    sanction_sources: Mapped[list | None] = mapped_column(JSON)
    is_pep: Mapped[bool | None] = mapped_column(Boolean)
    pep_details: Mapped[dict | None] = mapped_column(JSON)

    # Insolvency
    has_insolvency: Mapped[bool | None] = mapped_column(Boolean)
    has_insolvency_history: Mapped[bool | None] = mapped_column(Boolean)
    insolvency_type: Mapped[str | None] = mapped_column(String(100))
    insolvency_details: Mapped[str | None] = mapped_column(Text)
    insolvency_started_date: Mapped[str | None] = mapped_column(String(10))
    insolvency_ended_date: Mapped[str | None] = mapped_column(String(10))

    # Adverse media
    adverse_media_mentions: Mapped[int | None] = mapped_column(Integer)
    adverse_media_risk_score: Mapped[float | None] = mapped_column(Float)
    adverse_media_summary: Mapped[str | None] = mapped_column(Text)
    adverse_media_links: Mapped[list | None] = mapped_column(JSON)

    # Tax / VAT
    tax_rating: Mapped[str | None] = mapped_column(String(50))
    tax_status_explanation: Mapped[str | None] = mapped_column(Text)
    vies_valid: Mapped[bool | None] = mapped_column(Boolean)
    vies_address: Mapped[str | None] = mapped_column(String(255))

    profile_data: Mapped[dict | None] = mapped_column(JSON)
    checked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
